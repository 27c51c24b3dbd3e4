"""Program entry point for fizzy-md.

Each run takes exactly one of three paths:

- version query: the sole argument is --version or -v
- stdin pipe: no arguments and data piped on stdin; the stream is converted
  to stdout and fizzy is not started
- normal: arguments are rewritten (Markdown flag values to HTML) and handed to
  fizzy, whose exit status becomes this process's exit status

The command line is never parsed beyond this, since every argument other
than the four intercepted flags belongs to fizzy.
"""

import logging
import sys
from collections.abc import Sequence

from fizzy_md import __version__
from fizzy_md.cli.config import load_settings
from fizzy_md.cli.delegate import find_delegate, run_delegate
from fizzy_md.cli.exit_codes import ExitCode, exit_code_for
from fizzy_md.cli.output import PROGRAM_NAME, configure_logging, handle_error
from fizzy_md.cli.pipe import run_pipe, stdin_is_piped
from fizzy_md.core.converter import MarkdownConverter
from fizzy_md.core.exceptions import ConfigError, FizzyMdError
from fizzy_md.core.resolver import ContentResolver
from fizzy_md.core.rewriter import ArgumentRewriter, TempArtifacts

logger = logging.getLogger(__name__)

VERSION_FLAGS = ("--version", "-v")

# exit status for SIGINT, as reported by shells
INTERRUPTED = 130


def main(argv: Sequence[str] | None = None) -> int:
    """Run fizzy-md and return the process exit code.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Exit code: fizzy's own status on the normal path, otherwise a
        fizzy_md.cli.exit_codes.ExitCode value
    """
    args = list(sys.argv[1:] if argv is None else argv)

    if len(args) == 1 and args[0] in VERSION_FLAGS:
        print(f"{PROGRAM_NAME} version {__version__}")
        return ExitCode.SUCCESS

    try:
        settings = load_settings()
    except ConfigError as e:
        handle_error(e)
        return ExitCode.CONFIG_ERROR

    configure_logging(settings["log_level"], settings["log_file"])
    verbose = settings["log_level"] == "debug"

    converter = MarkdownConverter()

    if not args and stdin_is_piped(sys.stdin):
        return run_pipe(converter, sys.stdin, sys.stdout, verbose=verbose)

    try:
        with TempArtifacts(settings["temp_dir"], keep=settings["keep_temp_files"]) as artifacts:
            rewriter = ArgumentRewriter(converter, ContentResolver(converter), artifacts)
            rewritten = rewriter.rewrite(args)

            delegate_path = find_delegate(settings["delegate"])
            return run_delegate(delegate_path, rewritten)

    except FizzyMdError as e:
        handle_error(e, verbose=verbose)
        return exit_code_for(e)
    except KeyboardInterrupt:
        logger.debug("Interrupted while waiting for %s", settings["delegate"])
        return INTERRUPTED
    except Exception as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
