"""Direct stdin to stdout conversion.

When fizzy-md is run with no arguments and data piped on stdin, it converts
the whole stream and writes the HTML to stdout without starting fizzy:

    echo "## Notes" | fizzy-md
"""

import logging
import os
import stat
from typing import TextIO

from fizzy_md.cli.exit_codes import ExitCode, exit_code_for
from fizzy_md.cli.output import handle_error
from fizzy_md.core.converter import MarkdownConverter
from fizzy_md.core.exceptions import FizzyMdError

logger = logging.getLogger(__name__)


def stdin_is_piped(stream: TextIO) -> bool:
    """Return True when the stream is piped or redirected from a file.

    Terminals and other character devices such as /dev/null do not count,
    so `fizzy-md < /dev/null` still goes on to run fizzy. Streams without a
    file descriptor fall back to isatty().
    """
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (AttributeError, OSError, ValueError):
        pass
    else:
        return not stat.S_ISCHR(mode)

    try:
        return not stream.isatty()
    except (AttributeError, ValueError):
        # closed or detached stream, nothing to read
        return False


def run_pipe(converter: MarkdownConverter, stdin: TextIO, stdout: TextIO, verbose: bool = False) -> int:
    """Convert everything on stdin and write it to stdout.

    Args:
        converter: Converter for the stream content
        stdin: Input stream, read to completion
        stdout: Output stream; no trailing newline is added
        verbose: Show stack traces for failures

    Returns:
        ExitCode.SUCCESS, or a non-zero code after reporting the failure
    """
    try:
        markdown = stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        handle_error(RuntimeError(f"failed to read stdin: {e}"), verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR

    logger.debug("Read %d characters from stdin", len(markdown))

    try:
        html = converter.convert(markdown)
    except FizzyMdError as e:
        handle_error(e, verbose=verbose)
        return exit_code_for(e)

    stdout.write(html)
    stdout.flush()
    return ExitCode.SUCCESS
