"""Argument rewriting for fizzy command lines.

Scans the argument vector for the four intercepted flags and replaces each
flag's value with HTML:

- --description, --body: the value is Markdown text, converted inline
- --description_file, --body_file: the value is a path; its resolved content
  is written to a new temporary .html file whose path replaces the value

Recognition is by exact equality only. Every other argument is passed through
unchanged and in order; nothing else about fizzy's flag grammar is assumed.
"""

import logging
import os
import tempfile
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from fizzy_md.core.converter import MarkdownConverter
from fizzy_md.core.exceptions import FizzyMdError, MissingFlagValueError, TempArtifactError
from fizzy_md.core.resolver import ContentResolver

logger = logging.getLogger(__name__)


class FlagMode(Enum):
    """How an intercepted flag's value is converted."""

    INLINE = "inline"
    FILE = "file"


FLAG_RULES: dict[str, FlagMode] = {
    "--description": FlagMode.INLINE,
    "--body": FlagMode.INLINE,
    "--description_file": FlagMode.FILE,
    "--body_file": FlagMode.FILE,
}


class TempArtifacts:
    """Registry of temporary HTML files created for file-valued flags.

    Used as a context manager around rewriting and delegation. On exit every
    file created through it is removed, on success and failure alike, unless
    ``keep`` is set, in which case the files are left for the host's own
    temp-directory cleanup.

    Example:
        with TempArtifacts() as artifacts:
            path = artifacts.create("<p>hi</p>")
            # ... run fizzy with path ...
    """

    prefix = "fizzy-md-"
    suffix = ".html"

    def __init__(self, temp_dir: str | Path | None = None, keep: bool = False) -> None:
        self.temp_dir = str(temp_dir) if temp_dir is not None else None
        self.keep = keep
        self.paths: list[Path] = []

    def create(self, content: str) -> Path:
        """Write content to a new uniquely named temporary file.

        Args:
            content: HTML to write in full

        Returns:
            Path of the new file

        Raises:
            TempArtifactError: If the file cannot be created or written
        """
        try:
            tmp = tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                errors="surrogateescape",
                newline="",
                prefix=self.prefix,
                suffix=self.suffix,
                dir=self.temp_dir,
                delete=False,
            )
        except OSError as e:
            raise TempArtifactError(
                "failed to create temp file",
                temp_dir=self.temp_dir or tempfile.gettempdir(),
                reason=str(e),
            ) from e

        path = Path(tmp.name)
        try:
            with tmp:
                tmp.write(content)
        except OSError as e:
            _remove(path)
            raise TempArtifactError(
                "failed to write temp file",
                temp_dir=str(path.parent),
                reason=str(e),
                path=str(path),
            ) from e

        self.paths.append(path)
        logger.debug("Created temp file %s (%d characters)", path, len(content))
        return path

    def cleanup(self) -> None:
        """Remove every file created so far."""
        while self.paths:
            _remove(self.paths.pop())

    def __enter__(self) -> "TempArtifacts":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.keep:
            logger.debug("Keeping %d temp file(s)", len(self.paths))
            return
        self.cleanup()


def _remove(path: Path) -> None:
    try:
        os.unlink(path)
        logger.debug("Removed temp file %s", path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove temp file %s: %s", path, e)


class ArgumentRewriter:
    """Rewrite intercepted flag values from Markdown to HTML.

    Args:
        converter: Converter used for inline values
        resolver: Resolver used for file-valued flags
        artifacts: Registry that stages resolved file content
    """

    def __init__(
        self,
        converter: MarkdownConverter,
        resolver: ContentResolver,
        artifacts: TempArtifacts,
    ) -> None:
        self.converter = converter
        self.resolver = resolver
        self.artifacts = artifacts

    def rewrite(self, args: Sequence[str]) -> list[str]:
        """Return a new argument list with intercepted values converted.

        Args:
            args: Arguments without the program name; never modified

        Returns:
            New list in the same order, with each intercepted (flag, value)
            pair replaced as a unit

        Raises:
            MissingFlagValueError: If an intercepted flag is the last argument
            FileReadError: If a file-valued flag's path cannot be read
            ConversionError: If Markdown conversion fails
            TempArtifactError: If a temporary file cannot be written
        """
        result: list[str] = []
        i = 0

        while i < len(args):
            arg = args[i]
            mode = FLAG_RULES.get(arg)

            if mode is None:
                result.append(arg)
                i += 1
                continue

            if i + 1 >= len(args):
                raise MissingFlagValueError(arg)

            try:
                if mode is FlagMode.INLINE:
                    value = self.converter.convert(args[i + 1])
                else:
                    html = self.resolver.resolve(args[i + 1])
                    value = str(self.artifacts.create(html))
            except FizzyMdError as e:
                e.context.setdefault("flag", arg)
                raise

            logger.debug("Rewrote %s (%s mode)", arg, mode.value)
            result.extend((arg, value))
            i += 2

        return result
