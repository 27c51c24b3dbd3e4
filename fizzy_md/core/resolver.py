"""Content resolution for file-valued flags.

Decides from a file's extension whether its content is already HTML or still
Markdown, and returns content ready to hand to fizzy:

- .html, .htm: returned unchanged
- .md or no extension: converted
- anything else: converted as well, so raw Markdown is never passed through
  unrendered when a caller picks an unusual extension
"""

import logging
from enum import Enum
from pathlib import Path

from fizzy_md.core.converter import MarkdownConverter
from fizzy_md.core.exceptions import FileReadError

logger = logging.getLogger(__name__)

HTML_EXTENSIONS = frozenset({".html", ".htm"})


class ContentKind(Enum):
    """Classification of a content file."""

    ALREADY_RENDERED = "already-rendered"
    NEEDS_CONVERSION = "needs-conversion"


def classify(path: str | Path) -> ContentKind:
    """Classify a file by its lower-cased extension.

    Args:
        path: File path (need not exist)

    Returns:
        ALREADY_RENDERED for HTML extensions, NEEDS_CONVERSION otherwise
    """
    if Path(path).suffix.lower() in HTML_EXTENSIONS:
        return ContentKind.ALREADY_RENDERED
    return ContentKind.NEEDS_CONVERSION


class ContentResolver:
    """Read content files and convert them when they hold Markdown."""

    def __init__(self, converter: MarkdownConverter) -> None:
        self.converter = converter

    def resolve(self, path: str | Path) -> str:
        """Read a file and return its HTML content.

        Args:
            path: Path to a Markdown or HTML file

        Returns:
            Raw content for HTML files, converted content otherwise

        Raises:
            FileReadError: If the file cannot be opened, read or decoded
            ConversionError: If Markdown conversion fails
        """
        kind = classify(path)
        # HTML is handed on untouched, so undecodable bytes ride along as
        # surrogates; newline="" keeps line endings as they are
        errors = "surrogateescape" if kind is ContentKind.ALREADY_RENDERED else "strict"
        try:
            with open(path, encoding="utf-8", errors=errors, newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            raise FileReadError(
                f"failed to read file {path}",
                file_path=str(path),
                reason=reason,
            ) from e

        logger.debug("Resolved %s as %s", path, kind.value)
        if kind is ContentKind.ALREADY_RENDERED:
            return content
        return self.converter.convert(content)
