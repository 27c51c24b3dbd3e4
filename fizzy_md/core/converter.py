"""Markdown to HTML conversion.

The renderer is configured once per run (CommonMark grammar, table extension,
raw HTML passthrough) and shared read-only by every component that converts
text. Components receive the converter explicitly instead of reaching for a
module-level instance.
"""

import logging

from markdown_it import MarkdownIt

from fizzy_md.core.exceptions import ConversionError

logger = logging.getLogger(__name__)


def build_renderer() -> MarkdownIt:
    """Create the renderer used for every conversion.

    Returns:
        CommonMark renderer with tables enabled and raw HTML left unescaped
    """
    return MarkdownIt("commonmark", {"html": True}).enable("table")


class MarkdownConverter:
    """Convert Markdown documents to HTML fragments.

    Output never ends in the newline the renderer appends after the last
    block, so converted values can be passed as flag values directly.

    Example:
        >>> converter = MarkdownConverter()
        >>> converter.convert("## Hi")
        '<h2>Hi</h2>'
    """

    def __init__(self, renderer: MarkdownIt | None = None) -> None:
        self._renderer = renderer if renderer is not None else build_renderer()

    def convert(self, text: str) -> str:
        """Convert Markdown text to HTML.

        Args:
            text: Markdown source (may be empty)

        Returns:
            Rendered HTML with exactly one trailing newline removed

        Raises:
            ConversionError: If the renderer fails on the input
        """
        if not text:
            return ""

        try:
            html = self._renderer.render(text)
        except Exception as e:
            raise ConversionError(
                f"markdown conversion failed: {e}",
                reason=type(e).__name__,
            ) from e

        logger.debug("Converted %d characters of Markdown to %d characters of HTML", len(text), len(html))
        return html.removesuffix("\n")
