"""Core functionality for readly: fetching highlights from a Kindle device."""

import logging
from collections.abc import Callable
from pathlib import Path

from .parser import ClippingsParser, Highlight, load_text

logger = logging.getLogger(__name__)


def log_highlight(highlight: Highlight) -> None:
    """Default observer: log each highlight found on the device."""
    logger.info("Found the highlight for book '%s' of author '%s'", highlight.title, highlight.author)


class KindleHighlights:
    """Fetches and parses the highlights stored on an Amazon Kindle device."""

    def __init__(
        self,
        base_path: str | Path,
        multiline_content: bool = False,
        on_highlight: Callable[[Highlight], None] | None = log_highlight,
    ):
        """Initialize the highlight source.

        Args:
            base_path: Root of the mounted Kindle volume
            multiline_content: Capture highlights spanning several lines
            on_highlight: Callback invoked for every accepted highlight, or None
        """
        self.base_path = base_path
        self.parser = ClippingsParser(multiline_content=multiline_content, on_highlight=on_highlight)
        logger.debug("KindleHighlights initialized for base path: %s", base_path)

    def get_highlights(self) -> list[Highlight]:
        """Return the highlights of the books on the Kindle device.

        Raises:
            ClippingsFileError: If the clippings file cannot be read
        """
        text = load_text(self.base_path)
        highlights = self.parser.parse(text)
        logger.info("Extracted %d highlights from %s", len(highlights), self.base_path)
        return highlights


def get_highlights(
    base_path: str | Path,
    multiline_content: bool = False,
    on_highlight: Callable[[Highlight], None] | None = log_highlight,
) -> list[Highlight]:
    """Return the highlights of the Kindle device mounted at ``base_path``."""
    return KindleHighlights(base_path, multiline_content=multiline_content, on_highlight=on_highlight).get_highlights()
