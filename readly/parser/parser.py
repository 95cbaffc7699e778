import logging
import re
from collections.abc import Callable

from .models import Highlight

# Initialize logger for this module
logger = logging.getLogger(__name__)


class ClippingsParser:
    """Parser for the text of Kindle 'My Clippings.txt' files.

    Each record in the file is laid out as a header line ``Title (Author)``, a
    metadata line starting with ``-``, a blank line, the highlighted text and
    finally a separator line of ten ``=`` characters. Blocks that do not follow
    this layout are skipped rather than reported as errors.
    """

    SEPARATOR = "=========="
    METADATA_PREFIX = "-"
    BOM = "\ufeff"
    MIN_LINES_PER_CLIPPING = 4

    # Preview length limit for log messages
    TITLE_PREVIEW_LENGTH = 80

    # Any of the three line ending conventions, possibly mixed in one file
    LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
    # Title is everything before the last space-separated parenthetical group
    HEADER_RE = re.compile(r"(.*) \((.*)\)")

    def __init__(
        self,
        multiline_content: bool = False,
        on_highlight: Callable[[Highlight], None] | None = None,
    ):
        """Initialize the parser.

        Args:
            multiline_content: Capture every line between the blank line and the
                separator instead of a single content line. Records spanning
                several lines are skipped when this is off.
            on_highlight: Optional callback invoked with each accepted highlight
        """
        self.multiline_content = multiline_content
        self.on_highlight = on_highlight

    def parse(self, text: str) -> list[Highlight]:
        """Parse clippings text into highlights, in the order they appear.

        Args:
            text: Raw content of a clippings file

        Returns:
            List of Highlight objects with non-empty content
        """
        blocks = self._split_blocks(text)
        highlights = []
        skipped_count = 0
        empty_count = 0

        for section_index, block in enumerate(blocks, 1):
            highlight = self._parse_block(block, section_index)
            if highlight is None:
                skipped_count += 1
                continue

            if not highlight.content:
                empty_count += 1
                logger.debug("Dropping section %d ('%s'): no highlighted text.", section_index, highlight.title)
                continue

            highlights.append(highlight)
            if self.on_highlight is not None:
                self.on_highlight(highlight)

        self._log_parsing_summary(len(blocks), skipped_count, empty_count, len(highlights))
        return highlights

    def _split_blocks(self, text: str) -> list[list[str]]:
        """Split text into the line lists found before each separator line.

        Args:
            text: Raw content of a clippings file

        Returns:
            One list of lines per separator-terminated block
        """
        blocks = []
        current: list[str] = []
        for line in self.LINE_BREAK_RE.split(text):
            if line == self.SEPARATOR:
                blocks.append(current)
                current = []
            else:
                current.append(line)

        if any(current):
            logger.debug("Ignoring %d trailing lines not terminated by a separator.", len(current))

        logger.debug("Split content into %d raw sections.", len(blocks))
        return blocks

    def _log_parsing_summary(self, processed: int, skipped: int, empty: int, parsed: int) -> None:
        logger.info(
            "Parsing complete. Processed: %d, Skipped Malformed: %d, Empty: %d, Parsed OK: %d",
            processed,
            skipped,
            empty,
            parsed,
        )

    def _parse_block(self, lines: list[str], section_index: int) -> Highlight | None:
        """Parse a single separator-terminated block.

        The record is the last ``header, metadata, blank`` run in the block
        followed by its content lines. Stray lines before it, such as the
        remains of a record whose separator was lost, are ignored.

        Args:
            lines: Lines of the block, without the separator
            section_index: The 1-based index of the block in the file (for logging)

        Returns:
            Highlight if the block holds a record, None otherwise
        """
        if len(lines) < self.MIN_LINES_PER_CLIPPING:
            logger.debug("Skipping section %d: too few lines (%d).", section_index, len(lines))
            return None

        start, title_author = self._find_record_start(lines)
        if title_author is None:
            logger.debug(
                "Skipping section %d: no record header in section starting '%s'.",
                section_index,
                self._get_preview_text(lines[0], self.TITLE_PREVIEW_LENGTH),
            )
            return None

        if start > 0:
            logger.debug("Section %d: ignoring %d lines before the record header.", section_index, start)

        content_lines = lines[start + 3 :]
        content = self._extract_content(content_lines)
        if content is None:
            logger.debug(
                "Skipping section %d: content spans %d lines and multi-line content is disabled.",
                section_index,
                len(content_lines),
            )
            return None

        title, author = title_author
        return Highlight(title=title, author=author, content=content)

    def _find_record_start(self, lines: list[str]) -> tuple[int, tuple[str, str] | None]:
        """Find the last header line followed by a metadata line and a blank line.

        At least one content line must follow the blank line.

        Returns:
            Tuple of (header index, (title, author)), or (-1, None) if none is found
        """
        for index in range(len(lines) - self.MIN_LINES_PER_CLIPPING, -1, -1):
            if lines[index + 2] or not lines[index + 1].startswith(self.METADATA_PREFIX):
                continue
            title_author = self._parse_title_author(lines[index])
            if title_author is not None:
                return index, title_author
        return -1, None

    def _parse_title_author(self, header: str) -> tuple[str, str] | None:
        """Split a header line into title and author.

        Args:
            header: First line of a record

        Returns:
            Tuple of (title, author), or None if the line has no author group
        """
        if header.startswith(self.BOM):
            header = header[1:]

        match = self.HEADER_RE.fullmatch(header)
        if not match:
            return None
        return match.group(1), match.group(2)

    def _extract_content(self, content_lines: list[str]) -> str | None:
        if not self.multiline_content:
            return content_lines[0] if len(content_lines) == 1 else None

        end = len(content_lines)
        while end > 0 and not content_lines[end - 1]:
            end -= 1
        return "\n".join(content_lines[:end])

    def _get_preview_text(self, text: str, max_length: int) -> str:
        """Get a preview of text, truncated if too long."""
        if len(text) > max_length:
            return text[:max_length] + "..."
        return text
