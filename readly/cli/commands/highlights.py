"""Highlights command handler for the readly CLI."""

import logging
import sys

from ...core import KindleHighlights
from ...exceptions import ConfigurationError
from ...parser.models import Highlight
from ..utils.common import get_kindle_base_path_cli, get_multiline_content_cli
from ..utils.formatters import (
    format_books_csv,
    format_books_json,
    format_books_text,
    format_highlights_csv,
    format_highlights_json,
    format_highlights_text,
)

logger = logging.getLogger(__name__)


def handle_highlights(args):
    """Handle the 'highlights' command: read the Kindle device and print its highlights."""
    logger.info("Starting 'highlights' command.")

    try:
        base_path = get_kindle_base_path_cli(args)
        source = KindleHighlights(base_path, multiline_content=get_multiline_content_cli(args))
        highlights = source.get_highlights()
    except ConfigurationError as e:
        # ClippingsFileError is a ConfigurationError; show the I/O cause too
        cause = f" ({e.__cause__})" if e.__cause__ else ""
        logger.error("%s%s", e, cause)
        print(f"Error: {e}{cause}", file=sys.stderr)
        sys.exit(1)

    command = getattr(args, "highlights_command", None) or "list"
    if command == "books":
        _handle_highlights_books(highlights, args)
    else:
        _handle_highlights_list(highlights, args)


def filter_highlights(
    highlights: list[Highlight], title: str | None = None, author: str | None = None, limit: int | None = None
) -> list[Highlight]:
    """Filter highlights by case-insensitive partial title/author match, keeping file order."""
    if title:
        highlights = [h for h in highlights if title.lower() in h.title.lower()]
    if author:
        highlights = [h for h in highlights if author.lower() in h.author.lower()]
    if limit is not None and limit >= 0:
        highlights = highlights[:limit]
    return highlights


def group_by_book(highlights: list[Highlight]) -> list[dict]:
    """Count highlights per (title, author), in order of first appearance."""
    counts: dict[tuple[str, str], int] = {}
    for highlight in highlights:
        key = (highlight.title, highlight.author)
        counts[key] = counts.get(key, 0) + 1
    return [{"title": title, "author": author, "highlight_count": count} for (title, author), count in counts.items()]


def _handle_highlights_list(highlights: list[Highlight], args):
    selected = filter_highlights(
        highlights,
        title=getattr(args, "title", None),
        author=getattr(args, "author", None),
        limit=getattr(args, "limit", None),
    )
    output_format = getattr(args, "format", "text")

    if output_format == "json":
        print(format_highlights_json(selected, len(highlights)))
        return
    if output_format == "csv":
        print(format_highlights_csv(selected), end="")
        return

    if not selected:
        print("No highlights found.")
        return
    print(format_highlights_text(selected, len(highlights)))


def _handle_highlights_books(highlights: list[Highlight], args):
    books = group_by_book(highlights)
    output_format = getattr(args, "format", "text")

    if output_format == "json":
        print(format_books_json(books))
    elif output_format == "csv":
        print(format_books_csv(books), end="")
    else:
        print(format_books_text(books))
