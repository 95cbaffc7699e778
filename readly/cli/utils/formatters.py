"""Output formatting utilities for CLI commands."""

import csv
import io
import json

from ...parser.models import Highlight

MAX_TITLE_LENGTH = 40
MAX_AUTHOR_LENGTH = 28
BOOKS_TABLE_WIDTH = 80


def _truncate(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[: max_length - 3] + "..."
    return text


def format_highlights_text(highlights: list[Highlight], total: int) -> str:
    """Format highlights as readable text."""
    output = [f"\n--- Highlights ({len(highlights)} of {total}) ---"]
    for i, highlight in enumerate(highlights, 1):
        output.append(f"\n{i}. {highlight.title} ({highlight.author})")
        output.append(f"   {highlight.content}")
    return "\n".join(output)


def format_highlights_json(highlights: list[Highlight], total: int) -> str:
    """Format highlights as JSON."""
    return json.dumps(
        {"total": total, "count": len(highlights), "highlights": [h.to_dict() for h in highlights]},
        indent=2,
        ensure_ascii=False,
    )


def format_highlights_csv(highlights: list[Highlight]) -> str:
    """Format highlights as CSV."""
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=["title", "author", "content"])
    writer.writeheader()
    writer.writerows(h.to_dict() for h in highlights)
    return output.getvalue()


def format_books_text(books: list[dict]) -> str:
    """Format the per-book highlight counts as a table."""
    if not books:
        return "No books found."

    output = ["\n--- Books ---"]
    output.append(f"{'Title':<{MAX_TITLE_LENGTH}} {'Author':<{MAX_AUTHOR_LENGTH}} {'Highlights':>10}")
    output.append("-" * BOOKS_TABLE_WIDTH)
    for book in books:
        output.append(
            f"{_truncate(book['title'], MAX_TITLE_LENGTH):<{MAX_TITLE_LENGTH}} "
            f"{_truncate(book['author'], MAX_AUTHOR_LENGTH):<{MAX_AUTHOR_LENGTH}} "
            f"{book['highlight_count']:>10}"
        )
    output.append("-" * BOOKS_TABLE_WIDTH)
    output.append(f"Total: {sum(b['highlight_count'] for b in books)} highlights across {len(books)} books")
    return "\n".join(output)


def format_books_json(books: list[dict]) -> str:
    return json.dumps(books, indent=2, ensure_ascii=False)


def format_books_csv(books: list[dict]) -> str:
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=["title", "author", "highlight_count"])
    writer.writeheader()
    writer.writerows(books)
    return output.getvalue()
