"""Extract highlights from the 'My Clippings.txt' file of Amazon Kindle devices."""

__version__ = "0.1.0"

from .core import KindleHighlights, get_highlights, log_highlight  # noqa: E402
from .exceptions import ClippingsFileError, ConfigurationError, ReadlyError  # noqa: E402
from .parser import ClippingsParser, Highlight, load_text  # noqa: E402

__all__ = [
    "ClippingsFileError",
    "ClippingsParser",
    "ConfigurationError",
    "Highlight",
    "KindleHighlights",
    "ReadlyError",
    "__version__",
    "get_highlights",
    "load_text",
    "log_highlight",
]
