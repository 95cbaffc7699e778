"""Locating and reading the clippings file on a mounted Kindle device."""

import logging
from pathlib import Path

from ..exceptions import ClippingsFileError

logger = logging.getLogger(__name__)

# Location of My Clippings.txt relative to the root of the Kindle volume
CLIPPINGS_RELATIVE_PATH = Path("documents", "My Clippings.txt")


def clippings_file_path(base_directory: str | Path) -> Path:
    """Return the path of the clippings file below a Kindle base directory.

    Args:
        base_directory: Root of the mounted Kindle volume

    Returns:
        Path to 'documents/My Clippings.txt' inside the base directory

    Raises:
        ClippingsFileError: If the base directory is empty or not a path
    """
    if not base_directory or not isinstance(base_directory, str | Path):
        raise ClippingsFileError(f"Invalid Kindle base path: {base_directory!r}", path=base_directory)
    return Path(base_directory) / CLIPPINGS_RELATIVE_PATH


def load_text(base_directory: str | Path) -> str:
    """Read the full text of the clippings file of a Kindle device.

    Line endings are returned exactly as stored in the file. A leading UTF-8
    byte order mark is dropped.

    Args:
        base_directory: Root of the mounted Kindle volume

    Returns:
        Raw text of the clippings file

    Raises:
        ClippingsFileError: If the file is missing, unreadable or not valid UTF-8
    """
    clippings_file = clippings_file_path(base_directory)
    logger.debug("Reading Kindle clippings file: %s", clippings_file)

    try:
        with open(clippings_file, encoding="utf-8-sig", newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read clippings file %s: %s", clippings_file, e)
        raise ClippingsFileError(f"Unable to read the Kindle clippings file: {clippings_file}", path=clippings_file) from e

    logger.debug("Successfully read %d characters from %s", len(content), clippings_file)
    return content
