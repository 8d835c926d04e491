"""
Plain-file helpers for working with extracted XML parts.

Files are read and written with newline translation disabled so line endings
round-trip unchanged.
"""

import logging
from pathlib import Path

from .errors import AutoCrossRefError

logger = logging.getLogger(__name__)


def load_file(path: str | Path) -> str:
    """Load the contents of a UTF-8 text file.

    Raises:
        AutoCrossRefError: If the file cannot be read
    """
    path = Path(path)
    logger.debug("Loading file %s", path)
    try:
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise AutoCrossRefError(f"Error reading the file {path}: {e}") from e
    logger.debug("File %s loaded.", path)
    return text


def save_file(path: str | Path, text: str) -> None:
    """Save a string to a UTF-8 text file.

    Raises:
        AutoCrossRefError: If the file cannot be written
    """
    path = Path(path)
    logger.debug("Saving file %s", path)
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise AutoCrossRefError(f"Error writing the file {path}: {e}") from e
    logger.debug("File %s saved.", path)
