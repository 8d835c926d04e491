"""
Bookmark id allocation for new cross-reference bookmarks.

document.xml may already contain bookmarks (headings, Word's own _GoBack, and
so on) with arbitrary ids. Bookmark ids must be unique within the document,
so new bookmarks start one past the highest id already in use.
"""

import logging

from .constants import BOOKMARK_START_PATTERN, DIGITS_PATTERN, MAX_BOOKMARK_ID
from .errors import ParseError

logger = logging.getLogger(__name__)


def _parse_bookmark_id(value: str) -> int:
    if not DIGITS_PATTERN.fullmatch(value):
        raise ParseError(value, "a bookmark id in document.xml")
    bookmark_id = int(value)
    # The next id handed out is one past the highest, so it must stay in range too
    if bookmark_id >= MAX_BOOKMARK_ID:
        raise ParseError(value, f"a bookmark id in document.xml (maximum {MAX_BOOKMARK_ID - 1})")
    return bookmark_id


def starting_bookmark(document_xml: str) -> int:
    """Determine the first bookmark id to use for new bookmarks.

    Args:
        document_xml: Full contents of word/document.xml

    Returns:
        One more than the highest existing bookmark id, or 1 if the document
        has no bookmarks

    Raises:
        ParseError: If an existing bookmark id is not an unsigned integer, or is
            so large that the next id would exceed MAX_BOOKMARK_ID

    Example:
        >>> starting_bookmark('<w:bookmarkStart w:id="5" w:name="a"/>')
        6
    """
    logger.debug("Determining starting bookmark id...")

    existing = [
        _parse_bookmark_id(match.group(1))
        for match in BOOKMARK_START_PATTERN.finditer(document_xml)
    ]

    start = max(existing) + 1 if existing else 1
    logger.debug("Found %d existing bookmark(s); starting bookmark is %d", len(existing), start)
    return start
