"""
Parser that turns lexer segments into branches ready for markup.

Document segments become text and numbered footnote-reference branches.
Footnote segments become text and cross-reference branches, and the parser
also collects which footnotes are referenced at all so the renderer only
bookmarks the footnotes that need it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple, Union

from .constants import DIGITS_PATTERN
from .errors import ParseError
from .lexer import Segment, SegmentType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextBranch:
    """Text that is copied to the output unchanged."""

    contents: str


@dataclass(frozen=True)
class FootnoteRefBranch:
    """A footnote reference in document.xml.

    Attributes:
        number: The footnote's number, counted in source order from 1
        contents: The original footnote-reference run
    """

    number: int
    contents: str


@dataclass(frozen=True)
class CrossRefBranch:
    """A cross-reference to another footnote in footnotes.xml.

    Attributes:
        number: The footnote number referred to
        contents: The digits as written in the source
    """

    number: int
    contents: str


Branch = Union[TextBranch, FootnoteRefBranch, CrossRefBranch]


class ParseResult(NamedTuple):
    """The two branch sequences plus the footnotes that are cross-referenced."""

    document_branches: list[Branch]
    footnote_branches: list[Branch]
    referenced: list[int]


def parse_document(segments: Sequence[Segment]) -> list[Branch]:
    """Parse the segments produced from document.xml.

    OTHER segments pass through as TextBranch. Each FOOTNOTE_REF segment gets
    the next footnote number, starting at 1.

    Note:
        Numbering assumes the document's footnotes start at 1 and run without
        gaps. Supra's offset feature breaks this assumption.
    """
    logger.debug("Starting document parser...")

    branches: list[Branch] = []
    footnote_number = 1

    for segment in segments:
        if segment.kind is SegmentType.OTHER:
            branches.append(TextBranch(segment.text))
        elif segment.kind is SegmentType.FOOTNOTE_REF:
            logger.debug("Footnote reference %d: %r", footnote_number, segment.text)
            branches.append(FootnoteRefBranch(footnote_number, segment.text))
            footnote_number += 1

    logger.debug("Document parser finished; %d footnote reference(s).", footnote_number - 1)
    return branches


def parse_footnotes(segments: Sequence[Segment]) -> tuple[list[Branch], list[int]]:
    """Parse the segments produced from footnotes.xml.

    Args:
        segments: Footnote segments from the lexer

    Returns:
        Tuple of (branches, referenced) where referenced lists each
        cross-referenced footnote number once, in the order first seen

    Raises:
        ParseError: If a CROSS_REF segment is not a run of digits
    """
    logger.debug("Starting footnotes parser...")

    branches: list[Branch] = []
    referenced: list[int] = []
    seen: set[int] = set()

    for segment in segments:
        if segment.kind is SegmentType.OTHER:
            branches.append(TextBranch(segment.text))
        elif segment.kind is SegmentType.CROSS_REF:
            digits = segment.text
            if not DIGITS_PATTERN.fullmatch(digits):
                raise ParseError(digits, "a cross-referenced footnote number")
            number = int(digits)

            if number not in seen:
                logger.debug("Adding footnote %d to used cross-references", number)
                seen.add(number)
                referenced.append(number)

            branches.append(CrossRefBranch(number, digits))

    logger.debug("Footnotes parser finished; %d footnote(s) referenced.", len(referenced))
    return branches, referenced


def parse(
    document_segments: Sequence[Segment], footnote_segments: Sequence[Segment]
) -> ParseResult:
    """Parse both segment sequences."""
    logger.debug("Starting parser...")
    document_branches = parse_document(document_segments)
    footnote_branches, referenced = parse_footnotes(footnote_segments)
    logger.debug("Parser finished.")
    return ParseResult(document_branches, footnote_branches, referenced)
