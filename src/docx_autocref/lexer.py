"""
Lexer for breaking document.xml and footnotes.xml into segments.

The lexer identifies the chunks that may need new markup (footnote references
in document.xml, cross-reference numbers in footnotes.xml) and treats
everything else as opaque text. Segments store offsets into the original
string rather than copies, and the segments of an input always concatenate
back to that input exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .constants import CROSS_REFERENCE_PATTERN, FOOTNOTE_REFERENCE_PATTERN

logger = logging.getLogger(__name__)


class SegmentType(Enum):
    """The kinds of segment in the two parts.

    FOOTNOTE_REF is the run holding a footnote reference in document.xml.
    CROSS_REF is the number referring to another footnote in footnotes.xml.
    Everything else is OTHER.
    """

    OTHER = "other"
    FOOTNOTE_REF = "footnote_ref"
    CROSS_REF = "cross_ref"


@dataclass(frozen=True)
class Segment:
    """A typed slice of an input string.

    Attributes:
        kind: The SegmentType of this slice
        source: The complete input string the slice belongs to
        start: Offset of the first character (inclusive)
        end: Offset past the last character (exclusive)
    """

    kind: SegmentType
    source: str
    start: int
    end: int

    @property
    def text(self) -> str:
        """Get the text of the segment, sliced from the source on demand."""
        return self.source[self.start : self.end]

    def __repr__(self) -> str:
        return f"Segment({self.kind.name}, {self.start}:{self.end}, {self.text!r})"


class _SegmentBuilder:
    """Collects segments for one input, tracking where the pending OTHER chunk starts."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.start = 0
        self.segments: list[Segment] = []

    def push(self, kind: SegmentType, start: int, end: int) -> None:
        segment = Segment(kind, self.source, start, end)
        logger.debug("Pushing %r", segment)
        self.segments.append(segment)

    def close_other(self, end: int) -> None:
        """Push the OTHER chunk running from the current start to ``end``."""
        self.push(SegmentType.OTHER, self.start, end)
        self.start = end

    def finish(self) -> list[Segment]:
        self.close_other(len(self.source))
        return self.segments


def lex_document(document_xml: str) -> list[Segment]:
    """Lex the contents of document.xml.

    Each footnote-reference run becomes a FOOTNOTE_REF segment; the text
    around them becomes OTHER segments. The sequence always starts and ends
    with an OTHER segment (possibly empty) and the two kinds alternate.

    Args:
        document_xml: Contents of word/document.xml

    Returns:
        Ordered list of segments covering the whole input
    """
    logger.debug("Lexing document...")
    builder = _SegmentBuilder(document_xml)

    for match in FOOTNOTE_REFERENCE_PATTERN.finditer(document_xml):
        builder.close_other(match.start())
        builder.push(SegmentType.FOOTNOTE_REF, match.start(), match.end())
        builder.start = match.end()

    segments = builder.finish()
    logger.debug("Document lexing finished with %d segment(s).", len(segments))
    return segments


def lex_footnotes(footnotes_xml: str) -> list[Segment]:
    """Lex the contents of footnotes.xml.

    A single reference (">note 3") produces an OTHER chunk ending after the
    marker and a CROSS_REF for the number. A range (">notes 1–2") produces
    OTHER, CROSS_REF, OTHER for the dash (kept verbatim, hyphen or en-dash),
    and CROSS_REF. A final OTHER chunk always closes the sequence.

    Args:
        footnotes_xml: Contents of word/footnotes.xml

    Returns:
        Ordered list of segments covering the whole input
    """
    logger.debug("Lexing footnotes...")
    builder = _SegmentBuilder(footnotes_xml)

    for match in CROSS_REFERENCE_PATTERN.finditer(footnotes_xml):
        if match.group("first") is not None:
            builder.close_other(match.start("first"))
            builder.push(SegmentType.CROSS_REF, match.start("first"), match.end("first"))
            builder.push(SegmentType.OTHER, match.start("dash"), match.end("dash"))
            builder.push(SegmentType.CROSS_REF, match.start("second"), match.end("second"))
        else:
            builder.close_other(match.start("single"))
            builder.push(SegmentType.CROSS_REF, match.start("single"), match.end("single"))
        builder.start = match.end()

    segments = builder.finish()
    logger.debug("Footnote lexing finished with %d segment(s).", len(segments))
    return segments


def lex(document_xml: str, footnotes_xml: str) -> tuple[list[Segment], list[Segment]]:
    """Lex both parts.

    Returns:
        Tuple of (document segments, footnote segments)
    """
    logger.debug("Starting lexer...")
    result = lex_document(document_xml), lex_footnotes(footnotes_xml)
    logger.debug("Lexer finished.")
    return result
