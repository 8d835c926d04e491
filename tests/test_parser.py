"""
Tests for the document and footnotes parsers.
"""

import pytest

from docx_autocref.errors import ParseError
from docx_autocref.lexer import Segment, SegmentType, lex_document, lex_footnotes
from docx_autocref.parser import (
    CrossRefBranch,
    FootnoteRefBranch,
    ParseResult,
    TextBranch,
    parse,
    parse_document,
    parse_footnotes,
)

FOOTNOTE_RUN = (
    '<w:r><w:rPr><w:rStyle w:val="FootnoteReference" /></w:rPr>'
    '<w:footnoteReference w:id="{id}" /></w:r>'
)


def document_with_footnotes(count: int) -> str:
    return "".join(
        f"<w:p><w:r><w:t>Claim {i}.</w:t></w:r>{FOOTNOTE_RUN.format(id=19 + i)}</w:p>"
        for i in range(1, count + 1)
    )


class TestParseDocument:
    """Tests for numbering footnote references."""

    def test_text_passes_through(self):
        """Test OTHER segments become TextBranch with the same contents."""
        branches = parse_document(lex_document("<w:p>No footnotes</w:p>"))
        assert branches == [TextBranch("<w:p>No footnotes</w:p>")]

    def test_sequential_numbering(self):
        """Test the k-th footnote reference gets number k."""
        branches = parse_document(lex_document(document_with_footnotes(5)))

        refs = [b for b in branches if isinstance(b, FootnoteRefBranch)]
        assert [r.number for r in refs] == [1, 2, 3, 4, 5]

    def test_numbering_ignores_source_ids(self):
        """Test numbering counts occurrences rather than reading w:id."""
        text = FOOTNOTE_RUN.format(id=99) + FOOTNOTE_RUN.format(id=3)
        branches = parse_document(lex_document(text))

        refs = [b for b in branches if isinstance(b, FootnoteRefBranch)]
        assert [r.number for r in refs] == [1, 2]
        assert refs[0].contents == FOOTNOTE_RUN.format(id=99)

    def test_contents_preserved(self):
        """Test joining branch contents reproduces the input."""
        text = document_with_footnotes(3)
        branches = parse_document(lex_document(text))
        assert "".join(b.contents for b in branches) == text


class TestParseFootnotes:
    """Tests for parsing cross-references."""

    def test_single_reference(self):
        """Test a cross-reference becomes a CrossRefBranch."""
        branches, referenced = parse_footnotes(lex_footnotes("<w:t>note 4.</w:t>"))

        assert branches == [
            TextBranch("<w:t>note "),
            CrossRefBranch(4, "4"),
            TextBranch(".</w:t>"),
        ]
        assert referenced == [4]

    def test_range_reference(self):
        """Test both ends of a range are referenced and the dash kept as text."""
        branches, referenced = parse_footnotes(lex_footnotes("<w:t>notes 1–2.</w:t>"))

        assert branches == [
            TextBranch("<w:t>notes "),
            CrossRefBranch(1, "1"),
            TextBranch("–"),
            CrossRefBranch(2, "2"),
            TextBranch(".</w:t>"),
        ]
        assert referenced == [1, 2]

    def test_referenced_is_distinct_in_first_seen_order(self):
        """Test duplicates collapse and insertion order is kept."""
        text = "<w:t>note 3</w:t><w:t>notes 1–3</w:t><w:t>note 1</w:t><w:t>note 2</w:t>"
        branches, referenced = parse_footnotes(lex_footnotes(text))

        assert referenced == [3, 1, 2]
        numbers = [b.number for b in branches if isinstance(b, CrossRefBranch)]
        assert numbers == [3, 1, 3, 1, 2]

    def test_referenced_matches_cross_ref_branches(self):
        """Test a number is referenced iff some CrossRefBranch carries it."""
        text = "<w:t>note 7</w:t><w:t>notes 2-4</w:t><w:t>note 7</w:t>"
        branches, referenced = parse_footnotes(lex_footnotes(text))

        carried = {b.number for b in branches if isinstance(b, CrossRefBranch)}
        assert set(referenced) == carried
        assert len(referenced) == len(carried)

    def test_leading_zeros(self):
        """Test leading zeros parse to the number but keep the original digits."""
        branches, referenced = parse_footnotes(lex_footnotes("<w:t>note 007</w:t>"))
        assert CrossRefBranch(7, "007") in branches
        assert referenced == [7]

    def test_no_cross_references(self):
        """Test footnotes without references produce an empty referenced list."""
        branches, referenced = parse_footnotes(lex_footnotes("<w:t>Id.</w:t>"))
        assert branches == [TextBranch("<w:t>Id.</w:t>")]
        assert referenced == []

    @pytest.mark.parametrize("digits", ["x1", "", "1.5", "١٢"])
    def test_malformed_digits_raise_parse_error(self, digits):
        """Test a CROSS_REF segment that is not ASCII digits is a ParseError."""
        source = f">note {digits}"
        segments = [
            Segment(SegmentType.OTHER, source, 0, 6),
            Segment(SegmentType.CROSS_REF, source, 6, len(source)),
        ]

        with pytest.raises(ParseError) as exc_info:
            parse_footnotes(segments)

        assert exc_info.value.text == digits
        assert repr(digits) in str(exc_info.value)


class TestParse:
    """Tests for parsing both sequences together."""

    def test_parse_result(self):
        """Test parse() returns both branch lists and the referenced numbers."""
        result = parse(
            lex_document(document_with_footnotes(2)),
            lex_footnotes("<w:t>note 2</w:t>"),
        )

        assert isinstance(result, ParseResult)
        document_branches, footnote_branches, referenced = result
        assert sum(isinstance(b, FootnoteRefBranch) for b in document_branches) == 2
        assert CrossRefBranch(2, "2") in footnote_branches
        assert result.referenced == [2]

    def test_missing_footnote_is_representable(self):
        """Test a reference to a footnote absent from the document still parses."""
        result = parse(lex_document(""), lex_footnotes("<w:t>note 9</w:t>"))
        assert result.referenced == [9]
        assert result.document_branches == [TextBranch("")]
