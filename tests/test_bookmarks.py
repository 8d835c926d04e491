"""
Tests for choosing the starting bookmark id.
"""

import pytest

from docx_autocref.bookmarks import starting_bookmark
from docx_autocref.constants import MAX_BOOKMARK_ID
from docx_autocref.errors import ParseError

DOCUMENT_WITH_BOOKMARKS = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">
  <w:body>
    <w:p>
      <w:bookmarkStart w:id="5" w:name="Introduction"/>
      <w:r><w:t>Introduction section text.</w:t></w:r>
      <w:bookmarkEnd w:id="5"/>
    </w:p>
    <w:p>
      <w:bookmarkStart w:id="9" w:name="Definitions"/>
      <w:r><w:t>Definitions section.</w:t></w:r>
      <w:bookmarkEnd w:id="9"/>
    </w:p>
    <w:p>
      <w:bookmarkStart w:id="0" w:name="_GoBack"/>
      <w:bookmarkEnd w:id="0"/>
    </w:p>
  </w:body>
</w:document>"""


class TestStartingBookmark:
    """Tests for starting_bookmark()."""

    def test_no_bookmarks_starts_at_one(self):
        """Test a document without bookmarks starts at 1."""
        assert starting_bookmark("<w:document><w:body/></w:document>") == 1

    def test_empty_document_starts_at_one(self):
        """Test an empty string starts at 1."""
        assert starting_bookmark("") == 1

    def test_one_past_highest_existing_id(self):
        """Test the result is one past the highest id, not the last or the count."""
        assert starting_bookmark(DOCUMENT_WITH_BOOKMARKS) == 10

    def test_bookmark_end_ids_are_ignored(self):
        """Test only bookmarkStart tags are considered."""
        text = '<w:bookmarkStart w:id="2" w:name="a"/><w:bookmarkEnd w:id="50"/>'
        assert starting_bookmark(text) == 3

    def test_zero_id(self):
        """Test a lone bookmark with id 0 gives 1."""
        assert starting_bookmark('<w:bookmarkStart w:id="0" w:name="_GoBack"/>') == 1

    def test_large_id(self):
        """Test ids beyond nine digits are accepted while the next id still fits."""
        text = '<w:bookmarkStart w:id="4294967294" w:name="a"/>'
        assert starting_bookmark(text) == MAX_BOOKMARK_ID

    def test_id_at_limit_raises(self):
        """Test the largest 32-bit id is rejected since no id would follow it."""
        text = f'<w:bookmarkStart w:id="{MAX_BOOKMARK_ID}" w:name="a"/>'

        with pytest.raises(ParseError) as exc_info:
            starting_bookmark(text)

        assert exc_info.value.text == str(MAX_BOOKMARK_ID)
        assert "maximum 4294967294" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["abc", "", "-3", "1.0", "4294967296"])
    def test_malformed_id_raises_parse_error(self, value):
        """Test an id that is not an unsigned 32-bit integer aborts with ParseError."""
        text = (
            '<w:bookmarkStart w:id="1" w:name="a"/>'
            f'<w:bookmarkStart w:id="{value}" w:name="b"/>'
        )

        with pytest.raises(ParseError) as exc_info:
            starting_bookmark(text)

        assert exc_info.value.text == value
        assert "bookmark id" in str(exc_info.value)
