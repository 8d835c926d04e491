"""
Centralized constants for the markup patterns and fragments used by autocref.

This module consolidates the package part names, the regular expressions that
locate footnote references and cross-references, and the exact markup that is
injected. The injected fragments must match what Word expects byte for byte,
so import them from here rather than rebuilding them elsewhere.
"""

import re

# =============================================================================
# Package Parts
# =============================================================================

DOCUMENT_PART = "word/document.xml"
FOOTNOTES_PART = "word/footnotes.xml"


# =============================================================================
# Detection Patterns
# =============================================================================

# An existing bookmark in document.xml. The id is captured loosely so that a
# malformed value is reported rather than silently skipped.
BOOKMARK_START_PATTERN = re.compile(r'<w:bookmarkStart w:id="([^"]*)"')

# The run Pandoc emits for a footnote reference in document.xml
FOOTNOTE_REFERENCE_PATTERN = re.compile(
    r'<w:r><w:rPr><w:rStyle w:val="FootnoteReference" ?/></w:rPr>'
    r'<w:footnoteReference w:id="([0-9]{1,9})" ?/></w:r>'
)

# Cross-references in footnotes.xml. Both alternatives are anchored on the end
# of an opening tag so only text that starts a w:t element matches (otherwise
# "footnote 1" would match "note 1"). The range alternative accepts a hyphen
# or an en-dash (U+2013).
CROSS_REFERENCE_PATTERN = re.compile(
    r">notes (?P<first>[0-9]{1,9})(?P<dash>-|–)(?P<second>[0-9]{1,9})"
    r"|>note (?P<single>[0-9]{1,9})"
)

DIGITS_PATTERN = re.compile(r"[0-9]+")


# =============================================================================
# Injected Markup
# =============================================================================

BOOKMARK_START_TEMPLATE = '<w:bookmarkStart w:id="{bookmark_id}" w:name="{ref_id}"/>'
BOOKMARK_END_TEMPLATE = '<w:bookmarkEnd w:id="{bookmark_id}"/>'

# Closes the current run, inserts the field, and reopens a run for the rest of
# the text.
NOTEREF_FIELD_TEMPLATE = (
    "</w:t></w:r>"
    '<w:fldSimple w:instr=" NOTEREF {ref_id} ">'
    "<w:r><w:t>{number}</w:t></w:r>"
    "</w:fldSimple>"
    '<w:r><w:t xml:space="preserve">'
)


# =============================================================================
# Limits
# =============================================================================

# Word's hidden cross-reference bookmarks look like _Ref000000001
REF_ID_PREFIX = "_Ref"
REF_ID_LENGTH = 13
REF_ID_DIGITS = REF_ID_LENGTH - len(REF_ID_PREFIX)
MAX_REF_NUMBER = 10**REF_ID_DIGITS - 1

# Largest bookmark id accepted from an existing document (unsigned 32-bit)
MAX_BOOKMARK_ID = 2**32 - 1
