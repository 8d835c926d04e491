"""
Rendering of the new document.xml and footnotes.xml contents.

**The Markup for Bookmarks**

Word's markup for a bookmark is a pair of tags sharing an ``id``. The opening
tag also carries the ``name`` that cross-references point at::

    <w:bookmarkStart w:id="1" w:name="_Ref000000001"/>
    ...
    <w:bookmarkEnd w:id="1"/>

**The Markup for Cross-References**

A cross-reference is a NOTEREF field naming the bookmark. Because it sits in
the middle of a run of text, the run before it is closed and a new one is
opened after it::

    </w:t></w:r><w:fldSimple w:instr=" NOTEREF _Ref000000001 "><w:r><w:t>1</w:t></w:r></w:fldSimple><w:r><w:t xml:space="preserve">
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .config import MissingReferencePolicy
from .constants import (
    BOOKMARK_END_TEMPLATE,
    BOOKMARK_START_TEMPLATE,
    MAX_REF_NUMBER,
    NOTEREF_FIELD_TEMPLATE,
    REF_ID_DIGITS,
    REF_ID_PREFIX,
)
from .errors import MissingReferenceError, RefIdOverflowError
from .parser import Branch, CrossRefBranch, FootnoteRefBranch, TextBranch

logger = logging.getLogger(__name__)


def create_ref_id(number: int) -> str:
    """Create the reference name for a footnote's bookmark.

    Args:
        number: The footnote number

    Returns:
        A 13-character hidden bookmark name such as "_Ref000000042"

    Raises:
        RefIdOverflowError: If the number does not fit in nine digits
    """
    if not 1 <= number <= MAX_REF_NUMBER:
        raise RefIdOverflowError(number, MAX_REF_NUMBER)
    return f"{REF_ID_PREFIX}{number:0{REF_ID_DIGITS}d}"


def render_document(
    branches: Sequence[Branch],
    referenced: Iterable[int],
    starting_bookmark: int,
) -> tuple[str, dict[int, str]]:
    """Render the document.xml contents.

    Every footnote reference whose number is cross-referenced is wrapped in a
    new bookmark. Bookmark ids are assigned consecutively from
    ``starting_bookmark``.

    Args:
        branches: Document branches from the parser
        referenced: Footnote numbers that are cross-referenced
        starting_bookmark: The first unused bookmark id

    Returns:
        Tuple of (document_xml, ref_ids) where ref_ids maps each bookmarked
        footnote number to its reference name
    """
    logger.debug("Beginning document rendering...")

    referenced = set(referenced)
    output: list[str] = []
    ref_ids: dict[int, str] = {}
    bookmark_id = starting_bookmark

    for branch in branches:
        if isinstance(branch, TextBranch):
            output.append(branch.contents)
        elif isinstance(branch, FootnoteRefBranch):
            if branch.number in referenced:
                ref_id = create_ref_id(branch.number)
                ref_ids[branch.number] = ref_id

                output.append(
                    BOOKMARK_START_TEMPLATE.format(bookmark_id=bookmark_id, ref_id=ref_id)
                )
                output.append(branch.contents)
                output.append(BOOKMARK_END_TEMPLATE.format(bookmark_id=bookmark_id))
                logger.debug(
                    "Bookmarked footnote %d as %s (id %d)", branch.number, ref_id, bookmark_id
                )

                bookmark_id += 1
            else:
                output.append(branch.contents)

    logger.debug("Document rendering finished; %d bookmark(s) added.", len(ref_ids))
    return "".join(output), ref_ids


def render_footnotes(
    branches: Sequence[Branch],
    ref_ids: dict[int, str],
    missing_reference: MissingReferencePolicy = MissingReferencePolicy.FAIL,
) -> str:
    """Render the footnotes.xml contents.

    Each cross-reference is replaced by a NOTEREF field pointing at the
    bookmark created for its footnote.

    Args:
        branches: Footnote branches from the parser
        ref_ids: Footnote number to reference name, from render_document()
        missing_reference: What to do when a number has no reference name

    Returns:
        The new footnotes.xml contents

    Raises:
        MissingReferenceError: If a number has no reference name and the
            policy is FAIL
    """
    logger.debug("Beginning footnote rendering...")

    output: list[str] = []

    for branch in branches:
        if isinstance(branch, TextBranch):
            output.append(branch.contents)
        elif isinstance(branch, CrossRefBranch):
            ref_id = ref_ids.get(branch.number)
            if ref_id is None:
                if missing_reference is MissingReferencePolicy.FAIL:
                    raise MissingReferenceError(branch.number, list(ref_ids))
                logger.warning(
                    "Note %d is cross-referenced but has no footnote in the document; "
                    "leaving it as plain text",
                    branch.number,
                )
                output.append(branch.contents)
                continue

            output.append(NOTEREF_FIELD_TEMPLATE.format(ref_id=ref_id, number=branch.number))

    logger.debug("Footnote rendering finished.")
    return "".join(output)


def render(
    document_branches: Sequence[Branch],
    referenced: Iterable[int],
    starting_bookmark: int,
    footnote_branches: Sequence[Branch],
    missing_reference: MissingReferencePolicy = MissingReferencePolicy.FAIL,
) -> tuple[str, str]:
    """Render both parts.

    Returns:
        Tuple of (document_xml, footnotes_xml)
    """
    logger.debug("Beginning rendering...")
    document_xml, ref_ids = render_document(document_branches, referenced, starting_bookmark)
    footnotes_xml = render_footnotes(footnote_branches, ref_ids, missing_reference)
    logger.debug("Rendering finished.")
    return document_xml, footnotes_xml
