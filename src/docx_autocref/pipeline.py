"""
The processing pipeline.

`process()` is the pure transformation: it determines the starting bookmark
id, then lexes, parses, and renders the two parts. `process_docx()` and
`process_xml_files()` wrap it with the package and plain-file layers. Any
error aborts the whole run before anything is written.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .bookmarks import starting_bookmark
from .config import ProcessOptions
from .constants import DOCUMENT_PART, FOOTNOTES_PART
from .files import load_file, save_file
from .lexer import lex
from .package import DocxPackage
from .parser import CrossRefBranch, FootnoteRefBranch, parse
from .render import render
from .results import ProcessResult
from .validation import check_well_formed

logger = logging.getLogger(__name__)


def process(
    document_xml: str,
    footnotes_xml: str,
    options: ProcessOptions | None = None,
    log: logging.Logger | logging.LoggerAdapter | None = None,
) -> ProcessResult:
    """Add bookmark and cross-reference markup to the two parts.

    Args:
        document_xml: Contents of word/document.xml
        footnotes_xml: Contents of word/footnotes.xml
        options: Processing options (defaults to ProcessOptions())
        log: Logger for pipeline diagnostics (defaults to this module's logger)

    Returns:
        ProcessResult holding both new parts and counts of what changed

    Raises:
        ParseError: If a bookmark id or cross-reference number is malformed
        MissingReferenceError: If a cross-reference has no footnote and the
            missing-reference policy is FAIL
        RefIdOverflowError: If a footnote number is too large for a reference name

    Example:
        >>> result = process(document_xml, footnotes_xml)
        >>> print(result)
        Added 2 bookmarks, linked 3 cross-references
    """
    options = options or ProcessOptions()
    log = log or logger

    first_bookmark = starting_bookmark(document_xml)
    log.debug("Starting bookmark id is %d", first_bookmark)

    document_segments, footnote_segments = lex(document_xml, footnotes_xml)
    log.debug(
        "Lexed %d document and %d footnote segment(s)",
        len(document_segments),
        len(footnote_segments),
    )

    document_branches, footnote_branches, referenced = parse(document_segments, footnote_segments)
    log.debug("Cross-referenced footnotes: %s", referenced)

    new_document_xml, new_footnotes_xml = render(
        document_branches,
        referenced,
        first_bookmark,
        footnote_branches,
        options.missing_reference,
    )

    # A referenced footnote is bookmarked only if document.xml actually has it
    referenced_set = set(referenced)
    bookmarked = {
        b.number
        for b in document_branches
        if isinstance(b, FootnoteRefBranch) and b.number in referenced_set
    }
    cross_refs = [b for b in footnote_branches if isinstance(b, CrossRefBranch)]
    linked = sum(1 for b in cross_refs if b.number in bookmarked)

    result = ProcessResult(
        document_xml=new_document_xml,
        footnotes_xml=new_footnotes_xml,
        starting_bookmark=first_bookmark,
        bookmarks_added=len(bookmarked),
        cross_references_linked=linked,
        cross_references_skipped=len(cross_refs) - linked,
        referenced_footnotes=referenced,
    )
    log.info("%s", result)
    return result


def _check_outputs(result: ProcessResult, options: ProcessOptions) -> None:
    if options.validate_output:
        check_well_formed(result.document_xml, DOCUMENT_PART)
        check_well_formed(result.footnotes_xml, FOOTNOTES_PART)


def process_docx(
    input_path: str | Path,
    output_path: str | Path | None = None,
    options: ProcessOptions | None = None,
) -> ProcessResult:
    """Process a .docx file, writing the result to ``output_path``.

    If ``output_path`` is None the input file is overwritten. Parts other
    than document.xml and footnotes.xml are copied unchanged.

    Raises:
        ValidationError: If the package is invalid, a part is missing, or
            the rewritten XML is not well-formed
    """
    options = options or ProcessOptions()
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path is not None else input_path

    with DocxPackage.open(input_path) as pkg:
        result = process(
            pkg.get_part_text(DOCUMENT_PART), pkg.get_part_text(FOOTNOTES_PART), options
        )
        _check_outputs(result, options)

        pkg.set_part_text(DOCUMENT_PART, result.document_xml)
        pkg.set_part_text(FOOTNOTES_PART, result.footnotes_xml)
        pkg.save(output_path)

    logger.info("Saved %s", output_path)
    return result


def process_xml_files(
    document_path: str | Path,
    footnotes_path: str | Path,
    document_output: str | Path | None = None,
    footnotes_output: str | Path | None = None,
    options: ProcessOptions | None = None,
) -> ProcessResult:
    """Process already-extracted document.xml and footnotes.xml files.

    Outputs default to overwriting the inputs. Both files are written only
    after both have been produced (and checked, if enabled).
    """
    options = options or ProcessOptions()

    result = process(load_file(document_path), load_file(footnotes_path), options)
    _check_outputs(result, options)

    save_file(document_output or document_path, result.document_xml)
    save_file(footnotes_output or footnotes_path, result.footnotes_xml)
    return result
