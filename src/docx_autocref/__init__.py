"""
docx_autocref - Live footnote cross-references for Pandoc + Supra Word documents.

Law-review style footnotes refer back to earlier footnotes ("See supra note 3").
Pandoc writes those numbers as plain text, so they go stale whenever footnotes
are added or removed. This package bookmarks each referenced footnote and
turns the numbers into NOTEREF fields that Word keeps up to date.

Example:
    >>> from docx_autocref import process_docx
    >>> result = process_docx("article.docx", "article-linked.docx")
    >>> print(result)
    Added 2 bookmarks, linked 3 cross-references
"""

__version__ = "0.1.0"
__all__ = [
    "process",
    "process_docx",
    "process_xml_files",
    "ProcessOptions",
    "MissingReferencePolicy",
    "load_options",
    "ProcessResult",
    "DocxPackage",
    "AutoCrossRefError",
    "ParseError",
    "MissingReferenceError",
    "RefIdOverflowError",
    "ValidationError",
    "PartNotFoundError",
    "ConfigError",
]

# Import configuration
from .config import MissingReferencePolicy, ProcessOptions, load_options
from .errors import (
    AutoCrossRefError,
    ConfigError,
    MissingReferenceError,
    ParseError,
    PartNotFoundError,
    RefIdOverflowError,
    ValidationError,
)

# Import package class
from .package import DocxPackage

# Import pipeline entry points
from .pipeline import process, process_docx, process_xml_files

# Import result types
from .results import ProcessResult
