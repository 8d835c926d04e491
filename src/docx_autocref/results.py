"""
Result class for processing runs.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class ProcessResult:
    """Result of adding cross-reference markup to a document.

    Attributes:
        document_xml: The new word/document.xml contents
        footnotes_xml: The new word/footnotes.xml contents
        starting_bookmark: The first bookmark id that was available
        bookmarks_added: Number of bookmarks wrapped around footnote references
        cross_references_linked: Number of cross-references turned into fields
        cross_references_skipped: Number of cross-references left as plain text
        referenced_footnotes: Cross-referenced footnote numbers, in first-seen order
    """

    document_xml: str
    footnotes_xml: str
    starting_bookmark: int
    bookmarks_added: int = 0
    cross_references_linked: int = 0
    cross_references_skipped: int = 0
    referenced_footnotes: list[int] = field(default_factory=list)

    def __iter__(self) -> Iterator[str]:
        """Unpack as (document_xml, footnotes_xml)."""
        return iter((self.document_xml, self.footnotes_xml))

    @property
    def changed(self) -> bool:
        """Whether any markup was added."""
        return self.bookmarks_added > 0 or self.cross_references_linked > 0

    def __str__(self) -> str:
        """Get string representation of the result."""
        parts = [
            f"{self.bookmarks_added} bookmark{'s' if self.bookmarks_added != 1 else ''}",
            f"{self.cross_references_linked} cross-reference"
            f"{'s' if self.cross_references_linked != 1 else ''}",
        ]
        msg = f"Added {parts[0]}, linked {parts[1]}"
        if self.cross_references_skipped:
            msg += f" ({self.cross_references_skipped} skipped)"
        return msg
