"""
Custom exception classes for the docx_autocref package.

Every error is terminal for a run: the pipeline either produces both output
parts or raises one of these and nothing is written.
"""


class AutoCrossRefError(Exception):
    """Base exception for all docx_autocref errors."""

    pass


class ParseError(AutoCrossRefError):
    """Raised when a captured numeric field cannot be read as an integer.

    This covers malformed bookmark ids in document.xml and malformed
    cross-reference digits in footnotes.xml.

    Attributes:
        text: The offending text
        reason: What the text was expected to be
    """

    def __init__(self, text: str, reason: str | None = None) -> None:
        self.text = text
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format an error message naming the offending text."""
        msg = f"Could not parse {self.text!r}"
        if self.reason:
            msg += f" as {self.reason}"
        return msg


class MissingReferenceError(AutoCrossRefError):
    """Raised when a cross-reference points at a footnote that was never bookmarked.

    This happens when footnotes.xml refers to a footnote number that does not
    exist in document.xml, i.e. the two parts disagree about numbering.

    Attributes:
        number: The footnote number that was referenced
        available: Footnote numbers that did receive bookmarks
    """

    def __init__(self, number: int, available: list[int] | None = None) -> None:
        self.number = number
        self.available = sorted(available or [])
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format an error message with the bookmarked footnotes."""
        msg = f"Cross-reference to note {self.number} has no matching footnote in the document"
        if self.available:
            shown = ", ".join(str(n) for n in self.available[:10])
            if len(self.available) > 10:
                shown += f", ... and {len(self.available) - 10} more"
            msg += f"\n\nBookmarked footnotes: {shown}"
        return msg


class RefIdOverflowError(AutoCrossRefError):
    """Raised when a footnote number does not fit in a fixed-width reference name.

    Attributes:
        number: The footnote number
        maximum: The largest number the reference name can hold
    """

    def __init__(self, number: int, maximum: int) -> None:
        self.number = number
        self.maximum = maximum
        super().__init__(
            f"Footnote number {number} cannot be encoded in a reference name "
            f"(must be between 1 and {maximum})"
        )


class ValidationError(AutoCrossRefError):
    """Raised when a document package or a rewritten part is invalid.

    This can occur when:
    - The input is not a .docx (ZIP) file
    - A required part is missing
    - A rewritten part is no longer well-formed XML

    Attributes:
        errors: List of specific validation error messages (optional)
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)

    def __str__(self) -> str:
        if not self.errors:
            return super().__str__()

        error_details = "\n  - " + "\n  - ".join(self.errors)
        return f"{super().__str__()}{error_details}"


class PartNotFoundError(ValidationError):
    """Raised when a package part (e.g. word/footnotes.xml) does not exist.

    Attributes:
        part_name: Name of the missing part
    """

    def __init__(self, part_name: str) -> None:
        self.part_name = part_name
        super().__init__(f"Package part '{part_name}' not found in document")


class ConfigError(AutoCrossRefError):
    """Raised when processing options or a config file are invalid."""

    pass
