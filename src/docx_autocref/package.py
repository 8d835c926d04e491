"""
DocxPackage class for reading and rewriting parts of a Word document.

This module keeps ZIP handling apart from the text pipeline. Only the parts
that are explicitly replaced change; every other entry is copied across with
its original name, order, timestamp, and compression.
"""

import io
import logging
import os
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import Any, BinaryIO

from .errors import PartNotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _copy_info(info: zipfile.ZipInfo) -> zipfile.ZipInfo:
    # writestr() updates offsets and sizes on the ZipInfo it is given, so the
    # source archive's entries must not be passed in directly
    copy = zipfile.ZipInfo(info.filename, date_time=info.date_time)
    copy.compress_type = info.compress_type
    copy.comment = info.comment
    copy.create_system = info.create_system
    copy.external_attr = info.external_attr
    return copy


class DocxPackage:
    """An in-memory view of a .docx (ZIP) package.

    Example:
        >>> with DocxPackage.open("article.docx") as pkg:
        ...     doc_xml = pkg.get_part_text("word/document.xml")
        ...     pkg.set_part_text("word/document.xml", doc_xml)
        ...     pkg.save("article-linked.docx")
    """

    def __init__(self, data: bytes, source_path: Path | None = None) -> None:
        """Initialize a package from the raw archive bytes.

        Use the class methods `open()` or `from_bytes()` instead of
        calling this constructor directly.

        Args:
            data: Bytes of the .docx file
            source_path: Original source file path, if any
        """
        try:
            self._zip = zipfile.ZipFile(io.BytesIO(data), "r")
        except zipfile.BadZipFile as e:
            raise ValidationError("Source must be a valid .docx (ZIP) file") from e
        self._source_path = source_path
        self._replacements: dict[str, bytes] = {}
        self._closed = False

    @classmethod
    def open(cls, source: str | Path | BinaryIO) -> "DocxPackage":
        """Open a package from a file path or file-like object.

        Raises:
            ValidationError: If the file does not exist or is not a ZIP file
        """
        if isinstance(source, str | Path):
            source_path = Path(source)
            if not source_path.exists():
                raise ValidationError(f"Document not found: {source_path}")
            logger.debug("Reading package %s", source_path)
            return cls(source_path.read_bytes(), source_path)

        return cls(source.read())

    @classmethod
    def from_bytes(cls, data: bytes) -> "DocxPackage":
        """Open a package from bytes."""
        return cls(data)

    @property
    def source_path(self) -> Path | None:
        """Get the original source file path, if available."""
        return self._source_path

    @property
    def part_names(self) -> list[str]:
        """Names of all entries, in archive order."""
        return self._zip.namelist()

    def part_exists(self, part_name: str) -> bool:
        """Check if a package part exists."""
        return part_name in self._replacements or part_name in self._zip.NameToInfo

    def get_part_bytes(self, part_name: str) -> bytes:
        """Get the raw bytes of a part, including any staged replacement.

        Raises:
            PartNotFoundError: If the part does not exist
        """
        if part_name in self._replacements:
            return self._replacements[part_name]
        try:
            return self._zip.read(part_name)
        except KeyError:
            raise PartNotFoundError(part_name) from None

    def get_part_text(self, part_name: str) -> str:
        """Get a part decoded as UTF-8.

        Raises:
            PartNotFoundError: If the part does not exist
            ValidationError: If the part is not valid UTF-8
        """
        data = self.get_part_bytes(part_name)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError(f"Package part '{part_name}' is not UTF-8: {e}") from e

    def set_part_text(self, part_name: str, text: str) -> None:
        """Stage new contents for an existing part.

        Raises:
            PartNotFoundError: If the part does not exist
        """
        if part_name not in self._zip.NameToInfo:
            raise PartNotFoundError(part_name)
        self._replacements[part_name] = text.encode("utf-8")

    def _write_archive(self, target: BinaryIO) -> None:
        with zipfile.ZipFile(target, "w") as out:
            for info in self._zip.infolist():
                if info.filename in self._replacements:
                    data = self._replacements[info.filename]
                    logger.debug("Writing replaced part %s", info.filename)
                else:
                    data = self._zip.read(info)
                out.writestr(_copy_info(info), data)

    def save(self, output_path: str | Path) -> None:
        """Save the package to a .docx file.

        The archive is written to a temporary file next to the destination and
        then moved into place, so saving over the source file is safe and a
        failed save leaves any existing file untouched.
        """
        output_path = Path(output_path)
        fd, temp_name = tempfile.mkstemp(
            prefix=".autocref_", suffix=".docx", dir=output_path.parent
        )
        try:
            with os.fdopen(fd, "wb") as f:
                self._write_archive(f)
            if output_path.exists():
                shutil.copymode(output_path, temp_name)
            else:
                os.chmod(temp_name, 0o644)
            os.replace(temp_name, output_path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved package to %s", output_path)

    def save_to_bytes(self) -> bytes:
        """Save the package to bytes."""
        buffer = io.BytesIO()
        self._write_archive(buffer)
        return buffer.getvalue()

    def close(self) -> None:
        """Release the underlying archive."""
        if not self._closed:
            self._zip.close()
            self._closed = True

    def __enter__(self) -> "DocxPackage":
        """Context manager support."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager cleanup."""
        self.close()
