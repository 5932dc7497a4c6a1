"""Domain errors raised by the manuscript import entry point."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, eq=False)
class ManuscriptImportError(Exception):
    """Base error for import failures that are reported to the caller."""

    file_name: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (file={self.file_name})"


class MissingFile(ManuscriptImportError):
    """No file payload was supplied with the request."""


class UnsupportedFormat(ManuscriptImportError):
    """The file-name suffix does not map to any registered adapter."""


class DecodeFailure(ManuscriptImportError):
    """The format decoder could not read the payload."""


class PersistenceFailure(ManuscriptImportError):
    """The atomic book create was rejected by the store."""
