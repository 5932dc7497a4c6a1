"""Canonical data structures shared by the import pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from folio.storage.repository import StoredBook


DRAFT_STATUS = "draft"


@dataclass(frozen=True, slots=True)
class RawDocument:
    """Uploaded manuscript payload before format conversion."""

    raw: bytes
    file_name: str

    @property
    def suffix(self) -> str:
        return PurePath(self.file_name).suffix.lower()


@dataclass(frozen=True, slots=True)
class NormalizedContent:
    """HTML rendition of a document plus its markup-free twin."""

    html: str
    plain_text: str


@dataclass(frozen=True, slots=True)
class ChapterUnit:
    """One detected chapter: title and HTML body span."""

    title: str
    raw_content: str


@dataclass(frozen=True, slots=True)
class ChapterDraft:
    """Ready-to-persist chapter record."""

    title: str
    content: str
    order_index: int
    word_count: int
    status: str = DRAFT_STATUS


@dataclass(slots=True)
class ImportResult:
    book: StoredBook
    chapters_imported: int
    message: str
