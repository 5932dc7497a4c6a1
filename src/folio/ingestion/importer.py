"""Entry point that turns an uploaded manuscript into a persisted book."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from folio.ingestion.adapters.base import FormatAdapter
from folio.ingestion.assembler import DEFAULT_BOOK_TITLE, assemble_drafts, resolve_book_title
from folio.ingestion.errors import DecodeFailure, MissingFile, PersistenceFailure, UnsupportedFormat
from folio.ingestion.models import ChapterDraft, ImportResult, NormalizedContent, RawDocument
from folio.ingestion.segmenter import ChapterSegmenter, SegmenterSettings

if TYPE_CHECKING:
    from folio.storage.repository import BookStore

logger = logging.getLogger(__name__)

DEFAULT_BOOK_LANGUAGE = "en"
GENERIC_IMPORT_FAILURE = "Import failed"


class DocumentImporter:
    """Resolve the adapter by suffix, segment the content and store the book."""

    def __init__(
        self,
        store: BookStore | None = None,
        *,
        segmenter_settings: SegmenterSettings | None = None,
        language: str = DEFAULT_BOOK_LANGUAGE,
        default_book_title: str = DEFAULT_BOOK_TITLE,
    ) -> None:
        self._store = store
        self._segmenter = ChapterSegmenter(segmenter_settings)
        self._language = language
        self._default_book_title = default_book_title
        self._adapter_map: dict[str, FormatAdapter] = {}

    @property
    def adapter_map(self) -> dict[str, FormatAdapter]:
        """Registered adapters keyed by format name."""

        return dict(self._adapter_map)

    @property
    def accepted_suffixes(self) -> list[str]:
        return sorted({suffix for adapter in self._adapter_map.values() for suffix in adapter.suffixes})

    def register_adapter(self, name: str, adapter: FormatAdapter) -> None:
        """Register an adapter implementation by key."""

        if not name:
            raise ValueError("Adapter name cannot be empty")
        self._adapter_map[name] = adapter

    def preview(self, file_bytes: bytes | None, file_name: str | None) -> list[ChapterDraft]:
        """Run conversion, segmentation and assembly without persisting anything."""

        document = self._validate(file_bytes, file_name)
        content = self._convert(document)
        units = self._segmenter.segment(content)
        return assemble_drafts(units)

    def import_document(
        self,
        file_bytes: bytes | None,
        file_name: str | None,
        title: str | None = None,
    ) -> ImportResult:
        """Import a manuscript and create one book with its ordered chapters."""

        if self._store is None:
            raise RuntimeError("DocumentImporter has no book store configured")

        drafts = self.preview(file_bytes, file_name)
        book_title = resolve_book_title(title, file_name, self._default_book_title)

        try:
            book = self._store.create_book_with_chapters(
                title=book_title,
                language=self._language,
                chapters=drafts,
                source_name=file_name,
            )
        except Exception as exc:
            logger.exception("Persisting imported book failed: %s", file_name)
            raise PersistenceFailure(str(file_name), GENERIC_IMPORT_FAILURE) from exc

        logger.info("Imported %s chapters from %s into book %s", len(drafts), file_name, book.id)
        return ImportResult(
            book=book,
            chapters_imported=len(drafts),
            message=f"Successfully imported {len(drafts)} chapters.",
        )

    def _validate(self, file_bytes: bytes | None, file_name: str | None) -> RawDocument:
        if file_bytes is None or not file_name:
            raise MissingFile(file_name or "", "No file provided")
        return RawDocument(raw=file_bytes, file_name=file_name)

    def _select_adapter(self, document: RawDocument) -> FormatAdapter:
        for name, adapter in self._adapter_map.items():
            if adapter.supports(document.file_name):
                logger.debug("Selected %s adapter for %s", name, document.file_name)
                return adapter

        accepted = ", ".join(self.accepted_suffixes)
        logger.warning("No adapter accepts suffix %r of %s", document.suffix, document.file_name)
        raise UnsupportedFormat(document.file_name, f"Unsupported file format. Please use {accepted}")

    def _convert(self, document: RawDocument) -> NormalizedContent:
        adapter = self._select_adapter(document)
        try:
            return adapter.convert(document.raw, document.file_name)
        except Exception as exc:
            logger.exception("Decoding %s failed", document.file_name)
            raise DecodeFailure(document.file_name, GENERIC_IMPORT_FAILURE) from exc
