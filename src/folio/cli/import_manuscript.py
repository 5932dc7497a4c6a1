"""CLI command that imports a manuscript file as a book with chapters."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from folio.config import ImportSettings
from folio.ingestion.adapters import build_default_adapters
from folio.ingestion.errors import ManuscriptImportError
from folio.ingestion.importer import DocumentImporter
from folio.ingestion.models import ChapterDraft
from folio.storage.repository import BookRepository, BookStore

logger = logging.getLogger(__name__)


def _build_importer(settings: ImportSettings, store: BookStore | None) -> DocumentImporter:
    importer = DocumentImporter(
        store,
        segmenter_settings=settings.segmenter_settings(),
        language=settings.language,
        default_book_title=settings.default_book_title,
    )
    for name, adapter in build_default_adapters().items():
        importer.register_adapter(name, adapter)
    return importer


def _read_payload(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except OSError as exc:
        logger.error("Failed to read %s: %s", path, exc)
        return None


def _chapter_summary(draft: ChapterDraft) -> dict[str, object]:
    return {
        "title": draft.title,
        "order_index": draft.order_index,
        "word_count": draft.word_count,
        "status": draft.status,
    }


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )

    parser = argparse.ArgumentParser(description="Import a DOCX, Markdown or text manuscript as a book")
    parser.add_argument("--path", required=True, help="Manuscript file")
    parser.add_argument("--title", default=None, help="Book title (defaults to the file name)")
    parser.add_argument("--db-path", default=None, help="SQLite database path (overrides FOLIO_DB_PATH)")
    parser.add_argument("--dry-run", action="store_true", help="Show detected chapters without storing them")
    args = parser.parse_args(argv)

    source_path = Path(args.path)
    try:
        settings = ImportSettings.from_env()
    except ValueError as exc:
        logger.error("Invalid import settings: %s", exc)
        print(json.dumps({"path": str(source_path), "error": str(exc)}, ensure_ascii=False, indent=2))
        return 1

    payload = _read_payload(source_path)

    if args.dry_run:
        importer = _build_importer(settings, None)
        try:
            drafts = importer.preview(payload, source_path.name)
        except ManuscriptImportError as exc:
            print(json.dumps({"path": str(source_path), "error": exc.message}, ensure_ascii=False, indent=2))
            return 1
        result_payload: dict[str, object] = {
            "path": str(source_path),
            "chapters_detected": len(drafts),
            "chapters": [_chapter_summary(draft) for draft in drafts],
        }
        print(json.dumps(result_payload, ensure_ascii=False, indent=2))
        return 0

    db_path = Path(args.db_path) if args.db_path else settings.db_path
    with BookRepository(db_path) as repository:
        importer = _build_importer(settings, repository)
        try:
            result = importer.import_document(payload, source_path.name, args.title)
        except ManuscriptImportError as exc:
            print(json.dumps({"path": str(source_path), "error": exc.message}, ensure_ascii=False, indent=2))
            return 1

    result_payload = {
        "path": str(source_path),
        "book": {"id": result.book.id, "title": result.book.title, "language": result.book.language},
        "chapters_imported": result.chapters_imported,
        "message": result.message,
        "chapters": [
            {
                "title": chapter.title,
                "order_index": chapter.order_index,
                "word_count": chapter.word_count,
                "status": chapter.status,
            }
            for chapter in result.book.chapters
        ],
    }
    print(json.dumps(result_payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
