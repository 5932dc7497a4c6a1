"""Repository for books and their ordered chapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import sqlite3
from typing import Protocol, Sequence

from folio.ingestion.models import DRAFT_STATUS, ChapterDraft
from folio.ingestion.normalization import count_words
from folio.ingestion.segmenter import DEFAULT_CHAPTER_TITLE_TEMPLATE
from folio.storage.schema import apply_runtime_pragmas, ensure_schema


@dataclass(slots=True)
class StoredChapter:
    id: int
    book_id: int
    title: str
    content: str
    order_index: int
    word_count: int
    status: str


@dataclass(slots=True)
class StoredBook:
    id: int
    title: str
    language: str
    source_name: str | None
    chapters: list[StoredChapter] = field(default_factory=list)


class BookStore(Protocol):
    """Persistence contract consumed by the importer."""

    def create_book_with_chapters(
        self,
        *,
        title: str,
        language: str,
        chapters: Sequence[ChapterDraft],
        source_name: str | None = None,
    ) -> StoredBook:
        """Create one book owning all chapters in a single atomic write."""


class BookRepository:
    """SQLite-backed storage facade for books and chapters."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._connection = sqlite3.connect(str(self._db_path))
        self._connection.row_factory = sqlite3.Row
        apply_runtime_pragmas(self._connection)
        ensure_schema(self._connection)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> "BookRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def create_book_with_chapters(
        self,
        *,
        title: str,
        language: str,
        chapters: Sequence[ChapterDraft],
        source_name: str | None = None,
    ) -> StoredBook:
        """Insert the book and every chapter in one transaction.

        Any failure rolls the whole transaction back, so no book is left
        without its chapters.
        """

        with self._connection:
            cursor = self._connection.execute(
                "INSERT INTO books (title, language, source_name) VALUES (?, ?, ?)",
                (title, language, source_name),
            )
            book_id = int(cursor.lastrowid)
            self._connection.executemany(
                """
                INSERT INTO chapters (book_id, title, content, order_index, word_count, status)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (book_id, draft.title, draft.content, draft.order_index, draft.word_count, draft.status)
                    for draft in chapters
                ],
            )

        book = self.get_book(book_id)
        if book is None:
            raise sqlite3.DatabaseError(f"Book {book_id} vanished after insert")
        return book

    def get_book(self, book_id: int) -> StoredBook | None:
        row = self._connection.execute(
            "SELECT id, title, language, source_name FROM books WHERE id = ?",
            (book_id,),
        ).fetchone()
        if row is None:
            return None

        return StoredBook(
            id=int(row["id"]),
            title=row["title"],
            language=row["language"],
            source_name=row["source_name"],
            chapters=self.list_chapters(book_id),
        )

    def list_chapters(self, book_id: int) -> list[StoredChapter]:
        rows = self._connection.execute(
            """
            SELECT id, book_id, title, content, order_index, word_count, status
            FROM chapters
            WHERE book_id = ?
            ORDER BY order_index ASC
            """,
            (book_id,),
        ).fetchall()
        return [
            StoredChapter(
                id=int(row["id"]),
                book_id=int(row["book_id"]),
                title=row["title"],
                content=row["content"],
                order_index=int(row["order_index"]),
                word_count=int(row["word_count"]),
                status=row["status"],
            )
            for row in rows
        ]

    def add_chapter(self, book_id: int, *, title: str | None = None, content: str = "") -> StoredChapter:
        """Append a manually created chapter using the same shape as imported drafts."""

        if self.get_book(book_id) is None:
            raise ValueError(f"Unknown book id: {book_id}")

        with self._connection:
            row = self._connection.execute(
                "SELECT COALESCE(MAX(order_index), -1) AS last_index FROM chapters WHERE book_id = ?",
                (book_id,),
            ).fetchone()
            order_index = int(row["last_index"]) + 1
            draft = ChapterDraft(
                title=(title or "").strip() or DEFAULT_CHAPTER_TITLE_TEMPLATE.format(number=order_index + 1),
                content=content,
                order_index=order_index,
                word_count=count_words(content),
                status=DRAFT_STATUS,
            )
            cursor = self._connection.execute(
                """
                INSERT INTO chapters (book_id, title, content, order_index, word_count, status)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (book_id, draft.title, draft.content, draft.order_index, draft.word_count, draft.status),
            )

        return StoredChapter(
            id=int(cursor.lastrowid),
            book_id=book_id,
            title=draft.title,
            content=draft.content,
            order_index=draft.order_index,
            word_count=draft.word_count,
            status=draft.status,
        )
