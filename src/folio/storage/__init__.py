"""SQLite persistence for imported books and their chapters."""

from .repository import BookRepository, BookStore, StoredBook, StoredChapter

__all__ = ["BookRepository", "BookStore", "StoredBook", "StoredChapter"]
