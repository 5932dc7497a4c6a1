"""Manuscript import pipeline interfaces."""

from .errors import DecodeFailure, ManuscriptImportError, MissingFile, PersistenceFailure, UnsupportedFormat
from .importer import DocumentImporter
from .models import ChapterDraft, ChapterUnit, ImportResult, NormalizedContent, RawDocument

__all__ = [
    "ChapterDraft",
    "ChapterUnit",
    "DecodeFailure",
    "DocumentImporter",
    "ImportResult",
    "ManuscriptImportError",
    "MissingFile",
    "NormalizedContent",
    "PersistenceFailure",
    "RawDocument",
    "UnsupportedFormat",
]
