"""Runtime configuration for manuscript import."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping

from folio.ingestion.assembler import DEFAULT_BOOK_TITLE
from folio.ingestion.importer import DEFAULT_BOOK_LANGUAGE
from folio.ingestion.segmenter import (
    DEFAULT_CHAPTER_KEYWORDS,
    DEFAULT_MIN_KEYWORD_MATCHES,
    DEFAULT_MIN_SECTION_CHARS,
    DEFAULT_PREAMBLE_OFFSET,
    SegmenterSettings,
)


DEFAULT_DB_PATH = ".folio.db"


def _parse_int(*, name: str, raw_value: str, minimum: int = 0) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _parse_keywords(raw_value: str) -> tuple[str, ...]:
    keywords = tuple(part.strip() for part in raw_value.split(",") if part.strip())
    if not keywords:
        raise ValueError("FOLIO_CHAPTER_KEYWORDS must list at least one keyword")
    return keywords


@dataclass(frozen=True, slots=True)
class ImportSettings:
    """Validated import settings."""

    db_path: Path
    language: str = DEFAULT_BOOK_LANGUAGE
    default_book_title: str = DEFAULT_BOOK_TITLE
    min_section_chars: int = DEFAULT_MIN_SECTION_CHARS
    preamble_offset: int = DEFAULT_PREAMBLE_OFFSET
    min_keyword_matches: int = DEFAULT_MIN_KEYWORD_MATCHES
    chapter_keywords: tuple[str, ...] = DEFAULT_CHAPTER_KEYWORDS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ImportSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        db_path_raw = source.get("FOLIO_DB_PATH", DEFAULT_DB_PATH).strip()
        language = source.get("FOLIO_BOOK_LANGUAGE", DEFAULT_BOOK_LANGUAGE).strip()
        default_title = source.get("FOLIO_DEFAULT_BOOK_TITLE", DEFAULT_BOOK_TITLE).strip()
        min_section_raw = source.get("FOLIO_MIN_SECTION_CHARS", str(DEFAULT_MIN_SECTION_CHARS)).strip()
        preamble_raw = source.get("FOLIO_PREAMBLE_OFFSET", str(DEFAULT_PREAMBLE_OFFSET)).strip()
        keyword_matches_raw = source.get("FOLIO_MIN_KEYWORD_MATCHES", str(DEFAULT_MIN_KEYWORD_MATCHES)).strip()
        keywords_raw = source.get("FOLIO_CHAPTER_KEYWORDS", ",".join(DEFAULT_CHAPTER_KEYWORDS))

        if not db_path_raw:
            raise ValueError("FOLIO_DB_PATH cannot be empty")
        if not language:
            raise ValueError("FOLIO_BOOK_LANGUAGE cannot be empty")
        if not default_title:
            raise ValueError("FOLIO_DEFAULT_BOOK_TITLE cannot be empty")

        return cls(
            db_path=Path(db_path_raw),
            language=language,
            default_book_title=default_title,
            min_section_chars=_parse_int(name="FOLIO_MIN_SECTION_CHARS", raw_value=min_section_raw),
            preamble_offset=_parse_int(name="FOLIO_PREAMBLE_OFFSET", raw_value=preamble_raw),
            min_keyword_matches=_parse_int(
                name="FOLIO_MIN_KEYWORD_MATCHES",
                raw_value=keyword_matches_raw,
                minimum=1,
            ),
            chapter_keywords=_parse_keywords(keywords_raw),
        )

    def segmenter_settings(self) -> SegmenterSettings:
        return SegmenterSettings(
            min_section_chars=self.min_section_chars,
            preamble_offset=self.preamble_offset,
            min_keyword_matches=self.min_keyword_matches,
            chapter_keywords=self.chapter_keywords,
        )
