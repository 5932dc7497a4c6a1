"""Turn segmented chapter units into persistable drafts."""

from __future__ import annotations

from pathlib import PurePath
import re

from folio.ingestion.models import DRAFT_STATUS, ChapterDraft, ChapterUnit
from folio.ingestion.normalization import count_words, normalize_whitespace

DEFAULT_BOOK_TITLE = "Imported Book"

_EXTENSION_RE = re.compile(r"\.[^.]+$")
_SEPARATOR_RE = re.compile(r"[_\-]")


def assemble_drafts(units: list[ChapterUnit]) -> list[ChapterDraft]:
    """Assign contiguous order indices and word counts in document order."""

    return [
        ChapterDraft(
            title=unit.title,
            content=unit.raw_content,
            order_index=index,
            word_count=count_words(unit.raw_content),
            status=DRAFT_STATUS,
        )
        for index, unit in enumerate(units)
    ]


def title_from_file_name(file_name: str) -> str:
    name = _EXTENSION_RE.sub("", PurePath(file_name).name)
    return normalize_whitespace(_SEPARATOR_RE.sub(" ", name))


def resolve_book_title(
    explicit_title: str | None,
    file_name: str | None,
    placeholder: str = DEFAULT_BOOK_TITLE,
) -> str:
    """Pick the explicit title, else a title derived from the file name, else the placeholder."""

    if explicit_title and explicit_title.strip():
        return explicit_title.strip()
    if file_name:
        derived = title_from_file_name(file_name)
        if derived:
            return derived
    return placeholder
