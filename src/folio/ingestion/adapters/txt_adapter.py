"""Plain-text adapter with encoding detection."""

from __future__ import annotations

from pathlib import PurePath

from charset_normalizer import from_bytes

from folio.ingestion.markup import plain_text_to_html
from folio.ingestion.models import NormalizedContent
from folio.ingestion.normalization import normalize_newlines

_BOM = "\ufeff"


def _detect_encoding(raw: bytes) -> str:
    best = from_bytes(raw).best()
    if best and best.encoding:
        name = best.encoding.lower()
        if name in {"windows-1252", "cp1252"}:
            return "cp1252"
        return best.encoding

    for fallback in ("utf-8", "cp1252"):
        try:
            raw.decode(fallback)
            return fallback
        except UnicodeDecodeError:
            continue
    raise ValueError("Could not detect text encoding")


def decode_text(raw: bytes) -> str:
    """Decode a text payload, dropping a byte-order mark and normalizing newlines."""

    if not raw:
        return ""
    text = raw.decode(_detect_encoding(raw))
    return normalize_newlines(text.lstrip(_BOM))


class TXTAdapter:
    """Convert plain-text manuscripts; blank lines become paragraph breaks."""

    suffixes = (".txt",)

    def supports(self, file_name: str) -> bool:
        return PurePath(file_name).suffix.lower() in self.suffixes

    def convert(self, raw: bytes, file_name: str) -> NormalizedContent:
        text = decode_text(raw)
        return NormalizedContent(html=plain_text_to_html(text), plain_text=text)
