"""Markdown adapter rendering headers and emphasis into the shared HTML vocabulary."""

from __future__ import annotations

from pathlib import PurePath

from folio.ingestion.adapters.txt_adapter import decode_text
from folio.ingestion.markup import markdown_to_html
from folio.ingestion.models import NormalizedContent


class MarkdownAdapter:
    suffixes = (".md",)

    def supports(self, file_name: str) -> bool:
        return PurePath(file_name).suffix.lower() in self.suffixes

    def convert(self, raw: bytes, file_name: str) -> NormalizedContent:
        text = decode_text(raw)
        return NormalizedContent(html=markdown_to_html(text), plain_text=text)
