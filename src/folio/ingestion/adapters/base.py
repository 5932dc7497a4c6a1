"""Shared adapter contract for per-format manuscript converters."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from folio.ingestion.models import NormalizedContent


@runtime_checkable
class FormatAdapter(Protocol):
    """Protocol that every format adapter must implement."""

    suffixes: tuple[str, ...]

    def supports(self, file_name: str) -> bool:
        """Return True when the file-name suffix belongs to this adapter."""

    def convert(self, raw: bytes, file_name: str) -> NormalizedContent:
        """Convert a payload into the shared HTML/plain-text pair."""
