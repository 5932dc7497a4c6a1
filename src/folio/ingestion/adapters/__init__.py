"""Format adapter implementations and contracts."""

import logging

from .base import FormatAdapter

logger = logging.getLogger(__name__)

try:
    from .docx_adapter import DocxAdapter
except ImportError:
    DocxAdapter = None
    logger.warning("DOCX support unavailable: install 'python-docx'")

try:
    from .txt_adapter import TXTAdapter
    from .markdown_adapter import MarkdownAdapter
except ImportError:
    TXTAdapter = None
    MarkdownAdapter = None
    logger.warning("TXT/Markdown support unavailable: install 'charset-normalizer'")


def build_default_adapters() -> dict[str, FormatAdapter]:
    """Return the default format adapter map keyed by format name."""
    adapters: dict[str, FormatAdapter] = {}
    if DocxAdapter is not None:
        adapters["docx"] = DocxAdapter()
    if MarkdownAdapter is not None:
        adapters["md"] = MarkdownAdapter()
    if TXTAdapter is not None:
        adapters["txt"] = TXTAdapter()
    return adapters


__all__ = [
    "FormatAdapter",
    "DocxAdapter",
    "MarkdownAdapter",
    "TXTAdapter",
    "build_default_adapters",
]
