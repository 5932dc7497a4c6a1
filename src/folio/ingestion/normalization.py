"""Text normalization helpers shared by adapters, segmenter and assembler."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

_WHITESPACE_RE = re.compile(r"\s+")
_TAG_RE = re.compile(r"<[^>]*>")

# Tags that end a word; any other tag is dropped without a separator.
_BREAKING_TAGS = ("br", "p", "h1", "h2", "h3")


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace and trim boundaries."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def strip_tags(html: str) -> str:
    """Drop every `<...>` tag and trim, leaving the text between tags untouched."""

    return _TAG_RE.sub("", html).strip()


def html_to_text(html: str) -> str:
    """Return the markup-free text of an HTML fragment.

    Inline tags vanish without a separator, so `<strong>Bold</strong>ness` stays
    one word. Block tags and `<br>` still end a word.
    """

    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(_BREAKING_TAGS):
        tag.insert_after(" ")
    return soup.get_text()


def count_words(html: str) -> int:
    """Count whitespace-separated tokens of the markup-free text."""

    return len(html_to_text(html).split())
