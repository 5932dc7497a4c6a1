"""Chapter segmentation cascade over normalized manuscript content.

Three strategies run in strict priority order and the first one that
matches decides the whole result; partial results are never merged:

1. heading split: `<h1>`/`<h2>` elements of the HTML rendition,
2. keyword split: "Chapter 3: Title" style lines of the plain-text twin,
3. single chapter: the full HTML as one unit.

Each strategy returns either `NoMatch` or `Matches` so it can be exercised
on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import unescape
import logging
import re
from typing import Callable, Union

from folio.ingestion.markup import plain_text_to_html
from folio.ingestion.models import ChapterUnit, NormalizedContent
from folio.ingestion.normalization import normalize_whitespace, strip_tags

logger = logging.getLogger(__name__)

DEFAULT_MIN_SECTION_CHARS = 50
DEFAULT_PREAMBLE_OFFSET = 100
DEFAULT_MIN_KEYWORD_MATCHES = 2
DEFAULT_CHAPTER_KEYWORDS = ("Chapter", "Kapitel")
DEFAULT_INTRODUCTION_TITLE = "Introduction"
DEFAULT_CHAPTER_TITLE_TEMPLATE = "Chapter {number}"

_HEADING_RE = re.compile(r"<h[12][^>]*>(.*?)</h[12]>", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True, slots=True)
class SegmenterSettings:
    """Empirically tuned thresholds and labels used by the cascade."""

    min_section_chars: int = DEFAULT_MIN_SECTION_CHARS
    preamble_offset: int = DEFAULT_PREAMBLE_OFFSET
    min_keyword_matches: int = DEFAULT_MIN_KEYWORD_MATCHES
    chapter_keywords: tuple[str, ...] = DEFAULT_CHAPTER_KEYWORDS
    introduction_title: str = DEFAULT_INTRODUCTION_TITLE
    chapter_title_template: str = DEFAULT_CHAPTER_TITLE_TEMPLATE

    def chapter_title(self, number: int) -> str:
        return self.chapter_title_template.format(number=number)


@dataclass(frozen=True, slots=True)
class NoMatch:
    """A strategy found no usable chapter boundaries."""


@dataclass(frozen=True, slots=True)
class Matches:
    """A strategy produced chapter units in document order."""

    units: list[ChapterUnit] = field(default_factory=list)


StrategyResult = Union[NoMatch, Matches]


def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(keyword) for keyword in keywords)
    return re.compile(
        rf"^[^\S\n]*(?:{alternatives})\b"
        r"[^\S\n]*(?:(?:\d+|[IVXLCDM]+)\b)?"
        r"[^\S\n]*[:.\-]*[^\S\n]*"
        r"(?P<title>[^\n]*)$",
        re.IGNORECASE | re.MULTILINE,
    )


def split_by_headings(html: str, settings: SegmenterSettings | None = None) -> StrategyResult:
    """Split at `<h1>`/`<h2>` tags, dropping short non-final sections."""

    settings = settings or SegmenterSettings()
    matches = list(_HEADING_RE.finditer(html))
    if not matches:
        return NoMatch()

    units: list[ChapterUnit] = []
    for idx, match in enumerate(matches):
        is_last = idx == len(matches) - 1
        end = len(html) if is_last else matches[idx + 1].start()
        content = html[match.end() : end].strip()

        if len(strip_tags(content)) > settings.min_section_chars or is_last:
            title = normalize_whitespace(unescape(strip_tags(match.group(1))))
            units.append(ChapterUnit(title=title or settings.chapter_title(len(units) + 1), raw_content=content))

    first_start = matches[0].start()
    if first_start > settings.preamble_offset:
        preamble = html[:first_start].strip()
        if len(strip_tags(preamble)) > settings.min_section_chars:
            units.insert(0, ChapterUnit(title=settings.introduction_title, raw_content=preamble))

    return Matches(units)


def split_by_keywords(plain_text: str, settings: SegmenterSettings | None = None) -> StrategyResult:
    """Split the plain-text twin at lines that start with a chapter keyword."""

    settings = settings or SegmenterSettings()
    if not settings.chapter_keywords:
        return NoMatch()

    matches = list(_keyword_pattern(settings.chapter_keywords).finditer(plain_text))
    if len(matches) < settings.min_keyword_matches:
        return NoMatch()

    units: list[ChapterUnit] = []
    for idx, match in enumerate(matches):
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(plain_text)
        body = plain_text[match.end() : end].strip()
        title = match.group("title").strip() or settings.chapter_title(idx + 1)
        units.append(ChapterUnit(title=title, raw_content=plain_text_to_html(body)))

    return Matches(units)


def single_chapter(html: str, settings: SegmenterSettings | None = None) -> StrategyResult:
    """Wrap the whole document into one chapter; always matches."""

    settings = settings or SegmenterSettings()
    return Matches([ChapterUnit(title=settings.chapter_title(1), raw_content=html)])


class ChapterSegmenter:
    """Run the heading -> keyword -> single-chapter cascade."""

    def __init__(self, settings: SegmenterSettings | None = None) -> None:
        self._settings = settings or SegmenterSettings()

    def _strategies(self, content: NormalizedContent) -> list[tuple[str, Callable[[], StrategyResult]]]:
        return [
            ("headings", lambda: split_by_headings(content.html, self._settings)),
            ("keywords", lambda: split_by_keywords(content.plain_text, self._settings)),
            ("single", lambda: single_chapter(content.html, self._settings)),
        ]

    def segment(self, content: NormalizedContent) -> list[ChapterUnit]:
        """Return the units of the first strategy that matches."""

        for name, strategy in self._strategies(content):
            result = strategy()
            if isinstance(result, Matches) and result.units:
                logger.debug("Segmented with %s strategy into %s chapters", name, len(result.units))
                return result.units
        raise RuntimeError("Single-chapter fallback produced no chapter")
