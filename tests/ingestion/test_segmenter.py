from __future__ import annotations

import logging

import pytest

from folio.ingestion.markup import markdown_to_html, plain_text_to_html
from folio.ingestion.models import ChapterUnit, NormalizedContent
from folio.ingestion.segmenter import (
    ChapterSegmenter,
    Matches,
    NoMatch,
    SegmenterSettings,
    single_chapter,
    split_by_headings,
    split_by_keywords,
)

LONG = "The river carried the lantern past the sleeping town until dawn broke."


def _titles(result: Matches | NoMatch) -> list[str]:
    assert isinstance(result, Matches)
    return [unit.title for unit in result.units]


def test_heading_split_uses_h1_and_h2_in_document_order() -> None:
    html = f"<H1>One</H1><p>{LONG}</p><h2 class='x'>Two</h2><p>{LONG}</p><h3>Not a chapter</h3><p>{LONG}</p>"

    result = split_by_headings(html)

    assert _titles(result) == ["One", "Two"]
    assert isinstance(result, Matches)
    assert result.units[0].raw_content == f"<p>{LONG}</p>"
    assert result.units[1].raw_content == f"<p>{LONG}</p><h3>Not a chapter</h3><p>{LONG}</p>"


def test_heading_titles_strip_nested_tags_and_fall_back_to_ordinal() -> None:
    html = f"<h1><strong>Bold</strong> Title &amp; More</h1><p>{LONG}</p><h1>  </h1><p>{LONG}</p>"

    assert _titles(split_by_headings(html)) == ["Bold Title & More", "Chapter 2"]


def test_heading_split_drops_short_sections_unless_last() -> None:
    html = f"<h1>Contents</h1><p>short</p><h1>Real</h1><p>{LONG}</p><h1>Epilogue</h1><p>End.</p>"

    assert _titles(split_by_headings(html)) == ["Real", "Epilogue"]


def test_single_short_heading_is_kept_because_it_is_last() -> None:
    result = split_by_headings("<h1>Only</h1><p>ten chars.</p>")

    assert isinstance(result, Matches)
    assert result.units == [ChapterUnit(title="Only", raw_content="<p>ten chars.</p>")]


def test_heading_split_without_headings_is_no_match() -> None:
    assert isinstance(split_by_headings("<p>No headings at all.</p>"), NoMatch)


def test_markdown_scenario_with_short_sections_needs_lower_threshold() -> None:
    html = markdown_to_html("# Chapter One\nText A.\n\n## Chapter Two\nText B.")

    assert _titles(split_by_headings(html)) == ["Chapter Two"]

    relaxed = split_by_headings(html, SegmenterSettings(min_section_chars=0))
    assert _titles(relaxed) == ["Chapter One", "Chapter Two"]
    assert isinstance(relaxed, Matches)
    assert "Text B." in relaxed.units[1].raw_content


def test_long_preamble_becomes_introduction_chapter() -> None:
    preamble_text = ("Preface words " * 11).strip()
    html = f"<p>{preamble_text}</p>\n<h1>Start</h1><p>{LONG}</p>"

    result = split_by_headings(html)

    assert html.index("<h1>") > 100
    assert _titles(result) == ["Introduction", "Start"]
    assert isinstance(result, Matches)
    assert result.units[0].raw_content == f"<p>{preamble_text}</p>"


def test_preamble_is_ignored_when_heading_is_near_start_or_text_is_short() -> None:
    near_start = f"<p>A short foreword here.</p><h1>Start</h1><p>{LONG}</p>"
    markup_heavy = "<p></p>" * 20 + f"<p>hi</p><h1>Start</h1><p>{LONG}</p>"

    assert _titles(split_by_headings(near_start)) == ["Start"]
    assert _titles(split_by_headings(markup_heavy)) == ["Start"]


def test_keyword_split_extracts_titles_and_renders_bodies() -> None:
    text = "Chapter 1: Beginnings\nIt all started here.\n\nChapter 2: Middle\nThings got complicated."

    result = split_by_keywords(text)

    assert isinstance(result, Matches)
    assert result.units == [
        ChapterUnit(title="Beginnings", raw_content="<p>It all started here.</p>"),
        ChapterUnit(title="Middle", raw_content="<p>Things got complicated.</p>"),
    ]


def test_keyword_split_handles_roman_numerals_locales_and_empty_titles() -> None:
    text = "Kapitel I\nErster Teil.\n\n  KAPITEL II - Zweiter\nMehr Text.\n\nchapter 3. Third\nEnd."

    assert _titles(split_by_keywords(text)) == ["Chapter 1", "Zweiter", "Third"]


def test_keyword_split_requires_two_line_leading_matches() -> None:
    assert isinstance(split_by_keywords("Chapter 1: Alone\nNothing else follows."), NoMatch)
    assert isinstance(split_by_keywords("She loved that Chapter.\nChapter of life, said nobody."), NoMatch)
    assert isinstance(split_by_keywords("Chapters pile up.\nChapters everywhere."), NoMatch)


def test_keyword_list_is_configurable() -> None:
    text = "Capítulo 1: Uno\nTexto.\n\nCapítulo 2: Dos\nMás texto."
    settings = SegmenterSettings(chapter_keywords=("Capítulo",))

    assert isinstance(split_by_keywords(text), NoMatch)
    assert _titles(split_by_keywords(text, settings)) == ["Uno", "Dos"]


def test_single_chapter_wraps_entire_html() -> None:
    result = single_chapter("<p>whole</p>")

    assert result == Matches([ChapterUnit(title="Chapter 1", raw_content="<p>whole</p>")])


def test_cascade_prefers_headings_over_keywords() -> None:
    source = f"# Part\n{LONG}\n\nChapter 1: a\n\nChapter 2: b"
    content = NormalizedContent(html=markdown_to_html(source), plain_text=source)

    units = ChapterSegmenter().segment(content)

    assert [unit.title for unit in units] == ["Part"]


def test_cascade_falls_back_to_keywords_then_single_chapter() -> None:
    keyword_text = "Chapter 1: Beginnings\nIt all started here.\n\nChapter 2: Middle\nThings got complicated."
    prose = "It was the best Chapter of her life.\n\nThe end."
    segmenter = ChapterSegmenter()

    keyword_units = segmenter.segment(
        NormalizedContent(html=plain_text_to_html(keyword_text), plain_text=keyword_text)
    )
    prose_units = segmenter.segment(NormalizedContent(html=plain_text_to_html(prose), plain_text=prose))

    assert [unit.title for unit in keyword_units] == ["Beginnings", "Middle"]
    assert prose_units == [ChapterUnit(title="Chapter 1", raw_content=plain_text_to_html(prose))]


def test_cascade_logs_selected_strategy(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="folio.ingestion.segmenter")

    ChapterSegmenter().segment(NormalizedContent(html="", plain_text=""))

    assert "single strategy" in caplog.text
