from __future__ import annotations

from folio.ingestion.assembler import DEFAULT_BOOK_TITLE, assemble_drafts, resolve_book_title
from folio.ingestion.models import ChapterDraft, ChapterUnit
from folio.ingestion.normalization import count_words


def test_assemble_drafts_assigns_contiguous_indices_and_word_counts() -> None:
    units = [
        ChapterUnit(title="One", raw_content="<p>Text A.<br>Text B.</p>"),
        ChapterUnit(title="Two", raw_content="<p>alpha <strong>beta</strong></p>\n<p>gamma</p>"),
        ChapterUnit(title="Three", raw_content=""),
    ]

    drafts = assemble_drafts(units)

    assert drafts == [
        ChapterDraft(title="One", content="<p>Text A.<br>Text B.</p>", order_index=0, word_count=4),
        ChapterDraft(
            title="Two",
            content="<p>alpha <strong>beta</strong></p>\n<p>gamma</p>",
            order_index=1,
            word_count=3,
        ),
        ChapterDraft(title="Three", content="", order_index=2, word_count=0),
    ]
    assert {draft.status for draft in drafts} == {"draft"}


def test_count_words_decodes_entities_and_ignores_markup() -> None:
    assert count_words("<p>a &amp; b</p>") == 3
    assert count_words("<h3>   </h3>") == 0


def test_count_words_keeps_words_split_by_inline_markup_whole() -> None:
    assert count_words("<p><strong>Bold</strong>ness</p>") == 1
    assert count_words("<p><strong>Hel</strong>lo world</p>") == 2
    assert count_words("<h1>One</h1><p>Two</p>") == 2


def test_resolve_book_title_prefers_explicit_value() -> None:
    assert resolve_book_title("  My Novel ", "ignored.docx") == "My Novel"


def test_resolve_book_title_derives_from_file_name() -> None:
    assert resolve_book_title(None, "my_great-novel.docx") == "my great novel"
    assert resolve_book_title("   ", "draft.v2.txt") == "draft.v2"
    assert resolve_book_title(None, "folder/sub/the_end.md") == "the end"


def test_resolve_book_title_falls_back_to_placeholder() -> None:
    assert resolve_book_title(None, ".md") == DEFAULT_BOOK_TITLE
    assert resolve_book_title("", "") == DEFAULT_BOOK_TITLE
    assert resolve_book_title(None, "___.txt", placeholder="Untitled") == "Untitled"
