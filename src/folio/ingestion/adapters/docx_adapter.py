"""DOCX adapter mapping Word paragraph styles onto the shared HTML vocabulary."""

from __future__ import annotations

from html import escape
import io
from pathlib import PurePath
from typing import Iterator

from docx import Document
from docx.document import Document as WordDocument
from docx.table import Table, _Cell
from docx.text.paragraph import Paragraph

from folio.ingestion.models import NormalizedContent

# Word built-in style names, compared case-insensitively.
_HEADING_TAGS: dict[str, str] = {
    "title": "h1",
    "heading 1": "h1",
    "heading 2": "h2",
    "heading 3": "h3",
}


def _paragraph_tag(paragraph: Paragraph) -> str:
    style = paragraph.style
    name = style.name if style is not None and style.name else ""
    return _HEADING_TAGS.get(name.strip().casefold(), "p")


def _escape(text: str) -> str:
    return escape(text, quote=False).replace("\n", "<br>")


def _iter_paragraphs(container: WordDocument | _Cell) -> Iterator[Paragraph]:
    """Yield body paragraphs in document order, descending into table cells."""

    for block in container.iter_inner_content():
        if isinstance(block, Paragraph):
            yield block
        elif isinstance(block, Table):
            # Merged cells repeat the same <w:tc> element across rows and columns.
            seen: list[_Cell] = []
            for row in block.rows:
                for cell in row.cells:
                    if any(cell._tc is other._tc for other in seen):
                        continue
                    seen.append(cell)
                    yield from _iter_paragraphs(cell)


def _render_runs(paragraph: Paragraph) -> str:
    runs = paragraph.runs
    # Hyperlinks and fields are not exposed as direct runs; keep their text unstyled.
    if "".join(run.text for run in runs) != paragraph.text:
        return _escape(paragraph.text)

    parts: list[str] = []
    for run in runs:
        if not run.text:
            continue
        text = _escape(run.text)
        if run.italic:
            text = f"<em>{text}</em>"
        if run.bold:
            text = f"<strong>{text}</strong>"
        parts.append(text)
    return "".join(parts)


class DocxAdapter:
    """Convert Word documents through python-docx.

    Headings keep their level (Title/Heading 1 -> h1, Heading 2 -> h2,
    Heading 3 -> h3); body paragraphs keep bold and italic runs. The
    plain-text twin is the paragraph text separated by blank lines. Table cells
    are read row by row; their paragraphs render like body paragraphs.
    """

    suffixes = (".docx",)

    def supports(self, file_name: str) -> bool:
        return PurePath(file_name).suffix.lower() in self.suffixes

    def convert(self, raw: bytes, file_name: str) -> NormalizedContent:
        document = Document(io.BytesIO(raw))

        html_parts: list[str] = []
        text_parts: list[str] = []
        for paragraph in _iter_paragraphs(document):
            if not paragraph.text.strip():
                continue

            tag = _paragraph_tag(paragraph)
            body = _escape(paragraph.text.strip()) if tag != "p" else _render_runs(paragraph)
            html_parts.append(f"<{tag}>{body}</{tag}>")
            text_parts.append(paragraph.text)

        return NormalizedContent(html="\n".join(html_parts), plain_text="\n\n".join(text_parts))
