"""Minimal Markdown and plain-text to HTML conversion.

Both converters emit the same small vocabulary (`h1`-`h3`, `strong`, `em`,
`p`, `br`) so the segmenter can treat every source format alike. The
Markdown pass is line oriented: lists, tables and links are left as text,
and overlapping emphasis markers are not resolved.
"""

from __future__ import annotations

import re

_PARAGRAPH_BREAK_RE = re.compile(r"\n{2,}")
_HEADER_RE = re.compile(r"^(#{1,3}) (.+)$", re.MULTILINE)
_HEADER_LINE_RE = re.compile(r"^<h[1-3]>.*</h[1-3]>$")
_INLINE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"__(.+?)__"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.+?)\*"), r"<em>\1</em>"),
    (re.compile(r"_(.+?)_"), r"<em>\1</em>"),
)


def _render_header(match: re.Match[str]) -> str:
    level = len(match.group(1))
    return f"<h{level}>{match.group(2)}</h{level}>"


def _paragraph(lines: list[str]) -> str:
    return f"<p>{'<br>'.join(lines)}</p>"


def _split_blocks(text: str) -> list[str]:
    return [block.strip() for block in _PARAGRAPH_BREAK_RE.split(text) if block.strip()]


def markdown_to_html(text: str) -> str:
    """Render headers, emphasis and paragraphs of a Markdown document."""

    html = _HEADER_RE.sub(_render_header, text)
    for pattern, replacement in _INLINE_RULES:
        html = pattern.sub(replacement, html)

    parts: list[str] = []
    for block in _split_blocks(html):
        pending: list[str] = []
        for line in block.split("\n"):
            if _HEADER_LINE_RE.match(line):
                if pending:
                    parts.append(_paragraph(pending))
                    pending = []
                parts.append(line)
            else:
                pending.append(line)
        if pending:
            parts.append(_paragraph(pending))

    return "\n".join(parts)


def plain_text_to_html(text: str) -> str:
    """Wrap blank-line separated blocks in paragraphs; no header detection."""

    return "\n".join(_paragraph(block.split("\n")) for block in _split_blocks(text))
