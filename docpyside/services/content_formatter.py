# content_formatter.py
"""Raw body text -> block-level markup ready for measurement.

Stored document bodies are plain text with an optional table macro:

    [[TABLO:COLS=Ad|Soyad # ROWS=Ahmet|Yılmaz;Mehmet|Demir]]

and inline markers: [[B]]..[[/B]], [[I]]..[[/I]], [[U]]..[[/U]] and
[[SIZE=n]]..[[/SIZE]] (n clamped to 8-24pt).

Table macros are expanded on the raw text with each cell escaped on its own;
the text around them is escaped, inline markers become spans, and newlines
become <br/> so the measurement engine can split the body into line groups.
"""

from __future__ import annotations

import re
from functools import lru_cache

from docpyside import config

TABLE_MACRO_RE = re.compile(r"\[\[TABLO:(.*?)\]\]")
SIZE_MACRO_RE = re.compile(r"\[\[SIZE=(\d{1,2})\]\](.*?)\[\[/SIZE\]\]", re.S)
INLINE_MACROS = (
    (re.compile(r"\[\[B\]\](.*?)\[\[/B\]\]", re.S), r"<strong>\1</strong>"),
    (re.compile(r"\[\[I\]\](.*?)\[\[/I\]\]", re.S), r"<em>\1</em>"),
    (re.compile(r"\[\[U\]\](.*?)\[\[/U\]\]", re.S), r'<span style="text-decoration: underline;">\1</span>'),
)
MIN_INLINE_PT = 8
MAX_INLINE_PT = 24

TABLE_STYLES = {
    "table": f"width: 100%; border-collapse: collapse; margin: 1em 0; font-size: {config.TABLE_FONT_PX}px;",
    "th": "border: 1px solid #000; padding: 4px 8px; text-align: left; font-weight: bold;",
    "td": "border: 1px solid #000; padding: 4px 8px; text-align: left;",
}


def escape_text(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def table_from_macro(inner: str) -> str | None:
    """
    Build table markup for one raw (unescaped) macro body, or None when it is
    malformed. Every header and cell is escaped on its own after splitting.
    """
    cols_part, sep, rows_part = inner.partition(" # ")
    if not sep or not cols_part or not rows_part:
        return None

    headers = cols_part.replace("COLS=", "", 1).split("|")
    rows = rows_part.replace("ROWS=", "", 1).split(";")

    header_cells = "".join(f'<th style="{TABLE_STYLES["th"]}">{escape_text(h)}</th>' for h in headers)
    body_rows = "".join(
        "<tr>"
        + "".join(f'<td style="{TABLE_STYLES["td"]}">{escape_text(v)}</td>' for v in row.split("|"))
        + "</tr>"
        for row in rows
    )
    return (
        f'<table style="{TABLE_STYLES["table"]}" border="1" cellspacing="0" cellpadding="4" width="100%">'
        f"<thead><tr>{header_cells}</tr></thead><tbody>{body_rows}</tbody></table>"
    )


def expand_tables(raw: str) -> str:
    """Escape ``raw`` and replace each well-formed table macro with its table."""
    out = []
    pos = 0
    for match in TABLE_MACRO_RE.finditer(raw):
        out.append(escape_text(raw[pos:match.start()]))
        table = table_from_macro(match.group(1))
        out.append(table if table is not None else escape_text(match.group(0)))
        pos = match.end()
    out.append(escape_text(raw[pos:]))
    return "".join(out)


def _size_span(match: re.Match) -> str:
    size = min(MAX_INLINE_PT, max(MIN_INLINE_PT, int(match.group(1))))
    return f'<span style="font-size: {size}pt;">{match.group(2)}</span>'


def apply_inline_formatting(text: str) -> str:
    """[[B]], [[I]], [[U]] and [[SIZE=n]] markers to inline markup."""
    for pattern, repl in INLINE_MACROS:
        text = pattern.sub(repl, text)
    return SIZE_MACRO_RE.sub(_size_span, text)


@lru_cache(maxsize=64)
def format_content(raw: str) -> str:
    if not raw:
        return ""
    formatted = expand_tables(raw)
    formatted = apply_inline_formatting(formatted)
    return formatted.replace("\r\n", "\n").replace("\n", "<br/>")
