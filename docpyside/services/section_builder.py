# section_builder.py
"""Markup for the fixed page sections (header, meta, receiver, footer).

Both the measurement surface and the painter build their text documents
through this module, so what gets measured is exactly what gets painted.
"""

from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont, QTextDocument, QTextOption

from docpyside import config
from docpyside.models.document import DocumentModel
from docpyside.services.content_formatter import escape_text

HEADER_RULE_PX = 2
HEADER_PADDING_BOTTOM_PX = 16
FOOTER_RULE_PX = 1
FOOTER_PADDING_TOP_PX = 8


def body_font() -> QFont:
    font = QFont(config.FONT_FAMILY)
    font.setStyleHint(QFont.Serif)
    font.setPixelSize(config.BODY_FONT_PX)
    return font


def configure_text_document(doc: QTextDocument, width_px: float, align: str = "left") -> QTextDocument:
    """Apply the shared typography: font, zero document margin, width, alignment."""
    doc.setDefaultFont(body_font())
    doc.setDocumentMargin(0)
    doc.setTextWidth(width_px)
    opt = QTextOption()
    opt.setWrapMode(QTextOption.WrapAtWordBoundaryOrAnywhere)
    opt.setAlignment(config.HMAP.get(align, Qt.AlignLeft))
    doc.setDefaultTextOption(opt)
    return doc


def build_text_document(html: str, width_px: float, align: str = "left") -> QTextDocument:
    doc = configure_text_document(QTextDocument(), width_px, align)
    doc.setHtml(html)
    return doc


@dataclass(frozen=True)
class Section:
    """A page section: its markup plus the box decoration painted around it."""
    html: str
    min_height: float = 0.0
    pad_top: float = 0.0
    pad_bottom: float = 0.0
    align: str = "left"

    @property
    def is_empty(self) -> bool:
        return not self.html

    def box_height(self, text_height: float) -> float:
        if self.is_empty:
            return 0.0
        return max(self.min_height, text_height) + self.pad_top + self.pad_bottom

    def text_top(self, text_height: float) -> float:
        """Offset of the text inside the box; short text is centred in min_height."""
        return self.pad_top + max(0.0, (self.min_height - text_height) / 2.0)


def _p(text: str, *, size: int, bold: bool = False, align: str | None = None, margin_bottom: int = 0) -> str:
    style = f"margin-top:0; margin-bottom:{margin_bottom}px; font-size:{size}px;"
    if bold:
        style += " font-weight:bold;"
    align_attr = f' align="{align}"' if align else ""
    return f'<p style="{style}"{align_attr}>{escape_text(text)}</p>'


def _labelled(label: str, value: str, *, size: int, align: str | None = None) -> str:
    align_attr = f' align="{align}"' if align else ""
    return (
        f'<p style="margin-top:0; margin-bottom:4px; font-size:{size}px;"{align_attr}>'
        f"<b>{escape_text(label)}</b> {escape_text(value)}</p>"
    )


class SectionBuilder:
    def __init__(self, doc: DocumentModel):
        self.doc = doc

    def header(self) -> Section:
        d = self.doc
        if not d.show_header:
            return Section("")
        parts = [
            _p(d.header_title, size=config.HEADER_TITLE_PX, bold=True, align="center", margin_bottom=4),
            _p(d.header_org_name, size=config.HEADER_ORG_PX, bold=True, align="center", margin_bottom=4),
        ]
        if d.sender_unit:
            parts.append(_p(d.sender_unit, size=config.SENDER_UNIT_PX, align="center"))
        return Section(
            "".join(parts),
            min_height=config.HEADER_MIN_HEIGHT_PX,
            pad_bottom=HEADER_PADDING_BOTTOM_PX + HEADER_RULE_PX,
            align="center",
        )

    def meta(self) -> Section:
        d = self.doc
        left, right = [], []
        if d.show_karar_no and d.decision_number:
            left.append(_labelled("Karar No:", d.decision_number, size=config.META_FONT_PX))
        if d.show_konu:
            left.append(_labelled("Konu:", d.subject, size=config.META_FONT_PX))
        if d.show_date:
            right.append(_labelled("Tarih:", d.display_date, size=config.META_FONT_PX, align="right"))
        if d.show_sayi:
            right.append(_labelled("Sayı:", d.display_document_number, size=config.META_FONT_PX, align="right"))
        if not left and not right:
            return Section("")
        html = (
            '<table width="100%" cellspacing="0" cellpadding="0"><tr>'
            f'<td width="50%" valign="top">{"".join(left)}</td>'
            f'<td width="50%" valign="top" align="right">{"".join(right)}</td>'
            "</tr></table>"
        )
        return Section(html)

    def receiver(self) -> Section:
        d = self.doc
        if not d.show_receiver or not d.receiver:
            return Section("")
        html = _p(d.receiver.upper(), size=config.BODY_FONT_PX, bold=True, align=d.receiver_text_align)
        return Section(html, align=d.receiver_text_align)

    def footer(self) -> Section:
        d = self.doc
        if not d.show_footer:
            return Section("")
        size = config.FOOTER_FONT_PX
        left = ""
        if d.footer_org_name:
            left += _p(d.footer_org_name, size=size, bold=True)
        left += _p(f"Adres: {d.footer_address}", size=size)
        right = (
            _p(f"Bilgi İçin: {d.footer_contact}", size=size, align="right")
            + _p(f"Tel: {d.footer_phone}", size=size, align="right")
        )
        html = (
            '<table width="100%" cellspacing="0" cellpadding="0" style="color:#64748b;"><tr>'
            f'<td width="50%" valign="top">{left}</td>'
            f'<td width="50%" valign="top" align="right">{right}</td>'
            "</tr></table>"
        )
        return Section(html, pad_top=FOOTER_PADDING_TOP_PX + FOOTER_RULE_PX)
