# page_painter.py
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QPointF, QRectF, QSizeF
from PySide6.QtGui import QColor, QPainter, QPen, QPixmap, QTextDocument

from docpyside import config
from docpyside.models.document import DocumentModel
from docpyside.models.layout import Page, PreviewLayout
from docpyside.services.render_cache import RenderCache
from docpyside.services.section_builder import (
    FOOTER_RULE_PX,
    HEADER_RULE_PX,
    Section,
    SectionBuilder,
    build_text_document,
)
from docpyside.services.signature_layout import SignatureRowLayout, name_font, title_font
from docpyside.utils.render_context import RenderContext
from docpyside.utils.units.unit_str import mm_to_px

HEADER_RULE_COLOR = QColor("#000000")
FOOTER_RULE_COLOR = QColor("#cbd5e1")


def page_size_px() -> QSizeF:
    return QSizeF(mm_to_px(config.PAGE_WIDTH_MM), mm_to_px(config.PAGE_HEIGHT_MM))


class PagePainter:
    """
    Paints one computed page in CSS-pixel coordinates (origin at the page's
    top-left). Callers scale the painter for their device; zoom belongs to the
    view and never reaches this class.
    """

    def __init__(self, ctx: Optional[RenderContext] = None, cache: Optional[RenderCache] = None):
        self.ctx = ctx or RenderContext()
        self.cache = cache or RenderCache(self.ctx)

    # ------------------------------------------------------------------
    # text helpers
    # ------------------------------------------------------------------
    def _text_doc(self, html: str, width: float, align: str) -> QTextDocument:
        key = self.cache.text_key(html=html, width_px=width, align=align)
        return self.cache.text_document(key, lambda: build_text_document(html, width, align))

    @staticmethod
    def _draw_doc(painter: QPainter, doc: QTextDocument, x: float, y: float) -> None:
        painter.save()
        painter.translate(x, y)
        doc.drawContents(painter)
        painter.restore()

    def _paint_section(self, painter: QPainter, section: Section, x: float, y: float, width: float) -> float:
        """Paint ``section`` with its box top at ``y``; returns the box height."""
        if section.is_empty:
            return 0.0
        doc = self._text_doc(section.html, width, section.align)
        text_h = float(doc.size().height())
        self._draw_doc(painter, doc, x, y + section.text_top(text_h))
        return section.box_height(text_h)

    @staticmethod
    def _draw_image(painter: QPainter, target: QRectF, img) -> None:
        if isinstance(img, QPixmap):
            painter.drawPixmap(target, img, QRectF(img.rect()))
        else:
            painter.drawImage(target, img)

    @staticmethod
    def _rule(painter: QPainter, x: float, y: float, width: float, thickness: float, color: QColor) -> None:
        painter.save()
        painter.setPen(Qt.NoPen)
        painter.setBrush(color)
        painter.drawRect(QRectF(x, y, width, thickness))
        painter.restore()

    # ------------------------------------------------------------------
    # sections
    # ------------------------------------------------------------------
    def _paint_header(self, painter: QPainter, doc: DocumentModel, x: float, y: float, width: float) -> float:
        section = SectionBuilder(doc).header()
        h = self._paint_section(painter, section, x, y, width)
        if not h:
            return 0.0
        scale = self.ctx.device_scale
        for source, left_side in ((doc.logo_url, True), (doc.right_logo_url, False)):
            img = self.cache.scaled_image(source, config.HEADER_LOGO_PX * scale)
            if img is None:
                continue
            w = img.width() / scale
            lx = x if left_side else x + width - w
            self._draw_image(painter, QRectF(lx, y, w, config.HEADER_LOGO_PX), img)
        self._rule(painter, x, y + h - HEADER_RULE_PX, width, HEADER_RULE_PX, HEADER_RULE_COLOR)
        return h

    def _paint_footer(self, painter: QPainter, doc: DocumentModel, x: float, bottom: float, width: float) -> None:
        section = SectionBuilder(doc).footer()
        if section.is_empty:
            return
        text_doc = self._text_doc(section.html, width, section.align)
        h = section.box_height(float(text_doc.size().height()))
        top = bottom - h
        self._rule(painter, x, top, width, FOOTER_RULE_PX, FOOTER_RULE_COLOR)
        self._draw_doc(painter, text_doc, x, top + section.text_top(float(text_doc.size().height())))

    def _paint_signatures(self, painter: QPainter, doc: DocumentModel, x: float, y: float, width: float) -> None:
        row = SignatureRowLayout(doc, width)
        scale = self.ctx.device_scale
        for col in row.columns:
            rect = col.rect.translated(x, y)
            painter.save()
            painter.setPen(QPen(Qt.black))
            painter.setFont(name_font())
            painter.drawText(QRectF(rect.left(), rect.top(), rect.width(), col.name_height),
                             Qt.AlignHCenter | Qt.AlignTop, col.signer.name)
            painter.setFont(title_font())
            painter.drawText(QRectF(rect.left(), rect.top() + col.name_height, rect.width(), col.title_height),
                             Qt.AlignHCenter | Qt.AlignTop, col.signer.title)
            painter.restore()

            # Signers without an image keep the blank space of the same height.
            img = self.cache.scaled_image(col.signer.signature_url, col.image_height * scale)
            if img is None:
                continue
            w = img.width() / scale
            origin = QPointF(
                rect.center().x() - w / 2 + mm_to_px(col.signer.signature_offset_x_mm),
                y + col.image_top + mm_to_px(col.signer.signature_offset_y_mm),
            )
            target = QRectF(origin, QSizeF(w, col.image_height))
            painter.save()
            painter.setCompositionMode(QPainter.CompositionMode_Multiply)
            self._draw_image(painter, target, img)
            painter.restore()

    # ------------------------------------------------------------------
    # page
    # ------------------------------------------------------------------
    def paint_page(self, painter: QPainter, layout: PreviewLayout, page: Page) -> None:
        doc = layout.document
        size = page_size_px()
        page_rect = QRectF(QPointF(0, 0), size)
        top, _right, bottom, left = layout.margins.px
        width = layout.margins.content_width_px

        painter.save()
        painter.setClipRect(page_rect)
        painter.fillRect(page_rect, Qt.white)

        y = top + self._paint_header(painter, doc, left, top, width)
        if page.is_first:
            sections = SectionBuilder(doc)
            y += self._paint_section(painter, sections.meta(), left, y, width)
            self._paint_section(painter, sections.receiver(), left, y, width)

        y = top + page.content_offset
        for fragment in page.fragments:
            self._draw_doc(painter, self._text_doc(fragment.html, width, doc.text_align), left, y)
            y += fragment.total_height

        if layout.is_last(page) and doc.has_signatures:
            self._paint_signatures(painter, doc, left, y + config.SIGNATURE_TOP_MARGIN_PX, width)

        if doc.show_footer:
            self._paint_footer(painter, doc, left, size.height() - bottom, width)

        painter.restore()
