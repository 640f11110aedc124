# page_item.py
from typing import Optional

from PySide6.QtCore import QRectF
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QGraphicsObject, QGraphicsItem

from docpyside.models.layout import Page, PreviewLayout
from docpyside.services.page_painter import PagePainter, page_size_px


class PageItem(QGraphicsObject):
    """One A4 sheet in the preview scene, in CSS pixels."""

    def __init__(self, layout: PreviewLayout, page: Page, painter_svc: PagePainter, parent=None):
        super().__init__(parent)
        self._layout = layout
        self._page = page
        self._painter_svc = painter_svc
        self.setFlag(QGraphicsItem.ItemIsSelectable, False)
        self.setFlag(QGraphicsItem.ItemIsMovable, False)

    @property
    def page(self) -> Page:
        return self._page

    @property
    def layout(self) -> PreviewLayout:
        return self._layout

    def boundingRect(self) -> QRectF:
        return QRectF(0, 0, page_size_px().width(), page_size_px().height())

    def paint(self, painter: QPainter, option, widget: Optional[object] = None):
        self._painter_svc.paint_page(painter, self._layout, self._page)
