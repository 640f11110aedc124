# preview_view.py
from typing import Any, List, Optional, Tuple

from loguru import logger
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QPainter, QTransform
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView

from docpyside import config
from docpyside.models.document import DocumentModel
from docpyside.models.layout import Margins, Page, PreviewLayout
from docpyside.services.app_settings import AppSettings
from docpyside.services.layout_pipeline import LayoutPipeline
from docpyside.services.measurement import MeasurementEngine
from docpyside.services.page_painter import PagePainter, page_size_px
from docpyside.services.render_cache import RenderCache
from docpyside.utils.debouncer import Debouncer
from docpyside.views.page_item import PageItem


class A4PreviewView(QGraphicsView):
    """
    Stack of A4 pages for one document.

    Inputs (document, margins) that change the layout signature schedule a
    debounced recompute; zoom only changes the view transform. The page list
    shown is always the last one fully committed by recompute().
    """
    pages_changed = Signal(int)

    def __init__(self, settings: Optional[AppSettings] = None, parent=None):
        super().__init__(parent)
        self.settings = settings or AppSettings(parent=self)
        self.setScene(QGraphicsScene(self))
        self.setRenderHints(QPainter.Antialiasing | QPainter.TextAntialiasing | QPainter.SmoothPixmapTransform)
        self.setDragMode(QGraphicsView.ScrollHandDrag)
        self.setAlignment(Qt.AlignHCenter | Qt.AlignTop)
        self.setTransformationAnchor(QGraphicsView.NoAnchor)
        self.setResizeAnchor(QGraphicsView.NoAnchor)
        self.setBackgroundBrush(QColor("#e2e8f0"))

        self.engine = MeasurementEngine()
        self.engine.mount()
        self.pipeline = LayoutPipeline(engine=self.engine)
        self._painter_svc = PagePainter(self.settings.ctx, RenderCache(self.settings.ctx))

        self._raw: Any = None
        self._signature: Optional[Tuple[DocumentModel, Margins]] = None
        self._layout = PreviewLayout(
            document=DocumentModel(),
            margins=self.settings.margins,
            pages=(Page(index=0),),
        )
        self._items: List[PageItem] = []

        self._debouncer = Debouncer(self.recompute, self.settings.debounce_ms, parent=self)
        self.settings.margins_changed.connect(lambda _m: self._schedule())
        self.settings.zoom_changed.connect(self._apply_zoom)
        self.settings.debounce_changed.connect(self._set_debounce)

        self._commit(self._layout)
        self._apply_zoom(self.settings.zoom)

    # ------------------------------------------------------------------
    # inputs
    # ------------------------------------------------------------------
    def set_document(self, raw: Any) -> None:
        self._raw = raw
        self._schedule()

    def set_margins(self, margins: Any) -> None:
        self.settings.margins = margins

    def set_zoom(self, zoom: float) -> None:
        self.settings.zoom = zoom

    @property
    def zoom(self) -> float:
        return self.settings.zoom

    @property
    def margins(self) -> Margins:
        return self.settings.margins

    @property
    def readonly(self) -> bool:
        return self.settings.readonly

    @readonly.setter
    def readonly(self, flag: bool) -> None:
        self.settings.readonly = flag

    # ------------------------------------------------------------------
    # outputs
    # ------------------------------------------------------------------
    @property
    def preview_layout(self) -> PreviewLayout:
        return self._layout

    @property
    def pages(self) -> Tuple[Page, ...]:
        return self._layout.pages

    @property
    def page_items(self) -> List[PageItem]:
        return list(self._items)

    @property
    def is_recompute_pending(self) -> bool:
        return self._debouncer.is_pending

    # ------------------------------------------------------------------
    # recompute
    # ------------------------------------------------------------------
    def _layout_signature(self) -> Tuple[DocumentModel, Margins]:
        return self.pipeline.normalize(self._raw), self.settings.margins

    def _schedule(self) -> None:
        signature = self._layout_signature()
        if signature == self._signature:
            return
        self._signature = signature
        self._debouncer.request()

    def _set_debounce(self, ms: int) -> None:
        self._debouncer.interval = ms

    def recompute(self) -> None:
        layout = self.pipeline.run(self._raw, self.settings.margins)
        if layout is None:
            return
        self._commit(layout)

    def flush(self) -> None:
        """Run a pending recompute immediately."""
        self._debouncer.flush()

    def _commit(self, layout: PreviewLayout) -> None:
        scene = self.scene()
        for item in self._items:
            scene.removeItem(item)
            item.deleteLater()

        size = page_size_px()
        items = []
        for page in layout.pages:
            item = PageItem(layout, page, self._painter_svc)
            item.setPos(0, page.index * (size.height() + config.PAGE_GAP_PX))
            scene.addItem(item)
            items.append(item)

        self._items = items
        self._layout = layout
        # text laid out for the replaced pages
        self._painter_svc.cache.clear_text()
        gap = config.PAGE_GAP_PX
        height = len(items) * (size.height() + gap) - gap
        scene.setSceneRect(-gap, -gap, size.width() + 2 * gap, height + 2 * gap)
        logger.debug("Committed {} page(s)", len(items))
        self.pages_changed.emit(len(items))

    # ------------------------------------------------------------------
    # zoom
    # ------------------------------------------------------------------
    def _apply_zoom(self, zoom: float) -> None:
        self.setTransform(QTransform.fromScale(zoom, zoom))
        bar = self.verticalScrollBar()
        bar.setValue(bar.minimum())

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    @property
    def render_cache(self) -> RenderCache:
        return self._painter_svc.cache

    def teardown(self) -> None:
        self._debouncer.cancel()
        self.engine.unmount()
        self._painter_svc.cache.clear()

    def closeEvent(self, event):
        self.teardown()
        super().closeEvent(event)
