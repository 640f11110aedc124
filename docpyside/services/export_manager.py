# export_manager.py
from pathlib import Path

from loguru import logger
from PySide6.QtCore import QMarginsF
from PySide6.QtGui import QPainter, QPageLayout, QPageSize, QPdfWriter

from docpyside import config
from docpyside.models.layout import PreviewLayout
from docpyside.services.page_painter import PagePainter
from docpyside.services.render_cache import RenderCache
from docpyside.utils.render_context import RenderContext, RenderMode


class ExportManager:
    def __init__(self, dpi: int = 300):
        self.dpi = dpi

    def export_pdf(self, layout: PreviewLayout, pdf_path) -> Path:
        """Write every page of ``layout`` to an A4 PDF and return the path."""
        pdf_path = Path(pdf_path)
        if not layout.pages:
            raise ValueError("Nothing to export: layout has no pages")

        _ctx = RenderContext(mode=RenderMode.EXPORT, dpi=self.dpi)
        _ctx.cache = RenderCache(_ctx)
        painter_svc = PagePainter(_ctx, _ctx.cache)

        writer = QPdfWriter(str(pdf_path))
        writer.setPageSize(QPageSize(QPageSize.A4))
        writer.setPageMargins(QMarginsF(0, 0, 0, 0), QPageLayout.Millimeter)
        writer.setResolution(config.CSS_DPI)  # 1 device unit = 1 CSS px
        writer.setTitle(layout.document.subject or "Document")

        painter = QPainter(writer)
        if not painter.isActive():
            raise OSError(f"Cannot open PDF for writing: {pdf_path}")
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setRenderHint(QPainter.TextAntialiasing, True)
        painter.setRenderHint(QPainter.SmoothPixmapTransform, True)

        try:
            for page in layout.pages:
                painter_svc.paint_page(painter, layout, page)
                if not layout.is_last(page):
                    writer.newPage()
        finally:
            painter.end()

        logger.info("Exported {} page(s) to {}", len(layout.pages), pdf_path)
        return pdf_path
