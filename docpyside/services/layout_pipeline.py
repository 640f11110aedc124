# layout_pipeline.py
from __future__ import annotations

from typing import Any, Optional

from loguru import logger

from docpyside.models.document import DocumentModel, DocumentNormalizer
from docpyside.models.layout import LayoutFlags, Margins, PreviewLayout
from docpyside.services.content_formatter import format_content
from docpyside.services.measurement import MeasurementEngine
from docpyside.services.pagination.pager import Pager


class LayoutPipeline:
    """
    normalize -> format -> measure -> paginate, in one synchronous pass.

    The preview view drives this behind its debouncer; the exporter and the
    headless CLI call it directly.
    """

    def __init__(self, engine: Optional[MeasurementEngine] = None, pager: Optional[Pager] = None):
        self.normalizer = DocumentNormalizer()
        self.engine = engine if engine is not None else MeasurementEngine()
        self.pager = pager or Pager()

    def normalize(self, raw: Any) -> DocumentModel:
        return self.normalizer(raw)

    def run(self, raw: Any, margins: Any = None) -> Optional[PreviewLayout]:
        doc = self.normalize(raw)
        margins = Margins.coerce(margins)
        snapshot = self.engine.measure(doc, format_content(doc.content), margins)
        if snapshot is None:
            return None
        pages = self.pager.paginate(snapshot, margins, LayoutFlags.from_document(doc))
        logger.debug("Paginated into {} page(s)", len(pages))
        return PreviewLayout(document=doc, margins=margins, pages=tuple(pages), snapshot=snapshot)


def layout_document(raw: Any, margins: Any = None) -> PreviewLayout:
    """One-shot helper with a freshly mounted ghost surface."""
    engine = MeasurementEngine()
    engine.mount()
    return LayoutPipeline(engine=engine).run(raw, margins)
