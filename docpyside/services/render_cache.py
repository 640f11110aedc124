"""Render cache for page painting.

Memoizes the expensive primitives the painter needs on every repaint: decoded
and scaled images (logos, signatures) and laid-out text documents for page
sections. Keys are built from everything that influences the output, so the
cache can live as long as the preview. Measurement never goes through here:
every measurement pass starts from a clean ghost surface.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, Union

from loguru import logger
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QImageReader, QPixmap, QTextDocument

from docpyside.utils.render_context import RenderContext
from docpyside.utils.valid_path import ValidPath

ImageType = Union[QImage, QPixmap]


class RenderCache:
    """Cache container for painter artifacts."""

    def __init__(self, ctx: Optional[RenderContext] = None) -> None:
        self._ctx = ctx
        self._image_cache: Dict[Tuple, ImageType] = {}
        self._text_cache: Dict[Tuple, QTextDocument] = {}

    # ------------------------------------------------------------------
    # cache management helpers
    # ------------------------------------------------------------------
    def clear(self) -> None:
        """Drop all cached artifacts."""
        self._image_cache.clear()
        self._text_cache.clear()

    def clear_text(self) -> None:
        """Drop laid-out text documents; decoded images stay."""
        self._text_cache.clear()

    @property
    def text_count(self) -> int:
        return len(self._text_cache)

    # ------------------------------------------------------------------
    # key builders
    # ------------------------------------------------------------------
    @staticmethod
    def image_key(*, source: Path | str, target_height: int, ctx: RenderContext) -> Tuple:
        return ("img", str(source), int(target_height), ctx.mode.value)

    @staticmethod
    def text_key(*, html: str, width_px: float, align: str) -> Tuple:
        content_hash = hashlib.sha1(html.encode("utf-8")).hexdigest()
        return ("text", content_hash, round(width_px, 4), align)

    # ------------------------------------------------------------------
    # cache accessors
    # ------------------------------------------------------------------
    def image(self, key: Tuple, factory: Callable[[], Optional[ImageType]]) -> Optional[ImageType]:
        cached = self._image_cache.get(key)
        if cached is not None:
            return cached
        generated = factory()
        if generated is not None:
            self._image_cache[key] = generated
        return generated

    def text_document(self, key: Tuple, factory: Callable[[], QTextDocument]) -> QTextDocument:
        cached = self._text_cache.get(key)
        if cached is not None:
            return cached
        doc = factory()
        self._text_cache[key] = doc
        return doc

    # ------------------------------------------------------------------
    # image loading
    # ------------------------------------------------------------------
    def scaled_image(self, source: Optional[str], target_height: float) -> Optional[ImageType]:
        """
        Image at ``target_height`` device pixels, width scaled to keep the
        aspect ratio. Missing or unreadable files yield None.
        """
        path = ValidPath.local_image(source)
        if path is None:
            if source:
                logger.debug("Image not available locally: {}", source)
            return None
        ctx = self._ctx or RenderContext()
        h_px = max(1, round(target_height))

        def factory() -> Optional[ImageType]:
            if ctx.is_export:
                reader = QImageReader(str(path))
                reader.setAutoTransform(True)
                base = reader.read()
            else:
                base = QPixmap(str(path))
            if base.isNull():
                logger.debug("Could not decode image: {}", path)
                return None
            return base.scaledToHeight(h_px, Qt.SmoothTransformation)

        return self.image(self.image_key(source=path, target_height=h_px, ctx=ctx), factory)
