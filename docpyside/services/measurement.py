# measurement.py
"""Ghost-surface measurement of a canonical document.

The ghost surface is an off-screen QTextDocument laid out at the real content
width but unconstrained in height. It is never shown and never zoomed. One
pass clears and rebuilds it for every section and content block, collecting
pixel heights into a MeasurementSnapshot for the pager.
"""

from __future__ import annotations

import time
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from loguru import logger
from PySide6.QtGui import QTextDocument

from docpyside import config
from docpyside.models.document import DocumentModel
from docpyside.models.layout import ContentBlock, Margins, MeasurementSnapshot
from docpyside.services.content_formatter import escape_text
from docpyside.services.section_builder import Section, SectionBuilder, configure_text_document
from docpyside.services.signature_layout import SignatureRowLayout

BLOCK_TAGS = frozenset({
    "table", "div", "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "blockquote", "pre", "hr",
})

BLANK_LINE = "&nbsp;"


def wrap_inline(inner: str, align: str) -> str:
    """Synthetic wrapper block for a run of inline nodes."""
    return f'<p style="margin-top:0; margin-bottom:0; white-space:pre-wrap;" align="{align}">{inner}</p>'


def group_content_blocks(html: str, align: str = config.DEFAULT_TEXT_ALIGN) -> List[str]:
    """
    Split formatted markup into a flat list of measurable blocks.

    Text and inline elements accumulate into a wrapper paragraph; a <br>
    closes the current wrapper (an empty one becomes a blank line); block-level
    elements flush the wrapper and stand alone.
    """
    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    blocks: List[str] = []
    pending: List[str] = []

    def flush(blank_if_empty: bool = False) -> None:
        if pending:
            blocks.append(wrap_inline("".join(pending), align))
            pending.clear()
        elif blank_if_empty:
            blocks.append(wrap_inline(BLANK_LINE, align))

    for node in soup.contents:
        if isinstance(node, Comment):
            continue
        if isinstance(node, Tag):
            name = node.name.lower()
            if name == "br":
                flush(blank_if_empty=True)
            elif name in BLOCK_TAGS:
                flush()
                blocks.append(str(node))
            else:
                pending.append(str(node))
        elif isinstance(node, NavigableString):
            pending.append(escape_text(str(node)))
    flush()
    return blocks


class GhostSurface:
    """Reusable measurement arena: cleared and rebuilt for every measurement."""

    def __init__(self) -> None:
        self._doc = QTextDocument()
        self._width_px = 0.0

    @property
    def width_px(self) -> float:
        return self._width_px

    def reset(self, width_px: float) -> None:
        self._width_px = float(width_px)
        self._doc.clear()

    def measure_html(self, html: str, align: str = "left") -> Tuple[float, float, float]:
        """Return (total height, top margin, bottom margin) of ``html`` laid out at the surface width."""
        doc = self._doc
        doc.clear()
        configure_text_document(doc, self._width_px, align)
        doc.setHtml(html)
        total = float(doc.size().height())

        top = doc.firstBlock().blockFormat().topMargin()
        bottom = doc.lastBlock().blockFormat().bottomMargin()
        frames = doc.rootFrame().childFrames()
        if frames:
            top = max(top, frames[0].frameFormat().topMargin())
            bottom = max(bottom, frames[-1].frameFormat().bottomMargin())
        return total, float(top), float(bottom)


class MeasurementEngine:
    """
    Measures sections and content blocks on a GhostSurface.

    ``surface`` is None until mount() and after unmount(); a pass attempted in
    that state returns None and the caller keeps its previous pages.
    """

    def __init__(self, surface: Optional[GhostSurface] = None):
        self.surface = surface

    @property
    def is_mounted(self) -> bool:
        return self.surface is not None

    def mount(self) -> GhostSurface:
        if self.surface is None:
            self.surface = GhostSurface()
        return self.surface

    def unmount(self) -> None:
        self.surface = None

    def _section(self, section: Section) -> float:
        if section.is_empty:
            return 0.0
        total, _, _ = self.surface.measure_html(section.html, section.align)
        return section.box_height(total)

    def _block(self, html: str, align: str) -> ContentBlock:
        total, top, bottom = self.surface.measure_html(html, align)
        height = max(0.0, total - top - bottom)
        return ContentBlock(html=html, height=height, margin_top=top, margin_bottom=bottom)

    def measure(self, doc: DocumentModel, formatted_html: str, margins: Margins) -> Optional[MeasurementSnapshot]:
        if self.surface is None:
            logger.debug("Measurement skipped: ghost surface not mounted")
            return None

        started = time.perf_counter()
        width = margins.content_width_px
        self.surface.reset(width)
        sections = SectionBuilder(doc)

        header = self._section(sections.header())
        footer = max(self._section(sections.footer()), float(config.MIN_FOOTER_HEIGHT_PX))
        meta = self._section(sections.meta())
        receiver = self._section(sections.receiver())
        signatures = SignatureRowLayout(doc, width, placeholder=True).height if doc.has_signatures else 0.0

        blocks = tuple(
            self._block(html, doc.text_align)
            for html in group_content_blocks(formatted_html, doc.text_align)
        )

        logger.debug(
            "Measured {} content blocks at {:.1f}px width in {:.1f}ms",
            len(blocks), width, (time.perf_counter() - started) * 1000,
        )
        return MeasurementSnapshot(
            header=header,
            footer=footer,
            meta=meta,
            receiver=receiver,
            signatures=signatures,
            blocks=blocks,
        )
