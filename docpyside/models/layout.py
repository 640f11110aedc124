# layout.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from docpyside import config
from docpyside.models.document import DocumentModel
from docpyside.utils.units.unit_str import UnitStr, mm_to_px


@dataclass(frozen=True)
class Margins:
    """Page margins in millimetres."""
    top: float = config.DEFAULT_MARGIN_MM
    right: float = config.DEFAULT_MARGIN_MM
    bottom: float = config.DEFAULT_MARGIN_MM
    left: float = config.DEFAULT_MARGIN_MM

    @classmethod
    def coerce(cls, value: Any) -> "Margins":
        """Accept None, a Margins, a mapping with any of top/right/bottom/left, or a 4-sequence."""
        if value is None:
            return cls()
        if isinstance(value, Margins):
            return value
        if isinstance(value, Mapping):
            d = cls()
            return cls(**{
                side: UnitStr(value[side]).mm if value.get(side) is not None else getattr(d, side)
                for side in ("top", "right", "bottom", "left")
            })
        parts = list(value)
        if len(parts) != 4:
            raise ValueError(f"Margins need 4 values (top, right, bottom, left), got {len(parts)}")
        return cls(*(UnitStr(p).mm for p in parts))

    @property
    def px(self) -> Tuple[float, float, float, float]:
        return tuple(mm_to_px(v) for v in (self.top, self.right, self.bottom, self.left))

    @property
    def content_width_px(self) -> float:
        return mm_to_px(config.PAGE_WIDTH_MM - self.left - self.right)


@dataclass(frozen=True)
class LayoutFlags:
    """The visibility switches the pager cares about."""
    show_header: bool = True
    show_receiver: bool = True
    show_signatures: bool = True
    has_signers: bool = False

    @classmethod
    def from_document(cls, doc: DocumentModel) -> "LayoutFlags":
        return cls(
            show_header=doc.show_header,
            show_receiver=doc.show_receiver,
            show_signatures=doc.show_signatures,
            has_signers=len(doc.signers) > 0,
        )

    @property
    def reserves_signatures(self) -> bool:
        return self.show_signatures and self.has_signers


@dataclass(frozen=True)
class ContentBlock:
    """One measurable unit of body content: its markup plus measured box."""
    html: str
    height: float = 0.0
    margin_top: float = 0.0
    margin_bottom: float = 0.0

    @property
    def total_height(self) -> float:
        return self.height + self.margin_top + self.margin_bottom


@dataclass(frozen=True)
class MeasurementSnapshot:
    """Pixel heights collected by one measurement pass."""
    header: float = 0.0
    footer: float = config.MIN_FOOTER_HEIGHT_PX
    meta: float = 0.0
    receiver: float = 0.0
    signatures: float = 0.0
    blocks: Tuple[ContentBlock, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Page:
    index: int
    fragments: Tuple[ContentBlock, ...] = field(default_factory=tuple)
    content_offset: float = 0.0   # px below the top margin where content starts

    @property
    def is_first(self) -> bool:
        return self.index == 0


@dataclass(frozen=True)
class PreviewLayout:
    """Everything the painter needs: the canonical document, margins and pages."""
    document: DocumentModel
    margins: Margins
    pages: Tuple[Page, ...]
    snapshot: Optional[MeasurementSnapshot] = None

    def __len__(self) -> int:
        return len(self.pages)

    def is_last(self, page: Page) -> bool:
        return page.index == len(self.pages) - 1
