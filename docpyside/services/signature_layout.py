# signature_layout.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from PySide6.QtCore import QRectF
from PySide6.QtGui import QFont, QFontMetricsF

from docpyside import config
from docpyside.models.document import DocumentModel, Signer
from docpyside.services.section_builder import body_font
from docpyside.utils.units.unit_str import mm_to_px


def name_font() -> QFont:
    font = body_font()
    font.setBold(True)
    return font


def title_font() -> QFont:
    font = body_font()
    font.setPixelSize(config.SIGNER_TITLE_PX)
    return font


@dataclass(frozen=True)
class SignatureColumn:
    signer: Signer
    rect: QRectF          # column box, relative to the row's top-left
    name_height: float
    title_height: float

    @property
    def image_top(self) -> float:
        return self.rect.top() + self.name_height + self.title_height + config.SIGNATURE_IMAGE_GAP_PX

    @property
    def image_height(self) -> float:
        return mm_to_px(self.signer.signature_size_mm)


class SignatureRowLayout:
    """
    Right-aligned, wrapping row of signer columns.

    Each column stacks the signer's name, title and signature image (or an
    equally tall blank). With ``placeholder=True`` every column is sized to the
    tallest signature in the row, which is what the measurement pass reserves.
    """

    def __init__(self, doc: DocumentModel, width_px: float, *, placeholder: bool = False):
        self.doc = doc
        self.width_px = float(width_px)
        self.placeholder = placeholder
        self._name_fm = QFontMetricsF(name_font())
        self._title_fm = QFontMetricsF(title_font())
        self.columns: List[SignatureColumn] = []
        self.height: float = 0.0
        if doc.signers:
            self._layout()

    def _column_width(self, signer: Signer) -> float:
        return max(
            float(config.SIGNATURE_MIN_COLUMN_PX),
            self._name_fm.horizontalAdvance(signer.name),
            self._title_fm.horizontalAdvance(signer.title),
        )

    def _column_height(self, signer: Signer, worst_image: float) -> Tuple[float, float, float]:
        name_h = self._name_fm.height()
        title_h = self._title_fm.height()
        image_h = worst_image if self.placeholder else mm_to_px(signer.signature_size_mm)
        return name_h, title_h, name_h + title_h + config.SIGNATURE_IMAGE_GAP_PX + image_h

    def _layout(self) -> None:
        gap = config.SIGNATURE_COLUMN_GAP_PX
        worst_image = max(mm_to_px(s.signature_size_mm) for s in self.doc.signers)

        # Greedy wrap into rows, preserving signer order.
        rows: List[List[Tuple[Signer, float]]] = [[]]
        used = 0.0
        for signer in self.doc.signers:
            w = self._column_width(signer)
            needed = w if not rows[-1] else used + gap + w
            if rows[-1] and needed > self.width_px:
                rows.append([])
                needed = w
            rows[-1].append((signer, w))
            used = needed

        y = 0.0
        for row in rows:
            row_width = sum(w for _, w in row) + gap * (len(row) - 1)
            x = self.width_px - row_width   # justify-end
            row_height = 0.0
            for signer, w in row:
                name_h, title_h, col_h = self._column_height(signer, worst_image)
                self.columns.append(SignatureColumn(
                    signer=signer,
                    rect=QRectF(x, y, w, col_h),
                    name_height=name_h,
                    title_height=title_h,
                ))
                row_height = max(row_height, col_h)
                x += w + gap
            y += row_height + gap
        self.height = y - gap
