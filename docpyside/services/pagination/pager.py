# pager.py
"""Greedy block pager.

Turns a MeasurementSnapshot into a list of Pages. The walk is single-pass and
forward-only: blocks are taken in order, never split, never rebalanced.

* Usable height = page height - top/bottom margins - footer - safety buffer.
* The first page reserves header + meta + receiver + spacing before content;
  continuation pages reserve only header + a smaller spacing.
* A block that does not fit closes the page, unless the page is still empty
  (an oversized block sits alone on its page).
* If the signature row (plus its top margin) does not fit under the last
  block, it is pushed to a fresh page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List

from docpyside import config
from docpyside.models.layout import ContentBlock, LayoutFlags, Margins, MeasurementSnapshot, Page
from docpyside.utils.units.unit_str import mm_to_px


@dataclass(frozen=True)
class PageBudget:
    usable_height: float
    first_offset: float
    continuation_offset: float

    @property
    def first_page(self) -> float:
        """Content height available on the first page."""
        return self.usable_height - self.first_offset

    @property
    def continuation_page(self) -> float:
        return self.usable_height - self.continuation_offset


class Pager:
    def __init__(
        self,
        page_height_mm: float = config.PAGE_HEIGHT_MM,
        safety_buffer: float = config.SAFETY_BUFFER_PX,
    ) -> None:
        self.page_height_px = mm_to_px(page_height_mm)
        self.safety_buffer = float(safety_buffer)

    # ------------------------------------------------------------------
    # Budgets
    # ------------------------------------------------------------------
    def budgets(self, snapshot: MeasurementSnapshot, margins: Margins, flags: LayoutFlags) -> PageBudget:
        top_px, _right, bottom_px, _left = margins.px
        usable = self.page_height_px - top_px - bottom_px - snapshot.footer - self.safety_buffer

        header = snapshot.header if flags.show_header else 0.0
        # Meta is always reserved, whichever of its fields are visible.
        first = (
            header
            + snapshot.meta
            + (snapshot.receiver if flags.show_receiver else 0.0)
            + config.FIRST_PAGE_SPACING_PX
        )
        continuation = header + config.CONTINUATION_SPACING_PX
        return PageBudget(usable_height=usable, first_offset=first, continuation_offset=continuation)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------
    def paginate(self, snapshot: MeasurementSnapshot, margins: Margins, flags: LayoutFlags) -> List[Page]:
        budget = self.budgets(snapshot, margins, flags)
        return list(self._walk(snapshot.blocks, snapshot.signatures, budget, flags))

    def _walk(
        self,
        blocks: Iterable[ContentBlock],
        signatures: float,
        budget: PageBudget,
        flags: LayoutFlags,
    ) -> Iterator[Page]:
        index = 0
        offset = budget.first_offset
        current: List[ContentBlock] = []
        used = offset

        for block in blocks:
            h = block.total_height
            if used + h > budget.usable_height and current:
                yield Page(index=index, fragments=tuple(current), content_offset=offset)
                index += 1
                offset = budget.continuation_offset
                current = []
                used = offset
            current.append(block)
            used += h

        if flags.reserves_signatures:
            needed = signatures + config.SIGNATURE_TOP_MARGIN_PX
            if used + needed > budget.usable_height and current:
                yield Page(index=index, fragments=tuple(current), content_offset=offset)
                index += 1
                offset = budget.continuation_offset
                current = []

        yield Page(index=index, fragments=tuple(current), content_offset=offset)
