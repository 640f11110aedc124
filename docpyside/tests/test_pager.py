import pytest

from docpyside import config
from docpyside.models.layout import ContentBlock, LayoutFlags, Margins, MeasurementSnapshot
from docpyside.services.pagination.pager import PageBudget, Pager
from docpyside.utils.units.unit_str import mm_to_px

# ------------------------------------------------------------
# Synthetic measurements: 25mm margins, 80px footer
#   usable       = 1122.52 - 2 * 94.49 - 80 - 180 = ~673.5px
#   first offset = 100 header + 40 meta + 20 receiver + 32 = 192px
#   continuation = 100 header + 20 = 120px
# ------------------------------------------------------------

MARGINS = Margins()
FLAGS = LayoutFlags()
SIGNED = LayoutFlags(has_signers=True)


def blocks(*heights):
    return tuple(ContentBlock(html=f"<p>{i}</p>", height=h) for i, h in enumerate(heights))


def snapshot(*heights, signatures=0.0, **kw):
    base = dict(header=100.0, footer=80.0, meta=40.0, receiver=20.0)
    base.update(kw)
    return MeasurementSnapshot(signatures=signatures, blocks=blocks(*heights), **base)


def flatten(pages):
    return tuple(b for p in pages for b in p.fragments)


def test_budgets():
    budget = Pager().budgets(snapshot(), MARGINS, FLAGS)
    expected_usable = mm_to_px(297) - 2 * mm_to_px(25) - 80 - config.SAFETY_BUFFER_PX
    assert budget.usable_height == pytest.approx(expected_usable)
    assert budget.first_offset == pytest.approx(192)
    assert budget.continuation_offset == pytest.approx(120)
    assert budget.first_page == pytest.approx(expected_usable - 192)
    assert budget.continuation_page == pytest.approx(expected_usable - 120)


def test_hidden_header_and_receiver_are_not_reserved():
    flags = LayoutFlags(show_header=False, show_receiver=False)
    budget = Pager().budgets(snapshot(), MARGINS, flags)
    assert budget.first_offset == pytest.approx(40 + config.FIRST_PAGE_SPACING_PX)
    assert budget.continuation_offset == pytest.approx(config.CONTINUATION_SPACING_PX)


def test_empty_document_yields_one_empty_page():
    pages = Pager().paginate(snapshot(), MARGINS, FLAGS)
    assert len(pages) == 1
    assert pages[0].fragments == ()
    assert pages[0].is_first


def test_conservation_and_order():
    snap = snapshot(*[37.5] * 60)
    pages = Pager().paginate(snap, MARGINS, FLAGS)
    assert flatten(pages) == snap.blocks
    assert [p.index for p in pages] == list(range(len(pages)))


def test_first_page_reserves_more_than_continuation():
    pages = Pager().paginate(snapshot(*[100] * 10), MARGINS, FLAGS)
    assert [len(p.fragments) for p in pages] == [4, 5, 1]
    assert pages[0].content_offset == pytest.approx(192)
    assert all(p.content_offset == pytest.approx(120) for p in pages[1:])


def test_page_count_never_decreases_when_blocks_are_appended():
    pager = Pager()
    counts = [len(pager.paginate(snapshot(*[55] * n), MARGINS, FLAGS)) for n in range(40)]
    assert counts == sorted(counts)


def test_signatures_that_do_not_fit_open_a_new_page():
    heights = [100] * 9                                   # 4 + 5, last page at 620px
    without = Pager().paginate(snapshot(*heights, signatures=100), MARGINS, FLAGS)
    with_sig = Pager().paginate(snapshot(*heights, signatures=100), MARGINS, SIGNED)
    assert len(with_sig) == len(without) + 1
    assert with_sig[-1].fragments == ()
    assert flatten(with_sig) == flatten(without)


def test_signatures_that_fit_stay_on_last_page():
    pages = Pager().paginate(snapshot(100, 100, signatures=100), MARGINS, SIGNED)
    assert len(pages) == 1


def test_signatures_never_push_an_empty_page():
    pages = Pager().paginate(snapshot(signatures=900), MARGINS, SIGNED)
    assert len(pages) == 1


def test_hidden_signatures_reserve_nothing():
    flags = LayoutFlags(show_signatures=False, has_signers=True)
    pages = Pager().paginate(snapshot(*[100] * 9, signatures=100), MARGINS, flags)
    assert len(pages) == 2


def test_oversized_block_sits_alone():
    pages = Pager().paginate(snapshot(100, 2000, 100), MARGINS, FLAGS)
    assert [[b.height for b in p.fragments] for p in pages] == [[100], [2000], [100]]


def test_oversized_first_block_is_not_preceded_by_empty_page():
    pages = Pager().paginate(snapshot(2000), MARGINS, FLAGS)
    assert len(pages) == 1
    assert len(pages[0].fragments) == 1


def test_block_margins_count_towards_height():
    tall = tuple(ContentBlock(html="x", height=80, margin_top=10, margin_bottom=10) for _ in range(5))
    snap = MeasurementSnapshot(header=100, footer=80, meta=40, receiver=20, blocks=tall)
    pages = Pager().paginate(snap, MARGINS, FLAGS)
    assert [len(p.fragments) for p in pages] == [4, 1]


def test_larger_margins_mean_more_pages():
    snap = snapshot(*[50] * 30)
    normal = Pager().paginate(snap, MARGINS, FLAGS)
    wide = Pager().paginate(snap, Margins(top=60, right=25, bottom=60, left=25), FLAGS)
    assert len(wide) > len(normal)


def test_paginate_is_idempotent():
    pager = Pager()
    snap = snapshot(*[70] * 25, signatures=150)
    assert pager.paginate(snap, MARGINS, SIGNED) == pager.paginate(snap, MARGINS, SIGNED)


def test_content_filling_a_continuation_page_exactly():
    pager = Pager()
    budget = pager.budgets(snapshot(), MARGINS, FLAGS)
    snap = snapshot(100, budget.continuation_page - 100)

    # does not fit under the first-page reservation
    pages = pager.paginate(snap, MARGINS, FLAGS)
    assert [len(p.fragments) for p in pages] == [1, 1]

    # fits exactly when laid out from the continuation offset
    from_continuation = PageBudget(
        usable_height=budget.usable_height,
        first_offset=budget.continuation_offset,
        continuation_offset=budget.continuation_offset,
    )
    pages = list(pager._walk(snap.blocks, 0.0, from_continuation, FLAGS))
    assert len(pages) == 1
    assert len(pages[0].fragments) == 2
