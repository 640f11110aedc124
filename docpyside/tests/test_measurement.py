import os
import sys

# Offscreen platform for Qt
os.environ['QT_QPA_PLATFORM'] = 'offscreen'
from PySide6.QtWidgets import QApplication

from docpyside import config
from docpyside.models.document import normalize_document
from docpyside.models.layout import LayoutFlags, Margins
from docpyside.services.content_formatter import format_content
from docpyside.services.layout_pipeline import LayoutPipeline, layout_document
from docpyside.services.measurement import MeasurementEngine, group_content_blocks
from docpyside.services.pagination.pager import Pager

app = QApplication.instance() or QApplication(sys.argv)


def _measure(raw, margins=None):
    engine = MeasurementEngine()
    engine.mount()
    doc = normalize_document(raw)
    return engine.measure(doc, format_content(doc.content), Margins.coerce(margins))


# ------------------------------------------------------------
# Block grouping
# ------------------------------------------------------------

def test_grouping_splits_on_line_breaks():
    blocks = group_content_blocks("bir<br/>iki<br/><br/>üç", "left")
    assert len(blocks) == 4
    assert "bir" in blocks[0]
    assert "&nbsp;" in blocks[2]
    assert all(b.startswith("<p ") for b in blocks)


def test_grouping_keeps_inline_runs_together():
    blocks = group_content_blocks("a <b>kalın</b> c", "justify")
    assert len(blocks) == 1
    assert "<b>kalın</b>" in blocks[0]
    assert 'align="justify"' in blocks[0]


def test_block_elements_stand_alone():
    html = format_content("Önce\n[[TABLO:COLS=A|B # ROWS=1|2]]\nSonra")
    blocks = group_content_blocks(html)
    # the newline after the table is a blank line of its own
    assert len(blocks) == 4
    assert blocks[1].startswith("<table")
    assert "&nbsp;" in blocks[2]
    assert "Sonra" in blocks[3]


def test_empty_content_has_no_blocks():
    assert group_content_blocks("") == []


# ------------------------------------------------------------
# Measurement
# ------------------------------------------------------------

def test_unmounted_engine_returns_none():
    engine = MeasurementEngine()
    assert not engine.is_mounted
    assert engine.measure(normalize_document({}), "", Margins()) is None
    engine.mount()
    engine.unmount()
    assert engine.measure(normalize_document({}), "", Margins()) is None


def test_measured_heights_are_positive():
    snap = _measure({
        "content": "Birinci paragraf.\nİkinci paragraf.",
        "receiver": "Genel Merkez",
        "signers": [{"name": "Ayşe Kaya", "title": "Başkan"}],
    })
    assert snap.header >= config.HEADER_MIN_HEIGHT_PX
    assert snap.meta > 0
    assert snap.receiver > 0
    assert snap.signatures > 0
    assert len(snap.blocks) == 2
    assert all(b.height > 0 for b in snap.blocks)


def test_hidden_sections_measure_zero():
    snap = _measure({"showHeader": False, "showReceiver": False, "receiver": "X", "signers": [{"name": "A"}],
                     "showSignatures": False})
    assert snap.header == 0
    assert snap.receiver == 0
    assert snap.signatures == 0


def test_footer_height_has_a_floor_even_when_hidden():
    snap = _measure({"showFooter": False})
    assert snap.footer == config.MIN_FOOTER_HEIGHT_PX
    assert _measure({}).footer >= config.MIN_FOOTER_HEIGHT_PX


def test_narrower_content_wraps_taller():
    text = "uzun bir satır " * 60
    wide = _measure({"content": text}, Margins(25, 10, 25, 10))
    narrow = _measure({"content": text}, Margins(25, 60, 25, 60))
    assert narrow.blocks[0].height > wide.blocks[0].height


def test_signature_reservation_uses_tallest_signature():
    small = _measure({"signers": [{"name": "A", "signatureSizeMm": 20}]})
    mixed = _measure({"signers": [{"name": "A", "signatureSizeMm": 20}, {"name": "B", "signatureSizeMm": 60}]})
    assert mixed.signatures > small.signatures


# ------------------------------------------------------------
# Pipeline
# ------------------------------------------------------------

def test_long_document_spans_pages_and_keeps_every_block():
    raw = {"content": "\n".join(f"Satır {i}" for i in range(200))}
    layout = layout_document(raw)
    assert len(layout) > 1
    fragments = [b for p in layout.pages for b in p.fragments]
    assert len(fragments) == 200

    budget = Pager().budgets(layout.snapshot, layout.margins, LayoutFlags.from_document(layout.document))
    for page in layout.pages:
        used = page.content_offset + sum(b.total_height for b in page.fragments)
        assert used <= budget.usable_height or len(page.fragments) == 1


def test_empty_document_is_one_page():
    layout = layout_document({})
    assert len(layout) == 1
    assert layout.pages[0].fragments == ()


def test_pipeline_returns_none_when_unmounted():
    assert LayoutPipeline(engine=MeasurementEngine()).run({"content": "x"}) is None
