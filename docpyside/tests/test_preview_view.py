import os
import sys

# Offscreen platform for Qt
os.environ['QT_QPA_PLATFORM'] = 'offscreen'
from PySide6.QtGui import QImage, QPainter
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QApplication

from docpyside import config
from docpyside.services.app_settings import AppSettings
from docpyside.services.layout_pipeline import layout_document
from docpyside.services.page_painter import PagePainter, page_size_px
from docpyside.views.preview_view import A4PreviewView

app = QApplication.instance() or QApplication(sys.argv)

LONG = {"content": "\n".join(f"Paragraf {i}: " + "metin " * 20 for i in range(60))}


def make_view(debounce_ms=50, **kw):
    return A4PreviewView(AppSettings(debounce_ms=debounce_ms, **kw))


def test_initial_state_is_one_empty_page():
    view = make_view()
    assert len(view.pages) == 1
    assert view.pages[0].fragments == ()
    assert len(view.page_items) == 1
    view.teardown()


def test_recompute_waits_for_the_debounce_interval():
    view = make_view(debounce_ms=config.DEBOUNCE_MS)
    view.set_document(LONG)
    assert view.is_recompute_pending
    QTest.qWait(100)
    assert len(view.pages) == 1
    QTest.qWait(config.DEBOUNCE_MS + 200)
    assert not view.is_recompute_pending
    assert len(view.pages) > 1
    view.teardown()


def test_only_the_last_change_in_a_burst_is_computed():
    view = make_view(debounce_ms=150)
    commits = []
    view.pages_changed.connect(commits.append)
    for n in (1, 2, 3):
        view.set_document({"content": "\n".join("satır" for _ in range(n))})
        QTest.qWait(10)
    QTest.qWait(400)
    assert len(commits) == 1
    assert sum(len(p.fragments) for p in view.pages) == 3
    view.teardown()


def test_unchanged_inputs_do_not_schedule():
    view = make_view()
    view.set_document({"subject": "Konu"})
    view.flush()
    view.set_document({"subject": "Konu"})
    assert not view.is_recompute_pending
    view.teardown()


def test_margin_change_triggers_recompute():
    view = make_view()
    view.set_document(LONG)
    view.flush()
    before = len(view.pages)
    view.set_margins({"top": 60, "bottom": 60})
    assert view.is_recompute_pending
    view.flush()
    assert len(view.pages) > before
    assert view.preview_layout.margins.top == 60
    view.teardown()


def test_zoom_does_not_touch_pagination():
    view = make_view()
    view.set_document(LONG)
    view.flush()
    pages = view.pages
    view.set_zoom(0.5)
    assert not view.is_recompute_pending
    assert view.pages is pages
    assert view.transform().m11() == 0.5
    assert view.transform().m22() == 0.5
    view.teardown()


def test_unmounted_engine_keeps_previous_pages():
    view = make_view()
    view.set_document(LONG)
    view.flush()
    pages = view.pages
    view.teardown()
    view.set_document({"content": "kısa"})
    view.flush()
    assert view.pages is pages


def test_readonly_is_stored_without_recompute():
    view = make_view()
    view.readonly = True
    assert view.readonly
    assert not view.is_recompute_pending
    view.teardown()


def test_pages_stack_vertically():
    view = make_view()
    view.set_document(LONG)
    view.flush()
    ys = [item.pos().y() for item in view.page_items]
    assert ys == sorted(ys)
    assert len(set(ys)) == len(ys)
    view.teardown()


def _render(layout, page):
    size = page_size_px()
    img = QImage(int(size.width()), int(size.height()), QImage.Format_ARGB32)
    img.fill(0)
    painter = QPainter(img)
    PagePainter().paint_page(painter, layout, page)
    painter.end()
    return img


def _band_has_ink(img, top, bottom):
    for y in range(int(top), int(bottom)):
        for x in range(0, img.width(), 2):
            if img.pixelColor(x, y).name() != "#ffffff":
                return True
    return False


def test_hidden_footer_leaves_the_bottom_band_blank():
    shown = layout_document({"content": "kısa metin"})
    hidden = layout_document({"content": "kısa metin", "showFooter": False})
    bottom = page_size_px().height() - shown.margins.px[2]
    top = bottom - config.MIN_FOOTER_HEIGHT_PX

    shown_img = _render(shown, shown.pages[0])
    hidden_img = _render(hidden, hidden.pages[0])
    assert shown_img.pixelColor(5, 5).name() == "#ffffff"
    assert _band_has_ink(shown_img, top, bottom)
    assert not _band_has_ink(hidden_img, top, bottom)


def test_text_cache_does_not_grow_across_edits():
    view = make_view()
    for n in range(20):
        view.set_document({"content": f"düzenleme {n}\nikinci satır"})
        view.flush()
        for item in view.page_items:
            img = QImage(10, 10, QImage.Format_ARGB32)
            painter = QPainter(img)
            item.paint(painter, None)
            painter.end()
    # only the text of the current page list is cached
    assert view.render_cache.text_count <= 10
    view.teardown()
