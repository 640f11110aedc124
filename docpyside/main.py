#!/usr/bin/env python3
import sys
import argparse
from typing import TYPE_CHECKING

from loguru import logger
from PySide6.QtWidgets import QApplication

from docpyside.models.layout import Margins
from docpyside.services.app_settings import AppSettings
from docpyside.services.export_manager import ExportManager
from docpyside.services.layout_pipeline import layout_document
from docpyside.utils.logger import setup_logger
from docpyside.utils.validator import load_document
from docpyside.utils.valid_path import ValidPath
from docpyside.views.preview_view import A4PreviewView

if TYPE_CHECKING:
    from pathlib import Path

# --- Helpers ---------------------------------------------------------------

def _norm(p):
    """Normalize a Path: expand ~ and resolve to absolute (non-strict)."""
    return p.expanduser().resolve()

def _die(msg: str, code: int = 2):
    print(f"Error: {msg}", file=sys.stderr)
    sys.exit(code)

def _ensure_pdf_path(path_like) -> "Path":
    """
    Ensure the given path-like is (or will be) a PDF path.
    We don't require existence here because we're about to create it.
    """
    p = ValidPath.check(path_like, has_ext="pdf", transform=_norm)
    if p is None:
        _die(f"invalid PDF path: {path_like}")
    return p

def parse_margins(text: str) -> Margins:
    """'T,R,B,L' (each a number in mm or a dimension like '1in') -> Margins."""
    parts = [s.strip() for s in text.split(",")]
    if len(parts) == 1:
        parts = parts * 4
    if len(parts) != 4 or not all(parts):
        raise ValueError(f"expected 1 or 4 comma-separated values, got {text!r}")
    return Margins.coerce(parts)


# --- Argparse --------------------------------------------------------------

def build_parser():
    p = argparse.ArgumentParser(
        prog="docpyside",
        description="A4 document preview / PDF export"
    )
    # Headless toggle (don't use -h because argparse reserves it for help)
    p.add_argument("--headless", "-H", action="store_true", dest="is_headless",
                   help="Run without GUI (requires --export)")

    p.add_argument("--export", "-e", dest="export_path",
                   help="PDF file to write")

    p.add_argument("document", nargs="?", help="document file (JSON)")

    p.add_argument("--zoom", "-z", type=float, default=1.0,
                   help="Preview zoom factor (GUI only)")

    p.add_argument("--margins", "-m", dest="margins",
                   help="Page margins in mm as T,R,B,L (or one value for all sides)")

    p.add_argument("--verbose", "-v", action="store_true",
                   help="Debug logging")

    return p


# --- Main ------------------------------------------------------------------

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logger(args.verbose)

    app = QApplication.instance() or QApplication(sys.argv)

    document = {}
    if args.document:
        path = ValidPath.check(args.document, must_exist=True, require_file=True, transform=_norm)
        if path is None:
            _die(f"document does not exist or is not a file: {args.document}")
        document, err = load_document(path)
        if err:
            _die(err)
        logger.debug("Loaded document {}", path)

    try:
        margins = parse_margins(args.margins) if args.margins else Margins.coerce(document.get("margins"))
    except (ValueError, TypeError) as e:
        _die(f"invalid margins: {e}")

    if args.zoom <= 0:
        _die(f"zoom must be positive: {args.zoom}")

    # HEADLESS MODE ----------------------------------------------------------
    if args.is_headless:
        if not args.export_path:
            _die("Headless mode requires --export")
        pdf_path = _ensure_pdf_path(args.export_path)
        layout = layout_document(document, margins)
        ExportManager().export_pdf(layout, pdf_path)
        return 0

    # GUI MODE ---------------------------------------------------------------
    settings = AppSettings(zoom=args.zoom, margins=margins)
    view = A4PreviewView(settings)
    view.set_document(document)
    view.flush()
    if args.export_path:
        ExportManager().export_pdf(view.preview_layout, _ensure_pdf_path(args.export_path))
    view.setWindowTitle(document.get("subject") or "A4 Preview")
    view.resize(900, 1100)
    view.show()
    return app.exec()

if __name__ == "__main__":
    sys.exit(main())
