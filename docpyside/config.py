# docpyside/config.py
from PySide6.QtCore import Qt

HMAP = {
    "left":    Qt.AlignLeft,
    "center":  Qt.AlignHCenter,
    "right":   Qt.AlignRight,
    "justify": Qt.AlignJustify,
}

# --- Page geometry -----------------------------------------------------------
# CSS reference pixel: 96 px per inch, i.e. 3.7795275591 px per mm.
CSS_DPI = 96
PX_PER_MM = 3.7795275591

PAGE_WIDTH_MM = 210
PAGE_HEIGHT_MM = 297
DEFAULT_MARGIN_MM = 25

# Gap between stacked pages in the preview (px, scene units)
PAGE_GAP_PX = 24

# --- Pagination policy (px) --------------------------------------------------
SAFETY_BUFFER_PX = 180
FIRST_PAGE_SPACING_PX = 32
CONTINUATION_SPACING_PX = 20
SIGNATURE_TOP_MARGIN_PX = 60
MIN_FOOTER_HEIGHT_PX = 80

# --- Signatures --------------------------------------------------------------
DEFAULT_SIGNATURE_SIZE_MM = 50
SIGNATURE_MIN_COLUMN_PX = 150
SIGNATURE_COLUMN_GAP_PX = 32
SIGNATURE_IMAGE_GAP_PX = 8

# --- Recompute ---------------------------------------------------------------
DEBOUNCE_MS = 300

# --- Typography (pixel sizes so layout does not depend on screen dpi) --------
FONT_FAMILY = "Times New Roman"
BODY_FONT_PX = 16      # 12pt
META_FONT_PX = 15      # 11pt
HEADER_TITLE_PX = 19   # 14pt
HEADER_ORG_PX = 21     # 16pt
SENDER_UNIT_PX = 15    # 11pt
SIGNER_TITLE_PX = 13   # 10pt
FOOTER_FONT_PX = 11    # 8pt
TABLE_FONT_PX = 13     # 10pt

HEADER_MIN_HEIGHT_PX = 100
HEADER_LOGO_PX = 96

# --- Document defaults -------------------------------------------------------
DEFAULT_HEADER_TITLE = "T.C."
DEFAULT_HEADER_ORG_NAME = "SENDİKA YÖNETİM SİSTEMİ"
DEFAULT_FOOTER_ADDRESS = "Genel Merkez Binası, Ankara"
DEFAULT_FOOTER_CONTACT = "Genel Sekreterlik"
DEFAULT_FOOTER_PHONE = "0312 000 00 00"
DEFAULT_TEXT_ALIGN = "justify"
DEFAULT_RECEIVER_ALIGN = "left"
EMPTY_DOCUMENT_NUMBER = "----------"
DATE_FORMAT = "%d.%m.%Y"
