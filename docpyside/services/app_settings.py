from PySide6.QtCore import QObject, Signal, Property

from docpyside import config
from docpyside.models.layout import Margins
from docpyside.utils.render_context import RenderContext, RenderMode


class AppSettings(QObject):
    zoom_changed = Signal(float)
    margins_changed = Signal(object)
    debounce_changed = Signal(int)

    def __init__(self, zoom=1.0, margins=None, debounce_ms=config.DEBOUNCE_MS, readonly=False, parent=None):
        super().__init__(parent)
        self._zoom = float(zoom)
        self._margins = Margins.coerce(margins)
        self._debounce_ms = int(debounce_ms)
        self._readonly = bool(readonly)
        self._ctx = RenderContext(mode=RenderMode.GUI, dpi=config.CSS_DPI)

    @Property(object)
    def ctx(self):
        return self._ctx

    @Property(float)
    def zoom(self):
        return self._zoom

    @zoom.setter
    def zoom(self, new):
        new = float(new)
        if new <= 0:
            raise ValueError(f"Zoom must be positive, got {new}")
        if new != self._zoom:
            self._zoom = new
            self.zoom_changed.emit(new)

    @Property(object)
    def margins(self):
        return self._margins

    @margins.setter
    def margins(self, value):
        new = Margins.coerce(value)
        if new != self._margins:
            self._margins = new
            self.margins_changed.emit(new)

    @Property(int)
    def debounce_ms(self):
        return self._debounce_ms

    @debounce_ms.setter
    def debounce_ms(self, ms):
        ms = int(ms)
        if ms != self._debounce_ms:
            self._debounce_ms = ms
            self.debounce_changed.emit(ms)

    @Property(bool)
    def readonly(self):
        return self._readonly

    @readonly.setter
    def readonly(self, flag):
        flag = bool(flag)
        if flag != self._readonly:
            self._readonly = flag
