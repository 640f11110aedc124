from enum import Enum, auto

from docpyside import config

# Render enumerations
class RenderMode(Enum):
    GUI = auto()
    EXPORT = auto()

class RenderContext:
    """Rendering parameters shared by the preview and the PDF exporter"""
    def __init__(self, mode=RenderMode.GUI, dpi=config.CSS_DPI):
        self.mode = mode
        self._dpi = dpi
        self.cache = None

    @property
    def is_gui(self):
        return self.mode == RenderMode.GUI

    @property
    def is_export(self):
        return self.mode == RenderMode.EXPORT

    @property
    def dpi(self):
        return self._dpi

    @dpi.setter
    def dpi(self, new):
        if new == self._dpi:
            return
        self._dpi = new

    @property
    def device_scale(self):
        """Device pixels per CSS pixel. Zoom is applied by the view, not here."""
        return self._dpi / config.CSS_DPI
