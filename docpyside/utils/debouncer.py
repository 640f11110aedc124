# debouncer.py
from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class Debouncer(QObject):
    """
    Single-slot pending-work queue with a trailing-edge delay.

    Every request() restarts the timer, so only the last request in a burst
    runs, ``interval_ms`` after it was made. A running callback is never
    interrupted; cancel() only drops work that has not started.
    """

    def __init__(self, callback: Callable[[], None], interval_ms: int, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._callback = callback
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(interval_ms))
        self._timer.timeout.connect(self._fire)

    @property
    def interval(self) -> int:
        return self._timer.interval()

    @interval.setter
    def interval(self, ms: int) -> None:
        self._timer.setInterval(int(ms))

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    def request(self) -> None:
        self._timer.start()   # restarts when already active

    def cancel(self) -> None:
        self._timer.stop()

    def flush(self) -> None:
        """Run pending work now instead of waiting for the timer."""
        if self._timer.isActive():
            self._timer.stop()
            self._fire()

    def _fire(self) -> None:
        self._callback()
