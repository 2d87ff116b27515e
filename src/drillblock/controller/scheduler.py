"""
Regeneration Scheduler (Debounce)
=================================
Collapses bursts of parameter edits into a single regeneration.

Every `schedule()` call restarts one single-shot QTimer. `triggered` is only
emitted once the inputs have been quiet for the whole interval, and the slot
connected to it runs to completion on the GUI thread. With a single timer
handle there is never more than one regeneration pending or running.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal

from drillblock.config import REGENERATE_DEBOUNCE_MS

logger = logging.getLogger(__name__)


class RegenerationScheduler(QObject):
    triggered = Signal()

    def __init__(self, interval_ms: int = REGENERATE_DEBOUNCE_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def interval(self) -> int:
        return self._timer.interval()

    def is_pending(self) -> bool:
        return self._timer.isActive()

    def schedule(self) -> None:
        """(Re)start the quiet interval; a pending regeneration is postponed."""
        self._timer.start()

    def cancel(self) -> None:
        if self._timer.isActive():
            logger.debug("Pending regeneration cancelled.")
        self._timer.stop()

    def flush(self) -> None:
        """Run a pending regeneration now instead of waiting for the timer."""
        if self._timer.isActive():
            self._timer.stop()
            self._on_timeout()

    def _on_timeout(self) -> None:
        logger.debug("Debounce interval elapsed, regenerating.")
        self.triggered.emit()
