"""Qt worker base for running icon theme operations off the UI thread."""

from __future__ import annotations

import logging
from threading import Event

from PySide6.QtCore import QObject, Signal

from icontheme.errors import classify_exception, format_error_for_user

logger = logging.getLogger(__name__)


class BaseWorker(QObject):
    """Base class for icon theme workers, meant to be moved to a QThread.

    Typical wiring from a GUI:
        worker = ThemeLoadWorker("Adwaita")
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.start()

    Cancelling does not interrupt an index build already running; it only
    stops the result from being delivered.
    """

    started = Signal()
    progress = Signal(int, int, str)    # current, total, icon or theme name
    finished = Signal(object)           # IconTheme or lookup results
    error = Signal(str)                 # user-facing message
    cancelled = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._cancel_event = Event()

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def _is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def run(self) -> None:
        """Override in subclass. Called when thread starts."""
        raise NotImplementedError

    def _deliver(self, result: object) -> None:
        if self._is_cancelled:
            self.cancelled.emit()
            return
        self.finished.emit(result)

    def _fail(self, exc: Exception) -> None:
        error = classify_exception(exc)
        logger.error("%s failed: %s", type(self).__name__, error.to_dict())
        self.error.emit(format_error_for_user(error))
