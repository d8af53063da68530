"""Worker resolving a batch of icon queries."""

from __future__ import annotations

from pathlib import Path
from time import monotonic
from typing import Iterable

from PySide6.QtCore import Signal

from icontheme.core.icon_theme import IconTheme
from icontheme.core.models import IconQuery
from icontheme.workers.base_worker import BaseWorker

LookupBatchEntry = tuple[IconQuery, Path | None]


class IconLookupWorker(BaseWorker):
    """Resolves many queries against one IconTheme in a background thread.

    Queries run one after another; IconTheme is not meant to be shared
    between threads, so a worker should own its instance while running.
    """

    batch_ready = Signal(list)
    _BATCH_SIZE = 50

    def __init__(self, icon_theme: IconTheme, queries: Iterable[IconQuery]) -> None:
        super().__init__()
        self._icon_theme = icon_theme
        self._queries = list(queries)

    def run(self) -> None:
        self.started.emit()
        try:
            results: dict[IconQuery, Path | None] = {}
            pending: list[LookupBatchEntry] = []
            total = len(self._queries)
            last_emit = 0.0
            for count, query in enumerate(self._queries, start=1):
                if self._is_cancelled:
                    self.cancelled.emit()
                    return
                icon = self._icon_theme.find_icon(query)
                results[query] = icon
                pending.append((query, icon))
                if len(pending) >= self._BATCH_SIZE:
                    self.batch_ready.emit(pending.copy())
                    pending.clear()

                now = monotonic()
                # Throttle progress events to avoid flooding the UI event queue.
                if count == 1 or count == total or (now - last_emit) >= 0.05:
                    self.progress.emit(count, total, query.name)
                    last_emit = now

            if pending:
                self.batch_ready.emit(pending.copy())
            self._deliver(results)
        except Exception as e:
            self._fail(e)
