"""Memoized lookups and base directory staleness detection."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Iterable

from icontheme.base_dirs import base_directory_mtimes
from icontheme.core.models import IconQuery

DEFAULT_REFRESH_INTERVAL = 5.0

# Sentinel for cache misses where None is a valid cached value
MISSING = object()


class QueryCache:
    """Caches lookup results per query, including negative results."""

    def __init__(self) -> None:
        self._entries: dict[IconQuery, Path | None] = {}

    def lookup(self, query: IconQuery) -> Path | None | object:
        """Return the cached result, or ``MISSING`` if the query is unknown."""
        return self._entries.get(query, MISSING)

    def store(self, query: IconQuery, result: Path | None) -> None:
        self._entries[query] = result

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, query: object) -> bool:
        return query in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class StalenessTracker:
    """Decides when the base directories changed since the last snapshot.

    Directory metadata is only re-read when more than ``interval`` seconds
    passed since the previous check request, so a change may go unnoticed
    for up to that long.
    """

    def __init__(
        self,
        base_dirs: Iterable[str | Path],
        *,
        interval: float = DEFAULT_REFRESH_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._base_dirs = list(base_dirs)
        self._interval = interval
        self._clock = clock
        self._snapshot: dict[str, int] = {}
        self._last_check: float | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def snapshot_mtimes(self) -> dict[str, int]:
        return dict(self._snapshot)

    def set_base_directories(self, base_dirs: Iterable[str | Path]) -> None:
        self._base_dirs = list(base_dirs)

    def snapshot(self) -> None:
        """Record the current base directory modification times."""
        self._snapshot = base_directory_mtimes(self._base_dirs)

    def is_stale(self) -> bool:
        """Return True if a rebuild is due. Call once per lookup."""
        now = self._clock()
        due = self._last_check is None or now - self._last_check > self._interval
        self._last_check = now
        if not due:
            return False
        return base_directory_mtimes(self._base_dirs) != self._snapshot
