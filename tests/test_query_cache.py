"""Tests for icontheme.core.query_cache."""

from __future__ import annotations

import os
from pathlib import Path

from icontheme.core.models import IconQuery
from icontheme.core.query_cache import MISSING, QueryCache, StalenessTracker


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _touch_dir(path: Path) -> None:
    st = path.stat()
    os.utime(path, ns=(st.st_atime_ns, st.st_mtime_ns + 1_000_000_000))


class TestQueryCache:
    def test_miss_returns_sentinel(self):
        assert QueryCache().lookup(IconQuery("a", 16)) is MISSING

    def test_negative_results_are_cached(self):
        cache = QueryCache()
        query = IconQuery("a", 16)
        cache.store(query, None)
        assert cache.lookup(query) is None
        assert query in cache
        assert len(cache) == 1

    def test_equal_queries_hit_same_entry(self):
        cache = QueryCache()
        cache.store(IconQuery("a", 16, 1, ["png"]), Path("/a.png"))
        assert cache.lookup(IconQuery("a", 16, 1, ("png",))) == Path("/a.png")
        assert cache.lookup(IconQuery("a", 16, 1, ("svg",))) is MISSING

    def test_clear(self):
        cache = QueryCache()
        cache.store(IconQuery("a", 16), None)
        cache.clear()
        assert len(cache) == 0


class TestStalenessTracker:
    def test_unchanged_dirs_are_not_stale(self, tmp_path):
        clock = FakeClock()
        tracker = StalenessTracker([tmp_path], clock=clock)
        tracker.snapshot()
        assert tracker.is_stale() is False

    def test_first_check_detects_change(self, tmp_path):
        tracker = StalenessTracker([tmp_path], clock=FakeClock())
        tracker.snapshot()
        _touch_dir(tmp_path)
        assert tracker.is_stale() is True

    def test_checks_are_gated_by_interval(self, tmp_path):
        clock = FakeClock()
        tracker = StalenessTracker([tmp_path], interval=5.0, clock=clock)
        tracker.snapshot()
        assert tracker.is_stale() is False

        _touch_dir(tmp_path)
        clock.now += 5.0
        assert tracker.is_stale() is False  # not more than 5 seconds

        clock.now += 5.1
        assert tracker.is_stale() is True

    def test_frequent_checks_keep_pushing_the_gate(self, tmp_path):
        clock = FakeClock()
        tracker = StalenessTracker([tmp_path], interval=5.0, clock=clock)
        tracker.snapshot()
        tracker.is_stale()
        _touch_dir(tmp_path)
        for _ in range(4):
            clock.now += 3.0
            assert tracker.is_stale() is False

    def test_new_base_dir_appearing_is_a_change(self, tmp_path):
        missing = tmp_path / "later"
        tracker = StalenessTracker([tmp_path / "a", missing], clock=FakeClock())
        (tmp_path / "a").mkdir()
        tracker.snapshot()
        missing.mkdir()
        assert tracker.is_stale() is True

    def test_snapshot_resets_staleness(self, tmp_path):
        clock = FakeClock()
        tracker = StalenessTracker([tmp_path], interval=0.0, clock=clock)
        tracker.snapshot()
        _touch_dir(tmp_path)
        clock.now += 1
        assert tracker.is_stale() is True
        tracker.snapshot()
        clock.now += 1
        assert tracker.is_stale() is False
