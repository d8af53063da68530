"""Tests for icontheme.workers."""

from __future__ import annotations

import pytest

from icontheme.config.settings import IconThemeSettings
from icontheme.core.icon_theme import IconTheme
from icontheme.core.models import IconQuery
from icontheme.workers.base_worker import BaseWorker
from icontheme.workers.icon_lookup_worker import IconLookupWorker
from icontheme.workers.theme_load_worker import ThemeLoadWorker, ThemeRefreshWorker

FIXED_32 = {"Size": 32, "Type": "Fixed"}


class SignalRecorder:
    """Collects emissions of a worker's standard signals."""

    def __init__(self, worker: BaseWorker) -> None:
        self.started = 0
        self.progress: list[tuple[int, int, str]] = []
        self.finished: list[object] = []
        self.errors: list[str] = []
        self.cancelled = 0
        worker.started.connect(self._on_started)
        worker.progress.connect(lambda cur, total, msg: self.progress.append((cur, total, msg)))
        worker.finished.connect(lambda result: self.finished.append(result))
        worker.error.connect(lambda message: self.errors.append(message))
        worker.cancelled.connect(self._on_cancelled)

    def _on_started(self) -> None:
        self.started += 1

    def _on_cancelled(self) -> None:
        self.cancelled += 1


@pytest.fixture
def installed(base_dir, make_theme):
    make_theme("Foo", {"32x32/apps": FIXED_32}, icons={"32x32/apps": ["bar.png", "baz.png"]})
    make_theme("hicolor", {"32x32/apps": FIXED_32}, icons={"32x32/apps": ["base.png"]})
    return base_dir


class TestBaseWorker:
    def test_cancel_sets_flag(self):
        worker = BaseWorker()
        assert worker._is_cancelled is False
        worker.cancel()
        assert worker._is_cancelled is True

    def test_run_not_implemented(self):
        with pytest.raises(NotImplementedError):
            BaseWorker().run()

    def test_deliver_respects_cancel(self):
        worker = BaseWorker()
        recorder = SignalRecorder(worker)
        worker._deliver("result")
        worker.cancel()
        worker._deliver("late")
        assert recorder.finished == ["result"]
        assert recorder.cancelled == 1

    def test_fail_emits_user_message(self):
        worker = BaseWorker()
        recorder = SignalRecorder(worker)
        worker._fail(PermissionError("permission denied"))
        assert len(recorder.errors) == 1
        assert "Access denied" in recorder.errors[0]


class TestThemeLoadWorker:
    def test_emits_loaded_theme(self, installed):
        worker = ThemeLoadWorker("Foo", base_dirs=[installed], isolated=False)
        recorder = SignalRecorder(worker)
        worker.run()

        assert recorder.started == 1
        assert recorder.errors == []
        (theme,) = recorder.finished
        assert isinstance(theme, IconTheme)
        assert theme.name == "Foo"
        assert recorder.progress[-1] == (1, 1, "Foo")

    def test_cancelled_before_start(self, installed):
        worker = ThemeLoadWorker("Foo", base_dirs=[installed], isolated=False)
        recorder = SignalRecorder(worker)
        worker.cancel()
        worker.run()
        assert recorder.finished == []
        assert recorder.cancelled == 1

    def test_from_settings(self, installed, tmp_path, monkeypatch):
        monkeypatch.setattr("icontheme.config.settings.icon_base_directories", lambda: [])
        settings = IconThemeSettings.from_file(tmp_path / "s.ini")
        settings.theme_name = "Foo"
        settings.extra_base_dirs = [str(installed)]
        settings.isolated_indexing = False

        worker = ThemeLoadWorker.from_settings(settings)
        recorder = SignalRecorder(worker)
        worker.run()

        assert recorder.finished[0].name == "Foo"

    def test_failure_reported_on_error_signal(self, monkeypatch):
        def boom(*args, **kwargs):
            raise OSError("disk on fire")

        monkeypatch.setattr(IconTheme, "load_theme", boom)
        worker = ThemeLoadWorker("Foo", base_dirs=[], isolated=False)
        recorder = SignalRecorder(worker)
        worker.run()

        assert recorder.finished == []
        assert len(recorder.errors) == 1


class TestThemeRefreshWorker:
    def test_refreshes_and_returns_theme(self, installed):
        theme = IconTheme.load_theme("Foo", base_dirs=[installed], isolated=False)
        (installed / "Foo" / "32x32" / "apps" / "new.png").write_bytes(b"")

        worker = ThemeRefreshWorker(theme)
        recorder = SignalRecorder(worker)
        worker.run()

        assert recorder.finished == [theme]
        assert theme.find_icon(IconQuery("new", 32, 1, ["png"])) is not None


class TestIconLookupWorker:
    def test_resolves_all_queries(self, installed):
        theme = IconTheme.load_theme("Foo", base_dirs=[installed], isolated=False)
        queries = [
            IconQuery("bar", 32, 1, ["png"]),
            IconQuery("base", 32, 1, ["png"]),
            IconQuery("missing", 32, 1, ["png"]),
        ]
        worker = IconLookupWorker(theme, queries)
        batches: list[list] = []
        worker.batch_ready.connect(lambda batch: batches.append(batch))
        recorder = SignalRecorder(worker)
        worker.run()

        (results,) = recorder.finished
        assert results[queries[0]].name == "bar.png"
        assert results[queries[1]].name == "base.png"
        assert results[queries[2]] is None
        assert [entry[0] for batch in batches for entry in batch] == queries
        assert recorder.progress[0] == (1, 3, "bar")
        assert recorder.progress[-1] == (3, 3, "missing")

    def test_cancel_stops_lookups(self, installed):
        theme = IconTheme.load_theme("Foo", base_dirs=[installed], isolated=False)
        worker = IconLookupWorker(theme, [IconQuery("bar", 32)])
        recorder = SignalRecorder(worker)
        worker.cancel()
        worker.run()
        assert recorder.finished == []
        assert recorder.cancelled == 1
