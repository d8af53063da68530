"""Workers that load or refresh an icon theme in a background thread."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from icontheme.core.icon_theme import IconTheme
from icontheme.core.models import BASE_THEME
from icontheme.workers.base_worker import BaseWorker

if TYPE_CHECKING:
    from icontheme.config.settings import IconThemeSettings


class ThemeLoadWorker(BaseWorker):
    """Loads an IconTheme and emits it through ``finished``."""

    def __init__(
        self,
        theme: str,
        fallback_theme: str = BASE_THEME,
        *,
        base_dirs: Iterable[str | Path] | None = None,
        isolated: bool = True,
    ) -> None:
        super().__init__()
        self._theme = theme
        self._fallback_theme = fallback_theme
        self._base_dirs = None if base_dirs is None else list(base_dirs)
        self._isolated = isolated
        self._settings: IconThemeSettings | None = None

    @classmethod
    def from_settings(cls, settings: IconThemeSettings) -> ThemeLoadWorker:
        worker = cls(settings.theme_name, settings.fallback_theme)
        worker._settings = settings
        return worker

    def run(self) -> None:
        self.started.emit()
        if self._is_cancelled:
            self.cancelled.emit()
            return
        try:
            self.progress.emit(0, 1, self._theme)
            if self._settings is not None:
                icon_theme = IconTheme.from_settings(self._settings)
            else:
                icon_theme = IconTheme.load_theme(
                    self._theme,
                    self._fallback_theme,
                    base_dirs=self._base_dirs,
                    isolated=self._isolated,
                )
            self.progress.emit(1, 1, icon_theme.name)
            self._deliver(icon_theme)
        except Exception as e:
            self._fail(e)


class ThemeRefreshWorker(BaseWorker):
    """Forces a rebuild of an already loaded IconTheme."""

    def __init__(self, icon_theme: IconTheme) -> None:
        super().__init__()
        self._icon_theme = icon_theme

    def run(self) -> None:
        self.started.emit()
        if self._is_cancelled:
            self.cancelled.emit()
            return
        try:
            self._icon_theme.refresh()
            self._deliver(self._icon_theme)
        except Exception as e:
            self._fail(e)
