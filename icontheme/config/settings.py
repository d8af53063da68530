"""Icon theme settings via QSettings."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QSettings

from icontheme.base_dirs import icon_base_directories, unique_paths
from icontheme.core.models import BASE_THEME
from icontheme.core.query_cache import DEFAULT_REFRESH_INTERVAL


class IconThemeSettings:
    """Wraps QSettings for persistent icon lookup configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("icontheme", "icontheme")

    @classmethod
    def from_file(cls, path: str | Path) -> IconThemeSettings:
        """Settings backed by an INI file instead of the platform store."""
        return cls(QSettings(str(path), QSettings.Format.IniFormat))

    # -- themes --

    @property
    def theme_name(self) -> str:
        raw = self._qs.value("theme/name", BASE_THEME, type=str)
        value = (raw or "").strip()
        return value or BASE_THEME

    @theme_name.setter
    def theme_name(self, value: str) -> None:
        cleaned = (value or "").strip() or BASE_THEME
        self._qs.setValue("theme/name", cleaned)

    @property
    def fallback_theme(self) -> str:
        raw = self._qs.value("theme/fallback", BASE_THEME, type=str)
        value = (raw or "").strip()
        return value or BASE_THEME

    @fallback_theme.setter
    def fallback_theme(self, value: str) -> None:
        cleaned = (value or "").strip() or BASE_THEME
        self._qs.setValue("theme/fallback", cleaned)

    # -- directories --

    @property
    def extra_base_dirs(self) -> list[str]:
        raw = self._qs.value("dirs/extra", [])
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, (list, tuple)):
            return []
        return [item.strip() for item in raw if isinstance(item, str) and item.strip()]

    @extra_base_dirs.setter
    def extra_base_dirs(self, value: list[str]) -> None:
        cleaned = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        self._qs.setValue("dirs/extra", cleaned)

    def base_directories(self) -> list[Path]:
        """Extra directories first, then the standard XDG icon directories."""
        return unique_paths([*self.extra_base_dirs, *icon_base_directories()])

    # -- lookup --

    @property
    def refresh_interval(self) -> float:
        raw = self._qs.value("lookup/refresh_interval", DEFAULT_REFRESH_INTERVAL)
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return DEFAULT_REFRESH_INTERVAL
        if value < 0:
            return DEFAULT_REFRESH_INTERVAL
        return value

    @refresh_interval.setter
    def refresh_interval(self, value: float) -> None:
        self._qs.setValue("lookup/refresh_interval", float(value))

    # -- indexing --

    @property
    def isolated_indexing(self) -> bool:
        return self._qs.value("indexing/isolated", True, type=bool)

    @isolated_indexing.setter
    def isolated_indexing(self, value: bool) -> None:
        self._qs.setValue("indexing/isolated", bool(value))

    # -- cache --

    @property
    def clear_cache_on_refresh(self) -> bool:
        return self._qs.value("cache/clear_on_refresh", True, type=bool)

    @clear_cache_on_refresh.setter
    def clear_cache_on_refresh(self, value: bool) -> None:
        self._qs.setValue("cache/clear_on_refresh", bool(value))

    def sync(self) -> None:
        """Flush pending writes to the backing store."""
        self._qs.sync()
