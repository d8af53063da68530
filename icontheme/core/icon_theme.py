"""Public entry point: load a theme and resolve icons against it."""

from __future__ import annotations

import logging
import multiprocessing
import threading
import time
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable

from icontheme.base_dirs import icon_base_directories, unique_paths
from icontheme.core.fallback_index import build_fallback_index
from icontheme.core.indexer import build_theme_graph, installed_themes
from icontheme.core.models import BASE_THEME, IconQuery, Theme
from icontheme.core.query_cache import DEFAULT_REFRESH_INTERVAL, MISSING, QueryCache, StalenessTracker
from icontheme.core.resolver import IconResolver

if TYPE_CHECKING:
    from icontheme.config.settings import IconThemeSettings

logger = logging.getLogger(__name__)


def select_theme(theme: str, fallback_theme: str, available: set[str]) -> str:
    """Pick ``theme`` if installed, else ``fallback_theme``, else hicolor."""
    if theme in available:
        return theme
    if fallback_theme in available:
        return fallback_theme
    return BASE_THEME


def build_indexes(
    theme_name: str,
    base_dirs: list[Path],
    *,
    isolated: bool = True,
) -> tuple[Theme, dict[str, Path]]:
    """Build the theme graph and fallback index for ``theme_name``.

    With ``isolated`` the theme graph is built in a separate process while
    the fallback index is built here; the graph comes back as one pickled
    snapshot.
    """
    if not isolated:
        return build_theme_graph(theme_name, base_dirs), build_fallback_index(base_dirs)

    # callers may run on Qt worker threads; never fork from them
    with ProcessPoolExecutor(max_workers=1, mp_context=multiprocessing.get_context("spawn")) as executor:
        future = executor.submit(build_theme_graph, theme_name, base_dirs)
        fallback_icons = build_fallback_index(base_dirs)
        theme = future.result()
    return theme, fallback_icons


class IconTheme:
    """Resolves icon queries for one loaded theme, rebuilding when icon
    directories change on disk.

    Instances are meant for a single consumer issuing lookups one at a time.
    Refreshes are serialized: concurrent callers wait for the rebuild in
    flight instead of starting another one.
    """

    def __init__(
        self,
        theme: Theme,
        fallback_icons: dict[str, Path],
        base_dirs: Iterable[str | Path],
        *,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        isolated: bool = True,
        clear_cache_on_refresh: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._base_dirs = unique_paths(base_dirs)
        self._resolver = IconResolver(theme, fallback_icons)
        self._cache = QueryCache()
        self._tracker = StalenessTracker(self._base_dirs, interval=refresh_interval, clock=clock)
        self._tracker.snapshot()
        self._isolated = isolated
        self._clear_cache_on_refresh = clear_cache_on_refresh
        self._refresh_lock = threading.Lock()
        self._generation = 0

    # -- construction --

    @staticmethod
    def installed_themes(base_dirs: Iterable[str | Path] | None = None) -> set[str]:
        """Names of all themes installed under the base directories."""
        dirs = icon_base_directories() if base_dirs is None else base_dirs
        return installed_themes(dirs)

    @classmethod
    def load_theme(
        cls,
        theme: str,
        fallback_theme: str = BASE_THEME,
        *,
        base_dirs: Iterable[str | Path] | None = None,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        isolated: bool = True,
        clear_cache_on_refresh: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> IconTheme:
        """Index ``theme`` (or a fallback) and return a ready resolver."""
        dirs = unique_paths(icon_base_directories() if base_dirs is None else base_dirs)
        theme_to_index = select_theme(theme, fallback_theme, installed_themes(dirs))
        if theme_to_index != theme:
            logger.info("theme %r is not installed; using %r", theme, theme_to_index)

        root, fallback_icons = build_indexes(theme_to_index, dirs, isolated=isolated)
        logger.info(
            "loaded theme %r: %d fallback icons", root.name, len(fallback_icons)
        )
        return cls(
            root,
            fallback_icons,
            dirs,
            refresh_interval=refresh_interval,
            isolated=isolated,
            clear_cache_on_refresh=clear_cache_on_refresh,
            clock=clock,
        )

    @classmethod
    def from_settings(cls, settings: IconThemeSettings) -> IconTheme:
        """Load the theme configured in ``settings``."""
        return cls.load_theme(
            settings.theme_name,
            settings.fallback_theme,
            base_dirs=settings.base_directories(),
            refresh_interval=settings.refresh_interval,
            isolated=settings.isolated_indexing,
            clear_cache_on_refresh=settings.clear_cache_on_refresh,
        )

    # -- properties --

    @property
    def name(self) -> str:
        return self._resolver.root.name

    @property
    def root(self) -> Theme:
        return self._resolver.root

    @property
    def base_directories(self) -> list[Path]:
        return list(self._base_dirs)

    @property
    def cached_query_count(self) -> int:
        return len(self._cache)

    # -- lookup --

    def find_icon(self, query: IconQuery) -> Path | None:
        """Return the file best matching ``query``, or None."""
        if self._tracker.is_stale():
            logger.info("icon directories changed; refreshing theme %r", self.name)
            self.refresh()

        cached = self._cache.lookup(query)
        if cached is not MISSING:
            return cached

        icon = self._resolver.find_icon(query)
        self._cache.store(query, icon)
        return icon

    def refresh(self) -> None:
        """Rebuild the theme graph and fallback index from disk."""
        generation = self._generation
        with self._refresh_lock:
            if self._generation != generation:
                # another caller finished a rebuild while we waited
                return
            self._rebuild()

    def reload_base_directories(self, base_dirs: Iterable[str | Path] | None = None) -> None:
        """Recompute the base directory list and rebuild.

        With no argument the standard directories are re-read from the
        environment. Always rebuilds, even when a refresh finished while
        this call waited for it.
        """
        dirs = unique_paths(icon_base_directories() if base_dirs is None else base_dirs)
        with self._refresh_lock:
            self._base_dirs = dirs
            self._tracker.set_base_directories(dirs)
            self._rebuild()

    def _rebuild(self) -> None:
        # caller holds _refresh_lock
        root, fallback_icons = build_indexes(
            self._resolver.root.name, self._base_dirs, isolated=self._isolated
        )
        self._resolver = IconResolver(root, fallback_icons)
        self._tracker.snapshot()
        if self._clear_cache_on_refresh:
            self._cache.clear()
        self._generation += 1
        logger.debug("refreshed theme %r", root.name)
