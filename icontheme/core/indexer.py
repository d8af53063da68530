"""Theme discovery, inheritance graph resolution and icon indexing."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

from icontheme.base_dirs import existing_base_directories
from icontheme.core.models import Theme
from icontheme.core.theme_description import INDEX_FILE_NAME, parse_theme_description
from icontheme.errors import InvalidThemeError

logger = logging.getLogger(__name__)


def installed_themes(base_dirs: Iterable[str | Path]) -> set[str]:
    """Return the names of all theme folders that carry an index.theme."""
    names: set[str] = set()
    for base_dir in existing_base_directories(base_dirs):
        try:
            children = list(base_dir.iterdir())
        except OSError as exc:
            logger.debug("cannot list base directory %s: %s", base_dir, exc)
            continue
        for child in children:
            if child.is_dir() and (child / INDEX_FILE_NAME).is_file():
                names.add(child.name)
    return names


def find_theme_directory(theme_name: str, base_dirs: Iterable[str | Path]) -> Path | None:
    """Return the first ``<base>/<theme_name>`` folder holding an index.theme."""
    for base_dir in existing_base_directories(base_dirs):
        candidate = base_dir / theme_name
        if (candidate / INDEX_FILE_NAME).is_file():
            return candidate
    return None


def resolve_theme_graph(theme_name: str, base_dirs: Sequence[str | Path]) -> Theme | None:
    """Parse ``theme_name`` and its ancestors into a graph of Theme nodes.

    Parents are resolved depth-first in declared order. A parent already
    resolved during this call is shared rather than parsed again. A parent
    that is still being resolved (a cycle in ``Inherits``) is left out, as
    is any theme that is missing or has an invalid index.theme.
    """
    return _resolve(theme_name, list(base_dirs), resolving=set(), resolved={})


def _resolve(
    theme_name: str,
    base_dirs: list[str | Path],
    *,
    resolving: set[str],
    resolved: dict[str, Theme | None],
) -> Theme | None:
    if theme_name in resolved:
        return resolved[theme_name]

    theme_dir = find_theme_directory(theme_name, base_dirs)
    if theme_dir is None:
        logger.debug("theme %r not found in any base directory", theme_name)
        resolved[theme_name] = None
        return None

    try:
        description = parse_theme_description(theme_dir)
    except InvalidThemeError as exc:
        logger.warning("ignoring invalid theme %r: %s", theme_name, exc)
        resolved[theme_name] = None
        return None

    resolving.add(theme_name)
    parents: list[Theme] = []
    for parent_name in description.parent_names:
        if parent_name in resolving:
            logger.debug("inheritance cycle: %r -> %r", theme_name, parent_name)
            continue
        parent = _resolve(parent_name, base_dirs, resolving=resolving, resolved=resolved)
        if parent is not None:
            parents.append(parent)
    resolving.discard(theme_name)

    theme = Theme(name=theme_name, description=description, parents=parents)
    resolved[theme_name] = theme
    return theme


def index_icons(theme: Theme, base_dirs: Sequence[str | Path]) -> None:
    """Fill ``icons`` of ``theme`` and every ancestor from disk.

    Each theme keeps its own map; nothing is merged into descendants. Every
    theme is indexed once even when reachable along several paths.
    """
    _index(theme, list(base_dirs), visited=set())


def _index(theme: Theme, base_dirs: list[str | Path], *, visited: set[str]) -> None:
    if theme.name in visited:
        return
    visited.add(theme.name)

    for base_dir in existing_base_directories(base_dirs):
        theme_dir = base_dir / theme.name
        if theme_dir.is_dir():
            _index_theme_folder(theme, theme_dir)

    for parent in theme.parents:
        _index(parent, base_dirs, visited=visited)


def _index_theme_folder(theme: Theme, theme_dir: Path) -> None:
    directories = theme.directories
    count = 0
    # real paths of each pending directory and its ancestors, to cut symlink loops
    chains = {os.fspath(theme_dir): frozenset({os.path.realpath(theme_dir)})}
    for dirpath, dirnames, filenames in os.walk(theme_dir, followlinks=True):
        chain = chains.pop(dirpath)
        kept = []
        for child in sorted(dirnames):
            child_path = os.path.join(dirpath, child)
            real = os.path.realpath(child_path)
            if real in chain:
                logger.debug("skipping symlink loop at %s", child_path)
                continue
            chains[child_path] = chain | {real}
            kept.append(child)
        dirnames[:] = kept
        relative = os.path.normpath(os.path.relpath(dirpath, theme_dir))
        descriptor = directories.get(relative)
        if descriptor is None:
            continue
        absolute_dir = os.path.abspath(dirpath)
        for fname in sorted(filenames):
            theme.icons.setdefault(fname, []).append((absolute_dir, descriptor))
            count += 1
    logger.debug("indexed %d icons for theme %r in %s", count, theme.name, theme_dir)


def build_theme_graph(theme_name: str, base_dirs: Sequence[str | Path]) -> Theme:
    """Resolve and index ``theme_name``.

    Runs in a worker process: arguments and the result must be picklable.
    A theme that cannot be resolved yields an empty theme of that name.
    """
    theme = resolve_theme_graph(theme_name, base_dirs)
    if theme is None:
        logger.warning("theme %r could not be loaded; using an empty theme", theme_name)
        return Theme.empty(theme_name)
    index_icons(theme, base_dirs)
    return theme
