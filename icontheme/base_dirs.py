"""Icon base directory helpers following the XDG base directory layout."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Mapping

PIXMAPS_DIR = Path("/usr/share/pixmaps")
_DEFAULT_XDG_DATA_DIRS = "/usr/local/share:/usr/share"


def icon_base_directories(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Return the icon base directories in lookup precedence order.

    User directories come first: ``$HOME/.icons`` then
    ``$XDG_DATA_HOME/icons``. System directories follow, one per entry of
    ``$XDG_DATA_DIRS``, and ``/usr/share/pixmaps`` is always last.
    """
    env = os.environ if environ is None else environ
    home = Path(env.get("HOME") or Path.home())
    data_home = env.get("XDG_DATA_HOME") or str(home / ".local" / "share")
    data_dirs = env.get("XDG_DATA_DIRS") or _DEFAULT_XDG_DATA_DIRS

    candidates = [home / ".icons", Path(data_home) / "icons"]
    candidates.extend(Path(d) / "icons" for d in data_dirs.split(":") if d)
    candidates.append(PIXMAPS_DIR)
    return unique_paths(candidates)


def unique_paths(paths: Iterable[str | Path]) -> list[Path]:
    """Drop repeated entries, keeping the first occurrence."""
    seen: set[Path] = set()
    result: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path in seen:
            continue
        seen.add(path)
        result.append(path)
    return result


def existing_base_directories(base_dirs: Iterable[str | Path]) -> list[Path]:
    """Keep only the base directories that currently exist."""
    return [Path(d) for d in base_dirs if Path(d).is_dir()]


def base_directory_mtimes(base_dirs: Iterable[str | Path]) -> dict[str, int]:
    """Map each existing base directory to its modification time in ns."""
    mtimes: dict[str, int] = {}
    for directory in existing_base_directories(base_dirs):
        try:
            mtimes[os.path.abspath(directory)] = directory.stat().st_mtime_ns
        except OSError:
            continue
    return mtimes
