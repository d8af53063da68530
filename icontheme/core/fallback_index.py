"""Index of loose icon files lying directly in the base directories."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from icontheme.base_dirs import existing_base_directories

logger = logging.getLogger(__name__)


def build_fallback_index(base_dirs: Iterable[str | Path]) -> dict[str, Path]:
    """Map file name to path for files directly under each base directory.

    Base directories are scanned in precedence order and the first file seen
    for a name wins. Theme folders are not descended into.
    """
    icons: dict[str, Path] = {}
    for base_dir in existing_base_directories(base_dirs):
        try:
            with os.scandir(base_dir) as entries:
                for entry in sorted(entries, key=lambda e: e.name):
                    if entry.name in icons:
                        continue
                    try:
                        if not entry.is_file():
                            continue
                    except OSError:
                        continue
                    icons[entry.name] = Path(os.path.abspath(entry.path))
        except OSError as exc:
            logger.debug("cannot list base directory %s: %s", base_dir, exc)
            continue
    return icons
