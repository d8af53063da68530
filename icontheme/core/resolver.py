"""Best-match icon lookup over an indexed theme graph."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Mapping

from icontheme.core.matching import directory_matches_size, directory_size_distance
from icontheme.core.models import IconQuery, Theme


class IconResolver:
    """Answers icon queries against one theme graph and a fallback index.

    The resolver does no I/O; it only reads the prebuilt indexes.
    """

    def __init__(self, root: Theme, fallback_icons: Mapping[str, Path]) -> None:
        self._root = root
        self._fallback_icons = fallback_icons

    @property
    def root(self) -> Theme:
        return self._root

    @property
    def fallback_icons(self) -> Mapping[str, Path]:
        return self._fallback_icons

    def find_icon(self, query: IconQuery) -> Path | None:
        """Return the best file for ``query`` or None."""
        # Environment variables may appear in absolute icon paths.
        if os.path.isabs(os.path.expandvars(query.name)):
            return Path(query.name)

        for theme in self.visit_theme_hierarchy():
            found = self._lookup_icon(theme, query)
            if found is not None:
                return found
        return self._lookup_fallback_icon(query)

    def visit_theme_hierarchy(self) -> Iterator[Theme]:
        """Yield the root and its ancestors depth-first, each theme once."""
        visited: set[str] = set()

        def visit(theme: Theme) -> Iterator[Theme]:
            yield theme
            visited.add(theme.name)
            for parent in theme.parents:
                if parent.name not in visited:
                    yield from visit(parent)

        yield from visit(self._root)

    def _lookup_icon(self, theme: Theme, query: IconQuery) -> Path | None:
        for extension in query.extensions:
            filename = f"{query.name}.{extension}"
            for icon_dir, directory in theme.icons.get(filename, ()):
                if directory_matches_size(directory, query.size, query.scale):
                    return Path(icon_dir, filename)

        minimal_distance: int | None = None
        closest: Path | None = None
        for extension in query.extensions:
            filename = f"{query.name}.{extension}"
            for icon_dir, directory in theme.icons.get(filename, ()):
                distance = directory_size_distance(directory, query.size, query.scale)
                if minimal_distance is not None and distance >= minimal_distance:
                    continue
                minimal_distance = distance
                closest = Path(icon_dir, filename)
        return closest

    def _lookup_fallback_icon(self, query: IconQuery) -> Path | None:
        for extension in query.extensions:
            icon = self._fallback_icons.get(f"{query.name}.{extension}")
            if icon is not None:
                return icon
        return None
