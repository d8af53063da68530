"""Shared fixtures that lay out fake icon base directories."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, Sequence

import pytest

DirectoryKeys = Mapping[str, object]


def write_theme(
    base_dir: Path,
    name: str,
    directories: Mapping[str, DirectoryKeys],
    *,
    inherits: Sequence[str] | None = None,
    icons: Mapping[str, Sequence[str]] | None = None,
) -> Path:
    """Create ``base_dir/name`` with an index.theme and empty icon files."""
    theme_dir = base_dir / name
    theme_dir.mkdir(parents=True, exist_ok=True)

    lines = ["[Icon Theme]", f"Name={name}", f"Directories={','.join(directories)}"]
    if inherits:
        lines.append(f"Inherits={','.join(inherits)}")
    lines.append("")
    for dir_name, keys in directories.items():
        lines.append(f"[{dir_name}]")
        lines.extend(f"{key}={value}" for key, value in keys.items())
        lines.append("")
    (theme_dir / "index.theme").write_text("\n".join(lines), encoding="utf-8")

    for rel_dir, filenames in (icons or {}).items():
        icon_dir = theme_dir / rel_dir
        icon_dir.mkdir(parents=True, exist_ok=True)
        for filename in filenames:
            (icon_dir / filename).write_bytes(b"")
    return theme_dir


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    path = tmp_path / "icons"
    path.mkdir()
    return path


@pytest.fixture
def make_theme(base_dir: Path) -> Callable[..., Path]:
    """Factory writing themes into ``base_dir`` unless another base is given."""

    def factory(name: str, directories: Mapping[str, DirectoryKeys], **kwargs) -> Path:
        target = kwargs.pop("base", base_dir)
        return write_theme(target, name, directories, **kwargs)

    return factory
