"""Tests for icontheme.core.fallback_index."""

from __future__ import annotations

import os

from icontheme.core.fallback_index import build_fallback_index


def test_indexes_loose_files_only(tmp_path):
    base = tmp_path / "pixmaps"
    base.mkdir()
    (base / "app.png").write_bytes(b"")
    (base / "Theme").mkdir()
    (base / "Theme" / "nested.png").write_bytes(b"")

    icons = build_fallback_index([base])

    assert set(icons) == {"app.png"}
    assert str(icons["app.png"]) == os.path.abspath(base / "app.png")


def test_first_base_dir_wins(tmp_path):
    user = tmp_path / "user"
    system = tmp_path / "system"
    for d in (user, system):
        d.mkdir()
        (d / "app.png").write_bytes(b"")
    (system / "other.svg").write_bytes(b"")

    icons = build_fallback_index([user, system])

    assert icons["app.png"].parent == user
    assert icons["other.svg"].parent == system


def test_missing_base_dirs_contribute_nothing(tmp_path):
    assert build_fallback_index([tmp_path / "missing"]) == {}
