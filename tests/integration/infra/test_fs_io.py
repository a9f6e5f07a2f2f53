from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, component-wise containment and the
timestamp lookup used by the staleness check.
"""

import os
from pathlib import Path
from unittest.mock import patch

from glsl2spv.infra.fs import (
    file_exists,
    get_mtime_seconds,
    get_umask,
    is_within,
    normalize_path,
    remove_quietly,
)


def test_normalize_path_expansion() -> None:
    with patch.dict(os.environ, {"SHADER_ROOT": "assets"}):
        result = normalize_path("$SHADER_ROOT/shaders", "/fallback")

    assert os.path.isabs(result)
    assert result.endswith(os.path.join("assets", "shaders"))


def test_normalize_path_uses_fallback_for_empty_input() -> None:
    assert normalize_path("   ", "/opt/project") == os.path.abspath("/opt/project")
    assert normalize_path(None, "/opt/project") == os.path.abspath("/opt/project")


def test_normalize_path_collapses_dots(tmp_path: Path) -> None:
    messy = str(tmp_path / "a" / ".." / "b" / ".")

    assert normalize_path(messy, "/") == str(tmp_path / "b")


def test_is_within_compares_components() -> None:
    base = os.path.join(os.sep, "proj", "shaders")

    assert is_within(base, base)
    assert is_within(os.path.join(base, "post", "bloom.frag"), base)
    assert not is_within(base + "_old", base)
    assert not is_within(os.path.join(os.sep, "proj"), base)


def test_get_mtime_seconds_truncates(tmp_path: Path) -> None:
    f = tmp_path / "a.vert"
    f.write_text("#version 450\n", encoding="utf-8")
    os.utime(f, (1_700_000_000.9, 1_700_000_000.9))

    assert get_mtime_seconds(str(f)) == 1_700_000_000


def test_get_mtime_seconds_missing_file(tmp_path: Path) -> None:
    assert get_mtime_seconds(str(tmp_path / "nope")) is None


def test_file_exists_only_for_regular_files(tmp_path: Path) -> None:
    (tmp_path / "dir").mkdir()
    (tmp_path / "file").write_text("x", encoding="utf-8")

    assert file_exists(str(tmp_path / "file"))
    assert not file_exists(str(tmp_path / "dir"))
    assert not file_exists(str(tmp_path / "missing"))


def test_remove_quietly_tolerates_missing(tmp_path: Path) -> None:
    target = tmp_path / "leftover.tmp"
    target.write_text("x", encoding="utf-8")

    remove_quietly(str(target))
    remove_quietly(str(target))

    assert not target.exists()


def test_get_umask_leaves_mask_unchanged() -> None:
    previous = os.umask(0o022)
    try:
        assert get_umask() == 0o022
        assert get_umask() == 0o022
    finally:
        os.umask(previous)
