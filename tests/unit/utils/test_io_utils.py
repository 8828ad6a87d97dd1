from __future__ import annotations

from pathlib import Path

import pytest

from partials.core.utils.io import ensure_directory, read_text, read_yaml, write_text
from partials.core.utils.merge import deep_merge
from partials.core.utils.paths import resolve_project_root


def test_write_text_creates_parents_and_leaves_no_temp(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "out.md"

    write_text(target, "content")

    assert target.read_text(encoding="utf-8") == "content"
    assert [p.name for p in target.parent.iterdir()] == ["out.md"]


def test_write_text_replaces_existing(tmp_path: Path) -> None:
    target = tmp_path / "out.md"
    target.write_text("old", encoding="utf-8")

    write_text(target, "new")

    assert read_text(target) == "new"


def test_read_text_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_text(tmp_path / "missing.md")


def test_read_text_directory_is_oserror(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        read_text(tmp_path)


def test_ensure_directory_rejects_files(tmp_path: Path) -> None:
    f = tmp_path / "file"
    f.write_text("x", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        ensure_directory(f)
    with pytest.raises(FileNotFoundError):
        ensure_directory(tmp_path / "new", create=False)
    assert ensure_directory(tmp_path / "new").is_dir()


def test_read_yaml_default_for_missing_and_invalid(tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("a: [", encoding="utf-8")

    assert read_yaml(tmp_path / "missing.yaml", default={}) == {}
    assert read_yaml(bad, default={"fallback": True}) == {"fallback": True}


def test_deep_merge_does_not_mutate_inputs() -> None:
    base = {"a": {"x": 1, "y": 2}, "l": [1]}
    override = {"a": {"y": 3}, "l": [2]}

    merged = deep_merge(base, override)

    assert merged == {"a": {"x": 1, "y": 3}, "l": [2]}
    assert base == {"a": {"x": 1, "y": 2}, "l": [1]}


def test_resolve_project_root_finds_marker(tmp_path: Path) -> None:
    (tmp_path / ".partials").mkdir()
    nested = tmp_path / "docs" / "deep"
    nested.mkdir(parents=True)

    assert resolve_project_root(nested) == tmp_path.resolve()
