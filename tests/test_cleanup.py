"""Tests for wpmoo_pipeline.cleanup."""

from __future__ import annotations

from pathlib import Path

from wpmoo_pipeline.cleanup import clean_outputs, delete_if_exists


def test_clean_outputs_removes_bundle_and_map(tmp_path: Path) -> None:
    out = tmp_path / "css" / "wpmoo.css"
    out.parent.mkdir()
    out.write_text("a{}", encoding="utf-8")
    (tmp_path / "css" / "wpmoo.css.map").write_text("{}", encoding="utf-8")

    removed = clean_outputs(out)

    assert removed == [out, tmp_path / "css" / "wpmoo.css.map"]
    assert not out.exists()
    assert not (tmp_path / "css" / "wpmoo.css.map").exists()


def test_clean_outputs_twice_never_raises(tmp_path: Path) -> None:
    out = tmp_path / "css" / "wpmoo.css"
    out.parent.mkdir()
    out.write_text("a{}", encoding="utf-8")

    assert clean_outputs(out) == [out]
    assert clean_outputs(out) == []


def test_clean_outputs_with_missing_directory(tmp_path: Path) -> None:
    assert clean_outputs(tmp_path / "missing" / "wpmoo.css") == []


def test_delete_if_exists_swallows_other_errors(tmp_path: Path) -> None:
    directory = tmp_path / "wpmoo.css"
    directory.mkdir()

    assert delete_if_exists(directory) is False
    assert directory.exists()
