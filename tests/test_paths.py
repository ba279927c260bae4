"""Tests for wpmoo_pipeline.paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from wpmoo_pipeline.paths import (
    change_extension,
    glob_base,
    is_partial,
    relative_source,
    replace_basename,
)


@pytest.mark.parametrize(
    "source",
    ["scss/wpmoo.scss", "/abs/scss/nested/theme.scss", "plain.sass", "noext"],
)
def test_change_extension_is_idempotent(source: str) -> None:
    once = change_extension(source, ".css")
    assert change_extension(once, ".css") == once
    assert once.suffix == ".css"
    assert once.parent == Path(source).parent


def test_change_extension_preserves_directory_and_stem() -> None:
    assert change_extension("scss/components/card.scss", ".css") == Path("scss/components/card.css")


def test_replace_basename_keeps_directory() -> None:
    assert replace_basename("/out/dist/pico.conditional.css", "pico-wpmoo.css") == Path(
        "/out/dist/pico-wpmoo.css"
    )


def test_is_partial_detects_underscore_prefix() -> None:
    assert is_partial("scss/_variables.scss")
    assert not is_partial("scss/wpmoo.scss")
    assert not is_partial("_dir/wpmoo.scss")


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("scss/**/*.scss", "scss"),
        ("scss/wpmoo.scss", "scss"),
        ("vendor/pico/css/pico.conditional.css", "vendor/pico/css"),
        ("*.html", "."),
        ("a/b*/c.css", "a"),
    ],
)
def test_glob_base(pattern: str, expected: str) -> None:
    assert glob_base(pattern) == str(Path(expected))


def test_relative_source_rewrites_file_uris(tmp_path: Path) -> None:
    source = (tmp_path / "scss" / "partials" / "_grid.scss").as_uri()
    assert relative_source(source, tmp_path / "scss") == "partials/_grid.scss"


def test_relative_source_leaves_other_entries_untouched(tmp_path: Path) -> None:
    assert relative_source("partials/_grid.scss", tmp_path) == "partials/_grid.scss"
    assert relative_source("https://cdn.example/x.scss", tmp_path) == "https://cdn.example/x.scss"
    already = relative_source((tmp_path / "a.scss").as_uri(), tmp_path)
    assert relative_source(already, tmp_path) == already
