"""Tests for the minify stage."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from wpmoo_pipeline.models import FileRecord
from wpmoo_pipeline.stages import MinifyStage, StreamUnsupportedError


def test_minify_compacts_expanded_css(tmp_path: Path) -> None:
    record = FileRecord(
        path=tmp_path / "a.css",
        base=tmp_path,
        contents=b"body {\n  color: red;\n}\n",
    )
    result = MinifyStage().apply(record)
    assert result is not None
    assert result.text() == "body{color:red}"


def test_minify_keeps_bang_comments(tmp_path: Path) -> None:
    record = FileRecord(
        path=tmp_path / "a.css",
        base=tmp_path,
        contents=b"/*! keep */\n/* drop */\na {\n  color: blue;\n}\n",
    )
    result = MinifyStage().apply(record)
    assert result is not None
    assert "/*! keep */" in result.text()
    assert "drop" not in result.text()


def test_minify_accepts_custom_minifier(tmp_path: Path) -> None:
    record = FileRecord(path=tmp_path / "a.css", base=tmp_path, contents=b"A { }")
    result = MinifyStage(lambda css: css.lower()).apply(record)
    assert result is not None
    assert result.text() == "a { }"


def test_minify_null_and_stream_payloads(tmp_path: Path) -> None:
    null_record = FileRecord(path=tmp_path / "a.css", base=tmp_path)
    assert MinifyStage().apply(null_record) is null_record
    with pytest.raises(StreamUnsupportedError):
        MinifyStage().apply(FileRecord(path=tmp_path / "a.css", base=tmp_path, contents=io.BytesIO(b"")))


def test_minify_drops_source_map_it_cannot_follow(tmp_path: Path) -> None:
    record = FileRecord(
        path=tmp_path / "a.css",
        base=tmp_path,
        contents=b"a {\n  color: blue;\n}\n",
        source_map={"version": 3, "mappings": "AAAA;AACA", "sources": ["a.scss"]},
    )
    result = MinifyStage().apply(record)
    assert result is not None
    assert result.source_map is None
