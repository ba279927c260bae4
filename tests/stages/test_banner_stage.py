"""Tests for the banner stage."""

from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path

import pytest

from wpmoo_pipeline.config import BannerConfig
from wpmoo_pipeline.models import FileRecord
from wpmoo_pipeline.stages import BannerStage, StreamUnsupportedError, render_banner, strip_banner


def test_banner_prepends_and_keeps_original_suffix(tmp_path: Path, fixed_clock) -> None:
    original = "body{color:red}"
    record = FileRecord(path=tmp_path / "a.css", base=tmp_path, contents=original.encode())

    result = BannerStage(BannerConfig(), clock=fixed_clock).apply(record)

    assert result is not None
    text = result.text()
    assert text.endswith(original)
    assert text.startswith("/*!\n")
    assert "WPMoo UI bundle" in text
    assert "Copyright 2031 - Licensed under MIT" in text
    assert "Contains portions of Pico CSS (MIT). See LICENSE-PICO.md." in text


def test_banner_uses_current_year_by_default() -> None:
    banner = render_banner(BannerConfig(), year=datetime.now().year)
    assert str(datetime.now().year) in banner
    assert banner.endswith("\n")


def test_banner_is_removed_by_stale_banner_strip(tmp_path: Path, fixed_clock) -> None:
    config = BannerConfig()
    record = FileRecord(path=tmp_path / "a.css", base=tmp_path, contents=b"a{}")
    bannered = BannerStage(config, clock=fixed_clock).apply(record)
    assert bannered is not None

    stripped = strip_banner(config.marker, name="strip-stale-banner").apply(bannered)

    assert stripped is not None
    assert stripped.text() == "\na{}"


def test_banner_respects_template_override(tmp_path: Path, fixed_clock) -> None:
    config = BannerConfig(template="/*! {{ marker }} {{ year }} */")
    record = FileRecord(path=tmp_path / "a.css", base=tmp_path, contents=b"a{}")
    result = BannerStage(config, clock=fixed_clock).apply(record)
    assert result is not None
    assert result.text() == "/*! WPMoo UI bundle 2031 */\na{}"


def test_banner_shifts_source_map_lines(tmp_path: Path, fixed_clock) -> None:
    record = FileRecord(
        path=tmp_path / "a.css",
        base=tmp_path,
        contents=b"a{}",
        source_map={"version": 3, "mappings": "AAAA", "sources": ["a.scss"]},
    )
    result = BannerStage(BannerConfig(), clock=fixed_clock).apply(record)
    assert result is not None
    assert result.source_map is not None
    assert result.source_map["mappings"] == ";;;;;AAAA"


def test_banner_null_and_stream_payloads(tmp_path: Path) -> None:
    stage = BannerStage(BannerConfig())
    null_record = FileRecord(path=tmp_path / "a.css", base=tmp_path)
    assert stage.apply(null_record) is null_record

    stream_record = FileRecord(path=tmp_path / "a.css", base=tmp_path, contents=io.BytesIO(b"a"))
    with pytest.raises(StreamUnsupportedError):
        stage.apply(stream_record)


def test_banner_template_must_render_marker() -> None:
    with pytest.raises(ValueError, match="marker"):
        render_banner(BannerConfig(template="/*! Acme {{ year }} */"), year=2031)
