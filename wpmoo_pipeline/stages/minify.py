"""Minification stage."""

from __future__ import annotations

from typing import Callable, Optional

import rcssmin

from ..logging import get_logger
from ..models import FileRecord
from .base import Stage

logger = get_logger("stages.minify")


def default_minifier(css: str) -> str:
    # Bang comments survive, matching how third-party attributions are usually kept.
    return rcssmin.cssmin(css, keep_bang_comments=True)


class MinifyStage(Stage):
    """Minify buffered CSS.

    Minifiers here emit no source map, so a record's map would no longer
    describe its output and is dropped. Map-producing builds compress at
    compile time instead.
    """

    name = "minify"

    def __init__(self, minifier: Callable[[str], str] | None = None) -> None:
        self.minifier = minifier or default_minifier

    def apply(self, record: FileRecord) -> Optional[FileRecord]:
        if record.is_null():
            return record
        self.require_buffer(record)
        record.set_text(self.minifier(record.text()))
        if record.source_map is not None:
            logger.debug("Dropping source map for %s after minification", record.relative)
            record.source_map = None
        return record


__all__ = ["MinifyStage", "default_minifier"]
