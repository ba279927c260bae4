"""Retarget a record onto a fixed published filename."""

from __future__ import annotations

from typing import Optional

from ..models import FileRecord
from ..paths import replace_basename
from .base import Stage


class RenameStage(Stage):
    name = "rename"

    def __init__(self, new_basename: str) -> None:
        self.new_basename = new_basename

    def apply(self, record: FileRecord) -> Optional[FileRecord]:
        record.path = replace_basename(record.path, self.new_basename)
        return record


__all__ = ["RenameStage"]
