"""Linear stage pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .logging import get_logger
from .models import FileRecord
from .stages.base import Stage


@dataclass
class Pipeline:
    """An ordered list of stages applied to each record in turn.

    A stage returning ``None`` drops the record; an exception from any stage
    aborts the whole run before anything downstream sees a partial result.
    """

    name: str
    stages: Sequence[Stage] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.logger = get_logger(f"pipeline.{self.name}")

    def process(self, record: FileRecord) -> FileRecord | None:
        current: FileRecord | None = record
        for stage in self.stages:
            if current is None:
                break
            current = stage.apply(current)
        return current

    def run(self, records: Iterable[FileRecord]) -> List[FileRecord]:
        emitted: List[FileRecord] = []
        for record in records:
            result = self.process(record)
            if result is None:
                self.logger.debug("%s dropped %s", self.name, record.path.name)
                continue
            emitted.append(result)
        return emitted


__all__ = ["Pipeline"]
