"""Base class and errors for per-file pipeline stages."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..models import FileRecord


class StreamUnsupportedError(RuntimeError):
    """Raised when a stage receives a streaming payload it cannot process."""

    def __init__(self, stage: str, record: FileRecord) -> None:
        super().__init__(f"{stage}: streaming not supported ({record.path})")
        self.stage = stage
        self.path = record.path


class Stage(ABC):
    """Contract for stages that transform one file record at a time.

    ``apply`` returns the (possibly mutated) record to pass it on, or ``None``
    to drop it from the run. Errors propagate and abort the run.
    """

    name: str = "stage"

    @abstractmethod
    def apply(self, record: FileRecord) -> Optional[FileRecord]:
        """Transform ``record`` and return it, or ``None`` to emit nothing."""

    def require_buffer(self, record: FileRecord) -> None:
        """Fail fast on streaming payloads instead of dropping them."""
        if record.is_stream():
            raise StreamUnsupportedError(self.name, record)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"
