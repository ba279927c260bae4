"""Core data models shared across pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import IO, Any, Dict, Optional, Tuple, Union

SourceMap = Dict[str, Any]

SUPPORTED_STYLES = ("expanded", "compressed", "nested", "compact")


class PayloadKind(str, Enum):
    """How a record carries its contents."""

    NULL = "null"
    BUFFER = "buffer"
    STREAM = "stream"


@dataclass
class FileRecord:
    """A single file travelling through a pipeline run.

    ``path`` and ``contents`` are rewritten in place as stages run; ``base``
    stays fixed and anchors :attr:`relative` for the destination layout.
    """

    path: Path
    base: Path
    contents: Union[bytes, IO[bytes], None] = None
    source_map: Optional[SourceMap] = None

    @property
    def kind(self) -> PayloadKind:
        if self.contents is None:
            return PayloadKind.NULL
        if isinstance(self.contents, (bytes, bytearray)):
            return PayloadKind.BUFFER
        return PayloadKind.STREAM

    def is_null(self) -> bool:
        return self.kind is PayloadKind.NULL

    def is_buffer(self) -> bool:
        return self.kind is PayloadKind.BUFFER

    def is_stream(self) -> bool:
        return self.kind is PayloadKind.STREAM

    @property
    def relative(self) -> Path:
        return self.path.relative_to(self.base)

    @property
    def basename(self) -> str:
        return self.path.name

    def text(self, encoding: str = "utf-8") -> str:
        """Decode buffered contents; callers must check the payload kind first."""
        if not isinstance(self.contents, (bytes, bytearray)):
            raise TypeError(f"{self.path} does not hold buffered contents")
        return bytes(self.contents).decode(encoding)

    def set_text(self, value: str, encoding: str = "utf-8") -> None:
        self.contents = value.encode(encoding)


@dataclass(frozen=True)
class CompileOptions:
    """Options handed to the style compiler for one file."""

    style: str = "expanded"
    source_map: bool = False
    source_map_contents: bool = False
    load_paths: Tuple[Path, ...] = ()
    quiet_deps: bool = False

    def __post_init__(self) -> None:
        if self.style not in SUPPORTED_STYLES:
            raise ValueError(
                f"Unsupported output style {self.style!r}; expected one of {', '.join(SUPPORTED_STYLES)}"
            )


@dataclass
class CompileResult:
    """Compiled stylesheet text plus the optional map the compiler produced."""

    css: str
    source_map: Optional[SourceMap] = None


__all__ = [
    "CompileOptions",
    "CompileResult",
    "FileRecord",
    "PayloadKind",
    "SUPPORTED_STYLES",
    "SourceMap",
]
