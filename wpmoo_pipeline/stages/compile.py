"""Stylesheet compilation stage."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from ..compiler import StyleCompiler
from ..logging import get_logger
from ..models import CompileOptions, FileRecord, SourceMap
from ..paths import change_extension, is_partial, relative_source, to_posix
from .base import Stage

CSS_EXTENSION = ".css"


class StyleCompileStage(Stage):
    """Compile stylesheet sources and carry their source maps forward.

    Null payloads and ``_partial`` files are dropped without error; partials
    only reach the output through the entry files that import them. When the
    incoming record carries a source map, the compiler is asked for one too
    and its ``file``/``sources`` entries are rebased onto the record root.
    """

    name = "style-compile"

    def __init__(
        self,
        compiler: StyleCompiler,
        *,
        style: str = "expanded",
        load_paths: Iterable[Path] = (),
        quiet_deps: bool = False,
        output_ext: str = CSS_EXTENSION,
    ) -> None:
        self.compiler = compiler
        self.style = style
        self.load_paths = tuple(Path(entry) for entry in load_paths)
        self.quiet_deps = quiet_deps
        self.output_ext = output_ext
        self.logger = get_logger("stages.compile")

    def options_for(self, record: FileRecord) -> CompileOptions:
        wants_map = record.source_map is not None
        return CompileOptions(
            style=self.style,
            source_map=wants_map,
            source_map_contents=wants_map,
            load_paths=self.load_paths,
            quiet_deps=self.quiet_deps,
        )

    def apply(self, record: FileRecord) -> Optional[FileRecord]:
        if record.is_null():
            return None
        self.require_buffer(record)
        if is_partial(record.path):
            self.logger.debug("Skipping partial %s", record.relative)
            return None

        result = self.compiler.compile(record.path, self.options_for(record))

        record.contents = result.css.encode("utf-8")
        record.path = change_extension(record.path, self.output_ext)

        if record.source_map is not None and result.source_map:
            record.source_map = rebase_source_map(result.source_map, record)
        return record


def rebase_source_map(source_map: SourceMap, record: FileRecord) -> SourceMap:
    """Point ``file`` at the output name and make file-URI sources root-relative."""
    rebased = dict(source_map)
    rebased["file"] = to_posix(record.relative)
    rebased["sources"] = [
        relative_source(source, record.base) for source in source_map.get("sources", [])
    ]
    return rebased


__all__ = ["CSS_EXTENSION", "StyleCompileStage", "rebase_source_map"]
