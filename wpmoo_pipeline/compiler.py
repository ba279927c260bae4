"""Style compiler adapters."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Protocol
from urllib.parse import urlparse

import sass

from .logging import get_logger
from .models import CompileOptions, CompileResult, SourceMap


class CompileError(RuntimeError):
    """Raised when the stylesheet compiler rejects a source file."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class StyleCompiler(Protocol):
    """Turns one stylesheet source file into CSS and an optional source map.

    Source-map ``sources`` may be absolute ``file://`` URIs; the compile
    stage rebases them onto the record root.
    """

    def compile(self, path: Path, options: CompileOptions) -> CompileResult:
        ...


class LibSassCompiler:
    """Compile SCSS through libsass."""

    def __init__(self) -> None:
        self.logger = get_logger("compiler")

    def compile(self, path: Path, options: CompileOptions) -> CompileResult:
        kwargs: Dict[str, Any] = {
            "filename": str(path),
            "output_style": options.style,
            "include_paths": [str(entry) for entry in options.load_paths],
        }
        if options.quiet_deps:
            # libsass has no per-dependency warning switch; warnings pass through as emitted.
            self.logger.debug("quiet_deps requested for %s", path.name)

        map_path = path.with_name(path.name + ".map")
        try:
            if options.source_map:
                css, map_text = sass.compile(
                    source_map_filename=str(map_path),
                    source_map_contents=options.source_map_contents,
                    omit_source_map_url=True,
                    **kwargs,
                )
            else:
                css = sass.compile(**kwargs)
                map_text = None
        except sass.CompileError as exc:
            raise CompileError(str(exc), path=path) from exc

        source_map = None
        if map_text:
            source_map = _absolute_sources(json.loads(map_text), map_path.parent)
        return CompileResult(css=css, source_map=source_map)


def _absolute_sources(source_map: SourceMap, map_dir: Path) -> SourceMap:
    """libsass writes sources relative to the map file; expose them as file URIs."""
    sources = []
    for source in source_map.get("sources", []):
        if urlparse(source).scheme:
            sources.append(source)
        else:
            sources.append((map_dir / source).resolve().as_uri())
    source_map["sources"] = sources
    return source_map


__all__ = ["CompileError", "LibSassCompiler", "StyleCompiler"]
