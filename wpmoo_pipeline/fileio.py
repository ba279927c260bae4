"""Reading source globs into file records and writing records to disk."""

from __future__ import annotations

import glob
import json
import os
from pathlib import Path
from typing import Iterable, List, Sequence

from .logging import get_logger
from .models import FileRecord, SourceMap
from .paths import glob_base, has_magic, to_posix

logger = get_logger("fileio")


def read_sources(
    patterns: Sequence[str],
    root: Path,
    *,
    allow_empty: bool = False,
    sourcemaps: bool = False,
) -> List[FileRecord]:
    """Expand ``patterns`` under ``root`` into buffered file records.

    Each record's ``base`` is the pattern's glob parent so that the
    destination layout mirrors the source tree below it. A literal path that
    does not exist raises ``FileNotFoundError`` unless ``allow_empty`` is set.
    """
    records: List[FileRecord] = []
    seen: set[Path] = set()
    for pattern in patterns:
        base = (root / glob_base(pattern)).resolve()
        matches = sorted(glob.glob(str(root / pattern), recursive=True))
        if not matches and not allow_empty:
            if has_magic(pattern):
                raise FileNotFoundError(f"No files match {pattern!r} under {root}")
            raise FileNotFoundError(f"Source file not found: {root / pattern}")
        for match in matches:
            path = Path(match).resolve()
            if path in seen or not path.is_file():
                continue
            seen.add(path)
            record = FileRecord(path=path, base=base, contents=path.read_bytes())
            if sourcemaps:
                record.source_map = identity_map(record)
            records.append(record)
    logger.debug("Read %d file(s) for %s", len(records), ", ".join(patterns))
    return records


def identity_map(record: FileRecord) -> SourceMap:
    """Empty v3 map seeded with the record's own source."""
    relative = to_posix(record.relative)
    return {
        "version": 3,
        "file": relative,
        "names": [],
        "mappings": "",
        "sources": [relative],
        "sourcesContent": [record.text()],
    }


def write_records(
    records: Iterable[FileRecord],
    dest: Path,
    *,
    source_maps: bool = True,
) -> List[Path]:
    """Write records below ``dest`` and return every path written.

    Records carrying a source map get a sibling ``.map`` file and a
    ``sourceMappingURL`` trailer. Null records are skipped.
    """
    written: List[Path] = []
    for record in records:
        if record.is_null():
            continue
        target = dest / record.relative
        target.parent.mkdir(parents=True, exist_ok=True)
        contents = bytes(record.contents)  # type: ignore[arg-type]
        map_path = None
        if source_maps and record.source_map is not None:
            map_path = target.with_name(target.name + ".map")
            trailer = f"\n/*# sourceMappingURL={map_path.name} */\n"
            contents = contents.rstrip(b"\n") + trailer.encode("utf-8")
        target.write_bytes(contents)
        written.append(target)
        if map_path is not None:
            source_map = dict(record.source_map or {})
            source_map["file"] = target.name
            if not source_map.get("sourceRoot"):
                source_map["sourceRoot"] = to_posix(os.path.relpath(record.base, target.parent))
            map_path.write_text(json.dumps(source_map), encoding="utf-8")
            written.append(map_path)
        record.path = target
        record.base = dest
    return written


__all__ = ["identity_map", "read_sources", "write_records"]
