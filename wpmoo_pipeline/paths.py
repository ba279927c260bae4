"""Path helpers shared by the pipeline stages."""

from __future__ import annotations

import os
import re
from pathlib import Path, PurePath
from urllib.parse import urlparse
from urllib.request import url2pathname

_MAGIC = re.compile(r"[*?\[]")


def change_extension(path: PurePath | str, new_ext: str) -> Path:
    """Return ``path`` with its extension swapped for ``new_ext``.

    Directory and stem are preserved. ``new_ext`` should include the leading
    dot; an empty string strips the extension.
    """
    source = Path(path)
    return source.with_name(source.stem + new_ext)


def replace_basename(path: PurePath | str, new_name: str) -> Path:
    """Return ``path`` with its final component replaced, directory untouched."""
    return Path(path).with_name(new_name)


def is_partial(path: PurePath | str) -> bool:
    """Partials (``_name.scss``) are only ever pulled in through imports."""
    return Path(path).name.startswith("_")


def has_magic(pattern: str) -> bool:
    return _MAGIC.search(pattern) is not None


def glob_base(pattern: str) -> str:
    """Return the non-glob leading directory of ``pattern``.

    ``scss/**/*.scss`` gives ``scss``; a literal path such as
    ``scss/wpmoo.scss`` gives its parent directory.
    """
    parts = PurePath(pattern).parts
    prefix: list[str] = []
    for part in parts[:-1]:
        if has_magic(part):
            break
        prefix.append(part)
    return str(PurePath(*prefix)) if prefix else "."


def to_posix(path: PurePath | str) -> str:
    return PurePath(path).as_posix()


def is_file_uri(value: str) -> bool:
    return value.startswith("file://")


def file_uri_to_path(uri: str) -> Path:
    parsed = urlparse(uri)
    return Path(url2pathname(parsed.path))


def relative_source(source: str, base: PurePath | str) -> str:
    """Rewrite a ``file://`` source-map entry relative to ``base``.

    Entries that are not local-file URIs are returned unchanged.
    """
    if not is_file_uri(source):
        return source
    local = file_uri_to_path(source)
    return to_posix(os.path.relpath(local, base))


__all__ = [
    "change_extension",
    "file_uri_to_path",
    "glob_base",
    "has_magic",
    "is_file_uri",
    "is_partial",
    "relative_source",
    "replace_basename",
    "to_posix",
]
