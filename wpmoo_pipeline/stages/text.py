"""Regex substitution over a record's decoded text."""

from __future__ import annotations

import re
from typing import List, Optional, Pattern, Tuple, Union

from ..models import FileRecord
from ..sourcemap import Edit, remap_edits
from .base import Stage

# Both strip patterns stay inside a single /*! ... */ comment.
_BANG_COMMENT_FMT = r"/\*!(?:(?!\*/)[\s\S])*?{needle}(?:(?!\*/)[\s\S])*\*/"


class TextReplaceStage(Stage):
    """Globally substitute ``pattern`` with ``replacement`` in each file."""

    def __init__(
        self,
        pattern: Union[str, Pattern[str]],
        replacement: str,
        *,
        name: str = "replace-text",
        encoding: str = "utf-8",
    ) -> None:
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.replacement = replacement
        self.name = name
        self.encoding = encoding

    def apply(self, record: FileRecord) -> Optional[FileRecord]:
        if record.is_null():
            return record
        self.require_buffer(record)
        code = record.text(self.encoding)
        updated, edits = self.substitute(code)
        record.set_text(updated, self.encoding)
        if edits and record.source_map is not None:
            record.source_map = remap_edits(record.source_map, code, updated, edits)
        return record

    def substitute(self, code: str) -> Tuple[str, List[Edit]]:
        """Same result as ``re.sub`` plus the edits it made, in order."""
        edits: List[Edit] = []
        pieces: List[str] = []
        last = 0
        for match in self.pattern.finditer(code):
            replacement = match.expand(self.replacement)
            edits.append((match.start(), match.end(), replacement))
            pieces.append(code[last : match.start()])
            pieces.append(replacement)
            last = match.end()
        pieces.append(code[last:])
        return "".join(pieces), edits


def banner_comment_pattern(needle: str) -> Pattern[str]:
    """Match a ``/*! ... */`` comment that mentions ``needle``."""
    return re.compile(_BANG_COMMENT_FMT.format(needle=re.escape(needle)))


def strip_banner(needle: str, *, name: str) -> TextReplaceStage:
    return TextReplaceStage(banner_comment_pattern(needle), "", name=name)


def rewrite_class_prefix(prefix: str, namespace: str) -> TextReplaceStage:
    """``.pico`` -> ``.wpmoo`` for every class selector using the vendor prefix."""
    return TextReplaceStage(
        re.compile(r"\." + re.escape(prefix)),
        "." + namespace,
        name="rewrite-class-prefix",
    )


def rewrite_custom_property_prefix(prefix: str, namespace: str) -> TextReplaceStage:
    """``--pico-*`` -> ``--wpmoo-*`` for custom properties."""
    return TextReplaceStage(
        re.compile("--" + re.escape(prefix) + "-"),
        f"--{namespace}-",
        name="rewrite-custom-property-prefix",
    )


__all__ = [
    "TextReplaceStage",
    "banner_comment_pattern",
    "rewrite_class_prefix",
    "rewrite_custom_property_prefix",
    "strip_banner",
]
