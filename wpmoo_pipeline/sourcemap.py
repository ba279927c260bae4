"""Source-map v3 mapping codec and remapping through text edits."""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import List, Sequence, Tuple

from .models import SourceMap

_B64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_B64_INDEX = {char: index for index, char in enumerate(_B64)}

# (start, end, replacement) in original-text offsets, sorted and non-overlapping.
Edit = Tuple[int, int, str]
Segment = List[int]


def _decode_vlq(raw: str) -> List[int]:
    values: List[int] = []
    shift = 0
    value = 0
    for char in raw:
        digit = _B64_INDEX[char]
        value += (digit & 31) << shift
        if digit & 32:
            shift += 5
            continue
        negative = value & 1
        value >>= 1
        values.append(-value if negative else value)
        value = 0
        shift = 0
    return values


def _encode_vlq(value: int) -> str:
    vlq = ((-value) << 1) | 1 if value < 0 else value << 1
    encoded = ""
    while True:
        digit = vlq & 31
        vlq >>= 5
        if vlq:
            digit |= 32
        encoded += _B64[digit]
        if not vlq:
            return encoded


def decode_mappings(mappings: str) -> List[List[Segment]]:
    """Decode ``mappings`` into absolute segments per generated line.

    Each segment is ``[column]``, ``[column, source, line, column]`` or the
    same with a trailing name index.
    """
    lines: List[List[Segment]] = []
    state = [0, 0, 0, 0]
    for line_text in mappings.split(";"):
        column = 0
        segments: List[Segment] = []
        for raw in line_text.split(","):
            if not raw:
                continue
            fields = _decode_vlq(raw)
            column += fields[0]
            segment = [column]
            if len(fields) >= 4:
                for index in range(3):
                    state[index] += fields[index + 1]
                segment.extend(state[:3])
                if len(fields) >= 5:
                    state[3] += fields[4]
                    segment.append(state[3])
            segments.append(segment)
        lines.append(segments)
    return lines


def encode_mappings(lines: Sequence[Sequence[Segment]]) -> str:
    state = [0, 0, 0, 0]
    encoded_lines: List[str] = []
    for segments in lines:
        column = 0
        parts: List[str] = []
        for segment in sorted(segments, key=lambda item: item[0]):
            fields = [segment[0] - column]
            column = segment[0]
            if len(segment) >= 4:
                for index in range(3):
                    fields.append(segment[index + 1] - state[index])
                    state[index] = segment[index + 1]
                if len(segment) >= 5:
                    fields.append(segment[4] - state[3])
                    state[3] = segment[4]
            parts.append("".join(_encode_vlq(value) for value in fields))
        encoded_lines.append(",".join(parts))
    return ";".join(encoded_lines).rstrip(";")


def _line_starts(text: str) -> List[int]:
    return [0] + [match.end() for match in re.finditer("\n", text)]


def _shift(offset: int, edits: Sequence[Edit]) -> int | None:
    delta = 0
    for start, end, replacement in edits:
        if offset < start:
            break
        if offset < end:
            # The start of a replaced token maps to the start of its replacement.
            return offset + delta if offset == start and replacement else None
        delta += len(replacement) - (end - start)
    return offset + delta


def remap_edits(
    source_map: SourceMap, original: str, edited: str, edits: Sequence[Edit]
) -> SourceMap:
    """Move generated positions in ``source_map`` from ``original`` to ``edited``.

    Segments inside removed or replaced text, or past the end of
    ``original``, are dropped.
    """
    old_starts = _line_starts(original)
    new_starts = _line_starts(edited)
    remapped: List[List[Segment]] = [[] for _ in new_starts]
    for line, segments in enumerate(decode_mappings(str(source_map.get("mappings", "")))):
        if line >= len(old_starts):
            break
        line_end = old_starts[line + 1] if line + 1 < len(old_starts) else len(original) + 1
        for segment in segments:
            offset = old_starts[line] + segment[0]
            if offset >= line_end:
                continue
            new_offset = _shift(offset, edits)
            if new_offset is None:
                continue
            new_line = bisect_right(new_starts, new_offset) - 1
            remapped[new_line].append([new_offset - new_starts[new_line], *segment[1:]])
    updated = dict(source_map)
    updated["mappings"] = encode_mappings(remapped)
    return updated


__all__ = ["Edit", "decode_mappings", "encode_mappings", "remap_edits"]
