"""Byte-span edits applied to the original source to produce new text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

__all__ = ["Edit", "apply_edits", "collapse_blank_lines", "removal"]

_BLANK_RUN_RE = re.compile(r"\n(?:[ \t]*\n){3,}")


@dataclass(frozen=True)
class Edit:
    """Replace ``data[start:end]`` with ``text``. Zero-width edits insert."""

    start: int
    end: int
    text: str = ""

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Edit start {self.start} is after end {self.end}")


def apply_edits(data: bytes, edits: Iterable[Edit]) -> bytes:
    """Apply non-overlapping *edits* to *data*.

    An insertion sharing its offset with a replacement lands before the
    replaced text.
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    previous_end = 0
    for edit in ordered:
        if edit.start < previous_end:
            raise ValueError(f"Overlapping edits at byte {edit.start}")
        previous_end = max(previous_end, edit.end)

    result = data
    for edit in reversed(ordered):
        result = result[: edit.start] + edit.text.encode("utf-8") + result[edit.end :]
    return result


def removal(data: bytes, start: int, end: int) -> Edit:
    """Build an edit deleting ``data[start:end]`` together with its lines.

    When the span occupies whole lines those lines are removed, and when it
    sat between two blank lines one of them is removed as well.
    """
    line_start = data.rfind(b"\n", 0, start) + 1
    line_end = data.find(b"\n", end)
    if line_end == -1:
        line_end = len(data)
    if data[line_start:start].strip() or data[end:line_end].strip():
        return Edit(start, end)

    start = line_start
    end = min(line_end + 1, len(data))

    blank_before = start == 0 or data[:start].endswith(b"\n\n")
    next_end = data.find(b"\n", end)
    if blank_before and next_end != -1 and data[end:next_end].strip() == b"":
        end = next_end + 1

    if end >= len(data):
        # No blank lines left dangling at end of file.
        while start > 1 and data[start - 2 : start] == b"\n\n":
            start -= 1

    return Edit(start, end)


def collapse_blank_lines(text: str) -> str:
    """Collapse every run of three or more blank lines into a single one."""
    return _BLANK_RUN_RE.sub("\n\n", text)
