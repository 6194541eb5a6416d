"""In-diff text search and mapping of diff lines to rendered rows."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..git.diff import FileChange
from ..git.parse import DiffLine, LineKind
from .text_input import TextInput
from .types import DiffMode

_UNRENDERED = frozenset(
    {LineKind.GIT_HEADER, LineKind.INDEX_HEADER, LineKind.OLD_FILE, LineKind.NEW_FILE}
)


@dataclass(frozen=True)
class DiffMatch:
    """A hit: index into ``diff_lines`` and UTF-8 byte offsets into its text."""

    line: int
    start: int
    end: int


@dataclass
class DiffSearch:
    query: TextInput = field(default_factory=lambda: TextInput(""))
    matches: list[DiffMatch] = field(default_factory=list)
    current: int = 0
    case_sensitive: bool = False


def _is_boundary(data: bytes, i: int) -> bool:
    return i == len(data) or (data[i] & 0xC0) != 0x80


def find_all_substr(
    hay: str, needle: str | bytes, case_sensitive: bool
) -> list[tuple[int, int]]:
    """All (possibly overlapping) occurrences of ``needle`` as UTF-8 byte ranges.

    Case-insensitive matching folds ASCII only; other bytes must match
    exactly. Every range falls on character boundaries.
    """
    needle_bytes = needle.encode("utf-8") if isinstance(needle, str) else bytes(needle)
    data = hay.encode("utf-8")
    n = len(needle_bytes)
    if n == 0 or n > len(data):
        return []
    if not case_sensitive:
        # bytes.lower() folds ASCII letters only.
        data_cmp, needle_cmp = data.lower(), needle_bytes.lower()
    else:
        data_cmp, needle_cmp = data, needle_bytes
    out = []
    i = data_cmp.find(needle_cmp)
    while i != -1:
        if _is_boundary(data, i) and _is_boundary(data, i + n):
            out.append((i, i + n))
        i = data_cmp.find(needle_cmp, i + 1)
    return out


def _lines(file: FileChange) -> Iterable[DiffLine]:
    return file.diff_lines


def rendered_row_for_match(file: FileChange, mode: DiffMode, target: int) -> int:
    """Rendered row of ``diff_lines[target]`` in the given diff mode.

    Header lines produce no row, and split mode pairs runs of deletions
    and additions into shared rows.
    """
    rendered = 0
    if mode is DiffMode.UNIFIED:
        for i, dl in enumerate(_lines(file)):
            if i == target:
                return rendered
            if dl.kind not in _UNRENDERED:
                rendered += 1
        return rendered

    pending_del = pending_add = 0
    for i, dl in enumerate(_lines(file)):
        on_target = i == target
        if dl.kind in (LineKind.HUNK, LineKind.CONTEXT):
            rendered += max(pending_del, pending_add)
            pending_del = pending_add = 0
            if on_target:
                return rendered
            rendered += 1
        elif dl.kind is LineKind.DEL:
            if on_target:
                return rendered + pending_del
            pending_del += 1
        elif dl.kind is LineKind.ADD:
            if on_target:
                return rendered + pending_add
            pending_add += 1
        elif on_target:
            return rendered
    return rendered + max(pending_del, pending_add)


def total_rendered_rows(file: FileChange, mode: DiffMode) -> int:
    """Number of rows the file's diff renders to in the given mode."""
    if mode is DiffMode.UNIFIED:
        return sum(1 for dl in _lines(file) if dl.kind not in _UNRENDERED)
    total = pending_del = pending_add = 0
    for dl in _lines(file):
        if dl.kind in (LineKind.HUNK, LineKind.CONTEXT):
            total += max(pending_del, pending_add) + 1
            pending_del = pending_add = 0
        elif dl.kind is LineKind.DEL:
            pending_del += 1
        elif dl.kind is LineKind.ADD:
            pending_add += 1
    return total + max(pending_del, pending_add)