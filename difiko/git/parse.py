"""Parsing of unified multi-file diffs into typed lines."""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable
from dataclasses import dataclass

_SECTION_START = re.compile(r"^diff --git ", re.MULTILINE)
_U32_MAX = 2**32 - 1


class LineKind(enum.Enum):
    GIT_HEADER = "git_header"
    INDEX_HEADER = "index_header"
    OLD_FILE = "old_file"
    NEW_FILE = "new_file"
    HUNK = "hunk"
    ADD = "add"
    DEL = "del"
    CONTEXT = "context"
    BINARY = "binary"
    NO_NEWLINE = "no_newline"


@dataclass(frozen=True)
class DiffLine:
    """One line of a file's diff. For hunks, ``text`` holds the header."""

    kind: LineKind
    text: str = ""
    old_start: int = 0
    old_count: int = 0
    new_start: int = 0
    new_count: int = 0


def split_diff_into_sections(diff_text: str) -> list[list[DiffLine]]:
    """Split a multi-file diff into per-file line lists, in git's order."""
    starts = [m.start() for m in _SECTION_START.finditer(diff_text)]
    ends = starts[1:] + [len(diff_text)]
    return [
        _parse_section(diff_text[start:end].rstrip("\n"))
        for start, end in zip(starts, ends)
    ]


def _parse_section(section: str) -> list[DiffLine]:
    out: list[DiffLine] = []
    in_hunk = False
    for line in section.split("\n"):
        if line.startswith("diff --git "):
            out.append(DiffLine(LineKind.GIT_HEADER, line))
        elif line.startswith("index "):
            out.append(DiffLine(LineKind.INDEX_HEADER, line))
        elif line.startswith("--- "):
            out.append(DiffLine(LineKind.OLD_FILE, line))
        elif line.startswith("+++ "):
            out.append(DiffLine(LineKind.NEW_FILE, line))
        elif line.startswith("@@"):
            in_hunk = True
            out.append(DiffLine(LineKind.HUNK, line, *_parse_hunk_header(line)))
        elif line.startswith("Binary files "):
            out.append(DiffLine(LineKind.BINARY, line))
        elif not in_hunk:
            # File-mode lines, similarity index and the like.
            if line:
                out.append(DiffLine(LineKind.INDEX_HEADER, line))
        elif line.startswith("+"):
            out.append(DiffLine(LineKind.ADD, line[1:]))
        elif line.startswith("-"):
            out.append(DiffLine(LineKind.DEL, line[1:]))
        elif line.startswith("\\"):
            out.append(DiffLine(LineKind.NO_NEWLINE, line))
        else:
            out.append(DiffLine(LineKind.CONTEXT, line[1:] if line.startswith(" ") else line))
    return out


def _parse_hunk_header(line: str) -> tuple[int, int, int, int]:
    old_start, old_count, new_start, new_count = 0, 1, 0, 1
    core = line[2:].split("@@", 1)[0]
    for token in core.split():
        if token.startswith("-"):
            old_start, old_count = _parse_pair(token[1:])
        elif token.startswith("+"):
            new_start, new_count = _parse_pair(token[1:])
    return old_start, old_count, new_start, new_count


def _parse_u32(text: str | None) -> int | None:
    if text is None:
        return None
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    value = int(digits)
    return value if value <= _U32_MAX else None


def _parse_pair(text: str) -> tuple[int, int]:
    parts = text.split(",")
    start = _parse_u32(parts[0])
    count = _parse_u32(parts[1] if len(parts) > 1 else None)
    return (0 if start is None else start, 1 if count is None else count)


def count_changes(lines: Iterable[DiffLine]) -> tuple[int, int, bool]:
    """Return (additions, deletions, is_binary) for one file's lines."""
    adds = dels = 0
    binary = False
    for line in lines:
        if line.kind is LineKind.ADD:
            adds += 1
        elif line.kind is LineKind.DEL:
            dels += 1
        elif line.kind is LineKind.BINARY:
            binary = True
    return adds, dels, binary