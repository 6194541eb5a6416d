"""Loading and parsing ``git blame --porcelain`` output."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .command import run

_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1
_I64_MIN, _I64_MAX = -(2**63), 2**63 - 1
_U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class BlameLine:
    short_hash: str
    author: str
    date: str


@dataclass
class Blame:
    """Blame data keyed by 1-based line number in the blamed revision."""

    by_line: dict[int, BlameLine] = field(default_factory=dict)


def load_blame(repo: str | os.PathLike[str], git_ref: str, file: str) -> Blame:
    """Blame ``file`` as of ``git_ref``."""
    stdout = run(repo, ["blame", "--porcelain", git_ref, "--", file])
    return parse_porcelain(stdout)


def _parse_int(text: str, low: int, high: int) -> int | None:
    if not text:
        return None
    if text[0] == "-" and low >= 0:
        return None
    body = text[1:] if text[0] in "+-" else text
    if not body or not (body.isascii() and body.isdigit()):
        return None
    value = int(text)
    return value if low <= value <= high else None


def parse_porcelain(stdout: str) -> Blame:
    """Parse porcelain blame output into per-line authorship."""
    by_line: dict[int, BlameLine] = {}
    # Per-commit metadata, fixed at the first content line seen for the hash.
    commits: dict[str, BlameLine] = {}

    current_hash = ""
    current_final = 0
    current_author = ""
    current_author_time = 0
    current_tz_secs = 0

    for raw in stdout.split("\n"):
        line = raw[:-1] if raw.endswith("\r") else raw
        if line.startswith("\t"):
            entry = commits.get(current_hash)
            if entry is None:
                entry = BlameLine(
                    short_hash=current_hash[:7],
                    author=current_author,
                    date=format_date_ymd(current_author_time + current_tz_secs),
                )
                commits[current_hash] = entry
            by_line[current_final] = entry
            continue
        key, sep, rest = line.partition(" ")
        if not sep:
            continue
        if is_commit_hash(key):
            current_hash = key
            nums = rest.split()
            final = _parse_int(nums[1], 0, _U32_MAX) if len(nums) > 1 else None
            current_final = 0 if final is None else final
            if current_hash not in commits:
                current_author = ""
                current_author_time = 0
                current_tz_secs = 0
        elif key == "author":
            current_author = rest
        elif key == "author-time":
            parsed = _parse_int(rest, _I64_MIN, _I64_MAX)
            current_author_time = 0 if parsed is None else parsed
        elif key == "author-tz":
            current_tz_secs = parse_tz_offset(rest)
    return Blame(by_line)


def is_commit_hash(s: str) -> bool:
    """True for a 40-char (SHA-1) or 64-char (SHA-256) hex object id."""
    return len(s) in (40, 64) and all(c in "0123456789abcdefABCDEF" for c in s)


def parse_tz_offset(s: str) -> int:
    """Convert ``+HHMM`` / ``-HHMM`` into seconds east of UTC; 0 if malformed."""
    s = s.strip()
    if len(s) != 5 or not s.isascii():
        return 0
    if s[0] == "+":
        sign = 1
    elif s[0] == "-":
        sign = -1
    else:
        return 0
    hours = _parse_int(s[1:3], _I32_MIN, _I32_MAX) or 0
    minutes = _parse_int(s[3:5], _I32_MIN, _I32_MAX) or 0
    return sign * (hours * 3600 + minutes * 60)


def format_date_ymd(epoch_seconds: int) -> str:
    """Format seconds since the epoch as ``YYYY-MM-DD``; 0 gives an empty string."""
    if epoch_seconds == 0:
        return ""
    # Civil-from-days conversion, valid for any proleptic Gregorian date.
    z = epoch_seconds // 86_400 + 719_468
    era = z // 146_097
    doe = z - era * 146_097
    yoe = (doe - doe // 1460 + doe // 36_524 - doe // 146_096) // 365
    year = yoe + era * 400
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    if month <= 2:
        year += 1
    return f"{year:04d}-{month:02d}-{day:02d}"