"""Loading and parsing the commit list between two refs."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .command import is_working_tree, run

_FORMAT = "--pretty=format:%H%x1f%h%x1f%an%x1f%ad%x1f%s%x1f%b%x1e"
_RECORD_SEP = "\x1e"
_FIELD_SEP = "\x1f"


@dataclass(frozen=True)
class Commit:
    hash: str
    short_hash: str
    author: str
    date: str
    subject: str
    body: str


def parse_commits(stdout: str) -> list[Commit]:
    """Parse ``git log`` output produced with the record/field separators."""
    commits = []
    for record in stdout.split(_RECORD_SEP):
        record = record.strip("\n\r")
        if not record:
            continue
        commit = _parse_one(record)
        if commit is not None:
            commits.append(commit)
    return commits


def _parse_one(entry: str) -> Commit | None:
    parts = entry.split(_FIELD_SEP)
    if len(parts) < 5:
        return None
    body = parts[5].strip() if len(parts) > 5 else ""
    return Commit(
        hash=parts[0],
        short_hash=parts[1],
        author=parts[2],
        date=parts[3],
        subject=parts[4],
        body=body,
    )


def load_commits(repo: str | os.PathLike[str], base: str, compare: str) -> list[Commit]:
    """Commits reachable from ``compare`` but not from ``base``."""
    if is_working_tree(compare):
        # The working tree has no commits of its own relative to base.
        return []
    stdout = run(repo, ["log", "--date=short", _FORMAT, f"{base}..{compare}", "--"])
    return parse_commits(stdout)