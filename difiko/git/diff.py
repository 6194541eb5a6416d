"""Loading per-file diffs between refs, for a commit, or for the working tree."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field

from .command import is_working_tree, run
from .parse import DiffLine, count_changes, split_diff_into_sections


class FileStatus(enum.Enum):
    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    TYPE_CHANGED = "T"
    UNMERGED = "U"
    UNKNOWN = "X"

    @classmethod
    def from_letter(cls, letter: str) -> "FileStatus":
        """Status for a ``--name-status`` letter; unrecognised letters are UNKNOWN."""
        try:
            return cls(letter)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class FileChange:
    path: str
    old_path: str | None
    status: FileStatus
    diff_lines: list[DiffLine] = field(default_factory=list)
    additions: int = 0
    deletions: int = 0
    binary: bool = False


@dataclass(frozen=True)
class NameStatusEntry:
    status: FileStatus
    new_path: str
    old_path: str | None = None


def parse_name_status_z(output: str) -> list[NameStatusEntry]:
    """Parse ``git diff --name-status -z`` output.

    Plain records are ``STATUS\\0PATH\\0``; renames and copies are
    ``R/C<score>\\0OLD\\0NEW\\0``.
    """
    entries: list[NameStatusEntry] = []
    tokens = iter(t for t in output.split("\0") if t)
    for raw_status in tokens:
        first = raw_status[0]
        if not ("A" <= first <= "Z"):
            continue
        status = FileStatus.from_letter(first)
        if status in (FileStatus.RENAMED, FileStatus.COPIED):
            old = next(tokens, None)
            new = next(tokens, None)
            if old is None or new is None:
                break
            entries.append(NameStatusEntry(status, new, old))
        else:
            path = next(tokens, None)
            if path is None:
                break
            entries.append(NameStatusEntry(status, path))
    return entries


def load_diff(repo: str | os.PathLike[str], base: str, compare: str) -> list[FileChange]:
    """Files changed on ``compare`` since it diverged from ``base``.

    With the working-tree pseudo-ref as ``compare`` the on-disk state
    (staged and unstaged) is compared against ``base``.
    """
    if is_working_tree(compare):
        return _load_for_spec(repo, base)
    return _load_for_spec(repo, f"{base}...{compare}")


def load_commit_diff(repo: str | os.PathLike[str], commit: str) -> list[FileChange]:
    """Files changed by a single commit."""
    return _load_for_spec(repo, f"{commit}^!")


def _load_for_spec(repo: str | os.PathLike[str], spec: str) -> list[FileChange]:
    entries = parse_name_status_z(run(repo, ["diff", "--name-status", "-z", spec, "--"]))
    if not entries:
        return []
    # Raw UTF-8 paths in the body; sections are matched to entries by position.
    full_diff = run(repo, ["-c", "core.quotePath=false", "diff", spec, "--"])
    sections = split_diff_into_sections(full_diff)
    files = []
    for index, entry in enumerate(entries):
        lines = sections[index] if index < len(sections) else []
        additions, deletions, binary = count_changes(lines)
        files.append(
            FileChange(
                path=entry.new_path,
                old_path=entry.old_path,
                status=entry.status,
                diff_lines=lines,
                additions=additions,
                deletions=deletions,
                binary=binary,
            )
        )
    files.sort(key=lambda f: f.path)
    return files