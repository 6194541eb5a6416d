"""Listing the branches of a repository."""

from __future__ import annotations

import os

from .command import run


def parse_branch_list(stdout: str) -> list[str]:
    """Sorted, de-duplicated branch names from ``git branch --format`` output."""
    names = {
        line.strip()
        for line in stdout.split("\n")
        if line.strip() and "HEAD ->" not in line
    }
    return sorted(names)


def list_branches(repo: str | os.PathLike[str], include_remote: bool) -> list[str]:
    """List local (and optionally remote-tracking) branches of ``repo``."""
    args = ["branch", "--format=%(refname:short)"]
    if include_remote:
        args.insert(1, "-a")
    return parse_branch_list(run(repo, args))