"""Running git subprocesses and a few repository-level helpers."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Sequence
from pathlib import Path

#: Pseudo-ref meaning "the on-disk working tree". ``[`` is not allowed in
#: real git refnames, so it can never collide with a branch or tag.
WORKING_TREE_REF = "[working tree]"

_GIT_ENV = {"GIT_OPTIONAL_LOCKS": "0", "GIT_TERMINAL_PROMPT": "0"}


class GitError(RuntimeError):
    """A git command could not be started or exited unsuccessfully."""


def _execute(repo: str | os.PathLike[str], args: Sequence[str]) -> bytes:
    command = ["git", "-C", str(repo), *args]
    env = {**os.environ, **_GIT_ENV}
    try:
        completed = subprocess.run(command, capture_output=True, env=env, check=False)
    except OSError as exc:
        raise GitError(f"failed to spawn git: {exc}") from exc
    if completed.returncode != 0:
        stderr = (completed.stderr or b"").decode("utf-8", errors="replace")
        raise GitError(f"git {' '.join(args)} failed: {stderr.strip()}")
    return completed.stdout or b""


def run(repo: str | os.PathLike[str], args: Sequence[str]) -> str:
    """Run ``git -C repo args`` and return stdout decoded as UTF-8 (lossy)."""
    return _execute(repo, args).decode("utf-8", errors="replace")


def run_bytes(repo: str | os.PathLike[str], args: Sequence[str]) -> bytes:
    """Run ``git -C repo args`` and return the raw stdout bytes."""
    return _execute(repo, args)


def is_working_tree(ref: str) -> bool:
    """True when ``ref`` is the working-tree pseudo-ref."""
    return ref == WORKING_TREE_REF


def ensure_git_repo(repo: str | os.PathLike[str]) -> None:
    """Raise GitError unless ``repo`` lies inside a git work tree."""
    out = run(repo, ["rev-parse", "--is-inside-work-tree"])
    if out.strip() != "true":
        raise GitError(f"Path is not inside a git work tree: {Path(repo)}")