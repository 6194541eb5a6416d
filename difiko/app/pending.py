"""Request-id counters and loading flags for in-flight git operations."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ReqIds:
    """Monotonic request ids per git operation.

    Bumped before each load; results carrying an older id are dropped so a
    stale response can never overwrite newer state.
    """

    branches: int = 0
    diff: int = 0
    commits: int = 0
    commit_diff: int = 0


@dataclass(frozen=True)
class CommitDiffState:
    """Loading state of a per-commit diff; ``hash`` is set while loading."""

    hash: str | None = None

    def is_loading(self, hash: str) -> bool:
        return self.hash is not None and self.hash == hash

    def is_active(self) -> bool:
        return self.hash is not None


@dataclass
class PendingOps:
    """Which git loads are currently in flight."""

    branches: bool = False
    diff: bool = False
    commits: bool = False
    commit_diff: CommitDiffState = field(default_factory=CommitDiffState)