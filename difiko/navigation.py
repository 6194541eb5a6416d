"""Scrolling, selection movement, toast expiry and setup-field navigation."""

from __future__ import annotations

import enum
import time
from pathlib import Path
from typing import TYPE_CHECKING

from .app.types import FocusedPane, SetupField, SidebarMode

if TYPE_CHECKING:
    from .app.state import App

#: How long a toast stays on screen before it expires, in seconds.
TOAST_LIFETIME_SECS = 4
#: Mouse-wheel scroll step for the diff body.
MOUSE_SCROLL_DIFF = 3
#: Mouse-wheel scroll step for the sidebar.
MOUSE_SCROLL_SIDEBAR = 3
#: Mouse-wheel scroll step for the commits panel.
MOUSE_SCROLL_COMMITS = 1

_MAX_SCROLL = 0xFFFF

_FIELD_ORDER = [
    SetupField.REPO,
    SetupField.BASE,
    SetupField.COMPARE,
    SetupField.REMOTE,
    SetupField.SUBMIT,
]


class ScrollDirection(enum.Enum):
    UP = "up"
    DOWN = "down"


def handle_scroll(app: "App", direction: ScrollDirection) -> None:
    """Apply a mouse-wheel scroll to whichever pane has focus."""
    sign = 1 if direction is ScrollDirection.DOWN else -1
    if app.focused is FocusedPane.DIFF:
        scroll_diff(app, sign * MOUSE_SCROLL_DIFF)
    elif app.focused is FocusedPane.SIDEBAR:
        move_sidebar(app, sign * MOUSE_SCROLL_SIDEBAR)
    else:
        move_commits(app, sign * MOUSE_SCROLL_COMMITS)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def move_sidebar(app: "App", by: int) -> None:
    """Move the sidebar selection by ``by`` rows, clamped to the list."""
    if app.sidebar_mode is SidebarMode.FLAT:
        length = len(app.files)
    else:
        length = len(app.tree_rows)
    if length == 0:
        return
    app.sidebar_selected = _clamp(app.sidebar_selected + by, 0, length - 1)


def move_commits(app: "App", by: int) -> None:
    """Move the commits selection by ``by`` rows, clamped to the list."""
    if not app.commits:
        return
    app.commits_selected = _clamp(app.commits_selected + by, 0, len(app.commits) - 1)


def _scroll(offsets: dict[str, int], key: str, by: int) -> None:
    offsets[key] = _clamp(offsets.get(key, 0) + by, 0, _MAX_SCROLL)


def scroll_diff(app: "App", by: int) -> None:
    """Scroll the visible diff vertically; never above the top."""
    key = app.diff_visible_path()
    if key is not None:
        _scroll(app.diff_scroll, key, by)


def scroll_diff_h(app: "App", by: int) -> None:
    """Scroll the visible diff horizontally; never left of column 0."""
    key = app.diff_visible_path()
    if key is not None:
        _scroll(app.diff_scroll_h, key, by)


def expire_toasts(app: "App", now: float | None = None) -> None:
    """Drop toasts older than the toast lifetime, oldest first."""
    now = time.monotonic() if now is None else now
    while app.toasts and now - app.toasts[0].created > TOAST_LIFETIME_SECS:
        app.toasts.popleft()


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def head_branch(app: "App") -> str | None:
    """Branch checked out at HEAD, also for linked worktrees.

    None for a detached HEAD or anything that cannot be read or parsed.
    """
    repo = app.repo_path
    if repo is None:
        return None
    repo = Path(repo)
    dot_git = repo / ".git"
    if dot_git.is_file():
        content = _read_text(dot_git)
        if content is None:
            return None
        gitdir = next(
            (line[len("gitdir: "):] for line in content.splitlines() if line.startswith("gitdir: ")),
            None,
        )
        if gitdir is None:
            return None
        gitdir = gitdir.strip()
        path = Path(gitdir)
        head_dir = path if path.is_absolute() else repo / gitdir
    else:
        head_dir = dot_git
    text = _read_text(head_dir / "HEAD")
    if text is None:
        return None
    prefix = "ref: refs/heads/"
    text = text.strip()
    if not text.startswith(prefix):
        return None
    return text[len(prefix):]


def next_field(field: SetupField) -> SetupField:
    """The setup field after ``field``, wrapping around."""
    return _FIELD_ORDER[(_FIELD_ORDER.index(field) + 1) % len(_FIELD_ORDER)]


def prev_field(field: SetupField) -> SetupField:
    """The setup field before ``field``, wrapping around."""
    return _FIELD_ORDER[(_FIELD_ORDER.index(field) - 1) % len(_FIELD_ORDER)]