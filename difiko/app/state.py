"""Application state shared by every screen of the review UI."""

from __future__ import annotations

import os
from collections import deque
from pathlib import Path
from typing import Any

from ..cli import Cli
from ..config import Config
from ..git.blame import Blame
from ..git.command import is_working_tree
from ..git.commits import Commit
from ..git.diff import FileChange, FileStatus
from ..git.parse import LineKind
from .completion import split_path_for_completion
from .pending import CommitDiffState, PendingOps, ReqIds
from .search import DiffMatch, DiffSearch, find_all_substr, rendered_row_for_match, total_rendered_rows
from .text_input import TextInput
from .types import (
    DiffMode,
    FocusedPane,
    Modal,
    Screen,
    SetupField,
    SidebarMode,
    Toast,
    ToastKind,
)

#: Older toasts are evicted first so a burst of errors cannot fill the screen.
MAX_TOASTS = 5

_SEARCHABLE = frozenset({LineKind.ADD, LineKind.DEL, LineKind.CONTEXT, LineKind.HUNK})


def _current_dir() -> Path | None:
    try:
        return Path.cwd()
    except OSError:
        return None


def _row_is_dir(row: Any) -> bool:
    return bool(getattr(row, "is_dir", False))


class App:
    """Flat application state.

    Sidebar tree rows are objects exposing ``path`` and ``is_dir``; only
    file rows (``is_dir`` false) map to entries of ``files``.
    """

    def __init__(
        self,
        cli: Cli | None = None,
        *,
        config_path: str | os.PathLike[str] | None = None,
    ) -> None:
        cli = cli if cli is not None else Cli()
        self._config_path = config_path

        self.screen = Screen.SETUP
        self.focused = FocusedPane.SIDEBAR
        self.modal: Modal | None = None

        self.repo_path: Path | None = (
            Path(cli.repo) if cli.repo is not None else _current_dir()
        )
        self.repo_input = TextInput(str(self.repo_path) if self.repo_path is not None else "")
        self.setup_field = SetupField.REPO
        self.repo_completions: list[str] = []
        self.repo_completion_index = 0
        self.repo_dropdown_hidden = False

        self.base_branch: str | None = cli.base
        self.compare_branch: str | None = cli.compare
        self.include_remote_branches = not cli.no_remote_branches
        self.branches: list[str] = []

        self.files: list[FileChange] = []
        self.commits: list[Commit] = []
        self.selected_commit: str | None = None
        self.commit_diff_cache: dict[str, list[FileChange]] = {}
        self.all_files_backup: list[FileChange] | None = None

        self.reviewed: set[str] = set()
        self.sidebar_mode = SidebarMode.FLAT
        self.sidebar_selected = 0
        self.sidebar_collapsed: set[str] = set()
        self.tree_rows: list[Any] = []

        self.diff_scroll: dict[str, int] = {}
        self.diff_scroll_h: dict[str, int] = {}
        self.diff_mode = DiffMode.UNIFIED
        self.commits_collapsed = False
        self.commits_selected = 0
        self.expanded_commit: str | None = None
        self.commits_panel_visible = True

        self.pending_clear_reviewed: float | None = None

        self.blame_enabled = False
        self.blame_cache: dict[tuple[str, str], Blame] = {}
        self.blame_pending: set[tuple[str, str]] = set()

        self.fullscreen_idx = 0
        # Last rendered diff body height, updated by the renderer.
        self.diff_view_height = 0
        self.diff_search: DiffSearch | None = None

        self.pending = PendingOps()
        self.req_ids = ReqIds()
        self.config_save_warned = False
        self.spinner_tick = 0
        self.toasts: deque[Toast] = deque(maxlen=MAX_TOASTS)

        self.initial_file: str | None = cli.file
        self.initial_fullscreen = cli.fullscreen

        config = Config.load(config_path)
        if cli.no_word_diff:
            config.word_diff = False
        if cli.no_syntax:
            config.syntax_highlight = False
        self.config = config
        self.syntax_cache: dict[str, Any] = {}

        self.should_quit = False
        self.update_repo_completions()

    # Repo path completion -------------------------------------------------

    def update_repo_completions(self) -> None:
        """Recompute directory completions for the repo-path input."""
        split = split_path_for_completion(self.repo_input.buffer)
        if split is None:
            self.repo_completions = []
            self.repo_completion_index = 0
            return
        parent, frag = split
        frag_lower = frag.lower()
        matches: list[str] = []
        try:
            with os.scandir(parent) as entries:
                for entry in entries:
                    try:
                        if not entry.is_dir(follow_symlinks=False):
                            continue
                    except OSError:
                        continue
                    name = entry.name
                    if name.startswith(".") and not frag.startswith("."):
                        continue
                    if frag and frag_lower not in name.lower():
                        continue
                    matches.append(name)
        except OSError:
            pass
        matches.sort(key=lambda n: (not n.lower().startswith(frag_lower), n.lower()))
        self.repo_completions = matches
        if self.repo_completion_index >= len(self.repo_completions):
            self.repo_completion_index = 0

    def accept_repo_completion(self) -> None:
        """Replace the last path fragment with the highlighted completion."""
        if not self.repo_completions:
            return
        candidate = self.repo_completions[self.repo_completion_index]
        buf = self.repo_input.buffer
        slash = buf.rfind("/")
        if slash >= 0:
            new = f"{buf[: slash + 1]}{candidate}/"
        elif buf == "~":
            new = f"~/{candidate}/"
        else:
            new = f"{candidate}/"
        self.repo_input.buffer = new
        self.repo_input.move_end()
        self.repo_completion_index = 0
        self.update_repo_completions()
        self.repo_dropdown_hidden = True

    def cycle_repo_completion(self, delta: int) -> None:
        if not self.repo_completions:
            return
        self.repo_completion_index = (self.repo_completion_index + delta) % len(
            self.repo_completions
        )

    # Toasts ---------------------------------------------------------------

    def toast(self, message: str, kind: ToastKind) -> None:
        """Queue a status message, evicting the oldest beyond the limit."""
        self.toasts.append(Toast(message=str(message), kind=kind))

    # File selection -------------------------------------------------------

    def current_file_index(self) -> int | None:
        if self.sidebar_mode is SidebarMode.FLAT:
            return self.sidebar_selected if self.sidebar_selected < len(self.files) else None
        if self.sidebar_selected >= len(self.tree_rows):
            return None
        row = self.tree_rows[self.sidebar_selected]
        if _row_is_dir(row):
            return None
        return next((i for i, f in enumerate(self.files) if f.path == row.path), None)

    def current_file(self) -> FileChange | None:
        idx = self.current_file_index()
        return self.files[idx] if idx is not None and idx < len(self.files) else None

    def select_file_by_path(self, target: str) -> None:
        if self.sidebar_mode is SidebarMode.FLAT:
            rows = [f.path for f in self.files]
        else:
            rows = [None if _row_is_dir(r) else r.path for r in self.tree_rows]
        if target in rows:
            self.sidebar_selected = rows.index(target)

    # Focus ----------------------------------------------------------------

    def focus_next_pane(self) -> None:
        if self.focused is FocusedPane.SIDEBAR:
            self.focused = FocusedPane.DIFF
        elif self.focused is FocusedPane.DIFF:
            self.focused = (
                FocusedPane.COMMITS if self.commits_panel_visible else FocusedPane.SIDEBAR
            )
        else:
            self.focused = FocusedPane.SIDEBAR

    def focus_prev_pane(self) -> None:
        if self.focused is FocusedPane.SIDEBAR:
            self.focused = (
                FocusedPane.COMMITS if self.commits_panel_visible else FocusedPane.DIFF
            )
        elif self.focused is FocusedPane.DIFF:
            self.focused = FocusedPane.SIDEBAR
        else:
            self.focused = FocusedPane.DIFF

    # Preferences ----------------------------------------------------------

    def toggle_word_diff(self) -> None:
        self.config.word_diff = not self.config.word_diff
        self._save_config()

    def toggle_syntax_highlight(self) -> None:
        self.config.syntax_highlight = not self.config.syntax_highlight
        self.syntax_cache.clear()
        self._save_config()

    def _save_config(self) -> None:
        # Warn once per session when preferences cannot be persisted.
        try:
            self.config.save(self._config_path)
        except OSError:
            if not self.config_save_warned:
                self.config_save_warned = True
                self.toast(
                    "Could not save config; preferences won't persist this session",
                    ToastKind.ERROR,
                )

    # Totals and visible file ----------------------------------------------

    def total_additions(self) -> int:
        return sum(f.additions for f in self.files)

    def total_deletions(self) -> int:
        return sum(f.deletions for f in self.files)

    def diff_visible_file(self) -> FileChange | None:
        """File shown in the diff panel (fullscreen index or sidebar selection)."""
        if self.screen is Screen.FULLSCREEN:
            idx = self.fullscreen_idx
            return self.files[idx] if idx < len(self.files) else None
        return self.current_file()

    def diff_visible_path(self) -> str | None:
        file = self.diff_visible_file()
        return file.path if file is not None else None

    # Load bookkeeping -----------------------------------------------------

    def start_branches_load(self) -> int:
        """Bump the branches request id, mark it pending and return the id."""
        self.req_ids.branches += 1
        self.pending.branches = True
        return self.req_ids.branches

    def start_diff_load(self) -> int:
        self.req_ids.diff += 1
        self.pending.diff = True
        return self.req_ids.diff

    def start_commits_load(self) -> int:
        self.req_ids.commits += 1
        self.pending.commits = True
        return self.req_ids.commits

    def start_commit_diff_load(self, hash: str) -> int:
        self.req_ids.commit_diff += 1
        self.pending.commit_diff = CommitDiffState(hash)
        return self.req_ids.commit_diff

    def cancel_inflight_loads(self) -> None:
        """Invalidate in-flight diff, commits and commit-diff loads."""
        if self.pending.diff:
            self.req_ids.diff += 1
            self.pending.diff = False
        if self.pending.commits:
            self.req_ids.commits += 1
            self.pending.commits = False
        if self.pending.commit_diff.is_active():
            self.req_ids.commit_diff += 1
            self.pending.commit_diff = CommitDiffState()

    def soft_back_to_setup(self) -> None:
        """Return to Setup keeping loaded state, focused on the compare field."""
        self.cancel_inflight_loads()
        self.screen = Screen.SETUP
        self.setup_field = SetupField.COMPARE
        self.focused = FocusedPane.SIDEBAR
        self.modal = None

    def hard_reset(self) -> None:
        """Drop branches, files, commits and review state and restart Setup."""
        self.base_branch = None
        self.compare_branch = None
        self.branches.clear()
        self.files.clear()
        self.commits.clear()
        self.commit_diff_cache.clear()
        self.all_files_backup = None
        self.selected_commit = None
        self.reviewed.clear()
        self.diff_scroll.clear()
        self.tree_rows.clear()
        self.sidebar_selected = 0
        self.fullscreen_idx = 0
        self.pending = PendingOps()
        # Drop any results still in flight from the previous session.
        self.req_ids.branches += 1
        self.req_ids.diff += 1
        self.req_ids.commits += 1
        self.req_ids.commit_diff += 1
        self.screen = Screen.SETUP
        self.setup_field = SetupField.REPO
        self.focused = FocusedPane.SIDEBAR
        self.modal = None
        self.update_repo_completions()

    # Diff search ----------------------------------------------------------

    def recompute_diff_search(self) -> None:
        """Recompute search matches against the visible file's diff lines."""
        search = self.diff_search
        if search is None:
            return
        query = search.query.buffer
        matches: list[DiffMatch] = []
        if query:
            if self.screen is Screen.FULLSCREEN:
                idx: int | None = self.fullscreen_idx
            else:
                idx = self.current_file_index()
            if idx is not None and idx < len(self.files):
                for i, dl in enumerate(self.files[idx].diff_lines):
                    if dl.kind not in _SEARCHABLE:
                        continue
                    for start, end in find_all_substr(dl.text, query, search.case_sensitive):
                        matches.append(DiffMatch(line=i, start=start, end=end))
        prev_count = len(search.matches)
        search.matches = matches
        if not matches or prev_count == 0 or search.current >= len(matches):
            search.current = 0

    def scroll_to_current_match(self) -> None:
        """Scroll the visible diff so the current match sits mid-panel."""
        search = self.diff_search
        if search is None or search.current >= len(search.matches):
            return
        match = search.matches[search.current]
        file = self.diff_visible_file()
        if file is None:
            return
        rendered = rendered_row_for_match(file, self.diff_mode, match.line)
        height = max(self.diff_view_height, 4)
        total = total_rendered_rows(file, self.diff_mode)
        max_scroll = max(total - height, 0)
        self.diff_scroll[file.path] = min(max(rendered - height // 2, 0), max_scroll)

    # Blame ----------------------------------------------------------------

    def blame_target_for(self, file: FileChange) -> tuple[str, str] | None:
        """(ref, path) to blame for ``file``; None for deletions or no compare ref."""
        if file.status is FileStatus.DELETED:
            return None
        if self.compare_branch is None:
            return None
        ref = "HEAD" if is_working_tree(self.compare_branch) else self.compare_branch
        return ref, file.path