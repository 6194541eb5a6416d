"""Pure mapping from key events to application actions, per screen and modal."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from ..app.types import BranchSlot, FocusedPane, Screen, SetupField

if TYPE_CHECKING:
    from ..app.state import App

#: Half-page diff scroll for Ctrl+D / Ctrl+U.
DIFF_SCROLL_HALF = 10
#: Full-page diff scroll for Ctrl+F/B/J/K and PgUp/PgDn.
DIFF_SCROLL_PAGE = 20
#: Horizontal scroll step for h/l and the arrow keys in the diff pane.
DIFF_SCROLL_H_STEP = 8


class KeyCode(enum.Enum):
    """Non-character keys. Character keys are given as one-character strings."""

    ESC = "esc"
    ENTER = "enter"
    TAB = "tab"
    BACKTAB = "backtab"
    BACKSPACE = "backspace"
    DELETE = "delete"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"


class Modifiers(enum.Flag):
    NONE = 0
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    ALT = enum.auto()


@dataclass(frozen=True)
class KeyEvent:
    """A key press: a KeyCode or a single character, plus modifiers."""

    code: Union[KeyCode, str]
    modifiers: Modifiers = Modifiers.NONE

    def __post_init__(self) -> None:
        if isinstance(self.code, str) and len(self.code) != 1:
            raise ValueError(f"character key must be a single character: {self.code!r}")

    @property
    def char(self) -> str | None:
        """The character typed, or None for a non-character key."""
        return self.code if isinstance(self.code, str) else None


class Action(enum.Enum):
    QUIT = "quit"
    TOGGLE_HELP = "toggle_help"
    OPEN_COMMAND_PALETTE = "open_command_palette"

    FOCUS_NEXT_PANE = "focus_next_pane"
    FOCUS_PREV_PANE = "focus_prev_pane"
    FOCUS_SIDEBAR = "focus_sidebar"
    FOCUS_DIFF = "focus_diff"
    FOCUS_COMMITS = "focus_commits"

    TOGGLE_SIDEBAR_MODE = "toggle_sidebar_mode"
    TOGGLE_COMMITS_PANEL = "toggle_commits_panel"
    TOGGLE_DIFF_MODE = "toggle_diff_mode"
    TOGGLE_REVIEWED = "toggle_reviewed"
    TOGGLE_BLAME = "toggle_blame"
    TOGGLE_WORD_DIFF = "toggle_word_diff"
    TOGGLE_SYNTAX_HIGHLIGHT = "toggle_syntax_highlight"
    CLEAR_REVIEWED = "clear_reviewed"
    EDIT_THEME = "edit_theme"

    ENTER_FULLSCREEN = "enter_fullscreen"
    EXIT_FULLSCREEN = "exit_fullscreen"
    FULLSCREEN_NEXT = "fullscreen_next"
    FULLSCREEN_PREV = "fullscreen_prev"

    OPEN_FILE_FILTER = "open_file_filter"
    OPEN_BRANCH_PICKER = "open_branch_picker"

    RELOAD_DIFF = "reload_diff"

    SCROLL_DIFF = "scroll_diff"
    SCROLL_DIFF_H = "scroll_diff_h"
    SCROLL_DIFF_TOP = "scroll_diff_top"
    SCROLL_DIFF_BOTTOM = "scroll_diff_bottom"

    SIDEBAR_MOVE = "sidebar_move"
    SIDEBAR_TOP = "sidebar_top"
    SIDEBAR_BOTTOM = "sidebar_bottom"
    SIDEBAR_OPEN_FILE = "sidebar_open_file"
    SIDEBAR_TOGGLE_FOLDER = "sidebar_toggle_folder"

    NEXT_FILE = "next_file"
    PREV_FILE = "prev_file"

    COMMITS_MOVE = "commits_move"
    COMMITS_TOGGLE_SELECT = "commits_toggle_select"
    COMMITS_TOGGLE_EXPAND = "commits_toggle_expand"

    SETUP_NEXT_FIELD = "setup_next_field"
    SETUP_PREV_FIELD = "setup_prev_field"
    SETUP_TOGGLE_REMOTE = "setup_toggle_remote"
    SETUP_SUBMIT = "setup_submit"
    SETUP_RESET = "setup_reset"
    BACK_TO_SETUP_SOFT = "back_to_setup_soft"
    SETUP_TEXT_INPUT = "setup_text_input"
    SETUP_BACKSPACE = "setup_backspace"
    SETUP_CURSOR_LEFT = "setup_cursor_left"
    SETUP_CURSOR_RIGHT = "setup_cursor_right"
    REPO_COMPLETE_ACCEPT = "repo_complete_accept"
    REPO_COMPLETE_CYCLE_PREV = "repo_complete_cycle_prev"
    REPO_COMPLETE_CYCLE_NEXT = "repo_complete_cycle_next"

    MODAL_CLOSE = "modal_close"
    MODAL_ACCEPT = "modal_accept"
    MODAL_MOVE_UP = "modal_move_up"
    MODAL_MOVE_DOWN = "modal_move_down"
    MODAL_INPUT_CHAR = "modal_input_char"
    MODAL_INPUT_BACKSPACE = "modal_input_backspace"

    DIFF_SEARCH_OPEN = "diff_search_open"
    DIFF_SEARCH_CLOSE = "diff_search_close"
    DIFF_SEARCH_INPUT = "diff_search_input"
    DIFF_SEARCH_BACKSPACE = "diff_search_backspace"
    DIFF_SEARCH_NEXT = "diff_search_next"
    DIFF_SEARCH_PREV = "diff_search_prev"
    DIFF_SEARCH_TOGGLE_CASE = "diff_search_toggle_case"


@dataclass(frozen=True)
class KeyAction:
    """An action with its argument: a scroll delta, a typed character or a slot."""

    action: Action
    arg: Union[int, str, BranchSlot, None] = None


def _act(action: Action, arg: Union[int, str, BranchSlot, None] = None) -> KeyAction:
    return KeyAction(action, arg)


def _typing(key: KeyEvent) -> bool:
    """Bare or Shift-only keys, the ones that may type into a field."""
    return not key.modifiers or key.modifiers == Modifiers.SHIFT


def ctrl(key: KeyEvent, c: str) -> bool:
    """True when ``key`` is Ctrl plus the character ``c``."""
    return Modifiers.CONTROL in key.modifiers and key.code == c


def global_key(key: KeyEvent) -> KeyAction | None:
    """Keys shared by Review and Fullscreen: quit, help, command palette."""
    if key.code == "q" and not key.modifiers:
        return _act(Action.QUIT)
    if key.code in (KeyCode.F1, "?"):
        return _act(Action.TOGGLE_HELP)
    if key.code == ":":
        return _act(Action.OPEN_COMMAND_PALETTE)
    return None


def dispatch_key(app: "App", key: KeyEvent) -> KeyAction | None:
    """Map a key press to an action given the current screen, focus and modal."""
    if app.modal is not None:
        return modal_key(app, key)
    # Global Ctrl chords come before any handler that swallows characters.
    if ctrl(key, "t"):
        return _act(Action.EDIT_THEME)
    if ctrl(key, "r") and app.screen is not Screen.SETUP:
        return _act(Action.RELOAD_DIFF)
    if (
        app.diff_search is not None
        and app.screen is not Screen.SETUP
        and (app.screen is Screen.FULLSCREEN or app.focused is FocusedPane.DIFF)
    ):
        action = diff_search_key(key)
        if action is not None:
            return action
    if app.screen is Screen.SETUP:
        return setup_key(app, key)
    if app.screen is Screen.REVIEW:
        return review_key(app, key)
    return fullscreen_key(key)


def modal_key(app: "App", key: KeyEvent) -> KeyAction | None:
    """Keys while a modal is open: pickers take typed text, overlays close."""
    is_overlay = app.modal is not None and app.modal.is_overlay()
    code = key.code
    if code is KeyCode.ESC:
        return _act(Action.MODAL_CLOSE)
    if code in ("q", "?") and is_overlay:
        return _act(Action.MODAL_CLOSE)
    if code is KeyCode.ENTER and not is_overlay:
        return _act(Action.MODAL_ACCEPT)
    if code is KeyCode.UP:
        return _act(Action.MODAL_MOVE_UP)
    if code is KeyCode.DOWN:
        return _act(Action.MODAL_MOVE_DOWN)
    if code is KeyCode.BACKSPACE and not is_overlay:
        return _act(Action.MODAL_INPUT_BACKSPACE)
    if code == "c" and Modifiers.CONTROL in key.modifiers:
        return _act(Action.QUIT)
    # Ctrl/Alt combos must not type stray letters into the query.
    if key.char is not None and not is_overlay and _typing(key):
        return _act(Action.MODAL_INPUT_CHAR, key.char)
    return None


def _ctrl_scroll(key: KeyEvent) -> KeyAction | None:
    if Modifiers.CONTROL in key.modifiers:
        if key.code is KeyCode.DOWN:
            return _act(Action.SCROLL_DIFF, DIFF_SCROLL_PAGE)
        if key.code is KeyCode.UP:
            return _act(Action.SCROLL_DIFF, -DIFF_SCROLL_PAGE)
    return None


_FULLSCREEN_KEYS: dict[Union[KeyCode, str], KeyAction] = {
    "j": _act(Action.SCROLL_DIFF, 1),
    KeyCode.DOWN: _act(Action.SCROLL_DIFF, 1),
    "k": _act(Action.SCROLL_DIFF, -1),
    KeyCode.UP: _act(Action.SCROLL_DIFF, -1),
    "h": _act(Action.SCROLL_DIFF_H, -DIFF_SCROLL_H_STEP),
    KeyCode.LEFT: _act(Action.SCROLL_DIFF_H, -DIFF_SCROLL_H_STEP),
    "l": _act(Action.SCROLL_DIFF_H, DIFF_SCROLL_H_STEP),
    KeyCode.RIGHT: _act(Action.SCROLL_DIFF_H, DIFF_SCROLL_H_STEP),
    KeyCode.PAGE_DOWN: _act(Action.SCROLL_DIFF, DIFF_SCROLL_PAGE),
    KeyCode.PAGE_UP: _act(Action.SCROLL_DIFF, -DIFF_SCROLL_PAGE),
    "g": _act(Action.SCROLL_DIFF_TOP),
    "G": _act(Action.SCROLL_DIFF_BOTTOM),
    "J": _act(Action.FULLSCREEN_NEXT),
    " ": _act(Action.FULLSCREEN_NEXT),
    "K": _act(Action.FULLSCREEN_PREV),
    "m": _act(Action.TOGGLE_REVIEWED),
    "u": _act(Action.TOGGLE_DIFF_MODE),
    "b": _act(Action.TOGGLE_BLAME),
    "W": _act(Action.TOGGLE_WORD_DIFF),
    "S": _act(Action.TOGGLE_SYNTAX_HIGHLIGHT),
}


def fullscreen_key(key: KeyEvent) -> KeyAction | None:
    """Keys on the fullscreen review screen."""
    if ctrl(key, "c"):
        return _act(Action.QUIT)
    # q and Esc leave fullscreen rather than quitting.
    if key.code is KeyCode.ESC or (key.code == "q" and not key.modifiers):
        return _act(Action.EXIT_FULLSCREEN)
    common = global_key(key)
    if common is not None:
        return common
    if ctrl(key, "d"):
        return _act(Action.SCROLL_DIFF, DIFF_SCROLL_HALF)
    if ctrl(key, "u"):
        return _act(Action.SCROLL_DIFF, -DIFF_SCROLL_HALF)
    if ctrl(key, "f"):
        return _act(Action.DIFF_SEARCH_OPEN)
    if ctrl(key, "j"):
        return _act(Action.SCROLL_DIFF, DIFF_SCROLL_PAGE)
    if ctrl(key, "k"):
        return _act(Action.SCROLL_DIFF, -DIFF_SCROLL_PAGE)
    scrolled = _ctrl_scroll(key)
    if scrolled is not None:
        return scrolled
    return _FULLSCREEN_KEYS.get(key.code)


def _review_modeless(key: KeyEvent) -> KeyAction | None:
    code, bare = key.code, not key.modifiers
    if code is KeyCode.ESC:
        return _act(Action.BACK_TO_SETUP_SOFT)
    if code is KeyCode.TAB:
        return _act(Action.FOCUS_NEXT_PANE)
    if code is KeyCode.BACKTAB:
        return _act(Action.FOCUS_PREV_PANE)
    bare_only = {
        "1": _act(Action.FOCUS_SIDEBAR),
        "2": _act(Action.FOCUS_DIFF),
        "3": _act(Action.FOCUS_COMMITS),
        "m": _act(Action.TOGGLE_REVIEWED),
        "r": _act(Action.RELOAD_DIFF),
        "t": _act(Action.TOGGLE_SIDEBAR_MODE),
        "c": _act(Action.TOGGLE_COMMITS_PANEL),
        "u": _act(Action.TOGGLE_DIFF_MODE),
        "b": _act(Action.TOGGLE_BLAME),
        "/": _act(Action.OPEN_FILE_FILTER),
    }
    any_mods = {
        "R": _act(Action.CLEAR_REVIEWED),
        "B": _act(Action.OPEN_BRANCH_PICKER, BranchSlot.COMPARE),
        "W": _act(Action.TOGGLE_WORD_DIFF),
        "S": _act(Action.TOGGLE_SYNTAX_HIGHLIGHT),
        "F": _act(Action.ENTER_FULLSCREEN),
        "J": _act(Action.NEXT_FILE),
        "K": _act(Action.PREV_FILE),
    }
    if isinstance(code, str):
        if bare and code in bare_only:
            return bare_only[code]
        if code in any_mods:
            return any_mods[code]
    return None


_SIDEBAR_KEYS: dict[Union[KeyCode, str], KeyAction] = {
    "j": _act(Action.SIDEBAR_MOVE, 1),
    KeyCode.DOWN: _act(Action.SIDEBAR_MOVE, 1),
    "k": _act(Action.SIDEBAR_MOVE, -1),
    KeyCode.UP: _act(Action.SIDEBAR_MOVE, -1),
    "g": _act(Action.SIDEBAR_TOP),
    "G": _act(Action.SIDEBAR_BOTTOM),
    KeyCode.ENTER: _act(Action.SIDEBAR_OPEN_FILE),
    "l": _act(Action.SIDEBAR_OPEN_FILE),
    " ": _act(Action.SIDEBAR_TOGGLE_FOLDER),
}

_DIFF_KEYS: dict[Union[KeyCode, str], KeyAction] = {
    "j": _act(Action.SCROLL_DIFF, 1),
    KeyCode.DOWN: _act(Action.SCROLL_DIFF, 1),
    "k": _act(Action.SCROLL_DIFF, -1),
    KeyCode.UP: _act(Action.SCROLL_DIFF, -1),
    "h": _act(Action.SCROLL_DIFF_H, -DIFF_SCROLL_H_STEP),
    KeyCode.LEFT: _act(Action.SCROLL_DIFF_H, -DIFF_SCROLL_H_STEP),
    "l": _act(Action.SCROLL_DIFF_H, DIFF_SCROLL_H_STEP),
    KeyCode.RIGHT: _act(Action.SCROLL_DIFF_H, DIFF_SCROLL_H_STEP),
    KeyCode.PAGE_DOWN: _act(Action.SCROLL_DIFF, DIFF_SCROLL_PAGE),
    KeyCode.PAGE_UP: _act(Action.SCROLL_DIFF, -DIFF_SCROLL_PAGE),
    "g": _act(Action.SCROLL_DIFF_TOP),
    "G": _act(Action.SCROLL_DIFF_BOTTOM),
}

_COMMITS_KEYS: dict[Union[KeyCode, str], KeyAction] = {
    "j": _act(Action.COMMITS_MOVE, 1),
    KeyCode.DOWN: _act(Action.COMMITS_MOVE, 1),
    "k": _act(Action.COMMITS_MOVE, -1),
    KeyCode.UP: _act(Action.COMMITS_MOVE, -1),
    KeyCode.ENTER: _act(Action.COMMITS_TOGGLE_SELECT),
    " ": _act(Action.COMMITS_TOGGLE_EXPAND),
}

_PANE_KEYS = {
    FocusedPane.SIDEBAR: _SIDEBAR_KEYS,
    FocusedPane.DIFF: _DIFF_KEYS,
    FocusedPane.COMMITS: _COMMITS_KEYS,
}


def review_key(app: "App", key: KeyEvent) -> KeyAction | None:
    """Keys on the review screen; pane-specific keys depend on focus."""
    if ctrl(key, "c"):
        return _act(Action.QUIT)
    common = global_key(key)
    if common is not None:
        return common
    if ctrl(key, "d"):
        return _act(Action.SCROLL_DIFF, DIFF_SCROLL_HALF)
    if ctrl(key, "u"):
        return _act(Action.SCROLL_DIFF, -DIFF_SCROLL_HALF)
    if ctrl(key, "f"):
        # Opens search in the diff pane; elsewhere it still pages down.
        if app.focused is FocusedPane.DIFF:
            return _act(Action.DIFF_SEARCH_OPEN)
        return _act(Action.SCROLL_DIFF, DIFF_SCROLL_PAGE)
    if ctrl(key, "b"):
        return _act(Action.SCROLL_DIFF, -DIFF_SCROLL_PAGE)
    if ctrl(key, "j"):
        return _act(Action.SCROLL_DIFF, DIFF_SCROLL_PAGE)
    if ctrl(key, "k"):
        return _act(Action.SCROLL_DIFF, -DIFF_SCROLL_PAGE)
    scrolled = _ctrl_scroll(key)
    if scrolled is not None:
        return scrolled
    modeless = _review_modeless(key)
    if modeless is not None:
        return modeless
    return _PANE_KEYS[app.focused].get(key.code)


def diff_search_key(key: KeyEvent) -> KeyAction | None:
    """Keys captured by the open diff search bar."""
    if ctrl(key, "c"):
        return _act(Action.QUIT)
    if Modifiers.ALT in key.modifiers and key.code == "c":
        return _act(Action.DIFF_SEARCH_TOGGLE_CASE)
    if ctrl(key, "f") or ctrl(key, "g") or ctrl(key, "n"):
        return _act(Action.DIFF_SEARCH_NEXT)
    if ctrl(key, "p"):
        return _act(Action.DIFF_SEARCH_PREV)
    if key.code is KeyCode.ESC:
        return _act(Action.DIFF_SEARCH_CLOSE)
    if key.code in (KeyCode.ENTER, KeyCode.F3):
        if Modifiers.SHIFT in key.modifiers:
            return _act(Action.DIFF_SEARCH_PREV)
        return _act(Action.DIFF_SEARCH_NEXT)
    if key.code is KeyCode.BACKSPACE:
        return _act(Action.DIFF_SEARCH_BACKSPACE)
    if key.char is not None and _typing(key):
        return _act(Action.DIFF_SEARCH_INPUT, key.char)
    return None


def _is_ascii_graphic(c: str) -> bool:
    return "\x21" <= c <= "\x7e"


def setup_key(app: "App", key: KeyEvent) -> KeyAction | None:
    """Keys on the setup screen; behaviour depends on the focused field."""
    if ctrl(key, "c"):
        return _act(Action.QUIT)
    typing = _typing(key)
    field = app.setup_field
    code = key.code

    if code is KeyCode.F1:
        return _act(Action.TOGGLE_HELP)
    if code is KeyCode.ESC:
        return _act(Action.SETUP_RESET)
    if code is KeyCode.TAB:
        return _act(Action.SETUP_NEXT_FIELD)
    if code is KeyCode.BACKTAB:
        return _act(Action.SETUP_PREV_FIELD)
    if field is not SetupField.REPO:
        if code == "?":
            return _act(Action.TOGGLE_HELP)
        if code == "q" and not key.modifiers:
            return _act(Action.QUIT)

    if field is SetupField.REPO:
        if code is KeyCode.ENTER:
            if not app.repo_dropdown_hidden and app.repo_completions:
                return _act(Action.REPO_COMPLETE_ACCEPT)
            return _act(Action.SETUP_SUBMIT)
        if code is KeyCode.RIGHT and Modifiers.SHIFT in key.modifiers:
            return _act(Action.REPO_COMPLETE_ACCEPT)
        simple = {
            KeyCode.UP: Action.REPO_COMPLETE_CYCLE_PREV,
            KeyCode.DOWN: Action.REPO_COMPLETE_CYCLE_NEXT,
            KeyCode.LEFT: Action.SETUP_CURSOR_LEFT,
            KeyCode.RIGHT: Action.SETUP_CURSOR_RIGHT,
            KeyCode.BACKSPACE: Action.SETUP_BACKSPACE,
        }
        if isinstance(code, KeyCode) and code in simple:
            return _act(simple[code])
        if key.char is not None and typing:
            return _act(Action.SETUP_TEXT_INPUT, key.char)
        return None

    if not typing:
        return None

    if field in (SetupField.BASE, SetupField.COMPARE):
        slot = BranchSlot.BASE if field is SetupField.BASE else BranchSlot.COMPARE
        if code in (KeyCode.ENTER, KeyCode.DOWN, KeyCode.UP, " ", "j", "k"):
            return _act(Action.OPEN_BRANCH_PICKER, slot)
        if key.char is not None and _is_ascii_graphic(key.char):
            return _act(Action.OPEN_BRANCH_PICKER, slot)
        return None
    if field is SetupField.REMOTE:
        if code in (KeyCode.ENTER, " ", "r"):
            return _act(Action.SETUP_TOGGLE_REMOTE)
        return None
    if code in (KeyCode.ENTER, " "):
        return _act(Action.SETUP_SUBMIT)
    return None