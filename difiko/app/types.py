"""Screen, focus and mode enums, toasts and modal dialogs."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field

from .picker import Picker


class Screen(enum.Enum):
    SETUP = "setup"
    REVIEW = "review"
    FULLSCREEN = "fullscreen"


class FocusedPane(enum.Enum):
    SIDEBAR = "sidebar"
    DIFF = "diff"
    COMMITS = "commits"


class SidebarMode(enum.Enum):
    FLAT = "flat"
    TREE = "tree"


class DiffMode(enum.Enum):
    UNIFIED = "unified"
    SPLIT = "split"


class SetupField(enum.Enum):
    REPO = "repo"
    BASE = "base"
    COMPARE = "compare"
    REMOTE = "remote"
    SUBMIT = "submit"


class BranchSlot(enum.Enum):
    BASE = "base"
    COMPARE = "compare"


class ToastKind(enum.Enum):
    INFO = "info"
    ERROR = "error"


@dataclass
class Toast:
    """A transient status message; ``created`` is a ``time.monotonic()`` value."""

    message: str
    kind: ToastKind
    created: float = field(default_factory=time.monotonic)


class ModalKind(enum.Enum):
    BRANCH_PICKER = "branch_picker"
    FILE_FILTER = "file_filter"
    COMMAND_PALETTE = "command_palette"
    HELP_OVERLAY = "help_overlay"
    ERROR = "error"


_PICKER_KINDS = frozenset(
    {ModalKind.BRANCH_PICKER, ModalKind.FILE_FILTER, ModalKind.COMMAND_PALETTE}
)
_OVERLAY_KINDS = frozenset({ModalKind.HELP_OVERLAY, ModalKind.ERROR})


@dataclass
class Modal:
    """A dialog drawn over the current screen.

    Picker kinds carry a ``picker``; a branch picker also names the slot
    it fills in ``which``; an error carries its ``message``.
    """

    kind: ModalKind
    picker: Picker | None = None
    which: BranchSlot | None = None
    message: str = ""

    def __post_init__(self) -> None:
        if self.kind in _PICKER_KINDS and self.picker is None:
            raise ValueError(f"{self.kind.value} modal needs a picker")
        if self.kind is ModalKind.BRANCH_PICKER and self.which is None:
            raise ValueError("branch picker modal needs a branch slot")

    def picker_or_none(self) -> Picker | None:
        """The picker of a picker-style modal, None for overlays."""
        return self.picker if self.kind in _PICKER_KINDS else None

    def is_overlay(self) -> bool:
        """True for the help overlay and the error dialog."""
        return self.kind in _OVERLAY_KINDS