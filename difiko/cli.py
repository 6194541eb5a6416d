"""Command-line options."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Cli:
    repo: Path | None = None
    base: str | None = None
    compare: str | None = None
    file: str | None = None
    fullscreen: bool = False
    no_remote_branches: bool = False
    new_window: bool = False
    no_word_diff: bool = False
    no_syntax: bool = False


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="difiko",
        description="Keyboard-driven TUI for reviewing local git PRs",
    )
    parser.add_argument(
        "--repo",
        type=Path,
        help="Path to a local git repository (defaults to current directory if it is a git repo).",
    )
    parser.add_argument("--base", help="Base branch (or any git ref).")
    parser.add_argument("--compare", help="Compare branch (or any git ref).")
    parser.add_argument(
        "--file", help="File path to focus when launching directly into the review screen."
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Open the focused file in fullscreen review mode.",
    )
    parser.add_argument(
        "--no-remote-branches",
        action="store_true",
        help="Hide remote-tracking branches from the branch picker.",
    )
    parser.add_argument(
        "-w",
        "--new-window",
        action="store_true",
        help="Re-launch difiko in a new terminal window and exit the current process.",
    )
    parser.add_argument(
        "--no-word-diff",
        action="store_true",
        help="Disable per-line word-level diff highlighting (overrides config).",
    )
    parser.add_argument(
        "--no-syntax",
        action="store_true",
        help="Disable syntax highlighting (overrides config).",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Cli:
    """Parse command-line arguments (``sys.argv[1:]`` when ``argv`` is None)."""
    ns = _parser().parse_args(argv)
    return Cli(**vars(ns))