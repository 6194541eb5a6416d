"""Splitting the repo-path input into a directory to scan and a fragment."""

from __future__ import annotations

import os
from pathlib import Path


def _cwd() -> Path | None:
    try:
        return Path.cwd()
    except OSError:
        return None


def _home() -> Path | None:
    home = os.environ.get("HOME")
    return Path(home) if home is not None else None


def split_path_for_completion(buf: str) -> tuple[Path, str] | None:
    """Return (parent directory to list, fragment to filter on).

    Handles ``~``, ``~/``, absolute and relative paths. None when the
    current or home directory cannot be determined.
    """
    if not buf:
        cwd = _cwd()
        return None if cwd is None else (cwd, "")
    if buf == "~":
        home = _home()
        return None if home is None else (home, "")
    slash = buf.rfind("/")
    prefix, frag = (buf[: slash + 1], buf[slash + 1 :]) if slash >= 0 else ("", buf)

    parent: Path | None
    if not prefix:
        parent = _cwd()
    elif prefix == "/":
        parent = Path("/")
    elif prefix == "~/":
        parent = _home()
    elif prefix.startswith("~/"):
        home = _home()
        parent = None if home is None else home / prefix[2:].rstrip("/")
    else:
        parent = Path(prefix.rstrip("/"))
    if parent is None:
        return None
    return parent, frag