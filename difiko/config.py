"""User preferences persisted as JSON in the user config directory."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from platformdirs import user_config_path


def config_path() -> Path:
    """Location of ``config.json`` in the user's config directory."""
    return user_config_path("difiko", appauthor=False) / "config.json"


@dataclass
class Config:
    word_diff: bool = True
    syntax_highlight: bool = True

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> "Config":
        """Read the config; any missing, unreadable or invalid file gives defaults."""
        target = Path(path) if path is not None else config_path()
        try:
            data = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return cls()
        if not isinstance(data, dict):
            return cls()
        values = {}
        for name in ("word_diff", "syntax_highlight"):
            if name in data:
                if not isinstance(data[name], bool):
                    return cls()
                values[name] = data[name]
        return cls(**values)

    def save(self, path: str | os.PathLike[str] | None = None) -> None:
        """Write the config atomically via a temporary file and rename."""
        target = Path(path) if path is not None else config_path()
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
        os.replace(tmp, target)