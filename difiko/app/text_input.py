"""A single-line editable text buffer with a character cursor."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TextInput:
    """Editable text; ``cursor`` counts characters, defaulting to the end."""

    buffer: str = ""
    cursor: int = -1

    def __post_init__(self) -> None:
        if self.cursor < 0:
            self.cursor = len(self.buffer)

    def _pos(self) -> int:
        return min(self.cursor, len(self.buffer))

    def insert(self, c: str) -> None:
        pos = self._pos()
        self.buffer = self.buffer[:pos] + c + self.buffer[pos:]
        self.cursor += 1

    def backspace(self) -> None:
        if self.cursor == 0:
            return
        pos = self._pos()
        if pos > 0:
            self.buffer = self.buffer[: pos - 1] + self.buffer[pos:]
        self.cursor -= 1

    def delete(self) -> None:
        pos = self._pos()
        if pos >= len(self.buffer):
            return
        self.buffer = self.buffer[:pos] + self.buffer[pos + 1 :]

    def move_left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_right(self) -> None:
        if self.cursor < len(self.buffer):
            self.cursor += 1

    def move_home(self) -> None:
        self.cursor = 0

    def move_end(self) -> None:
        self.cursor = len(self.buffer)

    def clear(self) -> None:
        self.buffer = ""
        self.cursor = 0