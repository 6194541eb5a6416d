"""A fuzzy-filtered list picker."""

from __future__ import annotations

import enum
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass

from .text_input import TextInput

_SCORE_MATCH = 16
_BONUS_BOUNDARY = 8
_BONUS_CAMEL = 6
_BONUS_CONSECUTIVE = 4


class _AtomKind(enum.Enum):
    FUZZY = "fuzzy"
    SUBSTRING = "substring"
    PREFIX = "prefix"
    POSTFIX = "postfix"
    EXACT = "exact"


@dataclass(frozen=True)
class _Atom:
    text: tuple[str, ...]
    kind: _AtomKind
    negative: bool
    case_sensitive: bool
    normalize: bool


def _fold(c: str, case_sensitive: bool, normalize: bool) -> str:
    if normalize:
        c = unicodedata.normalize("NFD", c)[0]
    if not case_sensitive:
        lowered = c.lower()
        if len(lowered) == 1:
            c = lowered
    return c


def _parse_pattern(query: str) -> list[_Atom]:
    atoms = []
    for raw in query.split():
        negative = raw.startswith("!")
        if negative:
            raw = raw[1:]
        kind = _AtomKind.SUBSTRING if negative else _AtomKind.FUZZY
        if raw.startswith("'"):
            kind, raw = _AtomKind.SUBSTRING, raw[1:]
        elif raw.startswith("^"):
            kind, raw = _AtomKind.PREFIX, raw[1:]
        if raw.endswith("$"):
            kind = _AtomKind.EXACT if kind is _AtomKind.PREFIX else _AtomKind.POSTFIX
            raw = raw[:-1]
        if not raw:
            continue
        case_sensitive = any(c.isupper() for c in raw)
        normalize = raw.isascii()
        text = tuple(_fold(c, case_sensitive, normalize) for c in raw)
        atoms.append(_Atom(text, kind, negative, case_sensitive, normalize))
    return atoms


def _bonuses(hay: str) -> list[int]:
    out = []
    for prev, c in zip([None, *hay[:-1]], hay):
        if prev is None or not prev.isalnum():
            out.append(_BONUS_BOUNDARY)
        elif prev.islower() and c.isupper():
            out.append(_BONUS_CAMEL)
        else:
            out.append(0)
    return out


def _fuzzy(needle: tuple[str, ...], hay: list[str], bonus: list[int]) -> int | None:
    if len(needle) > len(hay):
        return None
    prev_row: list[int | None] | None = None
    for pc in needle:
        row: list[int | None] = [None] * len(hay)
        best_gap: int | None = None  # max of prev_row[k] + k for k <= j - 2
        for j, hc in enumerate(hay):
            if prev_row is not None and j >= 2 and prev_row[j - 2] is not None:
                candidate = prev_row[j - 2] + (j - 2)
                best_gap = candidate if best_gap is None else max(best_gap, candidate)
            if hc != pc:
                continue
            base = _SCORE_MATCH + bonus[j]
            if prev_row is None:
                row[j] = base + bonus[j]
                continue
            options = []
            if j >= 1 and prev_row[j - 1] is not None:
                options.append(prev_row[j - 1] + _BONUS_CONSECUTIVE)
            if best_gap is not None:
                options.append(best_gap - j - 1)
            if options:
                row[j] = base + max(options)
        prev_row = row
    if prev_row is None:
        return 0
    return max((s for s in prev_row if s is not None), default=None)


def _contiguous(
    needle: tuple[str, ...], hay: list[str], bonus: list[int], kind: _AtomKind
) -> int | None:
    m, n = len(needle), len(hay)
    if m > n:
        return None
    if kind is _AtomKind.PREFIX:
        positions: Iterable[int] = [0]
    elif kind is _AtomKind.POSTFIX:
        positions = [n - m]
    elif kind is _AtomKind.EXACT:
        positions = [0] if m == n else []
    else:
        positions = range(n - m + 1)
    best = None
    for j in positions:
        if tuple(hay[j : j + m]) != needle:
            continue
        score = (
            _SCORE_MATCH * m
            + bonus[j] * 2
            + sum(bonus[j + 1 : j + m])
            + _BONUS_CONSECUTIVE * (m - 1)
        )
        best = score if best is None else max(best, score)
    return best


def _atom_score(atom: _Atom, haystack: str) -> int | None:
    hay = [_fold(c, atom.case_sensitive, atom.normalize) for c in haystack]
    bonus = _bonuses(haystack)
    if atom.kind is _AtomKind.FUZZY:
        score = _fuzzy(atom.text, hay, bonus)
    else:
        score = _contiguous(atom.text, hay, bonus, atom.kind)
    if atom.negative:
        return 0 if score is None else None
    return score


def _score_atoms(atoms: list[_Atom], haystack: str) -> int | None:
    total = 0
    for atom in atoms:
        score = _atom_score(atom, haystack)
        if score is None:
            return None
        total += score
    return total


def fuzzy_score(pattern: str, haystack: str) -> int | None:
    """Score ``haystack`` against a fuzzy pattern; None when it does not match.

    The pattern is split on whitespace into atoms that must all match.
    ``'x`` matches a substring, ``^x`` a prefix, ``x$`` a suffix and ``!x``
    rejects items containing ``x``. Matching ignores case unless the atom
    holds an upper-case letter.
    """
    return _score_atoms(_parse_pattern(pattern), haystack)


class Picker:
    """A list of items narrowed by a fuzzy query, with a selection cursor."""

    def __init__(self, items: Iterable[str] = ()) -> None:
        self.query = TextInput("")
        self.items: list[str] = list(items)
        self.filtered: list[int] = []
        self.selected = 0
        self.refilter()

    def __repr__(self) -> str:
        return (
            f"Picker(query={self.query.buffer!r}, items={self.items!r}, "
            f"selected={self.selected})"
        )

    @classmethod
    def with_selected(cls, items: Iterable[str], current: str | None) -> "Picker":
        """Build a picker whose cursor rests on ``current`` when it is listed."""
        picker = cls(items)
        if current is not None and current in picker.items:
            item_idx = picker.items.index(current)
            if item_idx in picker.filtered:
                picker.selected = picker.filtered.index(item_idx)
        return picker

    def refilter(self) -> None:
        query = self.query.buffer
        if not query:
            self.filtered = list(range(len(self.items)))
        else:
            atoms = _parse_pattern(query)
            scored = [
                (score, idx)
                for idx, item in enumerate(self.items)
                if (score := _score_atoms(atoms, item)) is not None
            ]
            scored.sort(key=lambda pair: pair[0], reverse=True)
            self.filtered = [idx for _, idx in scored]
        if self.selected >= len(self.filtered):
            self.selected = max(len(self.filtered) - 1, 0)

    def move_up(self) -> None:
        if self.selected > 0:
            self.selected -= 1

    def move_down(self) -> None:
        if self.selected + 1 < len(self.filtered):
            self.selected += 1

    def current(self) -> str | None:
        if self.selected < len(self.filtered):
            return self.items[self.filtered[self.selected]]
        return None