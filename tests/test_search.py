import pytest

from difiko.app.search import (
    DiffMatch,
    DiffSearch,
    find_all_substr,
    rendered_row_for_match,
    total_rendered_rows,
)
from difiko.app.types import DiffMode
from difiko.git.diff import FileChange, FileStatus
from difiko.git.parse import DiffLine, LineKind


def _hunk():
    return DiffLine(LineKind.HUNK, "@@", 1, 1, 1, 1)


@pytest.fixture
def unified_file():
    return FileChange(
        path="a",
        old_path=None,
        status=FileStatus.MODIFIED,
        diff_lines=[
            DiffLine(LineKind.GIT_HEADER, "diff --git ..."),
            DiffLine(LineKind.INDEX_HEADER, "index ..."),
            _hunk(),
            DiffLine(LineKind.CONTEXT, "x"),
        ],
    )


@pytest.fixture
def split_file():
    return FileChange(
        path="a",
        old_path=None,
        status=FileStatus.MODIFIED,
        diff_lines=[
            _hunk(),
            DiffLine(LineKind.DEL, "a"),
            DiffLine(LineKind.DEL, "b"),
            DiffLine(LineKind.ADD, "c"),
            DiffLine(LineKind.ADD, "d"),
            DiffLine(LineKind.CONTEXT, "e"),
        ],
        additions=2,
        deletions=2,
    )


def test_find_all_substr_ci_finds_overlapping_and_case_insensitive():
    assert find_all_substr("Foo foo FOO", b"foo", False) == [(0, 3), (4, 7), (8, 11)]


def test_find_all_substr_case_sensitive_filters():
    assert find_all_substr("Foo foo FOO", b"foo", True) == [(4, 7)]


def test_find_all_substr_returns_char_boundary_offsets():
    hits = find_all_substr("café bar", b"bar", False)
    assert hits == [(6, 9)]
    assert "café bar".encode()[6:9] == b"bar"


def test_find_all_substr_empty_needle_returns_nothing():
    assert find_all_substr("anything", b"", False) == []


def test_find_all_substr_overlapping_occurrences():
    assert find_all_substr("aaa", "aa", True) == [(0, 2), (1, 3)]


def test_find_all_substr_non_ascii_is_exact():
    assert find_all_substr("CAFÉ", "é", False) == []
    assert find_all_substr("café", "é", False) == [(3, 5)]


def test_find_all_substr_needle_longer_than_hay():
    assert find_all_substr("ab", "abc", False) == []


def test_rendered_row_skips_unrendered_headers_in_unified(unified_file):
    assert rendered_row_for_match(unified_file, DiffMode.UNIFIED, 2) == 0
    assert rendered_row_for_match(unified_file, DiffMode.UNIFIED, 3) == 1


def test_rendered_row_pairs_del_and_add_in_split(split_file):
    assert rendered_row_for_match(split_file, DiffMode.SPLIT, 1) == 1
    assert rendered_row_for_match(split_file, DiffMode.SPLIT, 2) == 2
    assert rendered_row_for_match(split_file, DiffMode.SPLIT, 3) == 1
    assert rendered_row_for_match(split_file, DiffMode.SPLIT, 4) == 2
    assert rendered_row_for_match(split_file, DiffMode.SPLIT, 5) == 3


def test_total_rows_unified_skips_headers(unified_file):
    assert total_rendered_rows(unified_file, DiffMode.UNIFIED) == 2


def test_total_rows_split_pairs_changes(split_file):
    assert total_rendered_rows(split_file, DiffMode.SPLIT) == 4


@pytest.mark.parametrize("mode", list(DiffMode))
def test_every_row_is_below_total(split_file, unified_file, mode):
    for file in (split_file, unified_file):
        total = total_rendered_rows(file, mode)
        for i in range(len(file.diff_lines)):
            assert 0 <= rendered_row_for_match(file, mode, i) < total


def test_diff_search_defaults():
    search = DiffSearch()
    assert search.query.buffer == ""
    assert search.matches == []
    assert search.current == 0
    assert search.case_sensitive is False
    assert DiffMatch(1, 2, 3) == DiffMatch(line=1, start=2, end=3)