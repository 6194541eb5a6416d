from pathlib import Path

import pytest

from difiko.app.completion import split_path_for_completion


@pytest.fixture
def home(tmp_path, monkeypatch):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


def test_empty_buffer_uses_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert split_path_for_completion("") == (Path.cwd(), "")


def test_bare_fragment_uses_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert split_path_for_completion("proj") == (Path.cwd(), "proj")


def test_tilde_alone_is_home(home):
    assert split_path_for_completion("~") == (home, "")


def test_tilde_slash_is_home(home):
    assert split_path_for_completion("~/") == (home, "")


def test_tilde_subdirectory(home):
    assert split_path_for_completion("~/code/sub/fr") == (home / "code" / "sub", "fr")


def test_root(home):
    assert split_path_for_completion("/") == (Path("/"), "")


def test_absolute_path_splits_at_last_slash():
    assert split_path_for_completion("/usr/lo") == (Path("/usr"), "lo")


def test_relative_path_with_trailing_slash():
    assert split_path_for_completion("a/b/") == (Path("a/b"), "")


def test_missing_home_gives_none(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    assert split_path_for_completion("~") is None
    assert split_path_for_completion("~/x") is None