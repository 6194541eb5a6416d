from pathlib import Path

import pytest

from difiko.cli import Cli, parse_args


def test_no_arguments_gives_defaults():
    assert parse_args([]) == Cli()


def test_refs_and_file():
    cli = parse_args(["--base", "main", "--compare", "feat/x", "--file", "src/a.rs"])
    assert (cli.base, cli.compare, cli.file) == ("main", "feat/x", "src/a.rs")


def test_repo_is_a_path():
    cli = parse_args(["--repo", "some/dir"])
    assert cli.repo == Path("some/dir")


def test_boolean_flags():
    cli = parse_args(
        ["--fullscreen", "--no-remote-branches", "--no-word-diff", "--no-syntax"]
    )
    assert cli.fullscreen and cli.no_remote_branches
    assert cli.no_word_diff and cli.no_syntax
    assert not cli.new_window


def test_short_new_window_flag():
    assert parse_args(["-w"]).new_window
    assert parse_args(["--new-window"]).new_window


def test_unknown_flag_is_rejected():
    with pytest.raises(SystemExit):
        parse_args(["--bogus"])