import subprocess
from unittest import mock

import pytest

from difiko.git.command import (
    WORKING_TREE_REF,
    GitError,
    ensure_git_repo,
    is_working_tree,
    run,
    run_bytes,
)


def _completed(stdout=b"", returncode=0, stderr=b""):
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


def test_is_working_tree_matches_only_pseudo_ref():
    assert is_working_tree(WORKING_TREE_REF) is True
    assert is_working_tree("[working tree]") is True
    assert is_working_tree("main") is False


@mock.patch("subprocess.run")
def test_run_returns_stdout_and_passes_args(fake_run):
    fake_run.return_value = _completed(stdout=b"hello\n")
    out = run("/some/repo", ["status", "--short"])
    assert out == "hello\n"
    command = fake_run.call_args.args[0]
    assert command == ["git", "-C", "/some/repo", "status", "--short"]
    env = fake_run.call_args.kwargs["env"]
    assert env["GIT_OPTIONAL_LOCKS"] == "0"
    assert env["GIT_TERMINAL_PROMPT"] == "0"


@mock.patch("subprocess.run")
def test_run_decodes_invalid_utf8_lossily(fake_run):
    fake_run.return_value = _completed(stdout=b"a\xffb")
    assert run("/r", ["log"]) == "a\ufffdb"


@mock.patch("subprocess.run")
def test_run_bytes_returns_raw_output(fake_run):
    fake_run.return_value = _completed(stdout=b"a\xffb")
    assert run_bytes("/r", ["show"]) == b"a\xffb"


@mock.patch("subprocess.run")
def test_failure_reports_args_and_stderr(fake_run):
    fake_run.return_value = _completed(returncode=128, stderr=b"  boom \n")
    with pytest.raises(GitError) as info:
        run("/r", ["log", "--oneline"])
    assert str(info.value) == "git log --oneline failed: boom"


@mock.patch("subprocess.run")
def test_run_bytes_failure_raises(fake_run):
    fake_run.return_value = _completed(returncode=1, stderr=b"bad")
    with pytest.raises(GitError, match="bad"):
        run_bytes("/r", ["cat-file"])


@mock.patch("subprocess.run", side_effect=FileNotFoundError("no git"))
def test_spawn_failure_raises(fake_run):
    with pytest.raises(GitError, match="failed to spawn git"):
        run("/r", ["status"])


@mock.patch("subprocess.run")
def test_ensure_git_repo_rejects_non_work_tree(fake_run):
    fake_run.return_value = _completed(stdout=b"false\n")
    with pytest.raises(GitError, match="not inside a git work tree"):
        ensure_git_repo("/r")


@mock.patch("subprocess.run")
def test_ensure_git_repo_accepts_work_tree(fake_run):
    fake_run.return_value = _completed(stdout=b"true\n")
    assert ensure_git_repo("/r") is None
    assert fake_run.call_args.args[0][-2:] == ["rev-parse", "--is-inside-work-tree"]