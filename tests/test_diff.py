import subprocess
from unittest import mock

from difiko.git.command import WORKING_TREE_REF
from difiko.git.diff import (
    FileStatus,
    NameStatusEntry,
    load_commit_diff,
    load_diff,
    parse_name_status_z,
)


def _completed(stdout):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr=b"")


def test_parses_modified_z():
    entries = parse_name_status_z("M\0src/foo.rs\0A\0src/bar.rs\0")
    assert len(entries) == 2
    assert entries[0].new_path == "src/foo.rs"
    assert entries[0].status is FileStatus.MODIFIED
    assert entries[1].status is FileStatus.ADDED


def test_parses_rename_z():
    entries = parse_name_status_z("R100\0old.rs\0new.rs\0")
    assert len(entries) == 1
    assert entries[0].new_path == "new.rs"
    assert entries[0].old_path == "old.rs"


def test_parses_path_with_spaces_z():
    entries = parse_name_status_z("M\0path with spaces.rs\0")
    assert len(entries) == 1
    assert entries[0].new_path == "path with spaces.rs"


def test_parses_copy_z():
    entries = parse_name_status_z("C075\0a.rs\0b.rs\0")
    assert entries == [NameStatusEntry(FileStatus.COPIED, "b.rs", "a.rs")]


def test_skips_non_uppercase_status_tokens():
    entries = parse_name_status_z("x\0M\0a.rs\0")
    assert entries == [NameStatusEntry(FileStatus.MODIFIED, "a.rs")]


def test_truncated_rename_stops_parsing():
    entries = parse_name_status_z("M\0a.rs\0R100\0old.rs\0")
    assert entries == [NameStatusEntry(FileStatus.MODIFIED, "a.rs")]


def test_from_letter():
    assert FileStatus.from_letter("D") is FileStatus.DELETED
    assert FileStatus.from_letter("R") is FileStatus.RENAMED
    assert FileStatus.from_letter("Q") is FileStatus.UNKNOWN


_FULL_DIFF = (
    b"diff --git a/b.rs b/b.rs\nindex 1..2 100644\n--- a/b.rs\n+++ b/b.rs\n"
    b"@@ -1,2 +1,2 @@\n-old\n+new\n context\n"
    b"diff --git a/a.rs b/a.rs\nnew file mode 100644\n--- /dev/null\n+++ b/a.rs\n"
    b"@@ -0,0 +1,1 @@\n+hello\n"
)


def _fake_git(name_status):
    def handler(command, **kwargs):
        if "--name-status" in command:
            return _completed(name_status)
        return _completed(_FULL_DIFF)

    return handler


def test_load_diff_matches_sections_positionally():
    with mock.patch("subprocess.run", side_effect=_fake_git(b"M\0b.rs\0A\0a.rs\0")) as fake:
        files = load_diff("/repo", "main", "feat")
    by_path = {f.path: f for f in files}
    assert (by_path["b.rs"].additions, by_path["b.rs"].deletions) == (1, 1)
    assert by_path["b.rs"].status is FileStatus.MODIFIED
    assert (by_path["a.rs"].additions, by_path["a.rs"].deletions) == (1, 0)
    assert by_path["a.rs"].status is FileStatus.ADDED
    commands = [c.args[0] for c in fake.call_args_list]
    assert all("main...feat" in c for c in commands)


def test_load_diff_working_tree_uses_base_only():
    with mock.patch("subprocess.run", side_effect=_fake_git(b"M\0b.rs\0A\0a.rs\0")) as fake:
        files = load_diff("/repo", "main", WORKING_TREE_REF)
    assert sorted(f.path for f in files) == ["a.rs", "b.rs"]
    first = fake.call_args_list[0].args[0]
    assert first[-2:] == ["main", "--"]


def test_load_commit_diff_uses_commit_range():
    with mock.patch("subprocess.run", side_effect=_fake_git(b"R100\0old.rs\0b.rs\0")) as fake:
        files = load_commit_diff("/repo", "abc123")
    assert len(files) == 1
    assert files[0].old_path == "old.rs"
    assert files[0].path == "b.rs"
    assert "abc123^!" in fake.call_args_list[0].args[0]


def test_empty_name_status_skips_full_diff():
    with mock.patch("subprocess.run", side_effect=_fake_git(b"")) as fake:
        files = load_diff("/repo", "main", "feat")
    assert files == []
    assert fake.call_count == 1


def test_missing_section_gives_empty_lines():
    with mock.patch("subprocess.run", side_effect=_fake_git(b"M\0b.rs\0A\0a.rs\0M\0z.rs\0")):
        files = load_diff("/repo", "main", "feat")
    z = next(f for f in files if f.path == "z.rs")
    assert z.diff_lines == []
    assert (z.additions, z.deletions, z.binary) == (0, 0, False)