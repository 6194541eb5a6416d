# difiko

difiko holds the terminal-independent core of a keyboard-driven reviewer
for local git branches: pick a repository, a base ref and a compare ref
(or the uncommitted working tree), step through the changed files, mark
them reviewed, search inside diffs, look at commits and blame.

It needs Python 3.10 or later and a `git` executable on `PATH`.

## What is in the package

- `difiko.git.command`: `run` and `run_bytes` execute `git -C <repo> ...`
  with optional locks and terminal prompts disabled and raise `GitError`
  on failure; `ensure_git_repo` checks that a path is inside a work tree;
  `is_working_tree` recognises the `"[working tree]"` pseudo-ref
  (`WORKING_TREE_REF`).
- `difiko.git.parse`: `split_diff_into_sections` splits a multi-file
  unified diff into lists of `DiffLine` (kinds in `LineKind`; hunks carry
  their start/count numbers), and `count_changes` returns
  `(additions, deletions, is_binary)`.
- `difiko.git.diff`: `load_diff(repo, base, compare)` (three-dot range, or
  the working tree against `base`) and `load_commit_diff(repo, commit)`
  return `FileChange` objects sorted by path; `parse_name_status_z` reads
  `git diff --name-status -z` output, renames and copies included.
- `difiko.git.commits`: `load_commits(repo, base, compare)` and
  `parse_commits` give `Commit` records; the working tree has none.
- `difiko.git.branches`: `list_branches(repo, include_remote)` and
  `parse_branch_list`, sorted and de-duplicated.
- `difiko.git.blame`: `load_blame` and `parse_porcelain` turn
  `git blame --porcelain` output into a `Blame` mapping line numbers to
  `BlameLine(short_hash, author, date)`, with dates in the author's time
  zone.
- `difiko.app`: `TextInput` (single-line editing), `Picker` with
  `fuzzy_score` (whitespace-separated atoms; `'x` substring, `^x` prefix,
  `x$` suffix, `!x` exclusion; smart case), `DiffSearch` and
  `find_all_substr`, request ids and loading flags (`ReqIds`,
  `PendingOps`, `CommitDiffState`), the screen/pane/mode enums, `Toast`,
  `Modal`, and the central `App` object in `difiko.app.state`.
- `difiko.input.bindings`: `dispatch_key(app, key)` maps a `KeyEvent` to a
  `KeyAction` for the setup, review and fullscreen screens, open modals
  and the diff search bar, or returns `None` for an unbound key.
- `difiko.navigation`: `handle_scroll`, `move_sidebar`, `move_commits`,
  `scroll_diff`, `scroll_diff_h`, `expire_toasts`, `head_branch` (reads
  `.git/HEAD`, following a linked worktree's `gitdir:` file) and
  `next_field` / `prev_field` for the setup form.
- `difiko.config`: `Config` with `word_diff` and `syntax_highlight`
  (both on by default), stored as JSON at `config_path()`.
- `difiko.cli`: `parse_args(argv)` returns a `Cli` of the options
  `--repo`, `--base`, `--compare`, `--file`, `--fullscreen`,
  `--no-remote-branches`, `-w/--new-window`, `--no-word-diff` and
  `--no-syntax`.

## Examples

Parsing a diff:

```python
from difiko.git.parse import split_diff_into_sections, count_changes

diff = (
    "diff --git a/foo.rs b/foo.rs\n"
    "index 1..2 100644\n"
    "--- a/foo.rs\n"
    "+++ b/foo.rs\n"
    "@@ -1,2 +1,2 @@\n"
    "-old\n"
    "+new\n"
    " context\n"
)
sections = split_diff_into_sections(diff)
assert count_changes(sections[0]) == (1, 1, False)
```

Loading the files changed between two refs:

```python
from difiko.git.diff import load_diff

for change in load_diff(".", "main", "feature"):
    print(change.status, change.path, change.additions, change.deletions)
```

A picker that opens on the current value:

```python
from difiko.app.picker import Picker

picker = Picker.with_selected(["main", "develop", "feat/x"], "feat/x")
assert picker.current() == "feat/x"
```

Mapping a key press to an action:

```python
from difiko.app.state import App
from difiko.app.types import Screen
from difiko.input.bindings import Action, KeyEvent, dispatch_key

app = App()
app.screen = Screen.REVIEW
assert dispatch_key(app, KeyEvent("q")).action is Action.QUIT
```

`App` reads its configuration on creation; pass `config_path=` to use a
file other than the one under the user's config directory. In tree mode,
`App.tree_rows` holds objects with `path` and `is_dir` attributes supplied
by the caller.

## Configuration

`Config.load()` falls back to the defaults when the file is missing,
unreadable or holds anything but booleans for the two keys.
`Config.save()` writes through a temporary file and a rename. The
`--no-word-diff` and `--no-syntax` options switch the matching setting off
for one `App` without touching the file.

## What the package does not do

There is no executable command and no terminal interface: nothing draws
screens, reads the keyboard or mouse, or runs an event loop. Key events
and scroll directions are values the caller builds and passes in. Actions
returned by `dispatch_key` are not applied by the package. The reviewed
set lives only in memory, the sidebar tree is not built from file paths,
`--new-window` is parsed but nothing opens a new window, and the
`word_diff` and `syntax_highlight` settings are stored but nothing
highlights text.

## Tests

The tests use pytest, available through the `test` extra.