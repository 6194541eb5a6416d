"""Access to git: commands, diff parsing, diffs, commits, branches and blame."""