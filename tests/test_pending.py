from difiko.app.pending import CommitDiffState, PendingOps, ReqIds


def test_default_state_is_idle():
    state = CommitDiffState()
    assert not state.is_active()
    assert not state.is_loading("abc")


def test_loading_matches_only_its_hash():
    state = CommitDiffState("abc")
    assert state.is_active()
    assert state.is_loading("abc")
    assert not state.is_loading("def")


def test_states_compare_by_value():
    assert CommitDiffState("abc") == CommitDiffState("abc")
    assert CommitDiffState() == CommitDiffState()
    assert CommitDiffState("abc") != CommitDiffState()


def test_pending_ops_defaults():
    ops = PendingOps()
    assert (ops.branches, ops.diff, ops.commits) == (False, False, False)
    assert ops.commit_diff == CommitDiffState()


def test_req_ids_start_at_zero_and_are_independent():
    ids = ReqIds()
    ids.diff += 1
    assert ids.diff == 1
    assert ids.branches == ids.commits == ids.commit_diff == 0


def test_pending_ops_instances_do_not_share_state():
    a = PendingOps()
    b = PendingOps()
    a.commit_diff = CommitDiffState("h")
    assert not b.commit_diff.is_active()