from __future__ import annotations

from treesync.actions import recommended_action
from treesync.change_tracking import apply_change_journal
from treesync.models import SyncAction, SyncDirection, SyncStatus

from conftest import mk_comparison


def test_paths_changed_on_both_sides_become_conflicts() -> None:
    comparisons = [
        mk_comparison("both.txt", status=SyncStatus.LOCAL_NEWER),
        mk_comparison("local_edit.txt", status=SyncStatus.LOCAL_NEWER),
        mk_comparison("new.txt", status=SyncStatus.LOCAL_ONLY, remote=False),
    ]
    local_changed = {"both.txt", "local_edit.txt", "new.txt"}
    remote_changed = {"both.txt", "new.txt"}

    updated = apply_change_journal(comparisons, local_changed, remote_changed)
    by = {c.relative_path: c for c in updated}

    assert [c.relative_path for c in updated] == [
        "both.txt",
        "local_edit.txt",
        "new.txt",
    ]
    assert by["both.txt"].status == SyncStatus.CONFLICT
    assert by["local_edit.txt"].status == SyncStatus.LOCAL_NEWER
    assert by["new.txt"].status == SyncStatus.LOCAL_ONLY
    assert comparisons[0].status == SyncStatus.LOCAL_NEWER


def test_injected_conflicts_never_auto_resolve() -> None:
    updated = apply_change_journal(
        [mk_comparison("x", status=SyncStatus.REMOTE_NEWER)], {"x"}, {"x"}
    )
    for direction in SyncDirection:
        assert recommended_action(updated[0].status, direction) == SyncAction.ASK_USER


def test_empty_journal_is_a_no_op() -> None:
    comparisons = [mk_comparison("a", status=SyncStatus.SIZE_MISMATCH)]
    assert apply_change_journal(comparisons, set(), set()) == comparisons
