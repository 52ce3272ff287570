from __future__ import annotations

from collections.abc import Collection
from dataclasses import replace

from .models import FileComparison, SyncStatus


def _changed_on_both_sides(
    comparison: FileComparison,
    local_changed: Collection[str],
    remote_changed: Collection[str],
) -> bool:
    if not comparison.present_on_both_sides:
        return False
    path = comparison.relative_path
    return path in local_changed and path in remote_changed


def apply_change_journal(
    comparisons: list[FileComparison],
    local_changed: Collection[str],
    remote_changed: Collection[str],
) -> list[FileComparison]:
    """Mark paths modified on both sides since the last checkpoint as conflicts.

    The change sets come from a backend journal or a previous run's record;
    comparisons are returned in the same order.
    """
    updated: list[FileComparison] = []
    for comparison in comparisons:
        if _changed_on_both_sides(comparison, local_changed, remote_changed):
            updated.append(replace(comparison, status=SyncStatus.CONFLICT))
            continue
        updated.append(comparison)
    return updated
