from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import (
    FileComparison,
    SyncAction,
    SyncDirection,
    SyncOperation,
    SyncStatus,
)

_BI = SyncDirection.BIDIRECTIONAL
_L2R = SyncDirection.LOCAL_TO_REMOTE
_R2L = SyncDirection.REMOTE_TO_LOCAL

# One-way directions mirror the source: entries only on the destination go.
_ACTION_TABLE: dict[tuple[SyncStatus, SyncDirection], SyncAction] = {
    (SyncStatus.LOCAL_NEWER, _BI): SyncAction.UPLOAD,
    (SyncStatus.LOCAL_NEWER, _L2R): SyncAction.UPLOAD,
    (SyncStatus.LOCAL_NEWER, _R2L): SyncAction.SKIP,
    (SyncStatus.REMOTE_NEWER, _BI): SyncAction.DOWNLOAD,
    (SyncStatus.REMOTE_NEWER, _L2R): SyncAction.SKIP,
    (SyncStatus.REMOTE_NEWER, _R2L): SyncAction.DOWNLOAD,
    (SyncStatus.LOCAL_ONLY, _BI): SyncAction.UPLOAD,
    (SyncStatus.LOCAL_ONLY, _L2R): SyncAction.UPLOAD,
    (SyncStatus.LOCAL_ONLY, _R2L): SyncAction.DELETE_LOCAL,
    (SyncStatus.REMOTE_ONLY, _BI): SyncAction.DOWNLOAD,
    (SyncStatus.REMOTE_ONLY, _L2R): SyncAction.DELETE_REMOTE,
    (SyncStatus.REMOTE_ONLY, _R2L): SyncAction.DOWNLOAD,
    (SyncStatus.CONFLICT, _BI): SyncAction.ASK_USER,
    (SyncStatus.CONFLICT, _L2R): SyncAction.ASK_USER,
    (SyncStatus.CONFLICT, _R2L): SyncAction.ASK_USER,
    (SyncStatus.SIZE_MISMATCH, _BI): SyncAction.ASK_USER,
    (SyncStatus.SIZE_MISMATCH, _L2R): SyncAction.ASK_USER,
    (SyncStatus.SIZE_MISMATCH, _R2L): SyncAction.ASK_USER,
    (SyncStatus.IDENTICAL, _BI): SyncAction.SKIP,
    (SyncStatus.IDENTICAL, _L2R): SyncAction.SKIP,
    (SyncStatus.IDENTICAL, _R2L): SyncAction.SKIP,
}


def _check_table_complete() -> None:
    missing = [
        (status.value, direction.value)
        for status in SyncStatus
        for direction in SyncDirection
        if (status, direction) not in _ACTION_TABLE
    ]
    if missing:
        raise RuntimeError(f"Action table is missing entries: {missing}")


_check_table_complete()


def recommended_action(status: SyncStatus, direction: SyncDirection) -> SyncAction:
    return _ACTION_TABLE[(SyncStatus(status), SyncDirection(direction))]


@dataclass(frozen=True)
class PlanSummary:
    upload: int = 0
    download: int = 0
    delete_local: int = 0
    delete_remote: int = 0
    skip: int = 0
    ask_user: int = 0

    @property
    def total(self) -> int:
        return (
            self.upload
            + self.download
            + self.delete_local
            + self.delete_remote
            + self.skip
            + self.ask_user
        )

    @property
    def actionable(self) -> int:
        return self.upload + self.download + self.delete_local + self.delete_remote


def plan_operations(
    comparisons: Iterable[FileComparison], direction: SyncDirection
) -> list[SyncOperation]:
    return [
        SyncOperation(
            comparison=comparison,
            action=recommended_action(comparison.status, direction),
        )
        for comparison in comparisons
    ]


def summarize_operations(ops: Iterable[SyncOperation]) -> PlanSummary:
    counts = {action.value: 0 for action in SyncAction}
    for op in ops:
        counts[op.action.value] += 1
    return PlanSummary(**counts)


_DIRECTION_STATUSES: dict[SyncDirection, frozenset[SyncStatus]] = {
    SyncDirection.LOCAL_TO_REMOTE: frozenset(
        {SyncStatus.LOCAL_NEWER, SyncStatus.LOCAL_ONLY}
    ),
    SyncDirection.REMOTE_TO_LOCAL: frozenset(
        {SyncStatus.REMOTE_NEWER, SyncStatus.REMOTE_ONLY}
    ),
}

_NEEDS_REVIEW = frozenset({SyncStatus.CONFLICT, SyncStatus.SIZE_MISMATCH})


def filter_for_direction(
    comparisons: Iterable[FileComparison], direction: SyncDirection
) -> list[FileComparison]:
    """Keep the differences that move data the way ``direction`` points.

    Identical entries are always dropped. Bidirectional keeps every other
    status, one-way directions keep only the statuses that flow toward the
    destination.
    """
    allowed = _DIRECTION_STATUSES.get(direction)
    return [
        comparison
        for comparison in comparisons
        if comparison.status != SyncStatus.IDENTICAL
        and (allowed is None or comparison.status in allowed)
    ]


def default_selection(comparisons: Iterable[FileComparison]) -> set[str]:
    return {
        comparison.relative_path
        for comparison in comparisons
        if comparison.status not in _NEEDS_REVIEW
    }
