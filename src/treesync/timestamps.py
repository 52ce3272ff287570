from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from .config import TIMESTAMP_TOLERANCE_SECONDS


class TimestampOrder(str, Enum):
    EQUAL_WITHIN_TOLERANCE = "equal_within_tolerance"
    LOCAL_AFTER = "local_after"
    REMOTE_AFTER = "remote_after"
    INDETERMINATE = "indeterminate"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _whole_seconds_between(local: datetime, remote: datetime) -> int:
    # int() truncates toward zero, so 2.9s of drift still counts as 2.
    return int((_as_utc(local) - _as_utc(remote)).total_seconds())


def compare_timestamps(
    local: datetime | None,
    remote: datetime | None,
    tolerance_seconds: int = TIMESTAMP_TOLERANCE_SECONDS,
) -> TimestampOrder:
    if local is None or remote is None:
        return TimestampOrder.INDETERMINATE

    diff = _whole_seconds_between(local, remote)
    if abs(diff) <= tolerance_seconds:
        return TimestampOrder.EQUAL_WITHIN_TOLERANCE
    if diff > 0:
        return TimestampOrder.LOCAL_AFTER
    return TimestampOrder.REMOTE_AFTER


def timestamps_equal(
    local: datetime | None,
    remote: datetime | None,
    tolerance_seconds: int = TIMESTAMP_TOLERANCE_SECONDS,
) -> bool:
    """True only when both instants exist and fall inside the tolerance."""
    return (
        compare_timestamps(local, remote, tolerance_seconds)
        == TimestampOrder.EQUAL_WITHIN_TOLERANCE
    )
