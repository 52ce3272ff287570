from __future__ import annotations

import logging
from collections.abc import Mapping

from .excludes import should_exclude
from .models import CompareOptions, FileComparison, FileInfo, SyncStatus
from .timestamps import TimestampOrder, compare_timestamps

logger = logging.getLogger(__name__)

_NEWER_BY_ORDER = {
    TimestampOrder.LOCAL_AFTER: SyncStatus.LOCAL_NEWER,
    TimestampOrder.REMOTE_AFTER: SyncStatus.REMOTE_NEWER,
}


def _classify_existing(
    local: FileInfo, remote: FileInfo, options: CompareOptions
) -> SyncStatus:
    if options.compare_size and local.size != remote.size:
        if not options.compare_timestamp:
            return SyncStatus.SIZE_MISMATCH
        order = compare_timestamps(local.modified, remote.modified)
        # Sizes differ and the clock can't say which side moved.
        return _NEWER_BY_ORDER.get(order, SyncStatus.SIZE_MISMATCH)

    if not options.compare_timestamp:
        return SyncStatus.IDENTICAL

    order = compare_timestamps(local.modified, remote.modified)
    # A missing mtime with matching size is treated as no change.
    return _NEWER_BY_ORDER.get(order, SyncStatus.IDENTICAL)


def classify_pair(
    local: FileInfo | None,
    remote: FileInfo | None,
    options: CompareOptions,
) -> SyncStatus:
    """Derive the sync status of one path from its two sides.

    Never returns ``SyncStatus.CONFLICT``; that status needs sync history and
    is added by ``change_tracking.apply_change_journal``.
    """
    if local is not None and remote is None:
        return SyncStatus.LOCAL_ONLY
    if remote is not None and local is None:
        return SyncStatus.REMOTE_ONLY
    if local is None or remote is None:
        return SyncStatus.IDENTICAL
    return _classify_existing(local, remote, options)


def _byte_order_key(comparison: FileComparison) -> bytes:
    return comparison.relative_path.encode("utf-8", errors="surrogatepass")


def build_comparisons(
    local_files: Mapping[str, FileInfo],
    remote_files: Mapping[str, FileInfo],
    options: CompareOptions,
) -> list[FileComparison]:
    comparisons: list[FileComparison] = []
    excluded = 0
    suppressed = 0

    for relpath in set(local_files) | set(remote_files):
        if should_exclude(relpath, options.exclude_patterns):
            excluded += 1
            continue

        local = local_files.get(relpath)
        remote = remote_files.get(relpath)
        status = classify_pair(local, remote, options)
        is_dir = bool(
            (local is not None and local.is_dir)
            or (remote is not None and remote.is_dir)
        )

        # Directories stay visible so callers keep the tree shape.
        if status == SyncStatus.IDENTICAL and not is_dir:
            suppressed += 1
            continue

        comparisons.append(
            FileComparison(
                relative_path=relpath,
                status=status,
                local_info=local,
                remote_info=remote,
                is_dir=is_dir,
            )
        )

    comparisons.sort(key=_byte_order_key)
    logger.debug(
        "Compared %d local / %d remote entries: %d reported, %d excluded, %d identical",
        len(local_files),
        len(remote_files),
        len(comparisons),
        excluded,
        suppressed,
    )
    return comparisons
