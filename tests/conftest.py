from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

from treesync.models import FileComparison, FileInfo, SyncStatus

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


def at(seconds: float) -> datetime:
    return T0 + timedelta(seconds=seconds)


def mk_info(
    relpath: str,
    *,
    size: int = 0,
    modified: datetime | None = T0,
    is_dir: bool = False,
    checksum: str | None = None,
    root: str = "/local",
) -> FileInfo:
    return FileInfo(
        name=relpath.rsplit("/", 1)[-1],
        path=f"{root}/{relpath}",
        size=size,
        modified=modified,
        is_dir=is_dir,
        checksum=checksum,
    )


def mk_comparison(
    relpath: str,
    *,
    status: SyncStatus,
    local: bool = True,
    remote: bool = True,
    is_dir: bool = False,
) -> FileComparison:
    return FileComparison(
        relative_path=relpath,
        status=status,
        local_info=mk_info(relpath, is_dir=is_dir) if local else None,
        remote_info=mk_info(relpath, is_dir=is_dir, root="/remote") if remote else None,
        is_dir=is_dir,
    )


def write_inventory(path: Path, entries: dict[str, FileInfo]) -> Path:
    path.write_text(
        json.dumps({relpath: info.to_dict() for relpath, info in entries.items()}),
        encoding="utf-8",
    )
    return path
