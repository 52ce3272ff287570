from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from .config import DEFAULT_EXCLUDE_PATTERNS


class SyncStatus(str, Enum):
    IDENTICAL = "identical"
    LOCAL_NEWER = "local_newer"
    REMOTE_NEWER = "remote_newer"
    LOCAL_ONLY = "local_only"
    REMOTE_ONLY = "remote_only"
    # Only injected by a change journal, see change_tracking.
    CONFLICT = "conflict"
    SIZE_MISMATCH = "size_mismatch"


class SyncDirection(str, Enum):
    LOCAL_TO_REMOTE = "local_to_remote"
    REMOTE_TO_LOCAL = "remote_to_local"
    BIDIRECTIONAL = "bidirectional"


class SyncAction(str, Enum):
    UPLOAD = "upload"
    DOWNLOAD = "download"
    DELETE_LOCAL = "delete_local"
    DELETE_REMOTE = "delete_remote"
    SKIP = "skip"
    ASK_USER = "ask_user"


def _expect(value: Any, kind: type | tuple[type, ...], name: str) -> Any:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    # bool is an int subclass, so True must not pass as a size.
    if not isinstance(value, kinds) or (isinstance(value, bool) and bool not in kinds):
        raise TypeError(f"{name} has unexpected type {type(value).__name__}")
    return value


def parse_timestamp(value: str | None) -> datetime | None:
    if value is None:
        return None
    _expect(value, str, "modified")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


@dataclass(frozen=True)
class FileInfo:
    name: str
    path: str
    size: int
    modified: datetime | None = None
    is_dir: bool = False
    checksum: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "modified": format_timestamp(self.modified),
            "is_dir": self.is_dir,
            "checksum": self.checksum,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileInfo:
        return cls(
            name=_expect(data["name"], str, "name"),
            path=_expect(data["path"], str, "path"),
            size=_expect(data["size"], int, "size"),
            modified=parse_timestamp(data.get("modified")),
            is_dir=_expect(data.get("is_dir", False), bool, "is_dir"),
            checksum=_expect(data.get("checksum"), (str, type(None)), "checksum"),
        )


@dataclass(frozen=True)
class CompareOptions:
    compare_timestamp: bool = True
    compare_size: bool = True
    # Reserved; classification ignores it.
    compare_checksum: bool = False
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    direction: SyncDirection = SyncDirection.BIDIRECTIONAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "compare_timestamp": self.compare_timestamp,
            "compare_size": self.compare_size,
            "compare_checksum": self.compare_checksum,
            "exclude_patterns": list(self.exclude_patterns),
            "direction": self.direction.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CompareOptions:
        defaults = cls()
        patterns = data.get("exclude_patterns", list(defaults.exclude_patterns))
        if not isinstance(patterns, (list, tuple)):
            raise TypeError("exclude_patterns must be a list of strings")
        return cls(
            compare_timestamp=_expect(
                data.get("compare_timestamp", defaults.compare_timestamp),
                bool,
                "compare_timestamp",
            ),
            compare_size=_expect(
                data.get("compare_size", defaults.compare_size), bool, "compare_size"
            ),
            compare_checksum=_expect(
                data.get("compare_checksum", defaults.compare_checksum),
                bool,
                "compare_checksum",
            ),
            exclude_patterns=tuple(
                _expect(p, str, "exclude_patterns entry") for p in patterns
            ),
            direction=SyncDirection(data.get("direction", defaults.direction.value)),
        )


@dataclass(frozen=True)
class FileComparison:
    relative_path: str
    status: SyncStatus
    local_info: FileInfo | None
    remote_info: FileInfo | None
    is_dir: bool = False

    @property
    def present_on_both_sides(self) -> bool:
        return self.local_info is not None and self.remote_info is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "relative_path": self.relative_path,
            "status": self.status.value,
            "local_info": self.local_info.to_dict() if self.local_info else None,
            "remote_info": self.remote_info.to_dict() if self.remote_info else None,
            "is_dir": self.is_dir,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileComparison:
        local = data.get("local_info")
        remote = data.get("remote_info")
        return cls(
            relative_path=str(data["relative_path"]),
            status=SyncStatus(data["status"]),
            local_info=FileInfo.from_dict(local) if local is not None else None,
            remote_info=FileInfo.from_dict(remote) if remote is not None else None,
            is_dir=_expect(data.get("is_dir", False), bool, "is_dir"),
        )


@dataclass(frozen=True)
class SyncOperation:
    comparison: FileComparison
    action: SyncAction

    @property
    def relative_path(self) -> str:
        return self.comparison.relative_path

    def to_dict(self) -> dict[str, Any]:
        return {
            "comparison": self.comparison.to_dict(),
            "action": self.action.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SyncOperation:
        return cls(
            comparison=FileComparison.from_dict(data["comparison"]),
            action=SyncAction(data["action"]),
        )
