from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from .models import SyncAction, SyncOperation

_COUNTER_BY_ACTION = {
    SyncAction.UPLOAD: "uploaded",
    SyncAction.DOWNLOAD: "downloaded",
    SyncAction.DELETE_LOCAL: "deleted",
    SyncAction.DELETE_REMOTE: "deleted",
    SyncAction.SKIP: "skipped",
    # Left for the user, so nothing was transferred.
    SyncAction.ASK_USER: "skipped",
}


@dataclass
class SyncResult:
    """Tally of outcomes reported by whatever executes a plan.

    Every attempted operation reports exactly once. A failure is recorded and
    the run carries on, so a cancelled or partly failed run still reads as an
    accurate summary.
    """

    uploaded: int = 0
    downloaded: int = 0
    deleted: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def record_success(self, action: SyncAction) -> None:
        counter = _COUNTER_BY_ACTION[SyncAction(action)]
        with self._lock:
            setattr(self, counter, getattr(self, counter) + 1)

    def record_failure(self, relative_path: str, message: str) -> None:
        with self._lock:
            self.errors.append(f"{relative_path}: {message}")

    def record(self, operation: SyncOperation, error: str | None = None) -> None:
        if error is None:
            self.record_success(operation.action)
        else:
            self.record_failure(operation.relative_path, error)

    def _succeeded_locked(self) -> int:
        return self.uploaded + self.downloaded + self.deleted + self.skipped

    @property
    def succeeded(self) -> int:
        with self._lock:
            return self._succeeded_locked()

    @property
    def total(self) -> int:
        with self._lock:
            return self._succeeded_locked() + len(self.errors)

    @property
    def has_errors(self) -> bool:
        with self._lock:
            return bool(self.errors)

    def to_dict(self) -> dict[str, Any]:
        with self._lock:
            return {
                "uploaded": self.uploaded,
                "downloaded": self.downloaded,
                "deleted": self.deleted,
                "skipped": self.skipped,
                "errors": list(self.errors),
            }
