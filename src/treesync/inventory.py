from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .models import FileInfo

logger = logging.getLogger(__name__)


class InventoryError(ValueError):
    """Raised when an inventory snapshot is malformed."""


def inventory_from_dict(data: Any) -> dict[str, FileInfo]:
    if not isinstance(data, dict):
        raise InventoryError("Inventory must be a JSON object keyed by relative path")

    inventory: dict[str, FileInfo] = {}
    for relpath, entry in data.items():
        if not isinstance(entry, dict):
            raise InventoryError(f"{relpath}: entry must be an object")
        try:
            info = FileInfo.from_dict(entry)
        except KeyError as exc:
            raise InventoryError(f"{relpath}: missing field {exc.args[0]!r}") from exc
        except (OverflowError, TypeError, ValueError) as exc:
            raise InventoryError(f"{relpath}: {exc}") from exc
        if info.size < 0:
            raise InventoryError(f"{relpath}: size must not be negative")
        inventory[str(relpath)] = info
    return inventory


def inventory_to_dict(inventory: Mapping[str, FileInfo]) -> dict[str, Any]:
    return {relpath: inventory[relpath].to_dict() for relpath in sorted(inventory)}


def load_inventory(path: Path) -> dict[str, FileInfo]:
    resolved = path.expanduser()
    try:
        raw = json.loads(resolved.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise InventoryError(f"Cannot read inventory {resolved}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InventoryError(f"Invalid JSON in {resolved}: {exc}") from exc

    inventory = inventory_from_dict(raw)
    logger.debug("Loaded %d entries from %s", len(inventory), resolved)
    return inventory


def dump_inventory(inventory: Mapping[str, FileInfo], path: Path) -> None:
    resolved = path.expanduser()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    resolved.write_text(
        json.dumps(inventory_to_dict(inventory), indent=2) + "\n", encoding="utf-8"
    )
