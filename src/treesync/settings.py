from __future__ import annotations

import logging
import tomllib
from dataclasses import fields, replace
from pathlib import Path
from typing import Any

from .config import CONFIG_TABLE
from .models import CompareOptions, SyncDirection

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a config file cannot be turned into CompareOptions."""


_BOOL_KEYS = ("compare_timestamp", "compare_size", "compare_checksum")


def _validate_table(table: dict[str, Any], source: Path) -> dict[str, Any]:
    known = {f.name for f in fields(CompareOptions)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ConfigError(f"{source}: unknown option(s): {', '.join(unknown)}")

    for key in _BOOL_KEYS:
        if key in table and not isinstance(table[key], bool):
            raise ConfigError(f"{source}: {key} must be a boolean")

    if "exclude_patterns" in table:
        patterns = table["exclude_patterns"]
        if not isinstance(patterns, list) or not all(
            isinstance(p, str) for p in patterns
        ):
            raise ConfigError(f"{source}: exclude_patterns must be a list of strings")

    if "direction" in table:
        try:
            SyncDirection(table["direction"])
        except ValueError:
            allowed = ", ".join(d.value for d in SyncDirection)
            raise ConfigError(
                f"{source}: direction must be one of {allowed}"
            ) from None
    return table


def load_compare_options(path: Path) -> CompareOptions:
    """Read the ``[compare]`` table of a TOML file.

    Keys that are not set keep their default value; a file without the table
    yields the defaults.
    """
    resolved = path.expanduser()
    try:
        data = tomllib.loads(resolved.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config {resolved}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {resolved}: {exc}") from exc

    table = data.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigError(f"{resolved}: [{CONFIG_TABLE}] must be a table")

    options = CompareOptions.from_dict(_validate_table(table, resolved))
    logger.debug("Loaded compare options from %s: %s", resolved, options)
    return options


def options_with_overrides(options: CompareOptions, **overrides: Any) -> CompareOptions:
    changes = {key: value for key, value in overrides.items() if value is not None}
    if "exclude_patterns" in changes:
        changes["exclude_patterns"] = tuple(changes["exclude_patterns"])
    if "direction" in changes:
        changes["direction"] = SyncDirection(changes["direction"])
    return replace(options, **changes)
