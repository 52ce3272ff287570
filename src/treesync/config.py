from __future__ import annotations

from pathlib import Path

# Absorbs clock skew and coarse filesystem timestamps on either side.
TIMESTAMP_TOLERANCE_SECONDS = 2

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "node_modules",
    ".git",
    ".DS_Store",
    "Thumbs.db",
    "__pycache__",
    "*.pyc",
    ".env",
    "target",
)

CONFIG_TABLE = "compare"
DEFAULT_CONFIG_PATH = Path("~/.config/treesync/config.toml")
