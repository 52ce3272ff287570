from __future__ import annotations

from collections.abc import Iterable


def _pattern_matches(path_lower: str, pattern: str) -> bool:
    pattern_lower = pattern.lower()
    if pattern_lower.startswith("*"):
        return path_lower.endswith(pattern_lower[1:])
    # Plain substring, not segment-aware: "target" also hides "retargeted.txt".
    return pattern_lower in path_lower


def should_exclude(path: str, patterns: Iterable[str]) -> bool:
    """Return True when any pattern matches ``path``, ignoring case.

    ``*suffix`` patterns match the end of the path; anything else matches
    as a substring anywhere in it.
    """
    path_lower = path.lower()
    return any(_pattern_matches(path_lower, pattern) for pattern in patterns)
