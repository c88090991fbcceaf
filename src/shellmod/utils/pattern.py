"""Case-insensitive wildcard pattern matching for module names."""

from __future__ import annotations

import fnmatch
import glob
from typing import Iterable

__all__ = ["match_pattern", "match_any", "escape_pattern"]


def match_pattern(pattern: str, name: str) -> bool:
    """Match a module name against a wildcard pattern, ignoring case.

    Supports '*' (any run of characters), '?' (one character) and
    '[...]' character sets.

    Args:
        pattern: The pattern to match against.
        name: The module name to test.

    Returns:
        True if the name matches the pattern, False otherwise.
    """
    if pattern == "*":
        return True
    return fnmatch.fnmatchcase(name.casefold(), pattern.casefold())


def match_any(name: str, patterns: Iterable[str]) -> bool:
    """Return True if the name matches at least one of the patterns."""
    return any(match_pattern(p, name) for p in patterns)


def escape_pattern(path: str) -> str:
    """Escape wildcard characters so a path is matched literally."""
    return glob.escape(path)
