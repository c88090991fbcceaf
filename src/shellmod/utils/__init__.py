"""Shared helpers for wildcard matching and ordering."""

from __future__ import annotations

from shellmod.utils.ordering import sort_and_remove_duplicates
from shellmod.utils.pattern import escape_pattern, match_any, match_pattern

__all__ = [
    "escape_pattern",
    "match_any",
    "match_pattern",
    "sort_and_remove_duplicates",
]
