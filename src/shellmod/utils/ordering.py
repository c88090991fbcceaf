"""Generic ordering helpers."""

from __future__ import annotations

from typing import Callable, TypeVar

__all__ = ["sort_and_remove_duplicates"]

T = TypeVar("T")


def sort_and_remove_duplicates(items: list[T], key: Callable[[T], str]) -> list[T]:
    """Sort items by a string key ignoring case, then drop adjacent duplicates.

    The sort is stable, so of several items with equal keys the one that came
    first in the input is kept.
    """
    ordered = sorted(items, key=lambda item: key(item).casefold())

    result: list[T] = []
    previous: str | None = None
    for item in ordered:
        current = key(item).casefold()
        if not result or current != previous:
            result.append(item)
        previous = current
    return result
