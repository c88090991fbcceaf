"""Bound on how deeply module loads may nest."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from shellmod.errors import ModuleNestingDepthError

logger = logging.getLogger(__name__)

__all__ = ["NestingGuard", "DEFAULT_MAX_NESTING_DEPTH"]

DEFAULT_MAX_NESTING_DEPTH = 10


class NestingGuard:
    """Counts module loads in progress and rejects runaway recursion.

    Every successful ``enter`` must be paired with one ``leave``; ``nested``
    does the pairing for a ``with`` block.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_NESTING_DEPTH) -> None:
        self.max_depth = max_depth
        self._depth = 0
        self._lock = threading.Lock()

    @property
    def depth(self) -> int:
        return self._depth

    def enter(self, path: str) -> None:
        """Record the start of a nested load.

        Raises:
            ModuleNestingDepthError: If the load would exceed ``max_depth``.
                The depth is left unchanged.
        """
        with self._lock:
            if self._depth + 1 > self.max_depth:
                raise ModuleNestingDepthError(path=path, max_depth=self.max_depth)
            self._depth += 1
            depth = self._depth
        logger.debug("Entered module load '%s' at depth %d", path, depth)

    def leave(self) -> None:
        """Record the end of a nested load."""
        with self._lock:
            if self._depth == 0:
                logger.warning("Module nesting depth decremented below zero, ignoring")
                return
            self._depth -= 1

    @contextmanager
    def nested(self, path: str) -> Iterator[None]:
        """Guard a module load for the duration of a ``with`` block."""
        self.enter(path)
        try:
            yield
        finally:
            self.leave()
