"""Canonicalisation of individual module-path segments."""

from __future__ import annotations

import enum
import glob
import logging
import os
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Protocol, Union, runtime_checkable

from shellmod.errors import (
    DriveNotFoundError,
    ItemNotFoundError,
    UnsupportedPathError,
)
from shellmod.utils.pattern import escape_pattern

logger = logging.getLogger(__name__)

__all__ = [
    "FILESYSTEM_PROVIDER",
    "PROVIDER_PREFIX",
    "SkipReason",
    "ResolvedPath",
    "SkippedPath",
    "PathProvider",
    "LocalFileSystemProvider",
    "ModulePathNormalizer",
    "is_unc_path",
]

FILESYSTEM_PROVIDER = "FileSystem"
PROVIDER_PREFIX = "filesystem::"

_DRIVE_RE = re.compile(r"^([A-Za-z]):")


class SkipReason(enum.Enum):
    NOT_FOUND = "not_found"
    DRIVE_NOT_FOUND = "drive_not_found"
    UNSUPPORTED = "unsupported"
    DUPLICATE = "duplicate"
    NOT_FILESYSTEM = "not_filesystem"
    MISSING = "missing"


@dataclass(frozen=True)
class ResolvedPath:
    """A segment that resolved to a canonical directory."""

    path: str


@dataclass(frozen=True)
class SkippedPath:
    """A segment dropped from the module path, with the reason."""

    segment: str
    reason: SkipReason

    @property
    def path(self) -> None:
        return None


NormalizedPath = Union[ResolvedPath, SkippedPath]


@runtime_checkable
class PathProvider(Protocol):
    """Resolves provider paths to canonical filesystem paths."""

    name: str

    def is_loaded(self) -> bool: ...

    def resolve_path(self, pattern: str) -> tuple[str, list[str]]:
        """Resolve a wildcard-escaped path.

        Returns:
            The name of the provider that owns the path and the canonical
            paths it resolved to.

        Raises:
            ItemNotFoundError: Nothing exists at the path.
            DriveNotFoundError: The drive of the path does not exist.
            UnsupportedPathError: The path syntax is not supported.
        """
        ...


class LocalFileSystemProvider:
    """PathProvider over the local disk."""

    name = FILESYSTEM_PROVIDER

    def is_loaded(self) -> bool:
        return True

    def resolve_path(self, pattern: str) -> tuple[str, list[str]]:
        if "\0" in pattern:
            raise UnsupportedPathError(path=pattern)

        drive = _DRIVE_RE.match(pattern)
        if drive is not None:
            if ":" in pattern[2:]:
                raise UnsupportedPathError(path=pattern)
            if os.name == "nt" and not os.path.exists(drive.group(0) + os.sep):
                raise DriveNotFoundError(drive=drive.group(1))
        elif os.name == "nt" and ":" in pattern:
            # Outside a volume identifier a colon is only illegal on Windows.
            raise UnsupportedPathError(path=pattern)

        matches = glob.glob(os.path.expanduser(pattern))
        if not matches:
            raise ItemNotFoundError(path=pattern)
        return self.name, [os.path.normpath(os.path.abspath(m)) for m in sorted(matches)]


def is_unc_path(path: str) -> bool:
    """Return True for ``\\\\server\\share`` style paths."""
    return len(path) > 2 and path[:2] in ("\\\\", "//") and path[2] not in "\\/"


class ModulePathNormalizer:
    """Turns raw module-path segments into canonical directories.

    Args:
        provider: The filesystem provider, or None when no provider is
            available; existence on disk is then checked directly.
    """

    def __init__(self, provider: PathProvider | None = None) -> None:
        self._provider = provider

    def normalize(self, segment: str, seen: set[str]) -> NormalizedPath:
        """Resolve one segment.

        ``seen`` holds the case-folded canonical paths already produced in
        the current pass and is updated in place.
        """
        path = segment.strip()
        if not path:
            return SkippedPath(segment, SkipReason.MISSING)

        if not is_unc_path(path) and path.casefold().startswith(PROVIDER_PREFIX):
            path = path[len(PROVIDER_PREFIX):]

        # Resolving a network path is too slow; take it as written.
        if is_unc_path(path):
            return ResolvedPath(path)

        if self._provider is not None and self._provider.is_loaded():
            try:
                provider_name, resolved = self._provider.resolve_path(escape_pattern(path))
            except ItemNotFoundError:
                return self._skip(segment, SkipReason.NOT_FOUND)
            except DriveNotFoundError:
                return self._skip(segment, SkipReason.DRIVE_NOT_FOUND)
            except UnsupportedPathError:
                return self._skip(segment, SkipReason.UNSUPPORTED)

            if provider_name != FILESYSTEM_PROVIDER or not resolved:
                return self._skip(segment, SkipReason.NOT_FILESYSTEM)
            canonical = resolved[0]
        elif os.path.isdir(path):
            canonical = path
        else:
            return self._skip(segment, SkipReason.NOT_FOUND)

        key = canonical.casefold()
        if key in seen:
            return self._skip(segment, SkipReason.DUPLICATE)
        seen.add(key)
        return ResolvedPath(canonical)

    def resolved_paths(self, segments: Iterable[str], seen: set[str] | None = None) -> Iterator[str]:
        """Lazily yield the canonical directories of ``segments``, dropping skipped ones.

        Pass ``seen`` to share duplicate detection across several calls.
        """
        if seen is None:
            seen = set()
        for segment in segments:
            result = self.normalize(segment, seen)
            if isinstance(result, ResolvedPath):
                yield result.path

    @staticmethod
    def _skip(segment: str, reason: SkipReason) -> SkippedPath:
        logger.debug("Skipping module path entry '%s': %s", segment, reason.value)
        return SkippedPath(segment, reason)
