"""Module-path merging.

Reconciles the process module path with the user and machine settings and
the built-in vendor and system-wide locations, then exposes the merged path
as a lazy sequence of canonical directories.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from shellmod.modpath.environment import EnvironmentTarget, ModulePathEnvironment
from shellmod.modpath.pathset import END, PATH_SEPARATOR, insert_unique, locate, split_path

if TYPE_CHECKING:
    from shellmod.modpath.locations import ModuleLocations
    from shellmod.modpath.normalizer import ModulePathNormalizer

logger = logging.getLogger(__name__)

__all__ = [
    "resolve_module_path",
    "get_module_path",
    "set_module_path",
    "iter_module_paths",
]


def _same(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()


def _add_vendor_if_not_sandboxed(process_path: str, locations: ModuleLocations) -> str | None:
    """Insert the vendor location before the system-wide one, if present.

    A process path that no longer lists the system-wide location was
    restricted on purpose, so None is returned and it is left alone.
    """
    position = locate(process_path, locations.system_wide) if locations.system_wide else -1
    if position >= 0:
        return insert_unique(process_path, locations.vendor, position)

    logger.warning("Module path does not include the system-wide location, leaving it unmodified")
    return None


def resolve_module_path(
    process_path: str | None,
    machine_path: str | None,
    user_path: str | None,
    locations: ModuleLocations,
) -> str | None:
    """Compute the effective module path.

    Args:
        process_path: Current process module path, None if never set.
        machine_path: Machine-scope module path, None if unset.
        user_path: User-scope module path, None if unset.
        locations: The built-in personal, vendor and system-wide locations.

    Returns:
        The merged module path, or None when the process path must be kept
        exactly as it is.
    """
    system_wide = locations.system_wide or ""

    if process_path is None:
        logger.debug("Process module path not set, building the default")
        process_path = user_path if user_path else locations.personal
        process_path += PATH_SEPARATOR
        if machine_path:
            process_path += machine_path
        else:
            process_path += locations.system_paths or ""
        process_path = insert_unique(process_path, system_wide, END)
    else:
        if locations.system_first and system_wide:
            process_path = insert_unique(process_path, system_wide, 0)

        if machine_path is not None:
            if user_path is None:
                if not _same(machine_path, process_path):
                    logger.debug("Process module path customised, machine path ignored")
                    return _add_vendor_if_not_sandboxed(process_path, locations)
                process_path = locations.personal + PATH_SEPARATOR + machine_path
            else:
                combined = user_path + PATH_SEPARATOR + machine_path
                if not (
                    _same(combined, process_path)
                    or _same(machine_path, process_path)
                    or _same(user_path, process_path)
                ):
                    logger.debug("Process module path customised, user and machine paths ignored")
                    return _add_vendor_if_not_sandboxed(process_path, locations)
                process_path = combined
        elif user_path is not None:
            if not _same(user_path, process_path):
                logger.debug("Process module path customised, user path ignored")
                return _add_vendor_if_not_sandboxed(process_path, locations)
            process_path = user_path + PATH_SEPARATOR + (locations.system_paths or "")
        else:
            return _add_vendor_if_not_sandboxed(process_path, locations)

    position = locate(process_path, system_wide) if system_wide else -1
    return insert_unique(process_path, locations.vendor, position)


def get_module_path(env: ModulePathEnvironment) -> str | None:
    """Return the current process module path."""
    return env.get(EnvironmentTarget.PROCESS)


def set_module_path(env: ModulePathEnvironment, locations: ModuleLocations) -> str | None:
    """Resolve the module path and store it in the process scope.

    Nothing is written when the resolution leaves the process path alone.
    """
    result = resolve_module_path(
        env.get(EnvironmentTarget.PROCESS),
        env.get(EnvironmentTarget.MACHINE),
        env.get(EnvironmentTarget.USER),
        locations,
    )
    if result:
        env.set_process(result)
    return result


def iter_module_paths(
    env: ModulePathEnvironment,
    locations: ModuleLocations,
    normalizer: ModulePathNormalizer,
    prefer_system_path: bool = False,
) -> Iterator[str]:
    """Yield the canonical directories of the module path, in search order.

    Segments are normalised only as the caller consumes them. When
    ``prefer_system_path`` is set the system-wide location comes first,
    ahead of anything the user configured.
    """
    module_path = get_module_path(env)
    if module_path is None:
        module_path = set_module_path(env, locations)

    seen: set[str] = set()

    if prefer_system_path and locations.system_wide:
        yield from normalizer.resolved_paths([locations.system_wide], seen)

    if not module_path or not module_path.strip():
        return

    yield from normalizer.resolved_paths(split_path(module_path), seen)
