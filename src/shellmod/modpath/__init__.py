"""shellmod module-path resolution.

Merges the process, user and machine module paths with the built-in
locations and turns the result into canonical directories to search.

Usage::

    from shellmod.modpath import ModuleLocations, resolve_module_path

    locations = ModuleLocations.from_config(config)
    merged = resolve_module_path(process_path, machine_path, user_path, locations)
"""

from __future__ import annotations

from shellmod.modpath.environment import EnvironmentTarget, ModulePathEnvironment
from shellmod.modpath.locations import (
    MODULE_EXTENSIONS,
    ModuleLocations,
    SystemPathCache,
    combine_system_module_paths,
    get_module_name,
    is_module_extension,
    personal_module_path,
    system_wide_module_path,
    vendor_module_path,
)
from shellmod.modpath.normalizer import (
    LocalFileSystemProvider,
    ModulePathNormalizer,
    PathProvider,
    ResolvedPath,
    SkippedPath,
    SkipReason,
)
from shellmod.modpath.pathset import END, PATH_SEPARATOR, insert_unique, locate
from shellmod.modpath.resolver import (
    get_module_path,
    iter_module_paths,
    resolve_module_path,
    set_module_path,
)

__all__ = [
    "END",
    "EnvironmentTarget",
    "LocalFileSystemProvider",
    "MODULE_EXTENSIONS",
    "ModuleLocations",
    "ModulePathEnvironment",
    "ModulePathNormalizer",
    "PATH_SEPARATOR",
    "PathProvider",
    "ResolvedPath",
    "SkipReason",
    "SkippedPath",
    "SystemPathCache",
    "combine_system_module_paths",
    "get_module_name",
    "get_module_path",
    "insert_unique",
    "is_module_extension",
    "iter_module_paths",
    "locate",
    "personal_module_path",
    "resolve_module_path",
    "set_module_path",
    "system_wide_module_path",
    "vendor_module_path",
]
