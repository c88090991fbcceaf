"""shellmod - module-path resolution and module registry for a command shell."""

from __future__ import annotations

# Config
from shellmod.config import Config

# Errors
from shellmod.errors import (
    ConfigError,
    ConfigNotFoundError,
    DriveNotFoundError,
    ErrorCodes,
    InvalidInputError,
    ItemNotFoundError,
    ModuleError,
    ModuleExitRequest,
    ModuleNestingDepthError,
    PathProviderError,
    UnsupportedPathError,
)

# Module path
from shellmod.modpath import (
    EnvironmentTarget,
    LocalFileSystemProvider,
    ModuleLocations,
    ModulePathEnvironment,
    ModulePathNormalizer,
    get_module_name,
    get_module_path,
    iter_module_paths,
    resolve_module_path,
    set_module_path,
)

# Registry
from shellmod.registry import (
    ModuleRecord,
    ModuleRegistry,
    ModuleSpecification,
    ModuleVersion,
    SessionState,
    matches_specification,
)

__version__ = "0.1.0"

__all__ = [
    # Config
    "Config",
    # Module path
    "EnvironmentTarget",
    "LocalFileSystemProvider",
    "ModuleLocations",
    "ModulePathEnvironment",
    "ModulePathNormalizer",
    "get_module_name",
    "get_module_path",
    "iter_module_paths",
    "resolve_module_path",
    "set_module_path",
    # Registry
    "ModuleRecord",
    "ModuleRegistry",
    "ModuleSpecification",
    "ModuleVersion",
    "SessionState",
    "matches_specification",
    # Errors
    "ErrorCodes",
    "ModuleError",
    "ConfigError",
    "ConfigNotFoundError",
    "InvalidInputError",
    "ModuleNestingDepthError",
    "ModuleExitRequest",
    "PathProviderError",
    "ItemNotFoundError",
    "DriveNotFoundError",
    "UnsupportedPathError",
]
