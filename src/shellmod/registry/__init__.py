"""shellmod module registry.

Tracks loaded modules and answers lookups by wildcard, by exact name and by
version-constrained specification.

Usage::

    from shellmod.registry import ModuleRegistry

    registry = ModuleRegistry()
    registry.create_module("Tools", "/opt/modules/Tools/Tools.psm1", body)
    registry.find_modules_by_specification([{"ModuleName": "Tools", "ModuleVersion": "1.0"}])
"""

from __future__ import annotations

from shellmod.registry.execution import CallableExecutor, DefaultScopeFactory, ScopeFactory, ScriptExecutor
from shellmod.registry.nesting import DEFAULT_MAX_NESTING_DEPTH, NestingGuard
from shellmod.registry.registry import ModuleRegistry
from shellmod.registry.specification import ModuleSpecification, matches_specification
from shellmod.registry.types import LAST_EXIT_CODE, ModuleRecord, ModuleTable, Scope, SessionState
from shellmod.registry.version import MAX_VERSION_PART, ModuleVersion, maximum_version_bound

__all__ = [
    "CallableExecutor",
    "DEFAULT_MAX_NESTING_DEPTH",
    "DefaultScopeFactory",
    "LAST_EXIT_CODE",
    "MAX_VERSION_PART",
    "ModuleRecord",
    "ModuleRegistry",
    "ModuleSpecification",
    "ModuleTable",
    "ModuleVersion",
    "NestingGuard",
    "Scope",
    "ScopeFactory",
    "ScriptExecutor",
    "SessionState",
    "matches_specification",
    "maximum_version_bound",
]
