"""Registry types: ModuleRecord, ModuleTable, Scope, SessionState."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Iterator
from uuid import UUID

from shellmod.registry.version import ModuleVersion

__all__ = [
    "ModuleRecord",
    "ModuleTable",
    "Scope",
    "SessionState",
    "LAST_EXIT_CODE",
]

LAST_EXIT_CODE = "LASTEXITCODE"


@dataclass(eq=False)
class Scope:
    """A variable scope. Lookups fall through to the parent scope."""

    parent: Scope | None = None
    variables: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        scope: Scope | None = self
        while scope is not None:
            if name in scope.variables:
                return scope.variables[name]
            scope = scope.parent
        return default

    def set(self, name: str, value: Any) -> None:
        self.variables[name] = value


@dataclass(eq=False)
class ModuleRecord:
    """A loaded module.

    Attributes:
        name: Module name; identity is case-insensitive.
        path: Canonical root path of the module; the key in module tables.
        version: Module version, 0.0 when the module declares none.
        guid: Unique identifier, if the module declares one.
        private_data: Opaque data owned by the module.
        session: The session the module's body ran in.
        results: Output produced while evaluating the module body.
    """

    name: str
    path: str
    version: ModuleVersion = field(default_factory=lambda: ModuleVersion(0, 0))
    guid: UUID | None = None
    private_data: Any = None
    session: SessionState | None = field(default=None, repr=False)
    results: list[Any] = field(default_factory=list, repr=False)


class ModuleTable:
    """Loaded modules keyed by path, compared ignoring case."""

    def __init__(self) -> None:
        self._records: dict[str, tuple[str, ModuleRecord]] = {}
        self._lock = threading.RLock()

    def add(self, record: ModuleRecord) -> None:
        """Insert a module, replacing any module already rooted at the same path."""
        with self._lock:
            self._records[record.path.casefold()] = (record.path, record)

    def get(self, path: str) -> ModuleRecord | None:
        with self._lock:
            entry = self._records.get(path.casefold())
        return entry[1] if entry is not None else None

    def remove(self, path: str) -> bool:
        """Remove the module at ``path``. Returns False if there was none."""
        with self._lock:
            return self._records.pop(path.casefold(), None) is not None

    def items(self) -> list[tuple[str, ModuleRecord]]:
        """Snapshot of (path, module) pairs in insertion order."""
        with self._lock:
            return list(self._records.values())

    def values(self) -> list[ModuleRecord]:
        with self._lock:
            return [record for _, record in self._records.values()]

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        with self._lock:
            return path.casefold() in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[ModuleRecord]:
        return iter(self.values())


class SessionState:
    """A session: its own module table and global scope.

    The top-level session has no module; every module gets a session of its
    own whose global scope is a child of the scope it was loaded from.
    """

    def __init__(self, global_scope: Scope | None = None, module: ModuleRecord | None = None) -> None:
        self.global_scope = global_scope if global_scope is not None else Scope()
        self.module_table = ModuleTable()
        self.module = module

    def get_variable(self, name: str, default: Any = None) -> Any:
        return self.global_scope.get(name, default)

    def set_variable(self, name: str, value: Any) -> None:
        self.global_scope.set(name, value)

    @property
    def last_exit_code(self) -> int | None:
        return self.get_variable(LAST_EXIT_CODE)
