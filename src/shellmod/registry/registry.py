"""Registry of loaded modules: creation, lookup and nesting control."""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence
from uuid import UUID

from shellmod.errors import InvalidInputError, ModuleExitRequest
from shellmod.modpath.locations import get_module_name
from shellmod.registry.execution import CallableExecutor, DefaultScopeFactory, ScopeFactory, ScriptExecutor
from shellmod.registry.nesting import DEFAULT_MAX_NESTING_DEPTH, NestingGuard
from shellmod.registry.specification import ModuleSpecification, matches_specification
from shellmod.registry.types import LAST_EXIT_CODE, ModuleRecord, ModuleTable, SessionState
from shellmod.registry.version import ModuleVersion
from shellmod.utils.ordering import sort_and_remove_duplicates
from shellmod.utils.pattern import match_any

if TYPE_CHECKING:
    from shellmod.config import Config

logger = logging.getLogger(__name__)

__all__ = ["ModuleRegistry"]


class ModuleRegistry:
    """Tracks the modules loaded into one engine instance.

    The registry keeps an engine-wide table of every module it created, and
    knows the engine's current session and its top-level session. Queries
    that are not for all modules look at the current session's table first
    and then fall back to the top-level session's table.
    """

    def __init__(
        self,
        config: Config | None = None,
        session: SessionState | None = None,
        scope_factory: ScopeFactory | None = None,
        executor: ScriptExecutor | None = None,
    ) -> None:
        """Initialize the ModuleRegistry.

        Args:
            config: Optional Config; ``modules.max_nesting_depth`` sets the
                nesting bound.
            session: The top-level session. A new one is created if omitted.
            scope_factory: Creates the scopes module bodies run in.
            executor: Evaluates module bodies.
        """
        max_depth = DEFAULT_MAX_NESTING_DEPTH
        if config is not None:
            max_depth = config.get("modules.max_nesting_depth", DEFAULT_MAX_NESTING_DEPTH)

        self.top_level_session = session if session is not None else SessionState()
        self.session = self.top_level_session
        self.module_table = ModuleTable()
        self._nesting = NestingGuard(max_depth=max_depth)
        self._scope_factory = scope_factory if scope_factory is not None else DefaultScopeFactory()
        self._executor = executor if executor is not None else CallableExecutor()

    # ----- Creation -----

    def create_module(
        self,
        name: str | None,
        path: str,
        body: Any,
        session: SessionState | None = None,
        private_data: Any = None,
        arguments: Sequence[Any] = (),
        version: ModuleVersion | str | None = None,
        guid: UUID | str | None = None,
    ) -> ModuleRecord:
        """Create a module by evaluating its body in a session of its own.

        The current session is switched to the module's session while the
        body runs, so modules loaded from the body nest under it. The new
        record is added to the engine-wide table and to the calling
        session's table.

        Args:
            name: Module name; derived from ``path`` when None.
            path: The path the module is rooted at.
            body: The module code, evaluated by the executor.
            session: Session to run the body in; a new child session when None.
            private_data: Opaque data kept on the record.
            arguments: Arguments passed to the body.
            version: Module version, 0.0 when omitted.
            guid: Module GUID.

        Returns:
            The new record. Its ``results`` hold whatever the body produced,
            even when the body requested an exit.

        Raises:
            InvalidInputError: If the version, GUID or body is invalid.
        """
        calling_session = self.session
        if session is None:
            session = SessionState(
                global_scope=self._scope_factory.create_child_scope(calling_session.global_scope)
            )

        module_guid: UUID | None = None
        if guid is not None:
            try:
                module_guid = UUID(str(guid))
            except ValueError as e:
                raise InvalidInputError(message=f"Invalid module GUID: '{guid}'") from e

        record = ModuleRecord(
            name=name if name is not None else get_module_name(path),
            path=path,
            version=ModuleVersion.parse(version) if version is not None else ModuleVersion(0, 0),
            guid=module_guid,
            private_data=private_data,
            session=session,
        )
        session.module = record

        exit_code: int | None = None
        self.session = session
        try:
            self._executor.invoke(body, session.global_scope, arguments, record.results)
        except ModuleExitRequest as e:
            exit_code = e.exit_code
        finally:
            self.session = calling_session

        if exit_code is not None:
            logger.debug("Module '%s' requested exit code %d", record.name, exit_code)
            calling_session.set_variable(LAST_EXIT_CODE, exit_code)

        self.module_table.add(record)
        calling_session.module_table.add(record)
        logger.debug("Created module '%s' at '%s'", record.name, record.path)
        return record

    def remove_module(self, record: ModuleRecord) -> bool:
        """Remove a module from the engine-wide and session tables.

        Returns False if the module was not in the engine-wide table.
        """
        removed = self.module_table.remove(record.path)
        self.session.module_table.remove(record.path)
        self.top_level_session.module_table.remove(record.path)
        return removed

    # ----- Nesting -----

    @property
    def nesting_depth(self) -> int:
        return self._nesting.depth

    @property
    def max_nesting_depth(self) -> int:
        return self._nesting.max_depth

    def enter(self, path: str) -> None:
        """Start a nested module load.

        Raises:
            ModuleNestingDepthError: If loads are already nested to the limit.
        """
        self._nesting.enter(path)

    def leave(self) -> None:
        """Finish a nested module load started with ``enter``."""
        self._nesting.leave()

    def nested(self, path: str) -> AbstractContextManager[None]:
        """Context manager pairing ``enter`` and ``leave``."""
        return self._nesting.nested(path)

    # ----- Query Methods -----

    def find_modules(self, patterns: Iterable[str] | None, all: bool = False) -> list[ModuleRecord]:
        """Return modules whose name matches any wildcard pattern, sorted by name.

        Args:
            patterns: Wildcard patterns; None matches every module.
            all: Search every module the engine created instead of the
                modules visible from the current session.
        """
        pattern_list = list(patterns) if patterns is not None else ["*"]
        return self._find(lambda record: match_any(record.name, pattern_list), all)

    def find_exact_modules(self, name: str | None, all: bool = False, exact_match: bool = True) -> list[ModuleRecord]:
        """Return modules named ``name``.

        With ``exact_match`` the name is compared literally (ignoring case);
        otherwise it is used as a wildcard pattern.
        """
        target = name if name is not None else ""
        if not exact_match:
            return self.find_modules([target], all)
        folded = target.casefold()
        return self._find(lambda record: record.name.casefold() == folded, all)

    def find_modules_by_specification(
        self,
        specifications: Iterable[ModuleSpecification | str | dict[str, Any]],
        all: bool = False,
    ) -> list[ModuleRecord]:
        """Return modules matching any of the specifications, sorted by name.

        Each specification is evaluated separately, so a module matching
        more than one specification is reported once per match.
        """
        matched: list[ModuleRecord] = []
        for value in specifications:
            spec = ModuleSpecification.from_value(value)
            matched.extend(self._collect(lambda record, spec=spec: matches_specification(record, spec), all))
        return sorted(matched, key=lambda record: record.name.casefold())

    def module_names(self, all: bool = False) -> list[str]:
        """Sorted names of the visible modules, each name listed once."""
        records = sort_and_remove_duplicates(self._collect(lambda record: True, all), key=lambda r: r.name)
        return [record.name for record in records]

    def _find(self, predicate: Callable[[ModuleRecord], bool], all: bool) -> list[ModuleRecord]:
        return sorted(self._collect(predicate, all), key=lambda record: record.name.casefold())

    def _collect(self, predicate: Callable[[ModuleRecord], bool], all: bool) -> list[ModuleRecord]:
        if all:
            return [record for record in self.module_table.values() if predicate(record)]

        # Local modules come before top-level ones; each path is reported once.
        matched: list[ModuleRecord] = []
        found: set[str] = set()
        for path, record in self.session.module_table.items():
            if predicate(record):
                matched.append(record)
                found.add(path.casefold())

        if self.session is not self.top_level_session:
            for path, record in self.top_level_session.module_table.items():
                if path.casefold() not in found and predicate(record):
                    matched.append(record)
        return matched
