"""Collaborators that bind scopes and evaluate module bodies."""

from __future__ import annotations

import inspect
from typing import Any, Protocol, Sequence

from shellmod.errors import InvalidInputError
from shellmod.registry.types import Scope

__all__ = ["ScopeFactory", "DefaultScopeFactory", "ScriptExecutor", "CallableExecutor"]


class ScopeFactory(Protocol):
    def create_child_scope(self, parent: Scope | None) -> Scope: ...


class DefaultScopeFactory:
    """Creates plain child scopes."""

    def create_child_scope(self, parent: Scope | None) -> Scope:
        return Scope(parent=parent)


class ScriptExecutor(Protocol):
    def invoke(self, body: Any, scope: Scope, arguments: Sequence[Any], output: list[Any]) -> None:
        """Evaluate ``body`` in ``scope``, appending what it produces to ``output``.

        Raises:
            ModuleExitRequest: If the body asks to exit with a code.
        """
        ...


class CallableExecutor:
    """Runs Python callables as module bodies.

    The body is called as ``body(scope, *arguments)``. A returned iterable
    (including a generator) is streamed into ``output`` one item at a time,
    so items produced before an exit request are kept. Any other non-None
    return value is a single result.
    """

    def invoke(self, body: Any, scope: Scope, arguments: Sequence[Any], output: list[Any]) -> None:
        if not callable(body):
            raise InvalidInputError(message=f"Module body must be callable, got {type(body).__name__}")

        result = body(scope, *arguments)
        if result is None:
            return
        if inspect.isgenerator(result) or isinstance(result, (list, tuple)):
            for item in result:
                output.append(item)
        else:
            output.append(result)
