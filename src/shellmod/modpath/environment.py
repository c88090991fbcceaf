"""Access to the process, user and machine module-path settings."""

from __future__ import annotations

import enum
import logging
import os
from typing import TYPE_CHECKING, MutableMapping

if TYPE_CHECKING:
    from shellmod.config import Config

logger = logging.getLogger(__name__)

__all__ = ["EnvironmentTarget", "ModulePathEnvironment"]


class EnvironmentTarget(enum.Enum):
    """Scope of a module-path setting."""

    PROCESS = "process"
    USER = "user"
    MACHINE = "machine"


class ModulePathEnvironment:
    """Reads the three module-path scopes and writes back the process scope.

    The process scope is the ``module_path.variable`` environment variable.
    The user and machine scopes come from ``module_path.user`` /
    ``module_path.machine`` in the config, falling back to the
    ``<variable>_USER`` / ``<variable>_MACHINE`` environment variables.
    """

    def __init__(
        self,
        config: Config | None = None,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        self._config = config
        self._environ = environ if environ is not None else os.environ
        self.variable: str = (
            config.get("module_path.variable") if config is not None else None
        ) or "SHELLMOD_MODULE_PATH"

    def get(self, target: EnvironmentTarget) -> str | None:
        """Return the expanded value of a scope, or None if it is unset."""
        if target is EnvironmentTarget.PROCESS:
            value = self._environ.get(self.variable)
        else:
            value = None
            if self._config is not None:
                value = self._config.get(f"module_path.{target.value}")
            if value is None:
                value = self._environ.get(f"{self.variable}_{target.name}")
            if value == "":
                value = None

        if value:
            value = os.path.expandvars(str(value))
        return value

    def set_process(self, value: str) -> None:
        """Write the process-scope module path."""
        logger.info("Setting %s to '%s'", self.variable, value)
        self._environ[self.variable] = value
