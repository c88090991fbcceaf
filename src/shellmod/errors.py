"""Error hierarchy for the shellmod engine."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "ModuleError",
    "ConfigNotFoundError",
    "ConfigError",
    "InvalidInputError",
    "ModuleNestingDepthError",
    "ModuleExitRequest",
    "PathProviderError",
    "ItemNotFoundError",
    "DriveNotFoundError",
    "UnsupportedPathError",
    "ErrorCodes",
]


class ModuleError(Exception):
    """Base error for all shellmod errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
        trace_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.trace_id = trace_id
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(ModuleError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(ModuleError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class InvalidInputError(ModuleError):
    """Raised for invalid input."""

    def __init__(self, message: str = "Invalid input", **kwargs: Any) -> None:
        super().__init__(code="GENERAL_INVALID_INPUT", message=message, **kwargs)


class ModuleNestingDepthError(ModuleError):
    """Raised when module loads nest deeper than the configured limit."""

    def __init__(self, path: str, max_depth: int, **kwargs: Any) -> None:
        super().__init__(
            code="MODULE_TOO_DEEPLY_NESTED",
            message=(
                f"Cannot load module '{path}': modules are nested more than "
                f"{max_depth} levels deep"
            ),
            details={"path": path, "max_depth": max_depth},
            **kwargs,
        )

    @property
    def path(self) -> str:
        """The module path whose load was rejected."""
        return self.details["path"]

    @property
    def max_depth(self) -> int:
        """The configured maximum nesting depth."""
        return self.details["max_depth"]


class ModuleExitRequest(ModuleError):
    """Raised by a module body to end its evaluation with a numeric exit code.

    Module creation absorbs this error and records the code as the last exit
    code of the calling session.
    """

    def __init__(self, exit_code: int = 0, **kwargs: Any) -> None:
        super().__init__(
            code="MODULE_EXIT_REQUESTED",
            message=f"Module body requested exit with code {exit_code}",
            details={"exit_code": exit_code},
            **kwargs,
        )

    @property
    def exit_code(self) -> int:
        """The requested exit code."""
        return self.details["exit_code"]


class PathProviderError(ModuleError):
    """Base error for path provider failures."""


class ItemNotFoundError(PathProviderError):
    """Raised by a path provider when no item exists at a path."""

    def __init__(self, path: str, **kwargs: Any) -> None:
        super().__init__(
            code="PATH_NOT_FOUND",
            message=f"Cannot find path '{path}' because it does not exist",
            details={"path": path},
            **kwargs,
        )


class DriveNotFoundError(PathProviderError):
    """Raised by a path provider when the drive of a path does not exist."""

    def __init__(self, drive: str, **kwargs: Any) -> None:
        super().__init__(
            code="DRIVE_NOT_FOUND",
            message=f"Cannot find drive '{drive}'",
            details={"drive": drive},
            **kwargs,
        )


class UnsupportedPathError(PathProviderError):
    """Raised by a path provider for syntactically unsupported paths."""

    def __init__(self, path: str, **kwargs: Any) -> None:
        super().__init__(
            code="PATH_NOT_SUPPORTED",
            message=f"The given path's format is not supported: {path}",
            details={"path": path},
            **kwargs,
        )


class ErrorCodes:
    """All shellmod error codes as constants.

    Example:
        if error.code == ErrorCodes.MODULE_TOO_DEEPLY_NESTED:
            abort_import()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    GENERAL_INVALID_INPUT = "GENERAL_INVALID_INPUT"
    MODULE_TOO_DEEPLY_NESTED = "MODULE_TOO_DEEPLY_NESTED"
    MODULE_EXIT_REQUESTED = "MODULE_EXIT_REQUESTED"
    PATH_NOT_FOUND = "PATH_NOT_FOUND"
    DRIVE_NOT_FOUND = "DRIVE_NOT_FOUND"
    PATH_NOT_SUPPORTED = "PATH_NOT_SUPPORTED"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
