"""Built-in module locations and module file naming."""

from __future__ import annotations

import os
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from shellmod.modpath.pathset import PATH_SEPARATOR

if TYPE_CHECKING:
    from shellmod.config import Config

__all__ = [
    "PRODUCT_DIRECTORY",
    "MODULE_DIRECTORY",
    "MODULE_EXTENSIONS",
    "SystemPathCache",
    "ModuleLocations",
    "personal_module_path",
    "system_wide_module_path",
    "vendor_module_path",
    "combine_system_module_paths",
    "is_module_extension",
    "get_module_name",
]

PRODUCT_DIRECTORY = "shellmod"
MODULE_DIRECTORY = "Modules"

# Extensions of every file that can be imported as a module.
MODULE_EXTENSIONS = (".psd1", ".psm1", ".ps1", ".cdxml", ".xaml", ".dll")


class SystemPathCache:
    """Process-wide memo for the system-wide module path.

    The first caller to publish a value wins; later publishes return the
    value already stored. There is no invalidation.
    """

    def __init__(self) -> None:
        self._value: str | None = None
        self._lock = threading.Lock()

    @property
    def value(self) -> str | None:
        return self._value

    def publish(self, value: str) -> str:
        """Store ``value`` unless another value is already stored; return the stored value."""
        with self._lock:
            if self._value is None:
                self._value = value
            return self._value


_system_path_cache = SystemPathCache()


def _engine_home(config: Config | None) -> str | None:
    home = config.get("engine.home") if config is not None else None
    if not home:
        home = os.environ.get("SHELLMOD_HOME")
    if not home:
        home = str(Path(__file__).resolve().parent.parent)
    return home or None


def personal_module_path(config: Config | None = None) -> str:
    """The per-user module location.

    ``~/Documents/shellmod/Modules`` on Windows, otherwise
    ``$XDG_DATA_HOME/shellmod/Modules``.
    """
    configured = config.get("module_path.personal") if config is not None else None
    if configured:
        return str(configured)

    if sys.platform == "win32":
        root = Path.home() / "Documents"
    else:
        root = Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return str(root / PRODUCT_DIRECTORY / MODULE_DIRECTORY)


def system_wide_module_path(
    config: Config | None = None,
    cache: SystemPathCache | None = None,
) -> str | None:
    """The engine's own module location, ``<engine home>/Modules``.

    The value is computed once per cache and never recomputed.
    """
    cache = cache if cache is not None else _system_path_cache
    if cache.value is not None:
        return cache.value

    home = _engine_home(config)
    if home is None:
        return None
    if sys.platform == "win32":
        # 32-bit installers register the redirected directory; fold it back.
        home = home.lower().replace("\\syswow64\\", "\\system32\\")
    return cache.publish(os.path.join(home, MODULE_DIRECTORY))


def vendor_module_path(config: Config | None = None) -> str:
    """The vendor module location; empty when the platform has none."""
    configured = config.get("module_path.vendor") if config is not None else None
    if configured is not None:
        return str(configured)

    if sys.platform != "win32":
        return ""
    program_files = os.environ.get("ProgramFiles")
    if not program_files:
        return ""
    return os.path.join(program_files, PRODUCT_DIRECTORY, MODULE_DIRECTORY)


def combine_system_module_paths(vendor: str | None, system_wide: str | None) -> str | None:
    """Join the vendor and system-wide locations, vendor first."""
    if vendor and system_wide:
        return vendor + PATH_SEPARATOR + system_wide
    return system_wide or vendor or None


@dataclass(frozen=True)
class ModuleLocations:
    """The built-in locations that take part in module-path resolution.

    Attributes:
        personal: Default per-user location, used when no user path is set.
        system_wide: The engine's own module location.
        vendor: Additional built-in location, placed before ``system_wide``.
        system_first: Whether ``system_wide`` is forced to the front of an
            existing process path.
    """

    personal: str
    system_wide: str | None
    vendor: str = ""
    system_first: bool = False

    @property
    def system_paths(self) -> str | None:
        return combine_system_module_paths(self.vendor, self.system_wide)

    @classmethod
    def from_config(cls, config: Config | None = None, cache: SystemPathCache | None = None) -> ModuleLocations:
        system_first = config.get("module_path.system_first", False) if config is not None else False
        return cls(
            personal=personal_module_path(config),
            system_wide=system_wide_module_path(config, cache),
            vendor=vendor_module_path(config),
            system_first=bool(system_first),
        )


def is_module_extension(extension: str) -> bool:
    """Return True if the extension belongs to an importable module file."""
    return extension.lower() in MODULE_EXTENSIONS


def get_module_name(path: str | None) -> str:
    """Derive a module name from its path.

    The file name is returned with a module extension removed; other
    extensions are kept.
    """
    file_name = os.path.basename(path) if path else ""
    stem, ext = os.path.splitext(file_name)
    if ext and is_module_extension(ext):
        return stem
    return file_name
