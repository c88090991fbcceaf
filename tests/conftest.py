"""Shared test fixtures for the shellmod test suite."""

from __future__ import annotations

from typing import Any

import pytest

from shellmod.modpath.locations import ModuleLocations
from shellmod.registry import ModuleRegistry, ModuleVersion, SessionState


# === Locations ===


@pytest.fixture
def locations() -> ModuleLocations:
    """Built-in locations with a vendor path and no forced system-first ordering."""
    return ModuleLocations(personal="/home/u/Modules", system_wide="/sys", vendor="/vendor")


@pytest.fixture
def system_first_locations() -> ModuleLocations:
    """Built-in locations that force the system-wide path to the front."""
    return ModuleLocations(
        personal="/home/u/Modules",
        system_wide="/sys",
        vendor="/vendor",
        system_first=True,
    )


# === Registry ===


def noop_body(scope: Any) -> None:
    return None


@pytest.fixture
def registry() -> ModuleRegistry:
    """An empty registry with its own top-level session."""
    return ModuleRegistry(session=SessionState())


@pytest.fixture
def populated_registry(registry: ModuleRegistry) -> ModuleRegistry:
    """Registry with a few top-level modules of different versions."""
    registry.create_module("Storage", "/mods/Storage/Storage.psm1", noop_body, version="2.0")
    registry.create_module("Network", "/mods/Network/Network.psm1", noop_body, version="1.5.2")
    registry.create_module("netutils", "/mods/netutils/netutils.psm1", noop_body, version="0.9")
    return registry


@pytest.fixture
def version_2() -> ModuleVersion:
    return ModuleVersion(2, 0)
