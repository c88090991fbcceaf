"""Four-part module versions."""

from __future__ import annotations

from dataclasses import dataclass

from shellmod.errors import InvalidInputError

__all__ = ["ModuleVersion", "MAX_VERSION_PART", "maximum_version_bound"]

MAX_VERSION_PART = 2147483647


@dataclass(frozen=True, order=True)
class ModuleVersion:
    """A ``major.minor[.build[.revision]]`` version.

    Unspecified parts are stored as -1, so ``1.0`` sorts before ``1.0.0``.
    """

    major: int
    minor: int
    build: int = -1
    revision: int = -1

    @classmethod
    def parse(cls, text: str | ModuleVersion) -> ModuleVersion:
        """Parse a version string with two to four numeric parts.

        Raises:
            InvalidInputError: If the text is not a valid version.
        """
        if isinstance(text, ModuleVersion):
            return text

        parts = str(text).strip().split(".")
        if not 2 <= len(parts) <= 4:
            raise InvalidInputError(message=f"Invalid version: '{text}'")
        if not all(p.isascii() and p.isdigit() for p in parts):
            raise InvalidInputError(message=f"Invalid version: '{text}'")
        numbers = [int(p) for p in parts]
        if any(n > MAX_VERSION_PART for n in numbers):
            raise InvalidInputError(message=f"Invalid version: '{text}'")
        return cls(*numbers)

    def __str__(self) -> str:
        parts = [self.major, self.minor, self.build, self.revision]
        return ".".join(str(p) for p in parts if p >= 0)


def maximum_version_bound(text: str | ModuleVersion) -> ModuleVersion:
    """Parse a maximum version that may end in a ``*`` wildcard.

    The wildcard stands for the largest possible part, so ``3.*`` admits
    every 3.x version.
    """
    if isinstance(text, ModuleVersion):
        return text
    value = str(text).strip()
    if value.endswith("*"):
        value = value[:-1] + str(MAX_VERSION_PART)
        if "." not in value:
            value += "." + str(MAX_VERSION_PART)
    return ModuleVersion.parse(value)
