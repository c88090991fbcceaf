"""Version-constrained module specifications and matching."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from shellmod.errors import InvalidInputError
from shellmod.registry.version import ModuleVersion, maximum_version_bound

if TYPE_CHECKING:
    from shellmod.registry.types import ModuleRecord

__all__ = ["ModuleSpecification", "matches_specification"]


class ModuleSpecification(BaseModel):
    """A module query: a name plus an optional GUID and version constraint.

    ``required_version`` is meant to be used on its own; ``version`` (a
    minimum) and ``maximum_version`` may be combined into an inclusive
    range. ``maximum_version`` keeps its text so a trailing ``*`` wildcard
    survives until matching.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    name: str = Field(validation_alias=AliasChoices("name", "ModuleName", "Name"), min_length=1)
    guid: Optional[UUID] = Field(default=None, validation_alias=AliasChoices("guid", "GUID", "Guid"))
    version: Optional[ModuleVersion] = Field(
        default=None, validation_alias=AliasChoices("version", "ModuleVersion")
    )
    required_version: Optional[ModuleVersion] = Field(
        default=None, validation_alias=AliasChoices("required_version", "RequiredVersion")
    )
    maximum_version: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("maximum_version", "MaximumVersion")
    )

    @field_validator("version", "required_version", mode="before")
    @classmethod
    def _parse_version(cls, value: Any) -> ModuleVersion | None:
        if value is None:
            return None
        try:
            return ModuleVersion.parse(value)
        except InvalidInputError as e:
            raise ValueError(e.message) from e

    @field_validator("maximum_version", mode="before")
    @classmethod
    def _check_maximum_version(cls, value: Any) -> str | None:
        if value is None:
            return None
        try:
            maximum_version_bound(value)
        except InvalidInputError as e:
            raise ValueError(e.message) from e
        return str(value)

    @property
    def maximum_version_bound(self) -> ModuleVersion | None:
        """The parsed upper bound, with any wildcard expanded."""
        if self.maximum_version is None:
            return None
        return maximum_version_bound(self.maximum_version)

    @classmethod
    def from_value(cls, value: str | dict[str, Any] | ModuleSpecification) -> ModuleSpecification:
        """Build a specification from a bare name, a mapping, or a specification.

        Raises:
            InvalidInputError: If the value does not describe a valid specification.
        """
        if isinstance(value, ModuleSpecification):
            return value
        if isinstance(value, str):
            value = {"name": value}
        try:
            return cls.model_validate(value)
        except ValidationError as e:
            raise InvalidInputError(message=f"Invalid module specification: {e}") from e

    def __str__(self) -> str:
        constraints = []
        if self.required_version is not None:
            constraints.append(f"=={self.required_version}")
        if self.version is not None:
            constraints.append(f">={self.version}")
        if self.maximum_version is not None:
            constraints.append(f"<={self.maximum_version}")
        return self.name + (f" ({', '.join(constraints)})" if constraints else "")


def matches_specification(record: ModuleRecord | None, spec: ModuleSpecification | None) -> bool:
    """Return True if a loaded module satisfies a specification.

    The name is compared ignoring case and the GUID must match when the
    specification has one. A specification that sets ``required_version``
    together with ``version`` or ``maximum_version`` matches only through
    the exact ``required_version`` clause.
    """
    if record is None or spec is None:
        return False
    if record.name.casefold() != spec.name.casefold():
        return False
    if spec.guid is not None and spec.guid != record.guid:
        return False

    minimum = spec.version
    required = spec.required_version
    maximum = spec.maximum_version_bound

    if minimum is None and required is None and maximum is None:
        return True
    if required is not None and required == record.version:
        return True
    if required is not None:
        return False
    if maximum is None:
        return minimum <= record.version
    if minimum is None:
        return record.version <= maximum
    return minimum <= record.version <= maximum
