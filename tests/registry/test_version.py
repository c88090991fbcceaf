"""Tests for ModuleVersion parsing, ordering and maximum-version wildcards."""

from __future__ import annotations

import pytest

from shellmod.errors import InvalidInputError
from shellmod.registry.version import MAX_VERSION_PART, ModuleVersion, maximum_version_bound


class TestParse:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1.0", ModuleVersion(1, 0)),
            ("1.2.3", ModuleVersion(1, 2, 3)),
            ("1.2.3.4", ModuleVersion(1, 2, 3, 4)),
            (" 10.0 ", ModuleVersion(10, 0)),
        ],
    )
    def test_valid(self, text: str, expected: ModuleVersion) -> None:
        assert ModuleVersion.parse(text) == expected

    @pytest.mark.parametrize(
        "text", ["1", "1.2.3.4.5", "a.b", "1.-1", "", "1..2", "1_0.0", "+1.0", "1. 0", "1.2147483648"]
    )
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidInputError):
            ModuleVersion.parse(text)

    def test_passes_versions_through(self) -> None:
        version = ModuleVersion(3, 1)
        assert ModuleVersion.parse(version) is version

    def test_str_omits_unspecified_parts(self) -> None:
        assert str(ModuleVersion(1, 2)) == "1.2"
        assert str(ModuleVersion(1, 2, 3, 4)) == "1.2.3.4"


class TestOrdering:
    def test_numeric_ordering(self) -> None:
        assert ModuleVersion.parse("1.10") > ModuleVersion.parse("1.9")

    def test_unspecified_parts_sort_first(self) -> None:
        assert ModuleVersion.parse("1.0") < ModuleVersion.parse("1.0.0")
        assert ModuleVersion.parse("1.0.0") < ModuleVersion.parse("1.0.0.0")

    def test_equality(self) -> None:
        assert ModuleVersion.parse("2.0") == ModuleVersion(2, 0)
        assert ModuleVersion.parse("2.0") != ModuleVersion.parse("2.0.0")


class TestMaximumVersionBound:
    def test_plain_version(self) -> None:
        assert maximum_version_bound("3.0") == ModuleVersion(3, 0)

    def test_wildcard_minor(self) -> None:
        assert maximum_version_bound("3.*") == ModuleVersion(3, MAX_VERSION_PART)
        assert maximum_version_bound("3.*") > ModuleVersion(3, 99, 1, 1)
        assert maximum_version_bound("3.*") < ModuleVersion(4, 0)

    def test_wildcard_build(self) -> None:
        assert maximum_version_bound("1.2.*") == ModuleVersion(1, 2, MAX_VERSION_PART)

    def test_bare_wildcard(self) -> None:
        assert maximum_version_bound("*") == ModuleVersion(MAX_VERSION_PART, MAX_VERSION_PART)

    def test_invalid(self) -> None:
        with pytest.raises(InvalidInputError):
            maximum_version_bound("x.*")
