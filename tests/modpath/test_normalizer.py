"""Tests for module-path segment normalisation."""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from shellmod.errors import DriveNotFoundError, ItemNotFoundError, UnsupportedPathError
from shellmod.modpath.normalizer import (
    LocalFileSystemProvider,
    ModulePathNormalizer,
    PathProvider,
    ResolvedPath,
    SkippedPath,
    SkipReason,
    is_unc_path,
)


def _provider(result=None, error: Exception | None = None, loaded: bool = True) -> MagicMock:
    provider = MagicMock()
    provider.name = "FileSystem"
    provider.is_loaded.return_value = loaded
    if error is not None:
        provider.resolve_path.side_effect = error
    else:
        provider.resolve_path.return_value = result
    return provider


class TestUncPaths:
    @pytest.mark.parametrize("path", ["\\\\server\\share", "//server/share"])
    def test_detected(self, path: str) -> None:
        assert is_unc_path(path)

    @pytest.mark.parametrize("path", ["C:\\mods", "/opt/mods", "\\\\", "\\\\\\x"])
    def test_not_unc(self, path: str) -> None:
        assert not is_unc_path(path)

    def test_returned_verbatim_without_provider_call(self) -> None:
        provider = _provider()
        result = ModulePathNormalizer(provider).normalize("  \\\\server\\share\\mods ", set())
        assert result == ResolvedPath("\\\\server\\share\\mods")
        provider.resolve_path.assert_not_called()

    def test_unc_behind_provider_prefix(self) -> None:
        result = ModulePathNormalizer(_provider()).normalize("FileSystem::\\\\server\\share", set())
        assert result == ResolvedPath("\\\\server\\share")


class TestProviderResolution:
    def test_first_result_is_used(self) -> None:
        provider = _provider(("FileSystem", ["/opt/mods", "/opt/other"]))
        result = ModulePathNormalizer(provider).normalize(" /opt/./mods/ ", set())
        assert result == ResolvedPath("/opt/mods")

    def test_prefix_stripped_and_wildcards_escaped(self) -> None:
        provider = _provider(("FileSystem", ["/opt/m[1]"]))
        ModulePathNormalizer(provider).normalize("filesystem::/opt/m[1]", set())
        provider.resolve_path.assert_called_once_with("/opt/m[[]1]")

    @pytest.mark.parametrize(
        ("error", "reason"),
        [
            (ItemNotFoundError(path="/x"), SkipReason.NOT_FOUND),
            (DriveNotFoundError(drive="Q"), SkipReason.DRIVE_NOT_FOUND),
            (UnsupportedPathError(path="c:\\a\\z:\\b"), SkipReason.UNSUPPORTED),
        ],
    )
    def test_provider_errors_become_skips(self, error: Exception, reason: SkipReason) -> None:
        result = ModulePathNormalizer(_provider(error=error)).normalize("/x", set())
        assert result == SkippedPath("/x", reason)
        assert result.path is None

    def test_other_errors_propagate(self) -> None:
        normalizer = ModulePathNormalizer(_provider(error=PermissionError("denied")))
        with pytest.raises(PermissionError):
            normalizer.normalize("/x", set())

    def test_non_filesystem_provider_skipped(self) -> None:
        provider = _provider(("Registry", ["HKLM:\\Software"]))
        result = ModulePathNormalizer(provider).normalize("HKLM:\\Software", set())
        assert result == SkippedPath("HKLM:\\Software", SkipReason.NOT_FILESYSTEM)

    def test_duplicates_within_a_pass(self) -> None:
        provider = _provider(("FileSystem", ["/opt/mods"]))
        normalizer = ModulePathNormalizer(provider)
        seen: set[str] = set()

        assert normalizer.normalize("/opt/mods", seen) == ResolvedPath("/opt/mods")
        assert normalizer.normalize("/OPT/mods/", seen) == SkippedPath("/OPT/mods/", SkipReason.DUPLICATE)

    def test_blank_segment(self) -> None:
        assert ModulePathNormalizer(_provider()).normalize("   ", set()).path is None


class TestWithoutProvider:
    def test_existing_directory(self, tmp_path: Path) -> None:
        result = ModulePathNormalizer(None).normalize(f" {tmp_path} ", set())
        assert result == ResolvedPath(str(tmp_path))

    def test_missing_directory(self, tmp_path: Path) -> None:
        missing = str(tmp_path / "missing")
        assert ModulePathNormalizer(None).normalize(missing, set()) == SkippedPath(missing, SkipReason.NOT_FOUND)

    def test_unloaded_provider_falls_back_to_disk(self, tmp_path: Path) -> None:
        provider = _provider(loaded=False)
        result = ModulePathNormalizer(provider).normalize(str(tmp_path), set())
        assert result == ResolvedPath(str(tmp_path))
        provider.resolve_path.assert_not_called()


class TestResolvedPaths:
    def test_keeps_only_resolved(self, tmp_path: Path) -> None:
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        segments = [str(tmp_path / "a"), str(tmp_path / "missing"), str(tmp_path / "b"), str(tmp_path / "a")]

        result = list(ModulePathNormalizer(LocalFileSystemProvider()).resolved_paths(segments))

        assert result == [str(tmp_path / "a"), str(tmp_path / "b")]


class TestLocalFileSystemProvider:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(LocalFileSystemProvider(), PathProvider)

    def test_resolves_to_absolute_normalised_path(self, tmp_path: Path) -> None:
        (tmp_path / "mods").mkdir()
        name, paths = LocalFileSystemProvider().resolve_path(str(tmp_path / "mods") + "/./")
        assert name == "FileSystem"
        assert paths == [str(tmp_path / "mods")]

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(ItemNotFoundError):
            LocalFileSystemProvider().resolve_path(str(tmp_path / "missing"))

    def test_colon_outside_volume_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedPathError):
            LocalFileSystemProvider().resolve_path("c:\\temp\\Z:\\invalid")

    @pytest.mark.skipif(sys.platform == "win32", reason="colons are legal in POSIX file names only")
    def test_colon_in_posix_directory_name(self, tmp_path: Path) -> None:
        (tmp_path / "a:b").mkdir()
        result = ModulePathNormalizer(LocalFileSystemProvider()).normalize(str(tmp_path / "a:b"), set())
        assert result == ResolvedPath(str(tmp_path / "a:b"))

    def test_nul_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedPathError):
            LocalFileSystemProvider().resolve_path("/opt/\0mods")


class TestSharedSeen:
    def test_duplicates_across_calls(self, tmp_path: Path) -> None:
        normalizer = ModulePathNormalizer(LocalFileSystemProvider())
        seen: set[str] = set()

        assert list(normalizer.resolved_paths([str(tmp_path)], seen)) == [str(tmp_path)]
        assert list(normalizer.resolved_paths([str(tmp_path)], seen)) == []
