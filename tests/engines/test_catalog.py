"""
Unit tests for the engine catalog.
"""

from pathlib import Path

import pytest

from provisionkit.core.config import TOOLS_DIR_ENV
from provisionkit.core.platform import PlatformInfo
from provisionkit.engines.base import CompressionEngine, DownloadEngine, ShellEngine
from provisionkit.engines.catalog import ROLES, EngineCatalog, build_catalog
from provisionkit.engines.download import WINDOWS_POWERSHELL_PATH

LINUX = PlatformInfo("linux")
WINDOWS = PlatformInfo("windows")


def display_names(engines):
    return [e.display_name for e in engines]


class TestBuildCatalog:
    """Test build_catalog for each platform family."""

    def test_posix_download_order(self):
        catalog = build_catalog(LINUX)
        assert display_names(catalog.download) == ["curl", "wget", "fetch"]

    def test_posix_compression_prefers_tar(self):
        catalog = build_catalog(LINUX)
        assert display_names(catalog.compression) == ["tar", "7z"]

    def test_posix_shell(self):
        catalog = build_catalog(LINUX)
        assert display_names(catalog.shell) == ["sh"]

    def test_windows_download_prefers_powershell(self, tmp_path):
        catalog = build_catalog(WINDOWS, tools_dir=tmp_path)

        assert display_names(catalog.download) == [
            "powershell",
            WINDOWS_POWERSHELL_PATH,
            "curl",
            "wget",
            "fetch",
        ]

    def test_windows_compression_prefers_bundled_7z(self, tmp_path):
        catalog = build_catalog(WINDOWS, tools_dir=tmp_path)

        assert display_names(catalog.compression) == [
            str(tmp_path / "7z.exe"),
            "7z",
            "tar",
        ]
        assert [e.name for e in catalog.compression] == ["7z", "7z", "tar"]

    def test_windows_shell_falls_back_to_busybox(self, tmp_path):
        catalog = build_catalog(WINDOWS, tools_dir=tmp_path)

        assert display_names(catalog.shell) == ["sh", str(tmp_path / "busybox.exe")]

    def test_windows_tools_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(TOOLS_DIR_ENV, str(tmp_path))

        catalog = build_catalog(WINDOWS)

        assert catalog.compression[0].executable == str(tmp_path / "7z.exe")

    def test_candidates_match_their_role(self):
        """Test every candidate implements the interface of its list."""
        catalog = build_catalog(WINDOWS, tools_dir=Path("tools"))
        interfaces = {
            "download": DownloadEngine,
            "compression": CompressionEngine,
            "shell": ShellEngine,
        }
        for role in ROLES:
            assert all(
                isinstance(e, interfaces[role]) for e in catalog.candidates(role)
            )


class TestEngineCatalog:
    """Test EngineCatalog accessors."""

    def test_unknown_role(self):
        with pytest.raises(KeyError):
            EngineCatalog().candidates("upload")
