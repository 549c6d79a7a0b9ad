"""
Engine catalog: ordered candidate engines per role.

The order of each list is the probing priority. Platform-specific variants
(alternate executable paths, bundled tools) are extra entries in these lists
so the prober never needs platform branches of its own.

Usage:
    from provisionkit.engines.catalog import build_catalog

    catalog = build_catalog()
    for engine in catalog.download:
        print(engine.display_name)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from provisionkit.core.config import get_tools_dir
from provisionkit.core.platform import PlatformInfo, detect_platform
from provisionkit.engines.base import (
    CompressionEngine,
    DownloadEngine,
    Engine,
    ShellEngine,
)
from provisionkit.engines.compression import SevenZipEngine, TarEngine
from provisionkit.engines.download import (
    WINDOWS_POWERSHELL_PATH,
    CurlEngine,
    FetchEngine,
    PowerShellEngine,
    WgetEngine,
)
from provisionkit.engines.shell import BusyBoxShellEngine, PosixShellEngine

ROLES = ("download", "compression", "shell")


@dataclass
class EngineCatalog:
    """
    Candidate engines for each role, in priority order.

    Attributes:
        download: Download engine candidates
        compression: Compression engine candidates
        shell: Shell engine candidates
    """

    download: List[DownloadEngine] = field(default_factory=list)
    compression: List[CompressionEngine] = field(default_factory=list)
    shell: List[ShellEngine] = field(default_factory=list)

    def candidates(self, role: str) -> Sequence[Engine]:
        """
        Get the candidate list for a role.

        Raises:
            KeyError: If role is not one of ROLES
        """
        if role not in ROLES:
            raise KeyError(f"Unknown engine role: {role}")
        return getattr(self, role)


def build_catalog(
    platform_info: Optional[PlatformInfo] = None, tools_dir: Optional[Path] = None
) -> EngineCatalog:
    """
    Build the candidate lists for a platform.

    Args:
        platform_info: Target platform (auto-detected if None)
        tools_dir: Directory with bundled tools (defaults to get_tools_dir())

    Returns:
        EngineCatalog with platform-specific candidates first
    """
    platform_info = platform_info or detect_platform()

    catalog = EngineCatalog(
        download=[CurlEngine(), WgetEngine(), FetchEngine()],
        compression=[TarEngine(), SevenZipEngine()],
        shell=[PosixShellEngine()],
    )

    if platform_info.is_windows:
        tools_dir = Path(tools_dir) if tools_dir is not None else get_tools_dir()

        catalog.download[:0] = [
            PowerShellEngine("powershell"),
            PowerShellEngine(WINDOWS_POWERSHELL_PATH),
        ]

        # 7-Zip is preferred over tar on Windows, bundled copy first
        catalog.compression = [
            SevenZipEngine(str(tools_dir / "7z.exe")),
            SevenZipEngine("7z"),
            TarEngine(),
        ]

        # busybox is only a fallback for hosts without a native sh on PATH
        catalog.shell.append(BusyBoxShellEngine(str(tools_dir / "busybox.exe")))

    return catalog
