"""
Platform detection for ProvisionKit.

The engine catalog uses this to decide which platform-specific candidates
(PowerShell downloader, bundled 7-Zip and BusyBox on Windows) to include.

Usage:
    from provisionkit.core.platform import detect_platform

    info = detect_platform()
    if info.is_windows:
        ...
"""

import functools
import platform
from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformInfo:
    """
    Platform information relevant to engine selection.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos', 'freebsd', ...)
    """

    os: str

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.
    """
    return PlatformInfo(os=_detect_os())


def clear_platform_cache():
    """Clear the cached platform detection result."""
    detect_platform.cache_clear()


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name. Unknown systems are returned lowercased as-is.
    """
    system = platform.system().lower()

    if system == "windows":
        return "windows"
    elif system == "darwin":
        return "macos"
    return system
