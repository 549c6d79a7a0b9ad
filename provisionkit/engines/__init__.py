"""
Engines: host tool discovery and command generation.
"""

from .base import CompressionEngine, DownloadEngine, Engine, ShellEngine
from .catalog import ROLES, EngineCatalog, build_catalog
from .commands import (
    download_command,
    list_archive_command,
    package_command,
    parse_archive_listing,
    shell_command,
    unpack_command,
)
from .compression import SevenZipEngine, TarEngine
from .download import CurlEngine, FetchEngine, PowerShellEngine, WgetEngine
from .listing import parse_7z_listing, parse_tar_listing
from .prober import (
    EngineSet,
    ensure_engines,
    get_engine_set,
    probe_engines,
    reset_engines,
    set_engine_set,
)
from .shell import BusyBoxShellEngine, PosixShellEngine

__all__ = [
    "Engine",
    "DownloadEngine",
    "CompressionEngine",
    "ShellEngine",
    "ROLES",
    "EngineCatalog",
    "build_catalog",
    "download_command",
    "unpack_command",
    "package_command",
    "list_archive_command",
    "parse_archive_listing",
    "shell_command",
    "SevenZipEngine",
    "TarEngine",
    "CurlEngine",
    "WgetEngine",
    "FetchEngine",
    "PowerShellEngine",
    "parse_7z_listing",
    "parse_tar_listing",
    "EngineSet",
    "probe_engines",
    "ensure_engines",
    "get_engine_set",
    "set_engine_set",
    "reset_engines",
    "PosixShellEngine",
    "BusyBoxShellEngine",
]
