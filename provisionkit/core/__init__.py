"""
Core functionality for ProvisionKit.

This package contains the foundational modules that the engines and the
transfer workflow depend on.
"""

from .command import Command

from .config import (
    EngineOverrides,
    load_engine_overrides,
    get_tools_dir,
)

from .execution import (
    CommandResult,
    run_command,
    probe_command,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .verification import (
    compute_file_hash,
    validate_hash,
    verify_file,
)

from .exceptions import (
    ProvisionKitError,
    ConfigError,
    ConfigurationWarning,
    EngineError,
    EngineNotFoundError,
    EngineNotProbedError,
    TransferError,
    IntegrityError,
    HashFormatError,
    ArchiveError,
    UnpackError,
    PackageError,
    ListingError,
    ListingParseError,
)

__all__ = [
    "Command",
    "EngineOverrides",
    "load_engine_overrides",
    "get_tools_dir",
    "CommandResult",
    "run_command",
    "probe_command",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "compute_file_hash",
    "validate_hash",
    "verify_file",
    "ProvisionKitError",
    "ConfigError",
    "ConfigurationWarning",
    "EngineError",
    "EngineNotFoundError",
    "EngineNotProbedError",
    "TransferError",
    "IntegrityError",
    "HashFormatError",
    "ArchiveError",
    "UnpackError",
    "PackageError",
    "ListingError",
    "ListingParseError",
]
