"""
Centralized exception hierarchy for ProvisionKit.

Every failure of an external tool is normalized into one of these
exceptions. Raw tool output is only ever logged, never parsed for control
flow.
"""

from typing import Dict, List, Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class ProvisionKitError(Exception):
    """Base exception for all ProvisionKit errors."""

    pass


class ConfigError(ProvisionKitError):
    """Configuration file could not be read or parsed."""

    pass


class ConfigurationWarning(UserWarning):
    """Non-fatal configuration problem, such as an unknown engine override."""

    pass


# ============================================================================
# Engine Exceptions
# ============================================================================


class EngineError(ProvisionKitError):
    """Base exception for engine probing and binding errors."""

    pass


class EngineNotFoundError(EngineError):
    """Raised when no usable engine was found for one or more roles."""

    def __init__(self, missing: Dict[str, List[str]]):
        self.missing = missing
        lines = []
        for role, names in missing.items():
            lines.append(
                f"No {role} engines found. We looked for: {', '.join(names)}. "
                "Install one and ensure it is available on the path."
            )
        super().__init__("\n".join(lines))


class EngineNotProbedError(EngineError):
    """Raised when a command generator is used before probing."""

    def __init__(self, entry_point: str):
        self.entry_point = entry_point
        super().__init__(f"Call probe_engines() before {entry_point}()")


# ============================================================================
# Transfer Exceptions
# ============================================================================


class TransferError(ProvisionKitError):
    """Download process failed or could not be started."""

    def __init__(self, url: str, destination: str):
        self.url = url
        self.destination = destination
        super().__init__(f"Could not download {url} to {destination}")


class IntegrityError(ProvisionKitError):
    """Downloaded file does not match its expected hash."""

    def __init__(
        self,
        path: str,
        expected: str,
        actual: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.path = path
        self.expected = expected
        self.actual = actual
        if message is None:
            message = f"Hash mismatch for {path}: expected {expected}"
            if actual:
                message += f", got {actual}"
        super().__init__(message)


class HashFormatError(IntegrityError):
    """Expected hash is malformed for its algorithm."""

    def __init__(self, path: str, expected: str, algorithm: str):
        self.algorithm = algorithm
        super().__init__(
            path,
            expected,
            message=f"Invalid hash format for {algorithm}: {expected}",
        )


# ============================================================================
# Archive Exceptions
# ============================================================================


class ArchiveError(ProvisionKitError):
    """Base exception for compression engine failures."""

    pass


class UnpackError(ArchiveError):
    """Extraction process failed."""

    def __init__(self, source: str, destination: str):
        self.source = source
        self.destination = destination
        super().__init__(f"Could not unpack {source} into {destination}")


class PackageError(ArchiveError):
    """Packaging process failed."""

    def __init__(self, source: str, destination: str):
        self.source = source
        self.destination = destination
        super().__init__(f"Could not package {source} into {destination}")


class ListingError(ArchiveError):
    """Archive listing could not be produced."""

    pass


class ListingParseError(ListingError):
    """Listing output did not have the structure the parser expects."""

    pass
