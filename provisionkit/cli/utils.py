"""
Shared utilities for CLI commands.
"""

import logging
from pathlib import Path
from typing import Optional

from provisionkit.core.config import DEFAULT_CONFIG_FILENAME, load_engine_overrides
from provisionkit.engines.prober import EngineSet, probe_engines
from provisionkit.transfer.provisioner import ArchiveProvisioner

logger = logging.getLogger(__name__)


def resolve_config_file(args) -> Optional[Path]:
    """
    Pick the configuration file for a command.

    An explicit ``--config`` always wins; otherwise ``./provisionkit.yaml``
    is used when it exists.
    """
    config = getattr(args, "config", None)
    if config:
        return Path(config)

    default_config = Path.cwd() / DEFAULT_CONFIG_FILENAME
    if default_config.exists():
        logger.debug(f"Using configuration file {default_config}")
        return default_config
    return None


def probe_from_args(args) -> EngineSet:
    """
    Probe engines using the overrides the command line points at.

    Raises:
        ConfigError: If the configuration file is malformed
        EngineNotFoundError: If a role has no usable engine
    """
    overrides = load_engine_overrides(config_file=resolve_config_file(args))
    return probe_engines(verbose=bool(getattr(args, "verbose", False)), overrides=overrides)


def provisioner_from_args(args) -> ArchiveProvisioner:
    """Probe engines and build a provisioner honoring --verbose."""
    engines = probe_from_args(args)
    return ArchiveProvisioner(engines, verbose=bool(getattr(args, "verbose", False)))


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        print(message.encode("ascii", errors="replace").decode("ascii"), file=file)
