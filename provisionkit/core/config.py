"""
Configuration for engine selection.

Engine overrides come from two places, highest precedence first:

1. Environment variables ``PROVISIONKIT_DOWNLOAD_ENGINE`` and
   ``PROVISIONKIT_COMPRESSION_ENGINE``
2. An optional YAML file::

       engines:
         download: wget
         compression: tar

Unknown engine names are not rejected here; the prober ignores them with a
warning.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from provisionkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DOWNLOAD_ENGINE_ENV = "PROVISIONKIT_DOWNLOAD_ENGINE"
COMPRESSION_ENGINE_ENV = "PROVISIONKIT_COMPRESSION_ENGINE"
TOOLS_DIR_ENV = "PROVISIONKIT_TOOLS_DIR"

DEFAULT_CONFIG_FILENAME = "provisionkit.yaml"


@dataclass(frozen=True)
class EngineOverrides:
    """
    Engine names pinned by the user.

    Attributes:
        download: Download engine name (e.g. 'curl'), or None
        compression: Compression engine name (e.g. '7z'), or None
    """

    download: Optional[str] = None
    compression: Optional[str] = None

    def for_role(self, role: str) -> Optional[str]:
        """Get the override for a role name ('download', 'compression', 'shell')."""
        return getattr(self, role, None)


def load_yaml_config(config_file: Path) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file

    Returns:
        Configuration dictionary (empty dict if the file is empty)

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping
    """
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {config_file}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {config_file} must contain a mapping")
    return data


def load_engine_overrides(
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> EngineOverrides:
    """
    Resolve engine overrides from a config file and the environment.

    Args:
        environ: Environment mapping (defaults to os.environ)
        config_file: Optional YAML file; a missing file is an error

    Returns:
        EngineOverrides with empty values normalized to None

    Raises:
        ConfigError: If the config file is unreadable or malformed
    """
    environ = os.environ if environ is None else environ

    download = None
    compression = None

    if config_file is not None:
        config = load_yaml_config(Path(config_file))
        engines = config.get("engines") or {}
        if not isinstance(engines, dict):
            raise ConfigError(f"'engines' in {config_file} must be a mapping")
        download = engines.get("download")
        compression = engines.get("compression")
        logger.debug(f"Loaded engine configuration from {config_file}")

    download = environ.get(DOWNLOAD_ENGINE_ENV) or download
    compression = environ.get(COMPRESSION_ENGINE_ENV) or compression

    return EngineOverrides(download=_clean(download), compression=_clean(compression))


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


def get_tools_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Directory holding bundled helper tools (7z.exe, busybox.exe on Windows).

    Returns:
        ``$PROVISIONKIT_TOOLS_DIR`` if set, else ``~/.provisionkit/tools``
    """
    environ = os.environ if environ is None else environ
    custom = environ.get(TOOLS_DIR_ENV)
    if custom:
        return Path(custom).expanduser()
    return Path.home() / ".provisionkit" / "tools"
