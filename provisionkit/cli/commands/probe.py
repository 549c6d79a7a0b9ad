"""
Probe command implementation.

Reports which download, compression and shell engines this host provides.
"""

import logging

from provisionkit.cli.utils import probe_from_args, safe_print
from provisionkit.core.exceptions import ProvisionKitError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the probe command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if every role has an engine)
    """
    try:
        engines = probe_from_args(args)
    except ProvisionKitError as e:
        logger.error(str(e))
        return 1

    for role, name in engines.describe().items():
        safe_print(f"{role:<12} {name}")

    return 0
