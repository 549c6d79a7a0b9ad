"""
List command implementation.

Prints one archive member per line, directories excluded.
"""

import logging

from provisionkit.cli.utils import provisioner_from_args, safe_print
from provisionkit.core.exceptions import ProvisionKitError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the list command.

    Args:
        args: Parsed command-line arguments (tarball)

    Returns:
        Exit code (0 for success)
    """
    if not args.tarball.is_file():
        logger.error(f"File not found: {args.tarball}")
        return 1

    try:
        files = provisioner_from_args(args).list_archive_files(args.tarball)
    except ProvisionKitError as e:
        logger.error(str(e))
        return 1

    for name in files:
        safe_print(name)
    return 0
