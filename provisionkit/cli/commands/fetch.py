"""
Fetch command implementation.

Downloads a single file and verifies it against an expected hash.
"""

import logging

from provisionkit.cli.utils import provisioner_from_args
from provisionkit.core.exceptions import ProvisionKitError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the fetch command.

    Args:
        args: Parsed command-line arguments (url, hash, dest, force)

    Returns:
        Exit code (0 for a verified file)
    """
    try:
        provisioner = provisioner_from_args(args)
        provisioner.download_verify(args.url, args.hash, args.dest, force=args.force)
    except ProvisionKitError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Verified {args.dest}")
    return 0
