"""
Install command implementation.

Downloads a tarball to a temporary location, verifies it and unpacks it.
"""

import logging

from provisionkit.cli.utils import provisioner_from_args
from provisionkit.core.exceptions import ProvisionKitError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments (url, hash, dest)

    Returns:
        Exit code (0 once the tarball is unpacked)
    """
    try:
        provisioner = provisioner_from_args(args)
        provisioner.download_verify_unpack(args.url, args.hash, args.dest)
    except ProvisionKitError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Installed {args.url} into {args.dest}")
    return 0
