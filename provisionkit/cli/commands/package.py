"""
Package command implementation.
"""

import logging

from provisionkit.cli.utils import provisioner_from_args
from provisionkit.core.exceptions import ProvisionKitError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """Package the contents of args.directory into args.tarball."""
    if not args.directory.is_dir():
        logger.error(f"Not a directory: {args.directory}")
        return 1

    try:
        provisioner_from_args(args).package(args.directory, args.tarball)
    except ProvisionKitError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Created {args.tarball}")
    return 0
