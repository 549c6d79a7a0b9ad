"""
Unpack command implementation.
"""

import logging

from provisionkit.cli.utils import provisioner_from_args
from provisionkit.core.exceptions import ProvisionKitError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """Unpack args.tarball into args.dest."""
    try:
        provisioner_from_args(args).unpack(args.tarball, args.dest)
    except ProvisionKitError as e:
        logger.error(str(e))
        return 1

    return 0
