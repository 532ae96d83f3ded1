"""
Deactivate command implementation.
"""

import logging

from zigvm.cli.utils import create_repository, warn_if_not_initialized

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the deactivate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = create_repository(args)
    if not repo.deactivate():
        logger.info("No version is currently active.")
        return 0

    logger.info("Deactivated Zig. No version is currently active.")
    warn_if_not_initialized()
    return 0
