"""
Uninstall command implementation.
"""

import logging

from zigvm.cli.utils import create_repository

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the uninstall command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = create_repository(args)
    result = repo.uninstall(args.version)
    logger.info(f"Successfully removed {result.directory_name}.")
    return 0
