"""
Install command implementation.

Downloads and installs a Zig version.
"""

import logging

from zigvm.cli.utils import create_repository

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = create_repository(args)
    result = repo.install(args.version, alias=args.alias)

    if result.already_installed:
        logger.warning(f"Zig version already installed at {result.path}")
        return 0

    logger.info(f"Zig version {args.version} is installed at: {result.path}")
    logger.info("\nTo use it, run:")
    logger.info(f"  zvm use {args.alias or args.version}")
    return 0
