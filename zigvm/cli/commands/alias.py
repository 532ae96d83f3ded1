"""
Alias command implementation.

    zvm alias <name> <version|alias>
    zvm alias --unset <name>
"""

import logging

from zigvm.cli.utils import create_repository

logger = logging.getLogger(__name__)

USAGE = "Usage: zvm alias <name> <version> OR zvm alias --unset <name>"


def run(args) -> int:
    """
    Run the alias command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = create_repository(args)

    if args.unset:
        repo.unset_alias(args.unset)
        logger.info(f'Unset alias "{args.unset}".')
        return 0

    if not args.name:
        logger.error(USAGE)
        return 1

    if not args.version:
        logger.error("Please specify a version for the alias.")
        return 1

    directory_name = repo.set_alias(args.name, args.version)
    logger.info(f'"{args.name}" is now an alias for {directory_name}.')
    return 0
