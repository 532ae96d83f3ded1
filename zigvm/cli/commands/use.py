"""
Use command implementation.

Activates a version given on the command line or, failing that, the one
named in the nearest ``.zig-version`` file.
"""

import logging

from zigvm.cli.utils import create_repository, warn_if_not_initialized
from zigvm.core.exceptions import NoVersionSpecifiedError, VersionNotFoundError
from zigvm.toolchain.project import find_version_file

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the use command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = create_repository(args)

    target = args.version
    if not target:
        target = find_version_file(name=repo.config.version_file)
        if not target:
            raise NoVersionSpecifiedError(
                f"No version specified and no {repo.config.version_file} file "
                "found in the current directory or parents."
            )
        logger.info(
            f"Found {repo.config.version_file} file, attempting to use: {target}"
        )

    try:
        directory_name = repo.use(target)
    except VersionNotFoundError as e:
        logger.error(str(e))
        logger.info(f"To install it, run: zvm install {target}")
        return 1

    logger.info(f"Now using {directory_name}.")
    warn_if_not_initialized()
    return 0
