"""
List-remote command implementation.

Lists versions from the official download index that have a build for the
current platform.
"""

import logging

from zigvm.cli.utils import create_repository

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the list-remote command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = create_repository(args)
    platform_key = repo.platform.platform_key

    logger.info("Fetching available Zig versions...")
    index = repo.remote_index

    print("\n--- Available Zig Versions ---")
    print("Stable Releases:")
    for version in index.stable_versions(platform_key):
        print(f"  - {version}")

    print("\nLatest Development Build:")
    master = index.master_version(platform_key)
    if master:
        print(f"  - {master}")
    else:
        print("  (Not available for this platform)")
    return 0
