"""
List command implementation.

Lists installed versions, marking the active one and showing aliases.
"""

import logging

from zigvm.cli.utils import create_repository

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = create_repository(args)

    logger.info(f"Installed Zig versions in {repo.home.versions_dir}:")

    active = repo.active_version()
    reverse_aliases = {}
    for alias, directory in repo.aliases.get().items():
        reverse_aliases.setdefault(directory, []).append(alias)

    versions = [name for name in repo.installed_versions() if name.startswith("zig-")]
    if not versions:
        print("  (No versions installed yet)")
        return 0

    for name in versions:
        prefix = "-> " if name == active else "   "
        alias_text = ""
        if name in reverse_aliases:
            alias_text = f" (alias: {', '.join(reverse_aliases[name])})"
        print(f"{prefix}{name}{alias_text}")
    return 0
