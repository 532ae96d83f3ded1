"""
Version resolution.

Turns a user-supplied token (exact directory name, partial version such as
``0.13`` or ``0.13.0``, or an alias) into the name of an installed directory.
"""

import logging
from pathlib import Path
from typing import List, Optional

from zigvm.toolchain.aliases import AliasStore

logger = logging.getLogger(__name__)

STAGING_SUFFIX = ".tmp"


def list_installed(versions_dir: Path) -> List[str]:
    """
    List installed version directories in sorted order.

    Staging directories left behind by interrupted installs are skipped.
    A missing installation root yields an empty list.
    """
    try:
        entries = list(Path(versions_dir).iterdir())
    except FileNotFoundError:
        return []
    return sorted(
        entry.name
        for entry in entries
        if entry.is_dir() and not entry.name.endswith(STAGING_SUFFIX)
    )


class VersionResolver:
    """
    Resolves versions and aliases to installed directory names.

    Resolution order:
        1. An alias name is replaced by its target directory name.
        2. Installed directories containing the target are collected.
        3. A single match wins; otherwise an exact match wins;
           otherwise the first match in sorted order.

    Example:
        >>> resolver = VersionResolver(home.versions_dir, AliasStore(home.aliases_file))
        >>> resolver.resolve("0.13.0")
        'zig-x86_64-linux-0.13.0'
    """

    def __init__(self, versions_dir: Path, aliases: AliasStore):
        self.versions_dir = Path(versions_dir)
        self.aliases = aliases

    def resolve(self, token: Optional[str]) -> Optional[str]:
        """
        Resolve a version or alias.

        Returns:
            Installed directory name, or None if nothing matches
        """
        if not token or not token.strip():
            return None
        token = token.strip()

        target = self.aliases.lookup(token) or token
        if target != token:
            logger.debug(f"Alias {token} -> {target}")

        matches = [name for name in list_installed(self.versions_dir) if target in name]

        if len(matches) == 1:
            return matches[0]
        if target in matches:
            return target
        if matches:
            logger.debug(
                f'"{target}" matches {len(matches)} versions, using {matches[0]}'
            )
            return matches[0]
        return None
