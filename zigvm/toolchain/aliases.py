"""
Persistent alias store.

Aliases map a user-chosen name to an installed directory name and live in a
single pretty-printed JSON file that is rewritten wholesale on every change.
The store does not check that targets exist; dangling aliases are handled by
the resolver.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from zigvm.core.exceptions import AliasStoreError
from zigvm.core.filesystem import atomic_write

logger = logging.getLogger(__name__)


class AliasStore:
    """
    Alias -> installed-directory mapping backed by ``aliases.json``.

    Example:
        >>> store = AliasStore(Path("~/.zvm/aliases.json").expanduser())
        >>> aliases = store.get()
        >>> aliases["stable"] = "zig-x86_64-linux-0.13.0"
        >>> store.set(aliases)
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def get(self) -> Dict[str, str]:
        """
        Load all aliases.

        Returns:
            Mapping of alias name to directory name (empty if no file yet)

        Raises:
            AliasStoreError: If the file exists but cannot be parsed
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise AliasStoreError(f"Failed to load aliases from {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise AliasStoreError(f"Alias file {self.path} must contain a JSON object")

        return {str(k): str(v) for k, v in data.items()}

    def set(self, aliases: Dict[str, str]):
        """
        Replace the stored aliases with ``aliases``.

        Raises:
            AliasStoreError: If the file cannot be written
        """
        try:
            atomic_write(self.path, json.dumps(aliases, indent=2, ensure_ascii=False))
        except OSError as e:
            raise AliasStoreError(f"Failed to save aliases to {self.path}: {e}") from e
        logger.debug(f"Saved {len(aliases)} aliases")

    def lookup(self, name: str) -> Optional[str]:
        """Return the directory an alias points to, or None."""
        return self.get().get(name)

    def assign(self, name: str, directory: str):
        aliases = self.get()
        aliases[name] = directory
        self.set(aliases)

    def unset(self, name: str) -> bool:
        """
        Remove one alias.

        Returns:
            True if the alias existed
        """
        aliases = self.get()
        if name not in aliases:
            return False
        del aliases[name]
        self.set(aliases)
        return True

    def aliases_for(self, directory: str) -> List[str]:
        """List aliases pointing at ``directory``."""
        return [alias for alias, target in self.get().items() if target == directory]

    def remove_targeting(self, directory: str) -> List[str]:
        """
        Drop every alias that points at ``directory``.

        The file is only rewritten when something was removed.

        Returns:
            Names of the removed aliases
        """
        aliases = self.get()
        removed = [alias for alias, target in aliases.items() if target == directory]
        if removed:
            self.set(
                {alias: target for alias, target in aliases.items() if target != directory}
            )
        return removed
