"""
Directory layout management for zigvm.

This module resolves the zigvm home directory and the fixed paths inside it.
All other components receive these paths from a ZvmHome instance rather than
computing them on their own.

Directory Structure (~/.zvm/ or %USERPROFILE%\\.zvm\\, overridable with ZVM_DIR):
    - versions/     : One subdirectory per installed Zig build
    - shims/active  : Symlink/junction to the active build
    - aliases.json  : Alias -> installed directory mapping
    - config.yaml   : Optional user configuration
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from zigvm.core.exceptions import ZigVMError

ENV_HOME = "ZVM_DIR"


class DirectoryError(ZigVMError):
    """Raised when the home directory cannot be determined or created."""

    pass


def get_zvm_home() -> Path:
    """
    Get the zigvm home directory path.

    Returns:
        Path: ``$ZVM_DIR`` if set, otherwise the platform default.
            - Windows: %USERPROFILE%\\.zvm
            - Linux/macOS: ~/.zvm

    Raises:
        DirectoryError: If USERPROFILE is unset on Windows.
    """
    override = os.environ.get(ENV_HOME)
    if override:
        return Path(override).expanduser()

    if os.name == "nt":  # Windows
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise DirectoryError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine zigvm home directory."
            )
        return Path(user_profile) / ".zvm"
    else:  # Linux/macOS
        return Path.home() / ".zvm"


@dataclass(frozen=True)
class ZvmHome:
    """
    Fixed paths inside a zigvm home directory.

    Example:
        >>> home = ZvmHome(Path("/home/user/.zvm"))
        >>> home.versions_dir
        PosixPath('/home/user/.zvm/versions')
    """

    root: Path

    @classmethod
    def default(cls, root: Optional[Path] = None) -> "ZvmHome":
        return cls(Path(root) if root is not None else get_zvm_home())

    @property
    def versions_dir(self) -> Path:
        return self.root / "versions"

    @property
    def shims_dir(self) -> Path:
        return self.root / "shims"

    @property
    def active_link(self) -> Path:
        return self.shims_dir / "active"

    @property
    def aliases_file(self) -> Path:
        return self.root / "aliases.json"

    @property
    def config_file(self) -> Path:
        return self.root / "config.yaml"

    def ensure(self) -> "ZvmHome":
        """
        Create the home and installation root if they don't exist.

        Raises:
            DirectoryError: If the directories cannot be created.
        """
        try:
            self.versions_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryError(
                f"Failed to create zigvm directory {self.versions_dir}: {e}"
            ) from e
        return self
