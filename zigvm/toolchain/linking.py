"""
zigvm/toolchain/linking.py

Active-version link management.

A single link (``shims/active``) designates the active build. It is a
directory symlink on Unix-like systems and a directory junction on Windows,
where symlinks to directories need elevated privileges. The link is always
removed and recreated, never edited in place.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

from zigvm.core.exceptions import ActivationError

logger = logging.getLogger(__name__)


class ActivationManager:
    """Points the active link at an installed version, or removes it."""

    def __init__(self, link_path: Path, use_junctions: Optional[bool] = None):
        """
        Initialize activation manager.

        Args:
            link_path: Fixed location of the active link
            use_junctions: Create junctions instead of symlinks (default: on
                Windows). Only the host OS matters here, so activation works
                on hosts that have no Zig builds of their own.
        """
        self.link_path = Path(link_path)
        if use_junctions is None:
            use_junctions = os.name == "nt"
        self._use_junctions = use_junctions

    def activate(self, target_dir: Path):
        """
        Make ``target_dir`` the active version.

        Any existing link is removed first, so stale or broken links never
        block activation.

        Raises:
            ActivationError: If target_dir doesn't exist or the link cannot
                be created
        """
        target_dir = Path(target_dir).absolute()
        if not target_dir.is_dir():
            raise ActivationError(f"Target does not exist: {target_dir}")

        self._remove_link()
        self.link_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            if self._use_junctions:
                self._create_junction(target_dir)
            else:
                os.symlink(target_dir, self.link_path, target_is_directory=True)
        except OSError as e:
            raise ActivationError(
                f"Failed to create link {self.link_path} -> {target_dir}: {e}"
            ) from e

        logger.debug(f"Created link: {self.link_path} -> {target_dir}")

    def deactivate(self) -> bool:
        """
        Remove the active link.

        Returns:
            True if a link was removed, False if nothing was active
        """
        removed = self._remove_link()
        if not removed:
            logger.debug(f"No active link at {self.link_path}")
        return removed

    def active_target(self) -> Optional[Path]:
        """
        Resolve the active link.

        Returns:
            Path the link points to, or None if there is no link
        """
        if not self._is_link(self.link_path):
            return None
        try:
            target = os.readlink(self.link_path)
        except OSError as e:
            logger.debug(f"Failed to read link {self.link_path}: {e}")
            return None

        # Junction targets may come back with the \\?\ prefix
        for prefix in ("\\\\?\\", "//?/"):
            if target.startswith(prefix):
                target = target[len(prefix):]

        target_path = Path(target)
        if not target_path.is_absolute():
            target_path = self.link_path.parent / target_path
        return target_path

    def active_name(self) -> Optional[str]:
        """Directory name of the active version, or None."""
        target = self.active_target()
        return target.name if target is not None else None

    def _remove_link(self) -> bool:
        if not self._is_link(self.link_path):
            return False
        try:
            if self._use_junctions and self.link_path.is_dir():
                # Junctions are removed with rmdir, not unlink
                os.rmdir(self.link_path)
            else:
                self.link_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise ActivationError(f"Failed to remove link {self.link_path}: {e}") from e
        logger.debug(f"Removed link: {self.link_path}")
        return True

    def _create_junction(self, target_dir: Path):
        """Create directory junction (Windows)."""
        try:
            import _winapi

            _winapi.CreateJunction(str(target_dir), str(self.link_path))  # type: ignore
            return
        except (ImportError, AttributeError, OSError) as e:
            logger.debug(f"_winapi.CreateJunction failed: {e}, trying mklink")

        result = subprocess.run(
            ["cmd", "/c", "mklink", "/J", str(self.link_path), str(target_dir)],
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            raise OSError(f"Failed to create junction: {result.stderr.strip()}")

    def _is_link(self, path: Path) -> bool:
        """True for symlinks and Windows junctions, including broken ones."""
        if path.is_symlink():
            return True
        if not self._use_junctions:
            return False

        try:
            st = os.stat(path, follow_symlinks=False)
        except FileNotFoundError:
            return False

        # FILE_ATTRIBUTE_REPARSE_POINT
        if hasattr(st, "st_file_attributes"):
            return bool(st.st_file_attributes & 0x400)  # type: ignore

        try:
            os.readlink(path)
            return True
        except OSError:
            return False
