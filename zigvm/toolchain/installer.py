"""
Atomic installation of downloaded archives.

An archive is extracted into ``<name>.tmp`` next to its final location and
only renamed to ``<name>`` once extraction has finished. The final path
therefore either does not exist or holds a complete build.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from zigvm.core.filesystem import (
    RENAME_ATTEMPTS,
    RENAME_DELAY_SECONDS,
    rename_with_retry,
    safe_rmtree,
)
from zigvm.toolchain.archive import ArchiveTool, TarArchiveTool, root_directory_name
from zigvm.toolchain.resolver import STAGING_SUFFIX

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of an install attempt."""

    directory_name: str
    """Installed version identity (archive's top-level directory)"""

    path: Path
    """Final installation path"""

    already_installed: bool = False
    """True if the version was present and nothing was installed"""


class AtomicInstaller:
    """
    Extracts archives into the installation root with a crash-safe commit.

    Steps:
        1. Read the archive's top-level directory name
        2. Stop if that version is already installed
        3. Extract into a ``.tmp`` staging directory
        4. Rename staging to final (retrying permission errors)
        5. Delete the archive

    Example:
        >>> installer = AtomicInstaller(home.versions_dir)
        >>> result = installer.install(Path("/tmp/zig-download-abc123"))
        >>> result.directory_name
        'zig-x86_64-linux-0.13.0'
    """

    def __init__(
        self,
        versions_dir: Path,
        archive_tool: Optional[ArchiveTool] = None,
        rename_attempts: int = RENAME_ATTEMPTS,
        rename_delay: float = RENAME_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.versions_dir = Path(versions_dir)
        self.archive_tool = archive_tool or TarArchiveTool()
        self.rename_attempts = rename_attempts
        self.rename_delay = rename_delay
        self.sleep = sleep

    def staging_path(self, final_path: Path) -> Path:
        return final_path.with_name(final_path.name + STAGING_SUFFIX)

    def install(self, archive_path: Path) -> InstallResult:
        """
        Install an archive.

        Args:
            archive_path: Downloaded archive; deleted once installed or
                found to be a duplicate

        Returns:
            InstallResult describing the installed (or existing) version

        Raises:
            ArchiveError: If the archive cannot be listed or extracted
            OSError: If the commit rename fails for good
        """
        archive_path = Path(archive_path)

        directory_name = root_directory_name(
            self.archive_tool.list_entries(archive_path)
        )
        final_path = self.versions_dir / directory_name

        if final_path.exists():
            logger.debug(f"Already installed: {final_path}")
            archive_path.unlink(missing_ok=True)
            return InstallResult(directory_name, final_path, already_installed=True)

        staging = self.staging_path(final_path)
        if staging.exists():
            logger.info(f"Removing stale staging directory: {staging}")
            safe_rmtree(staging, require_prefix=self.versions_dir)
        staging.mkdir(parents=True)

        logger.debug(f"Extracting {archive_path} to {staging}")
        self.archive_tool.extract_stripping_root(archive_path, staging)

        rename_with_retry(
            staging,
            final_path,
            attempts=self.rename_attempts,
            delay=self.rename_delay,
            sleep=self.sleep,
        )

        archive_path.unlink(missing_ok=True)
        logger.debug(f"Installed {directory_name} at {final_path}")
        return InstallResult(directory_name, final_path)
