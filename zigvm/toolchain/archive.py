"""
Archive inspection and extraction.

The installer only needs two capabilities from an archive tool: listing the
entries of an archive and extracting it with its single top-level directory
stripped. TarArchiveTool provides them by running the system ``tar``, which
also reads ``.zip`` files on Windows (bsdtar) and ``.tar.xz`` everywhere else.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from zigvm.core.exceptions import ArchiveError, ArchiveToolError

logger = logging.getLogger(__name__)


class ArchiveTool(ABC):
    """Capability interface for reading archives."""

    @abstractmethod
    def list_entries(self, archive: Path) -> List[str]:
        """
        List entry names in archive order.

        Raises:
            ArchiveError: If the archive cannot be read
        """
        pass

    @abstractmethod
    def extract_stripping_root(self, archive: Path, destination: Path):
        """
        Extract into ``destination``, dropping the top-level path component.

        Raises:
            ArchiveError: If extraction fails
        """
        pass


def root_directory_name(entries: List[str]) -> str:
    """
    Return the top-level directory name from an archive listing.

    The first entry is taken as the package's root directory. Leading
    ``./`` and ``/`` are ignored.

    Example:
        >>> root_directory_name(["zig-x86_64-linux-0.13.0/", "zig-x86_64-linux-0.13.0/zig"])
        'zig-x86_64-linux-0.13.0'

    Raises:
        ArchiveError: If the listing is empty
    """
    for entry in entries:
        name = entry.strip()
        if name.startswith("./"):
            name = name[2:]
        name = name.lstrip("/")
        name = name.split("/", 1)[0]
        if name:
            return name
    raise ArchiveError("Archive is empty")


class TarArchiveTool(ArchiveTool):
    """ArchiveTool backed by the external ``tar`` command."""

    def __init__(self, executable: str = "tar"):
        self.executable = executable

    def _run(self, args: List[str]) -> str:
        command = [self.executable] + args
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise ArchiveError(f"Failed to run {self.executable}: {e}") from e

        if result.returncode != 0:
            raise ArchiveToolError(command, result.returncode, result.stderr)
        return result.stdout

    def list_entries(self, archive: Path) -> List[str]:
        output = self._run(["-tf", str(archive)])
        return [line for line in output.splitlines() if line.strip()]

    def extract_stripping_root(self, archive: Path, destination: Path):
        self._run(
            ["-xf", str(archive), "--strip-components=1", "-C", str(destination)]
        )
