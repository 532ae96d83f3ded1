"""
Zig version acquisition and activation.

This package implements the install/use/uninstall pipeline:
- Version and alias resolution
- Package location and mirror-aware download
- Atomic installation
- Active-version linking
"""

from .aliases import AliasStore
from .archive import ArchiveTool, TarArchiveTool, root_directory_name
from .installer import AtomicInstaller, InstallResult
from .linking import ActivationManager
from .locator import PackageInfo, PackageLocator, normalize_version, is_dev_version
from .mirrors import MirrorDownloader, fetch_mirrors, parse_mirror_list
from .project import find_version_file
from .remote_index import RemoteIndex
from .repository import UninstallResult, VersionRepository
from .resolver import VersionResolver, list_installed

__all__ = [
    "AliasStore",
    "ArchiveTool",
    "TarArchiveTool",
    "root_directory_name",
    "AtomicInstaller",
    "InstallResult",
    "ActivationManager",
    "PackageInfo",
    "PackageLocator",
    "normalize_version",
    "is_dev_version",
    "MirrorDownloader",
    "fetch_mirrors",
    "parse_mirror_list",
    "find_version_file",
    "RemoteIndex",
    "UninstallResult",
    "VersionRepository",
    "VersionResolver",
    "list_installed",
]
