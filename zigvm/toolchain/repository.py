"""
Installed-version repository.

VersionRepository owns the zigvm home (installation root, active link and
alias file) and is the only place that mutates them. It wires the pipeline
components together:

    install:   PackageLocator -> mirror list -> MirrorDownloader
               -> AtomicInstaller -> (optional) alias
    use:       VersionResolver -> ActivationManager
    uninstall: VersionResolver -> ActivationManager (if active)
               -> directory removal -> alias cleanup

Concurrent invocations against the same home are not supported; there is no
locking.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

import requests

from zigvm.core.config import ZvmConfig
from zigvm.core.directory import ZvmHome
from zigvm.core.download import DownloadProgress
from zigvm.core.exceptions import (
    AliasInUseError,
    AliasNotFoundError,
    DownloadError,
    VersionNotFoundError,
)
from zigvm.core.filesystem import safe_rmtree
from zigvm.core.platform import PlatformInfo, detect_platform
from zigvm.toolchain.aliases import AliasStore
from zigvm.toolchain.archive import ArchiveTool
from zigvm.toolchain.installer import AtomicInstaller, InstallResult
from zigvm.toolchain.linking import ActivationManager
from zigvm.toolchain.locator import PackageLocator
from zigvm.toolchain.mirrors import MirrorDownloader, fetch_mirrors
from zigvm.toolchain.remote_index import MASTER, RemoteIndex
from zigvm.toolchain.resolver import VersionResolver, list_installed

logger = logging.getLogger(__name__)


@dataclass
class UninstallResult:
    """Result of removing an installed version."""

    directory_name: str
    was_active: bool
    removed_aliases: List[str] = field(default_factory=list)


class VersionRepository:
    """
    Facade over the zigvm home directory.

    Example:
        >>> repo = VersionRepository(ZvmHome.default())
        >>> result = repo.install("0.13.0", alias="stable")
        >>> repo.use("stable")
        'zig-x86_64-linux-0.13.0'
    """

    def __init__(
        self,
        home: ZvmHome,
        config: Optional[ZvmConfig] = None,
        platform: Optional[PlatformInfo] = None,
        session: Optional[requests.Session] = None,
        archive_tool: Optional[ArchiveTool] = None,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.home = home.ensure()
        self.config = config or ZvmConfig()
        self._platform = platform
        self.session = session

        self.aliases = AliasStore(home.aliases_file)
        self.resolver = VersionResolver(home.versions_dir, self.aliases)
        self.locator = PackageLocator(self.config.canonical_url)
        self.downloader = MirrorDownloader(
            session=session,
            timeout=self.config.request_timeout,
            progress_callback=progress_callback,
        )
        self.installer = AtomicInstaller(
            home.versions_dir,
            archive_tool=archive_tool,
            rename_attempts=self.config.rename_attempts,
            rename_delay=self.config.rename_delay,
            sleep=sleep,
        )
        self.remote_index = RemoteIndex(
            self.config.index_url, session=session, timeout=self.config.request_timeout
        )
        self._activation: Optional[ActivationManager] = None

    @property
    def platform(self) -> PlatformInfo:
        """Host platform (detected on first use; raises if unsupported)."""
        if self._platform is None:
            self._platform = detect_platform()
        return self._platform

    @property
    def activation(self) -> ActivationManager:
        if self._activation is None:
            # Link type depends on the host OS only, never on Zig target support
            use_junctions = (
                self._platform.is_windows if self._platform is not None else None
            )
            self._activation = ActivationManager(self.home.active_link, use_junctions)
        return self._activation

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def installed_versions(self) -> List[str]:
        return list_installed(self.home.versions_dir)

    def resolve(self, token: Optional[str]) -> Optional[str]:
        return self.resolver.resolve(token)

    def version_path(self, directory_name: str) -> Path:
        return self.home.versions_dir / directory_name

    def active_version(self) -> Optional[str]:
        """Directory name of the active version, or None."""
        return self.activation.active_name()

    # ------------------------------------------------------------------
    # Install
    # ------------------------------------------------------------------

    def install(self, version: str, alias: Optional[str] = None) -> InstallResult:
        """
        Download and install a Zig version.

        Args:
            version: Release version (``0.13.0``), dev version, or ``master``
            alias: Optional alias to assign after a successful install

        Returns:
            InstallResult; ``already_installed`` is set when the version was
            present, in which case no alias is assigned

        Raises:
            AliasInUseError: If ``alias`` is already assigned
            InvalidVersionError: If ``version`` is not a valid version
            UnsupportedPlatformError: If the host has no Zig builds
            MirrorsExhaustedError: If no source had the archive
            ArchiveError: If the archive cannot be extracted
        """
        if alias:
            existing = self.aliases.lookup(alias)
            if existing:
                raise AliasInUseError(alias, existing)

        version = version.strip()
        platform = self.platform

        if version == MASTER:
            master = self.remote_index.master_version(platform.platform_key)
            if not master:
                raise DownloadError(
                    f"No development build is available for {platform.platform_key}"
                )
            logger.info(f"Latest development build is {master}")
            version = master

        logger.info(f"[1/4] Target Zig version: {version}")
        package = self.locator.locate(
            version, platform.os_target, platform.arch_target
        )
        logger.info(
            f"[2/4] Determined potential packages: {', '.join(package.filenames)}"
        )

        logger.info("[3/4] Fetching mirrors and downloading Zig archive...")
        mirrors: List[str] = []
        if self.config.use_mirrors:
            mirrors = fetch_mirrors(
                self.config.mirrors_url,
                session=self.session,
                timeout=self.config.request_timeout,
            )
        archive = self.downloader.download(
            mirrors + [package.canonical_url], package.filenames
        )

        logger.info("[4/4] Installing...")
        try:
            result = self.installer.install(archive)
        finally:
            archive.unlink(missing_ok=True)

        if not result.already_installed and alias:
            self.aliases.assign(alias, result.directory_name)
            logger.info(f'"{alias}" is now an alias for {result.directory_name}.')

        return result

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def use(self, token: str) -> str:
        """
        Activate a version.

        Returns:
            The activated directory name

        Raises:
            VersionNotFoundError: If ``token`` matches no installed version
        """
        directory_name = self.resolve(token)
        if not directory_name:
            raise VersionNotFoundError(token)

        logger.debug(f"Activating {directory_name}...")
        self.activation.activate(self.version_path(directory_name))
        return directory_name

    def deactivate(self) -> bool:
        """
        Deactivate the active version.

        Returns:
            False if no version was active
        """
        return self.activation.deactivate()

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def uninstall(self, token: str) -> UninstallResult:
        """
        Remove an installed version and every alias pointing to it.

        An active version is deactivated before its directory is deleted.

        Raises:
            VersionNotFoundError: If ``token`` matches no installed version
        """
        directory_name = self.resolve(token)
        if not directory_name:
            raise VersionNotFoundError(token)

        was_active = self.active_version() == directory_name
        if was_active:
            logger.info(
                f"Version {directory_name} is currently active. Deactivating it first..."
            )
            self.deactivate()

        path = self.version_path(directory_name)
        logger.info(f"Removing {path}...")
        safe_rmtree(path, require_prefix=self.home.versions_dir)

        removed = self.aliases.remove_targeting(directory_name)
        if removed:
            logger.info(f"Removed associated aliases: {', '.join(removed)}")

        return UninstallResult(directory_name, was_active, removed)

    # ------------------------------------------------------------------
    # Aliases
    # ------------------------------------------------------------------

    def set_alias(self, name: str, token: str) -> str:
        """
        Point alias ``name`` at the version ``token`` resolves to.

        Returns:
            The aliased directory name

        Raises:
            VersionNotFoundError: If ``token`` matches no installed version
        """
        directory_name = self.resolve(token)
        if not directory_name:
            raise VersionNotFoundError(token)
        self.aliases.assign(name, directory_name)
        return directory_name

    def unset_alias(self, name: str):
        """
        Raises:
            AliasNotFoundError: If the alias does not exist
        """
        if not self.aliases.unset(name):
            raise AliasNotFoundError(name)
