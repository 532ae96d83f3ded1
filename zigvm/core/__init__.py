"""
Core functionality for zigvm.

This package contains the foundational modules that the toolchain pipeline
depends on: paths, platform detection, configuration, networking and
filesystem helpers.
"""

from .directory import (
    ZvmHome,
    get_zvm_home,
    DirectoryError,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    to_zig_target,
    clear_platform_cache,
)

from .config import (
    ZvmConfig,
    load_config,
)

from .exceptions import (
    ZigVMError,
    UserError,
    UnsupportedPlatformError,
    ConfigError,
    InvalidVersionError,
    VersionNotFoundError,
    NoVersionSpecifiedError,
    AliasInUseError,
    AliasNotFoundError,
    AliasStoreError,
    DownloadError,
    MirrorsExhaustedError,
    ArchiveError,
    ArchiveToolError,
    ActivationError,
)

__all__ = [
    "ZvmHome",
    "get_zvm_home",
    "DirectoryError",
    "PlatformInfo",
    "detect_platform",
    "to_zig_target",
    "clear_platform_cache",
    "ZvmConfig",
    "load_config",
    "ZigVMError",
    "UserError",
    "UnsupportedPlatformError",
    "ConfigError",
    "InvalidVersionError",
    "VersionNotFoundError",
    "NoVersionSpecifiedError",
    "AliasInUseError",
    "AliasNotFoundError",
    "AliasStoreError",
    "DownloadError",
    "MirrorsExhaustedError",
    "ArchiveError",
    "ArchiveToolError",
    "ActivationError",
]
