"""
Platform detection for zigvm.

This module detects the current operating system and CPU architecture and
maps them onto the target names used in Zig release archives.

Usage:
    from zigvm.core.platform import detect_platform

    platform_info = detect_platform()
    print(platform_info.os_target)      # 'linux', 'macos', 'windows'
    print(platform_info.arch_target)    # 'x86_64', 'aarch64'
    print(platform_info.platform_key)   # 'x86_64-linux'
"""

import functools
import platform
from dataclasses import dataclass

from zigvm.core.exceptions import UnsupportedPlatformError

# platform.system().lower() -> Zig OS target
_OS_TARGETS = {
    "linux": "linux",
    "darwin": "macos",
    "windows": "windows",
}

# platform.machine().lower() -> Zig architecture target
_ARCH_TARGETS = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform expressed in Zig target names.

    Attributes:
        os_target: 'linux', 'macos' or 'windows'
        arch_target: 'x86_64' or 'aarch64'
    """

    os_target: str
    arch_target: str

    @property
    def is_windows(self) -> bool:
        return self.os_target == "windows"

    @property
    def platform_key(self) -> str:
        """
        Key used by the remote download index (``<arch>-<os>``).

        Example:
            >>> PlatformInfo("linux", "x86_64").platform_key
            'x86_64-linux'
        """
        return f"{self.arch_target}-{self.os_target}"

    def __str__(self) -> str:
        return f"{self.os_target}/{self.arch_target}"


def to_zig_target(system: str, machine: str) -> PlatformInfo:
    """
    Map raw ``platform.system()``/``platform.machine()`` values to Zig targets.

    Raises:
        UnsupportedPlatformError: If either value has no Zig build.
    """
    os_target = _OS_TARGETS.get(system.lower())
    arch_target = _ARCH_TARGETS.get(machine.lower())
    if not os_target or not arch_target:
        raise UnsupportedPlatformError(system, machine)
    return PlatformInfo(os_target=os_target, arch_target=arch_target)


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Raises:
        UnsupportedPlatformError: If the host is not a supported OS/architecture.
    """
    return to_zig_target(platform.system(), platform.machine())


def clear_platform_cache():
    """Clear the cached result of detect_platform()."""
    detect_platform.cache_clear()
