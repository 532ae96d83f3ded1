"""
Package location for Zig archives.

Derives the canonical download URL and the candidate archive filenames for a
requested version. Upstream has published archives with the OS and the
architecture in either order, so both spellings are produced.
"""

import re
from dataclasses import dataclass
from typing import List

from zigvm.core.config import ZIG_CANONICAL_URL
from zigvm.core.exceptions import InvalidVersionError

DEV_MARKER = "-dev"
VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+(-dev\.\d+\+[0-9a-f]+)?")


@dataclass
class PackageInfo:
    """Where to find the archive for one version."""

    version: str
    """Normalized version used in filenames"""

    is_dev: bool
    """Whether this is a development (master) build"""

    canonical_url: str
    """Base URL on the official server"""

    filenames: List[str]
    """Candidate archive names, in the order they should be tried"""


def is_dev_version(version: str) -> bool:
    return DEV_MARKER in version


def normalize_version(version: str) -> str:
    """
    Extract the version number from user input.

    Release versions are reduced to the first ``MAJOR.MINOR.PATCH`` (with an
    optional ``-dev.N+hash`` suffix) they contain; dev versions are only
    stripped of surrounding whitespace.

    Raises:
        InvalidVersionError: If a release version has no MAJOR.MINOR.PATCH

    Example:
        >>> normalize_version(" 0.13.0 ")
        '0.13.0'
        >>> normalize_version("v0.12.1-final")
        '0.12.1'
    """
    if is_dev_version(version):
        return version.strip()
    match = VERSION_PATTERN.search(version)
    if not match:
        raise InvalidVersionError(version)
    return match.group(0)


class PackageLocator:
    """
    Builds download locations for Zig releases and dev builds.

    Example:
        >>> locator = PackageLocator()
        >>> info = locator.locate("0.13.0", "linux", "x86_64")
        >>> info.canonical_url
        'https://ziglang.org/download/0.13.0'
        >>> info.filenames
        ['zig-linux-x86_64-0.13.0.tar.xz', 'zig-x86_64-linux-0.13.0.tar.xz']
    """

    def __init__(self, canonical_url: str = ZIG_CANONICAL_URL):
        self.canonical_url = canonical_url.rstrip("/")

    def locate(self, version: str, os_target: str, arch_target: str) -> PackageInfo:
        is_dev = is_dev_version(version)
        version_norm = normalize_version(version)
        extension = "zip" if os_target == "windows" else "tar.xz"

        filenames = [
            f"zig-{os_target}-{arch_target}-{version_norm}.{extension}",
            f"zig-{arch_target}-{os_target}-{version_norm}.{extension}",
        ]

        if is_dev:
            canonical = f"{self.canonical_url}/builds"
        else:
            canonical = f"{self.canonical_url}/download/{version_norm}"

        return PackageInfo(
            version=version_norm,
            is_dev=is_dev,
            canonical_url=canonical,
            filenames=filenames,
        )
