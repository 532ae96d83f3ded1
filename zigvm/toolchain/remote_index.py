"""
Official Zig download index.

The index is a JSON object mapping a version string to per-platform metadata
(keyed ``<arch>-<os>``). The ``master`` entry describes the latest dev build
and carries its full version string under ``version``.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from zigvm.core.config import ZIG_INDEX_URL
from zigvm.core.download import DEFAULT_TIMEOUT, fetch_json
from zigvm.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

MASTER = "master"


class RemoteIndex:
    """
    Lazily fetched view of the download index.

    Example:
        >>> index = RemoteIndex()
        >>> index.stable_versions("x86_64-linux")
        ['0.13.0', '0.12.1', ...]
    """

    def __init__(
        self,
        url: str = ZIG_INDEX_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.url = url
        self.session = session
        self.timeout = timeout
        self._data: Optional[Dict[str, Any]] = None

    def fetch(self) -> Dict[str, Any]:
        """
        Load the index (once per instance).

        Raises:
            DownloadError: If the index cannot be fetched or is malformed
        """
        if self._data is None:
            logger.debug(f"Fetching download index: {self.url}")
            data = fetch_json(self.url, session=self.session, timeout=self.timeout)
            if not isinstance(data, dict):
                raise DownloadError(f"Unexpected index format from {self.url}")
            self._data = data
        return self._data

    def stable_versions(self, platform_key: str) -> List[str]:
        """Release versions that have a build for ``platform_key``, in index order."""
        return [
            version
            for version, entry in self.fetch().items()
            if version != MASTER
            and "-dev" not in version
            and isinstance(entry, dict)
            and platform_key in entry
        ]

    def master_version(self, platform_key: Optional[str] = None) -> Optional[str]:
        """
        Version string of the latest dev build.

        Returns:
            The version, or None if there is no master entry or it has no
            build for ``platform_key``
        """
        entry = self.fetch().get(MASTER)
        if not isinstance(entry, dict):
            return None
        if platform_key is not None and platform_key not in entry:
            return None
        return entry.get("version")
