"""
Mirror-aware archive download.

Candidates are tried strictly in order: every filename on the first base URL,
then every filename on the next one, and so on. Community mirrors come first
and the canonical server last. Each candidate is probed with a HEAD request
before the archive is fetched, so mirrors that answer with placeholder pages
are skipped cheaply.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import requests
from requests.exceptions import RequestException

from zigvm.core.config import MIRRORS_URL
from zigvm.core.download import (
    DEFAULT_TIMEOUT,
    DownloadProgress,
    download_file,
    fetch_text,
    probe_url,
)
from zigvm.core.exceptions import DownloadError, MirrorsExhaustedError

logger = logging.getLogger(__name__)

SECURE_PREFIX = "https://"


def parse_mirror_list(text: str) -> List[str]:
    """
    Parse a plain-text mirror list.

    One base URL per line; only ``https://`` entries are kept.
    """
    mirrors = []
    for line in text.splitlines():
        url = line.strip()
        if url.startswith(SECURE_PREFIX):
            mirrors.append(url.rstrip("/"))
    return mirrors


def fetch_mirrors(
    url: str = MIRRORS_URL,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[str]:
    """
    Fetch the community mirror list.

    A failed fetch is not an error: the canonical source remains available,
    so an empty list is returned.
    """
    try:
        text = fetch_text(url, session=session, timeout=timeout)
    except DownloadError as e:
        logger.warning(
            f"Could not fetch community mirrors ({e}). "
            "Will use the official URL as a fallback."
        )
        return []

    mirrors = parse_mirror_list(text)
    logger.info(f"  Found {len(mirrors)} community mirrors.")
    return mirrors


class MirrorDownloader:
    """
    Downloads the first existing (base URL, filename) combination.

    Example:
        >>> downloader = MirrorDownloader()
        >>> path = downloader.download(
        ...     ["https://mirror.example.org/zig", "https://ziglang.org/download/0.13.0"],
        ...     ["zig-linux-x86_64-0.13.0.tar.xz", "zig-x86_64-linux-0.13.0.tar.xz"],
        ... )
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
        temp_dir: Optional[Path] = None,
    ):
        self.session = session
        self.timeout = timeout
        self.progress_callback = progress_callback
        self.temp_dir = temp_dir

    def _create_temp_file(self) -> Path:
        fd, path = tempfile.mkstemp(prefix="zig-download-", dir=self.temp_dir)
        os.close(fd)
        return Path(path)

    def download(self, base_urls: Sequence[str], filenames: Sequence[str]) -> Path:
        """
        Download the archive from the first candidate that has it.

        Args:
            base_urls: Base URLs in priority order (mirrors, then canonical)
            filenames: Candidate archive names in priority order

        Returns:
            Path of the temporary file holding the archive. The caller is
            responsible for deleting it.

        Raises:
            MirrorsExhaustedError: If no candidate could be downloaded. Any
                partially written temporary file is removed first.
        """
        temp_file: Optional[Path] = None
        attempted = 0

        for base_url in base_urls:
            for filename in filenames:
                url = f"{base_url.rstrip('/')}/{filename}"
                attempted += 1
                try:
                    if not probe_url(url, session=self.session, timeout=self.timeout):
                        logger.debug(f"  Not found: {url}")
                        continue

                    logger.info(f"  Attempting download from: {url}")
                    if temp_file is None:
                        temp_file = self._create_temp_file()
                    download_file(
                        url,
                        temp_file,
                        session=self.session,
                        progress_callback=self.progress_callback,
                        timeout=self.timeout,
                    )
                    logger.info(f"Download successful from: {url}")
                    return temp_file
                except (RequestException, OSError) as e:
                    logger.warning(
                        f"Failed to process URL {url}. Error: {e}. Trying next..."
                    )

        if temp_file is not None:
            temp_file.unlink(missing_ok=True)
        raise MirrorsExhaustedError(attempted)
