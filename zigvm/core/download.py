"""
Network primitives for zigvm.

This module wraps ``requests`` for the three kinds of traffic zigvm makes:
- Cheap existence probes (HTTP HEAD)
- Streaming archive downloads with progress reporting
- Small text/JSON documents (mirror list, download index)

Every request is bounded by a timeout. Nothing here retries; callers that
have fallbacks (the mirror downloader) move on to the next candidate instead.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import requests
from requests.exceptions import RequestException

from zigvm.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
CHUNK_SIZE = 8192


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second
    eta_seconds: float  # estimated time remaining

    def __str__(self) -> str:
        return format_progress(self)


def _session(session: Optional[requests.Session]) -> Any:
    return session if session is not None else requests


def probe_url(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> bool:
    """
    Check whether a URL exists with a HEAD request.

    Returns:
        True on a 2xx response (after redirects), False otherwise

    Raises:
        RequestException: On connection errors, DNS failures or timeouts
    """
    response = _session(session).head(url, allow_redirects=True, timeout=timeout)
    logger.debug(f"HEAD {url}: {response.status_code}")
    return response.ok


def download_file(
    url: str,
    destination: Path,
    session: Optional[requests.Session] = None,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Path:
    """
    Stream a URL into ``destination``, overwriting it.

    Args:
        url: URL to download from
        destination: Local path to save file
        session: Optional requests session
        progress_callback: Optional callback for progress updates
        timeout: Connect/read timeout in seconds

    Returns:
        Path to downloaded file

    Raises:
        RequestException: If the request fails or returns an error status
        OSError: If the destination cannot be written
    """
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Downloading from {url}")

    with _session(session).get(
        url, stream=True, timeout=timeout, allow_redirects=True
    ) as response:
        response.raise_for_status()

        content_length = response.headers.get("content-length")
        total_size = int(content_length) if content_length else 0

        downloaded = 0
        start_time = time.time()
        last_progress_time = start_time

        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                f.write(chunk)
                downloaded += len(chunk)

                # Report at most twice per second
                current_time = time.time()
                if progress_callback and (
                    current_time - last_progress_time >= 0.5
                    or downloaded == total_size
                ):
                    elapsed = current_time - start_time
                    speed = downloaded / elapsed if elapsed > 0 else 0
                    remaining = total_size - downloaded if total_size > 0 else 0
                    progress_callback(
                        DownloadProgress(
                            bytes_downloaded=downloaded,
                            total_bytes=total_size if total_size > 0 else downloaded,
                            percentage=(downloaded / total_size * 100)
                            if total_size > 0
                            else 0,
                            speed_bps=speed,
                            eta_seconds=remaining / speed if speed > 0 else 0,
                        )
                    )
                    last_progress_time = current_time

    logger.debug(f"Download complete: {destination} ({downloaded} bytes)")
    return destination


def fetch_text(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """
    Fetch a small text document.

    Raises:
        DownloadError: If the request fails or returns an error status
    """
    try:
        response = _session(session).get(url, timeout=timeout)
        response.raise_for_status()
    except RequestException as e:
        raise DownloadError(f"Failed to fetch {url}: {e}") from e
    return response.text


def fetch_json(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """
    Fetch and decode a JSON document.

    Raises:
        DownloadError: If the request fails or the body is not valid JSON
    """
    try:
        response = _session(session).get(url, timeout=timeout)
        response.raise_for_status()
    except RequestException as e:
        raise DownloadError(f"Failed to fetch {url}: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise DownloadError(f"Invalid JSON from {url}: {e}") from e


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.total_bytes > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s "
            f"ETA: {progress.eta_seconds:.0f}s"
        )
    else:
        return f"{mb_downloaded:.1f} MB " f"at {speed_mbps:.1f} MB/s"
