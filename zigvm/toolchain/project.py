"""
Per-project version selection via a ``.zig-version`` marker file.
"""

import logging
from pathlib import Path
from typing import Optional

from zigvm.core.config import VERSION_FILE

logger = logging.getLogger(__name__)


def find_version_file(
    start: Optional[Path] = None, name: str = VERSION_FILE
) -> Optional[str]:
    """
    Search ``start`` and its parents for a version marker file.

    Args:
        start: Directory to start from (default: current directory)
        name: Marker file name

    Returns:
        The stripped content of the nearest marker, or None if none is found
        before the filesystem root
    """
    current = Path(start) if start is not None else Path.cwd()
    current = current.absolute()

    for directory in [current, *current.parents]:
        marker = directory / name
        if marker.is_file():
            version = marker.read_text(encoding="utf-8").strip()
            if version:
                logger.debug(f"Found {marker}: {version}")
                return version
            logger.debug(f"Ignoring empty {marker}")
    return None
