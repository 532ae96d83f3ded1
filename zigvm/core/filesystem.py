"""
File system utilities for zigvm.

This module provides the small set of platform-aware file operations the
install pipeline depends on:
- Atomic writes (temp file + replace)
- Directory renames that retry through transient permission errors
- Safe directory tree removal
"""

import logging
import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import Callable, Optional, Union

from zigvm.core.exceptions import ZigVMError

logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"

RENAME_ATTEMPTS = 5
RENAME_DELAY_SECONDS = 0.3


class FilesystemError(ZigVMError):
    """Base exception for filesystem operations."""

    pass


def is_relative_to(path: Path, parent: Path) -> bool:
    """Check if path is under parent directory."""
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    If the write fails, the original file (if any) remains unchanged.

    Example:
        >>> atomic_write('aliases.json', '{"stable": "zig-x86_64-linux-0.13.0"}')
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory keeps the replace on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except Exception:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def rename_with_retry(
    source: Union[str, Path],
    destination: Union[str, Path],
    attempts: int = RENAME_ATTEMPTS,
    delay: float = RENAME_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """
    Rename a directory, retrying while the failure is a PermissionError.

    Antivirus scanners and indexers on Windows briefly hold handles inside a
    freshly extracted tree, which makes the rename fail with EPERM/EACCES.
    Any other error is raised immediately; the last PermissionError is raised
    once ``attempts`` renames have failed.

    Args:
        source: Existing path
        destination: New path (must not exist)
        attempts: Maximum number of rename attempts
        delay: Seconds to wait between attempts
        sleep: Sleep function (injectable for tests)

    Raises:
        PermissionError: If every attempt failed with a permission error
        OSError: On any other rename failure
    """
    source = Path(source)
    destination = Path(destination)

    for attempt in range(1, attempts + 1):
        try:
            source.rename(destination)
            return
        except PermissionError:
            if attempt >= attempts:
                raise
            logger.warning(
                f"Rename failed, retrying in {delay * 1000:.0f}ms... "
                f"({attempt}/{attempts})"
            )
            sleep(delay)


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails

    Example:
        >>> safe_rmtree('~/.zvm/versions/zig-x86_64-linux-0.13.0',
        ...             require_prefix='~/.zvm/versions')
    """
    path = Path(path).absolute()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).absolute()
        if not is_relative_to(path, require_prefix) or path == require_prefix:
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        if IS_WINDOWS:

            def handle_remove_readonly(func, target, exc):
                """Error handler for Windows read-only files."""
                if not os.access(target, os.W_OK):
                    os.chmod(target, 0o777)
                    func(target)
                else:
                    raise

            shutil.rmtree(path, onerror=handle_remove_readonly)
        else:
            shutil.rmtree(path)

    except Exception as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e
