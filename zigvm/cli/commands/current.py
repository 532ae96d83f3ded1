"""
Current command implementation.

Shows the active version and the version reported by its ``zig`` binary.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from zigvm.cli.utils import create_repository

logger = logging.getLogger(__name__)


def zig_version(install_dir: Path) -> Optional[str]:
    """
    Run ``zig version`` from an installation directory.

    Returns:
        The reported version, or None if the binary is missing or fails
    """
    exe = install_dir / "zig"
    if not exe.exists():
        exe = install_dir / "zig.exe"
    try:
        result = subprocess.run(
            [str(exe), "version"], capture_output=True, text=True, timeout=30
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug(f"Could not run {exe}: {e}")
        return None
    if result.returncode != 0:
        logger.debug(f"{exe} version exited with {result.returncode}")
        return None
    return result.stdout.strip()


def run(args) -> int:
    """
    Run the current command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = create_repository(args)
    target = repo.activation.active_target()
    if target is None:
        logger.info("No version is currently active.")
        return 0

    reported = zig_version(target)
    if reported is None:
        logger.error(f"Could not determine current version: {target} is not runnable")
        print(f"Active version: {target.name}")
    else:
        print(f"Active version: {reported} ({target.name})")
    print(f"Path: {target}")
    return 0
