"""
Init command implementation.

Writes a shell setup script into the zigvm home that puts the active link on
PATH, then prints how to load it.
"""

import logging
import os

from zigvm.core.directory import ZvmHome
from zigvm.core.filesystem import atomic_write

logger = logging.getLogger(__name__)

POSIX_TEMPLATE = """#!/bin/sh
# zvm shell setup
export ZVM_DIR="{home}"
# The 'active' symlink points to the current version directory
export PATH="{active}:$PATH"
export ZVM_INITIALIZED="true"
"""

POWERSHELL_TEMPLATE = """
# zvm shell setup
$env:ZVM_DIR = "{home}"
$env:PATH = "{active};" + $env:PATH
$env:ZVM_INITIALIZED = "true"
"""


def run(args) -> int:
    """
    Run the init command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    home = ZvmHome.default()
    logger.info("Configuring your shell for zvm...")
    home.shims_dir.mkdir(parents=True, exist_ok=True)

    if os.name == "nt":
        script = home.root / "zvm.ps1"
        atomic_write(
            script,
            POWERSHELL_TEMPLATE.format(home=home.root, active=home.active_link),
        )
        print("\n--- PowerShell Setup ---")
        print("1. Add the following line to your PowerShell profile (usually at $PROFILE):")
        print(f'   . "{script}"')
        print("2. Restart your shell.")
    else:
        script = home.root / "zvm.sh"
        atomic_write(
            script, POSIX_TEMPLATE.format(home=home.root, active=home.active_link)
        )
        print("\n--- Setup for bash/zsh/etc. ---")
        print(
            "1. Add the following line to your shell's startup file "
            "(e.g., ~/.bashrc, ~/.zshrc):"
        )
        print(f'   source "{script}"')
        print(
            "\n2. Restart your shell or run the command above in your current "
            "session to apply changes."
        )
    return 0
