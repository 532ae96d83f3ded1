"""
Shared utilities for CLI commands.
"""

import logging
import os

from zigvm.core.config import load_config
from zigvm.core.directory import ZvmHome
from zigvm.core.download import DownloadProgress
from zigvm.toolchain.repository import VersionRepository

logger = logging.getLogger(__name__)

ENV_INITIALIZED = "ZVM_INITIALIZED"


def _log_progress(progress: DownloadProgress):
    logger.debug(f"  {progress}")


def create_repository(args) -> VersionRepository:
    """
    Build the repository for the default home using the user configuration.

    ``--no-mirrors`` overrides ``use_mirrors`` from config.yaml.
    """
    home = ZvmHome.default()
    config = load_config(home.config_file)
    if getattr(args, "no_mirrors", False):
        config.use_mirrors = False
    return VersionRepository(home, config, progress_callback=_log_progress)


def shell_initialized() -> bool:
    return os.environ.get(ENV_INITIALIZED) == "true"


def warn_if_not_initialized():
    """Remind the user to load the shell setup so PATH picks up the link."""
    if not shell_initialized():
        logger.warning(
            "\nRun 'zvm init' and follow its instructions to apply this change "
            "to your shell."
        )
