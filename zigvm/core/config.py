"""
User configuration for zigvm.

Configuration is read from an optional ``config.yaml`` in the zigvm home.
Every key is optional; missing keys fall back to the defaults below.

Example config.yaml:
    canonical_url: https://ziglang.org
    use_mirrors: false
    request_timeout: 60
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from zigvm.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ZIG_CANONICAL_URL = "https://ziglang.org"
ZIG_INDEX_URL = "https://ziglang.org/download/index.json"
MIRRORS_URL = "https://ziglang.org/download/community-mirrors.txt"
VERSION_FILE = ".zig-version"


@dataclass
class ZvmConfig:
    """
    Effective zigvm configuration.

    Attributes:
        canonical_url: Base URL of the official download server
        index_url: URL of the JSON download index
        mirrors_url: URL of the plain-text community mirror list
        use_mirrors: Whether to try community mirrors before the canonical source
        request_timeout: Timeout in seconds for every HTTP probe or fetch
        rename_attempts: Attempts when committing a staged install
        rename_delay: Seconds between commit attempts
        version_file: Name of the per-project version marker file
    """

    canonical_url: str = ZIG_CANONICAL_URL
    index_url: str = ZIG_INDEX_URL
    mirrors_url: str = MIRRORS_URL
    use_mirrors: bool = True
    request_timeout: float = 30.0
    rename_attempts: int = 5
    rename_delay: float = 0.3
    version_file: str = VERSION_FILE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ZvmConfig":
        """
        Build a config from a parsed mapping, validating value types.

        Raises:
            ConfigError: If a known key has a value of the wrong type
        """
        known = {f.name: f for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.debug(f"Ignoring unknown config key: {key}")
                continue
            default = known[key].default
            if isinstance(default, bool):
                ok = isinstance(value, bool)
            elif isinstance(default, int):
                ok = isinstance(value, int) and not isinstance(value, bool)
            elif isinstance(default, float):
                ok = isinstance(value, (int, float)) and not isinstance(value, bool)
            else:
                ok = isinstance(value, str)
            if not ok:
                raise ConfigError(
                    f"Invalid value for '{key}': expected "
                    f"{type(default).__name__}, got {type(value).__name__}"
                )
            values[key] = value

        config = cls(**values)
        if config.rename_attempts < 1:
            raise ConfigError("rename_attempts must be at least 1")
        if config.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")
        config.canonical_url = config.canonical_url.rstrip("/")
        return config


def load_config(config_file: Optional[Path]) -> ZvmConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_file: Path to config.yaml (None or missing file -> defaults)

    Returns:
        ZvmConfig with file values applied over the defaults

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    if config_file is None or not Path(config_file).exists():
        logger.debug(f"Config file not found (optional): {config_file}")
        return ZvmConfig()

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_file}: {e}") from e

    if data is None:
        return ZvmConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file} must contain a mapping of settings")

    return ZvmConfig.from_dict(data)
