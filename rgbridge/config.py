"""Application configuration.

Stored as YAML in {$RGBRIDGE_HOME or ~/.config/rgbridge}/config.yaml:

    rg_binary: rg
    default_search_path: /home/me
    history_path: null        # directory; null = config directory
    max_results: 10000

RGBRIDGE_RG_BINARY overrides rg_binary. A missing or unreadable file
falls back to defaults; the search pipeline itself reads no config.
"""

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from rgbridge.constants import CONFIG_FILE_NAME, DEFAULT_BINARY, MAX_RESULTS
from rgbridge.primitives.errors import ConfigurationError
from rgbridge.utils.path_utils import ensure_parent_directory, get_config_dir

logger = logging.getLogger(__name__)


@dataclass
class BridgeConfig:
    rg_binary: str = DEFAULT_BINARY
    default_search_path: str = ""
    history_path: Optional[str] = None
    max_results: int = MAX_RESULTS

    @classmethod
    def default(cls) -> "BridgeConfig":
        return cls(default_search_path=str(Path.home()))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BridgeConfig":
        """Build from parsed YAML. Missing keys take their defaults.

        Raises:
            ConfigurationError: If a value has the wrong type or range.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("config must be a mapping")

        defaults = cls.default()
        rg_binary = data.get("rg_binary") or defaults.rg_binary
        if not isinstance(rg_binary, str):
            raise ConfigurationError("rg_binary must be a string", field="rg_binary")

        history_path = data.get("history_path") or None
        if history_path is not None and not isinstance(history_path, str):
            raise ConfigurationError(
                "history_path must be a string or null", field="history_path"
            )

        max_results = data.get("max_results", MAX_RESULTS)
        if isinstance(max_results, bool) or not isinstance(max_results, int):
            raise ConfigurationError(
                "max_results must be an integer", field="max_results"
            )
        if max_results < 1:
            raise ConfigurationError("max_results must be >= 1", field="max_results")

        return cls(
            rg_binary=rg_binary,
            default_search_path=str(
                data.get("default_search_path") or defaults.default_search_path
            ),
            history_path=history_path,
            max_results=min(max_results, MAX_RESULTS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def history_dir(self) -> Path:
        if self.history_path:
            return Path(self.history_path).expanduser()
        return get_config_dir()


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILE_NAME


def detect_config_file() -> bool:
    return get_config_path().is_file()


def save_config(config: BridgeConfig) -> Path:
    """Write config.yaml, creating the config directory if needed."""
    path = ensure_parent_directory(get_config_path())
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)
    logger.debug("Saved config to %s", path)
    return path


def create_default_config() -> BridgeConfig:
    config = BridgeConfig.default()
    save_config(config)
    logger.info("Created default config at %s", get_config_path())
    return config


def _apply_env(config: BridgeConfig) -> BridgeConfig:
    binary = os.getenv("RGBRIDGE_RG_BINARY")
    if binary:
        config.rg_binary = binary
    return config


def load_config() -> BridgeConfig:
    """Load config.yaml, falling back to defaults if it is missing or broken."""
    path = get_config_path()
    if not path.is_file():
        return _apply_env(BridgeConfig.default())

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = BridgeConfig.from_dict(data)
    except (OSError, yaml.YAMLError, ConfigurationError) as e:
        logger.error("Failed to load config %s: %s", path, e)
        config = BridgeConfig.default()

    return _apply_env(config)


def initialize_config() -> BridgeConfig:
    """Create the config file if it does not exist, then load it."""
    if not detect_config_file():
        try:
            create_default_config()
        except OSError as e:
            logger.warning("Could not create config file: %s", e)
    return load_config()
