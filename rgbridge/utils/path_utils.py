"""Path utilities: config directory lookup and directory creation."""

import os
from pathlib import Path

from rgbridge.constants import APP_NAME, CONFIG_DIR_NAME, LOG_DIR_NAME


def ensure_directory(path: Path) -> Path:
    """Ensure directory exists, creating it and all parents if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The path (for chaining)

    Raises:
        OSError: If directory cannot be created
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def ensure_parent_directory(file_path: Path) -> Path:
    """Ensure parent directory of file path exists."""
    file_path = Path(file_path)
    ensure_directory(file_path.parent)
    return file_path


def get_config_dir() -> Path:
    """Get config directory from RGBRIDGE_HOME or default to ~/.config/rgbridge."""
    home = os.getenv("RGBRIDGE_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / CONFIG_DIR_NAME / APP_NAME


def get_log_dir() -> Path:
    return get_config_dir() / LOG_DIR_NAME
