from rgbridge.utils.logger import get_logger
from rgbridge.utils.path_utils import (
    ensure_directory,
    ensure_parent_directory,
    get_config_dir,
    get_log_dir,
)

__all__ = [
    "get_logger",
    "ensure_directory",
    "ensure_parent_directory",
    "get_config_dir",
    "get_log_dir",
]
