"""
Logger utility for rgbridge.

One console handler on stderr plus rotating files in the config
directory ({$RGBRIDGE_HOME or ~/.config/rgbridge}/logs/), see LOG_FILES.
The console only shows warnings unless debug output is requested; the
files always get the full stream.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional

from rgbridge.utils.path_utils import ensure_directory, get_log_dir

_MB = 1024 * 1024

# (file name, max bytes, backups, level, structured)
LOG_FILES = (
    ("rgbridge.log", 5 * _MB, 3, logging.DEBUG, False),
    ("rgbridge.errors.log", 2 * _MB, 2, logging.ERROR, False),
    ("rgbridge.json", 5 * _MB, 2, logging.INFO, True),
)

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def _file_handlers(text_formatter: logging.Formatter):
    log_dir = ensure_directory(get_log_dir())
    for file_name, max_bytes, backups, level, structured in LOG_FILES:
        handler = RotatingFileHandler(
            log_dir / file_name,
            maxBytes=max_bytes,
            backupCount=backups,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(JsonFormatter() if structured else text_formatter)
        yield handler


def get_logger(
    name: str = "rgbridge",
    level: Optional[int] = None,
    console_level: int = logging.WARNING,
) -> logging.Logger:
    """
    Get or create a logger with a console handler and rotating files.

    Args:
        name: Logger name. Configure "rgbridge" to capture every module.
        level: Optional logger level (defaults to DEBUG)
        console_level: Threshold for the stderr handler. Applied on every
            call, so a later call can turn debug output on or off.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    console = next(
        (h for h in logger.handlers if getattr(h, "_rgbridge_console", False)), None
    )
    if console is None:
        text_formatter = logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

        console = logging.StreamHandler(sys.stderr)
        console._rgbridge_console = True
        console.setFormatter(text_formatter)
        logger.addHandler(console)

        try:
            for handler in _file_handlers(text_formatter):
                logger.addHandler(handler)
        except OSError as e:
            logger.warning("File logging disabled: %s", e)

    console.setLevel(console_level)

    if level is not None:
        logger.setLevel(level)
    elif not logger.level:
        logger.setLevel(logging.DEBUG)

    return logger
