"""rgbridge primitives: errors and process execution."""

from rgbridge.primitives.errors import (
    ConfigurationError,
    ExecutionError,
    HistoryError,
    InvalidRequestError,
    LaunchError,
    SearchCancelled,
    SearchError,
)
from rgbridge.primitives.subprocess import (
    ProcessExecutor,
    SubprocessPrimitive,
    SubprocessResult,
)

__all__ = [
    # Errors
    "SearchError",
    "LaunchError",
    "ExecutionError",
    "SearchCancelled",
    "InvalidRequestError",
    "ConfigurationError",
    "HistoryError",
    # Subprocess
    "ProcessExecutor",
    "SubprocessResult",
    "SubprocessPrimitive",
]
