"""Error types for rgbridge.

Expected failures of a search (launch failure, tool error, cancellation)
travel as result objects: SubprocessResult, RunOutcome, SearchResponse.
These exceptions are for exceptional cases:
- Caller contract violations (bad SearchRequest)
- Config and history file problems
- SearchResponse.raise_for_error() for callers that prefer exceptions
"""

from typing import Optional


class SearchError(Exception):
    """Base exception for rgbridge.

    Attributes:
        message: Error description.
        cause: Optional underlying exception being wrapped.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        """Initialize SearchError.

        Args:
            message: Description of the error.
            cause: Optional exception that triggered this error.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause


class LaunchError(SearchError):
    """The external search tool could not be started.

    Attributes:
        message: Description of the launch failure.
        command: The binary that failed to launch.
    """

    def __init__(self, message: str, command: Optional[str] = None):
        super().__init__(message)
        self.command = command


class ExecutionError(SearchError):
    """The external search tool ran and reported an error.

    The message is the tool's standard error, verbatim.

    Attributes:
        stderr: Captured standard error text.
        return_code: Exit code of the tool.
    """

    def __init__(self, stderr: str, return_code: Optional[int] = None):
        super().__init__(stderr)
        self.stderr = stderr
        self.return_code = return_code


class SearchCancelled(SearchError):
    """The search was cancelled before the tool exited."""


class InvalidRequestError(SearchError):
    """A SearchRequest was built with invalid values.

    Attributes:
        message: Description of the problem.
        field: Name of the offending field.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConfigurationError(SearchError):
    """Configuration error (invalid value in config file, etc).

    Attributes:
        message: Description of the error.
        field: Optional field name that failed.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        """Initialize ConfigurationError.

        Args:
            message: Description of the error.
            field: Optional field that caused the error.
        """
        super().__init__(message)
        self.field = field


class HistoryError(SearchError):
    """Search history file I/O or format error.

    Attributes:
        message: Description of the error.
        path: Optional path to the history file.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
