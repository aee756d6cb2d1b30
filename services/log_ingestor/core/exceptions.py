"""
Custom exception classes.

Represent errors raised while correlating invocations with their REPORT lines.
"""

from typing import Optional


class LogIngestorError(Exception):
    """Base exception class for the log ingestor extension."""

    pass


class ReportPollTimeoutError(LogIngestorError, TimeoutError):
    """Raised when the log stream stays unavailable for the whole retry budget."""

    def __init__(
        self,
        log_group_name: str,
        log_stream_name: str,
        timeout: float,
        last_error: Optional[Exception] = None,
    ):
        self.log_group_name = log_group_name
        self.log_stream_name = log_stream_name
        self.timeout = timeout
        self.last_error = last_error
        super().__init__(
            f"Log stream {log_group_name}/{log_stream_name} not available "
            f"within {timeout}s: {last_error}"
        )


class LogConfigUnavailableError(LogIngestorError):
    """Raised when the log destination file does not appear in time."""

    def __init__(self, path: str, timeout: float):
        self.path = path
        self.timeout = timeout
        super().__init__(f"Log config file {path} did not appear within {timeout}s")


class InvalidLogConfigError(LogIngestorError):
    """Raised when the log destination file cannot be parsed."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Invalid log config in {path}: {cause}")


class UnknownEventTypeError(LogIngestorError):
    """Raised when the Extensions API sends an event kind we do not handle."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(f"Unknown event: {event_type}")


class ExtensionApiError(LogIngestorError):
    """Error response from the Lambda Extensions API."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Extensions API error ({status_code}): {detail}")
