"""
Core logic package.

Provides REPORT line parsing, exceptions and logging setup.
"""

from .exceptions import (
    ExtensionApiError,
    InvalidLogConfigError,
    LogConfigUnavailableError,
    LogIngestorError,
    ReportPollTimeoutError,
    UnknownEventTypeError,
)
from .report_parser import get_field_value, parse_report_message

__all__ = [
    "ExtensionApiError",
    "InvalidLogConfigError",
    "LogConfigUnavailableError",
    "LogIngestorError",
    "ReportPollTimeoutError",
    "UnknownEventTypeError",
    "get_field_value",
    "parse_report_message",
]
