"""
Data model definitions package.

Aggregates the models shared by the log ingestor services.
"""

from .extension import EVENT_INVOKE, EVENT_SHUTDOWN, ExtensionEvent
from .report import LogConfig, LogPage, LogRecord, PendingInvocation, ReportRecord

__all__ = [
    "EVENT_INVOKE",
    "EVENT_SHUTDOWN",
    "ExtensionEvent",
    "LogConfig",
    "LogPage",
    "LogRecord",
    "PendingInvocation",
    "ReportRecord",
]
