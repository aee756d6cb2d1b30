"""
Report correlation models.

Data carried between the log poller, the correlation jobs and the observation sink.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class PendingInvocation:
    """An invocation whose REPORT line has not been seen yet."""

    request_id: str
    registered_at: float = 0.0  # Epoch seconds when the INVOKE event arrived


@dataclass
class LogRecord:
    """One CloudWatch Logs event."""

    message: str
    timestamp: int = 0  # Milliseconds since epoch
    ingestion_time: int = 0

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "LogRecord":
        return cls(
            message=event.get("message", ""),
            timestamp=event.get("timestamp", 0),
            ingestion_time=event.get("ingestionTime", 0),
        )


@dataclass
class LogPage:
    """One page of GetLogEvents output plus the cursor for the next page."""

    records: List[LogRecord] = field(default_factory=list)
    next_cursor: Optional[str] = None


class ReportRecord(BaseModel):
    """
    Metrics parsed from a Lambda REPORT line.

    Values are kept verbatim (e.g. "100.00 ms"); a metric missing from the
    line is None.
    """

    request_id: str
    duration: Optional[str] = None
    billed_duration: Optional[str] = None
    memory_size: Optional[str] = None
    max_memory_used: Optional[str] = None
    init_duration: Optional[str] = None

    def to_observation(self) -> Dict[str, Optional[str]]:
        """Completion observation emitted for a resolved invocation."""
        return {
            "requestId": self.request_id,
            "duration": self.duration,
            "billedDuration": self.billed_duration,
            "memorySize": self.memory_size,
            "maxMemoryUsed": self.max_memory_used,
        }


class LogConfig(BaseModel):
    """Log destination of the function, written by the function into the side-channel file."""

    model_config = ConfigDict(populate_by_name=True)

    log_group_name: str = Field(..., alias="logGroupName", min_length=1)
    log_stream_name: str = Field(..., alias="logStreamName", min_length=1)
