import logging
from typing import Protocol

from ..models.report import ReportRecord

logger = logging.getLogger("log_ingestor.observation")


class ObservationSink(Protocol):
    """Receives one completion observation per resolved invocation."""

    def emit(self, report: ReportRecord) -> None: ...


class LoggingObservationSink:
    """Publish completion observations as structured log lines."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def emit(self, report: ReportRecord) -> None:
        observation = report.to_observation()
        self.log.info(
            f"Request {report.request_id} reported finish",
            extra={"aws_request_id": report.request_id, "observation": observation},
        )
