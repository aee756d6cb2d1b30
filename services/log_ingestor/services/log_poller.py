"""
ReportLogPoller - Paginated reader over a CloudWatch Logs stream

Lambda creates the log stream lazily, so the first polls for a fresh
destination commonly hit ResourceNotFoundException. Those are retried on a
fixed backoff within a per-call time budget; every other error is raised as is.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

from botocore.exceptions import ClientError

from ..core.exceptions import ReportPollTimeoutError
from ..models.report import LogPage, LogRecord

logger = logging.getLogger("log_ingestor.poller")

STREAM_NOT_FOUND_CODE = "ResourceNotFoundException"
DEFAULT_PAGE_SIZE = 100
DEFAULT_BACKOFF_SECONDS = 0.01


def is_stream_not_found(error: Exception) -> bool:
    if not isinstance(error, ClientError):
        return False
    return error.response.get("Error", {}).get("Code") == STREAM_NOT_FOUND_CODE


class ReportLogPoller:
    """Fetch pages of log events through a boto3 ``logs`` client."""

    def __init__(
        self,
        logs_client: Any,
        page_size: int = DEFAULT_PAGE_SIZE,
        backoff: float = DEFAULT_BACKOFF_SECONDS,
    ):
        self.logs_client = logs_client
        self.page_size = page_size
        self.backoff = backoff

    def _get_log_events(
        self, log_group_name: str, log_stream_name: str, cursor: Optional[str]
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "logGroupName": log_group_name,
            "logStreamName": log_stream_name,
            "limit": self.page_size,
            "startFromHead": True,
        }
        # boto3 rejects nextToken=None; omit it to read from the beginning.
        if cursor is not None:
            params["nextToken"] = cursor
        return self.logs_client.get_log_events(**params)

    async def fetch_page(
        self,
        log_group_name: str,
        log_stream_name: str,
        cursor: Optional[str],
        timeout: float,
    ) -> LogPage:
        """
        Fetch the page after ``cursor`` (None reads from the head of the stream).

        Raises:
            ReportPollTimeoutError: the stream did not exist for ``timeout`` seconds
            ClientError: any other CloudWatch Logs failure, without retry
        """
        logger.debug(f"Getting log events for {log_group_name}/{log_stream_name}")
        start_time = time.monotonic()
        attempts = 0

        while True:
            attempts += 1
            try:
                response = await asyncio.to_thread(
                    self._get_log_events, log_group_name, log_stream_name, cursor
                )
                break
            except ClientError as e:
                if not is_stream_not_found(e):
                    raise
                await asyncio.sleep(self.backoff)
                if time.monotonic() - start_time > timeout:
                    logger.warning(
                        f"Log stream {log_group_name}/{log_stream_name} still missing "
                        f"after {attempts} attempts"
                    )
                    raise ReportPollTimeoutError(
                        log_group_name, log_stream_name, timeout, last_error=e
                    ) from e

        if attempts > 1:
            logger.debug(f"Log stream {log_stream_name} became available after {attempts} attempts")

        return LogPage(
            records=[LogRecord.from_event(event) for event in response.get("events", [])],
            next_cursor=response.get("nextForwardToken"),
        )
