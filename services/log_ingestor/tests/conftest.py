import asyncio
import os
from collections import defaultdict, deque
from unittest.mock import MagicMock

import pytest

# Config is initialized at import time, so set the environment at top level.
os.environ.setdefault("AWS_LAMBDA_RUNTIME_API", "127.0.0.1:9001")

from services.log_ingestor.models.report import LogPage, LogRecord  # noqa: E402

REQUEST_ID = "6dbbebcc-6864-46ca-acfc-1361b5bb0948"


def build_report_line(
    request_id: str,
    duration: str = "100.00 ms",
    billed_duration: str = "100 ms",
    memory_size: str = "128 MB",
    max_memory_used: str = "64 MB",
) -> str:
    return (
        f"REPORT RequestId: {request_id}\tDuration: {duration}\t"
        f"Billed Duration: {billed_duration}\tMemory Size: {memory_size}\t"
        f"Max Memory Used: {max_memory_used}\t\n"
    )


class FakePoller:
    """
    In-memory stand-in for ReportLogPoller.

    Pages are queued per log stream; once a stream's queue is empty every poll
    returns an empty page that keeps the cursor where it was.
    """

    def __init__(self):
        self.pages = defaultdict(deque)
        self.errors = {}
        self.calls = []

    def add_page(self, log_stream_name: str, messages, next_cursor: str = None) -> None:
        self.pages[log_stream_name].append(
            LogPage(records=[LogRecord(message=m) for m in messages], next_cursor=next_cursor)
        )

    def fail_with(self, log_stream_name: str, error: Exception) -> None:
        self.errors[log_stream_name] = error

    async def fetch_page(self, log_group_name, log_stream_name, cursor, timeout):
        self.calls.append((log_group_name, log_stream_name, cursor, timeout))
        await asyncio.sleep(0)
        if log_stream_name in self.errors:
            raise self.errors[log_stream_name]
        if self.pages[log_stream_name]:
            return self.pages[log_stream_name].popleft()
        return LogPage(records=[], next_cursor=cursor)


@pytest.fixture
def report_line():
    """Factory for Lambda REPORT lines"""
    return build_report_line


@pytest.fixture
def fake_poller():
    return FakePoller()


@pytest.fixture
def sink():
    """Mock ObservationSink"""
    return MagicMock()


@pytest.fixture
def request_id():
    return REQUEST_ID
