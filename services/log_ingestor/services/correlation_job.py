"""
CorrelationJob - Match pending invocations with their REPORT lines

One job exists per (log group, log stream). The INVOKE path adds request ids
with add_pending(); the job's own loop pages through the stream and resolves
them. The loop runs while anything is pending or until stop() is called,
whichever finishes last.
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional

from services.common.core.request_context import clear_request_id

from ..core.report_parser import is_report_message, parse_report_message
from ..models.report import PendingInvocation, ReportRecord
from .log_poller import ReportLogPoller
from .observation import ObservationSink

logger = logging.getLogger("log_ingestor.job")

DEFAULT_POLL_TIMEOUT = 6.0


class CorrelationJob:
    """
    Correlation state for a single log destination.

    - pending: request id -> PendingInvocation, shared with the INVOKE path
    - cursor: nextForwardToken of the last page read (None = stream head)
    - stopped: set once by the shutdown coordinator, never unset
    """

    def __init__(
        self,
        log_group_name: str,
        log_stream_name: str,
        poller: ReportLogPoller,
        sink: ObservationSink,
        poll_timeout: float = DEFAULT_POLL_TIMEOUT,
        poll_interval: float = 0.0,
    ):
        self.log_group_name = log_group_name
        self.log_stream_name = log_stream_name
        self.poller = poller
        self.sink = sink
        self.poll_timeout = poll_timeout
        self.poll_interval = poll_interval

        self.pending: Dict[str, PendingInvocation] = {}
        self.cursor: Optional[str] = None
        self.stopped = False
        self.cycles = 0

    @property
    def is_done(self) -> bool:
        """True once no more arrivals are expected and nothing is pending."""
        return self.stopped and not self.pending

    def add_pending(self, request_id: str) -> None:
        """Register an invocation whose REPORT line is still to come."""
        if request_id in self.pending:
            return
        self.pending[request_id] = PendingInvocation(
            request_id=request_id, registered_at=time.time()
        )
        logger.debug(
            f"Pending invocation {request_id} on {self.log_stream_name} "
            f"({len(self.pending)} pending)"
        )

    def stop(self) -> None:
        """Signal that no more invocations will arrive. Observed between poll cycles."""
        self.stopped = True

    def unresolved(self) -> List[str]:
        return list(self.pending)

    async def run(self) -> None:
        """Poll until stopped and drained. Poller failures propagate to the awaiting task."""
        # The task inherited the INVOKE handler's context; it outlives that invocation.
        clear_request_id()
        logger.info(f"Correlation job started for {self.log_group_name}/{self.log_stream_name}")

        while self.pending or not self.stopped:
            await self.poll_once()
            # Yield even when the poll completed without suspending.
            await asyncio.sleep(self.poll_interval)

        logger.info(
            f"Correlation job finished for {self.log_group_name}/{self.log_stream_name} "
            f"after {self.cycles} cycles"
        )

    async def poll_once(self) -> List[ReportRecord]:
        """Run one poll cycle and return the reports that resolved pending invocations."""
        page = await self.poller.fetch_page(
            self.log_group_name, self.log_stream_name, self.cursor, self.poll_timeout
        )
        self.cycles += 1

        reports = [record for record in page.records if is_report_message(record.message)]
        if reports:
            logger.debug(f"Report events on {self.log_stream_name}: {len(reports)}")

        resolved = []
        for record in reports:
            report = parse_report_message(record.message)
            if report is None or report.request_id not in self.pending:
                # Another destination's invocation, or already resolved.
                continue
            pending = self.pending.pop(report.request_id)
            self.sink.emit(report)
            resolved.append(report)
            logger.debug(
                f"Resolved {report.request_id} after {time.time() - pending.registered_at:.3f}s"
            )

        self.cursor = page.next_cursor
        return resolved
