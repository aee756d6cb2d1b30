"""
JobRegistry - Routes INVOKE notifications to correlation jobs

Provides one CorrelationJob per (log group, log stream). Jobs are created
lazily on the first notification for a destination and their loops run as
unattended background tasks. Entries are never removed during the process
lifetime; the shutdown coordinator drains them at the end.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .correlation_job import CorrelationJob

logger = logging.getLogger("log_ingestor.registry")

JobKey = Tuple[str, str]


@dataclass
class JobEntry:
    job: CorrelationJob
    task: asyncio.Task

    @property
    def failed(self) -> bool:
        return self.task.done() and not self.task.cancelled() and self.task.exception() is not None


class JobRegistry:
    """
    Process-wide mapping of log destination -> running CorrelationJob.

    - route_notification() is synchronous: all mutation happens on the event loop
    - a destination whose job failed gets a fresh job; the failed entry is
      retired but kept so the drain still reports it
    """

    def __init__(self, job_factory: Callable[[str, str], CorrelationJob]):
        """
        Args:
            job_factory: builds a job for (log_group_name, log_stream_name)
        """
        self.job_factory = job_factory
        self._entries: Dict[JobKey, JobEntry] = {}
        self._retired: List[JobEntry] = []

    def route_notification(
        self, log_group_name: str, log_stream_name: str, invocation_id: str
    ) -> None:
        """Add invocation_id as pending on the job for this destination, creating it if needed."""
        key = (log_group_name, log_stream_name)
        entry = self._entries.get(key)

        if entry is not None and entry.failed:
            logger.warning(
                f"Job for {log_group_name}/{log_stream_name} failed earlier; starting a new one"
            )
            self._retired.append(self._entries.pop(key))
            entry = None

        if entry is None:
            entry = self._start_job(log_group_name, log_stream_name)
            self._entries[key] = entry

        entry.job.add_pending(invocation_id)

    def _start_job(self, log_group_name: str, log_stream_name: str) -> JobEntry:
        job = self.job_factory(log_group_name, log_stream_name)
        task = asyncio.create_task(
            job.run(), name=f"correlation:{log_group_name}/{log_stream_name}"
        )
        task.add_done_callback(self._on_job_done)
        logger.info(f"Created correlation job for {log_group_name}/{log_stream_name}")
        return JobEntry(job=job, task=task)

    def _on_job_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            return
        entry = self._find_entry(task)
        unresolved = entry.job.unresolved() if entry else []
        logger.error(
            f"Correlation job {task.get_name()} failed: {error}",
            exc_info=error,
            extra={"unresolved_request_ids": unresolved},
        )

    def _find_entry(self, task: asyncio.Task) -> Optional[JobEntry]:
        for entry in self.entries():
            if entry.task is task:
                return entry
        return None

    def get_job(self, log_group_name: str, log_stream_name: str) -> Optional[CorrelationJob]:
        entry = self._entries.get((log_group_name, log_stream_name))
        return entry.job if entry else None

    def entries(self) -> List[JobEntry]:
        """All entries: retired ones first, then the live ones."""
        return self._retired + list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
