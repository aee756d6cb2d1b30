"""
ShutdownCoordinator - Graceful drain of every correlation job

Marks each job as stopped, then waits for all job loops to finish. Results
are settled for every job before any failure is reported.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .job_registry import JobRegistry

logger = logging.getLogger("log_ingestor.shutdown")


class ShutdownCoordinator:
    def __init__(self, registry: "JobRegistry"):
        self.registry = registry

    async def drain_all(self) -> None:
        """
        Stop all jobs and wait for their loops to exit.

        Raises:
            The first job failure, after every job has settled.
        """
        entries = self.registry.entries()
        logger.info(f"Draining {len(entries)} correlation jobs...")

        for entry in entries:
            entry.job.stop()

        results = await asyncio.gather(*(entry.task for entry in entries), return_exceptions=True)

        first_error = None
        for entry, result in zip(entries, results):
            if not isinstance(result, BaseException):
                continue
            unresolved = entry.job.unresolved()
            if unresolved:
                logger.warning(
                    f"Unresolved invocations on {entry.job.log_stream_name}: {unresolved}",
                    extra={"unresolved_request_ids": unresolved},
                )
            # A cancelled job is not a failure.
            if first_error is None and isinstance(result, Exception):
                first_error = result

        if first_error is not None:
            logger.error(f"Drain finished with failures: {first_error}")
            raise first_error

        logger.info("All correlation jobs drained")
