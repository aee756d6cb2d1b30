"""
Tests for JobRegistry routing and job isolation
"""

import asyncio
import logging

import pytest

from services.log_ingestor.core.exceptions import ReportPollTimeoutError
from services.log_ingestor.services.correlation_job import CorrelationJob
from services.log_ingestor.services.job_registry import JobRegistry

GROUP = "/aws/lambda/test-func"


@pytest.fixture
def registry(fake_poller, sink):
    def job_factory(log_group_name, log_stream_name):
        return CorrelationJob(log_group_name, log_stream_name, poller=fake_poller, sink=sink)

    return JobRegistry(job_factory)


async def _wait_until(predicate, timeout: float = 1.0) -> None:
    async def _poll():
        while not predicate():
            await asyncio.sleep(0.001)

    await asyncio.wait_for(_poll(), timeout)


async def _cancel_all(registry: JobRegistry) -> None:
    tasks = [entry.task for entry in registry.entries()]
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


@pytest.mark.asyncio
async def test_first_notification_creates_job(registry):
    registry.route_notification(GROUP, "stream-a", "r1")

    job = registry.get_job(GROUP, "stream-a")
    assert job is not None
    assert list(job.pending) == ["r1"]
    assert len(registry) == 1

    entry = registry.entries()[0]
    assert not entry.task.done()

    await _cancel_all(registry)


@pytest.mark.asyncio
async def test_same_destination_reuses_job(registry):
    registry.route_notification(GROUP, "stream-a", "r1")
    registry.route_notification(GROUP, "stream-a", "r2")

    assert len(registry) == 1
    assert set(registry.get_job(GROUP, "stream-a").pending) == {"r1", "r2"}

    await _cancel_all(registry)


@pytest.mark.asyncio
async def test_different_destinations_get_separate_jobs(registry):
    registry.route_notification(GROUP, "stream-a", "r1")
    registry.route_notification(GROUP, "stream-b", "r2")
    registry.route_notification("/aws/lambda/other", "stream-a", "r3")

    assert len(registry) == 3
    assert list(registry.get_job(GROUP, "stream-a").pending) == ["r1"]
    assert list(registry.get_job(GROUP, "stream-b").pending) == ["r2"]
    assert list(registry.get_job("/aws/lambda/other", "stream-a").pending) == ["r3"]
    assert registry.get_job(GROUP, "stream-c") is None

    await _cancel_all(registry)


@pytest.mark.asyncio
async def test_jobs_do_not_resolve_each_others_invocations(
    registry, fake_poller, sink, report_line
):
    """A REPORT for stream B's invocation showing up in stream A is ignored"""
    registry.route_notification(GROUP, "stream-a", "a-1")
    registry.route_notification(GROUP, "stream-b", "b-1")
    fake_poller.add_page("stream-a", [report_line("b-1"), report_line("a-1")])

    job_a = registry.get_job(GROUP, "stream-a")
    job_b = registry.get_job(GROUP, "stream-b")
    await _wait_until(lambda: not job_a.pending)

    assert list(job_b.pending) == ["b-1"]
    emitted = [c.args[0].request_id for c in sink.emit.call_args_list]
    assert emitted == ["a-1"]

    await _cancel_all(registry)


@pytest.mark.asyncio
async def test_failed_job_is_replaced_and_retired(registry, fake_poller, caplog):
    fake_poller.fail_with("stream-a", ReportPollTimeoutError(GROUP, "stream-a", 6.0))

    with caplog.at_level(logging.ERROR, logger="log_ingestor.registry"):
        registry.route_notification(GROUP, "stream-a", "r1")
        failed_job = registry.get_job(GROUP, "stream-a")
        failed_entry = registry.entries()[0]
        await _wait_until(lambda: failed_entry.task.done())
        # Let the done callback run.
        await asyncio.sleep(0)

    assert failed_entry.failed
    assert any("failed" in r.getMessage() for r in caplog.records)

    del fake_poller.errors["stream-a"]
    registry.route_notification(GROUP, "stream-a", "r2")

    new_job = registry.get_job(GROUP, "stream-a")
    assert new_job is not failed_job
    assert list(new_job.pending) == ["r2"]
    assert len(registry) == 1
    assert len(registry.entries()) == 2
    assert registry.entries()[0] is failed_entry

    await _cancel_all(registry)
