"""
Where: services/log_ingestor/main.py
What: Lambda extension entrypoint for the log ingestor.
Why: Register with the Extensions API, feed events to the processor and map the outcome to an exit code.
"""

import asyncio
import logging
import sys
from typing import Optional

import boto3

from services.common.core.http_client import HttpClientFactory

from .config import LogIngestorConfig, config
from .core.exceptions import UnknownEventTypeError
from .core.logging_config import setup_logging
from .models.extension import EVENT_INVOKE, EVENT_SHUTDOWN
from .services.correlation_job import CorrelationJob
from .services.extension_client import ExtensionClient
from .services.job_registry import JobRegistry
from .services.log_config_reader import LogConfigReader
from .services.log_poller import ReportLogPoller
from .services.observation import LoggingObservationSink, ObservationSink
from .services.processor import ExtensionEventProcessor
from .services.shutdown import ShutdownCoordinator

logger = logging.getLogger("log_ingestor.main")


def build_processor(
    app_config: LogIngestorConfig,
    logs_client=None,
    sink: Optional[ObservationSink] = None,
) -> ExtensionEventProcessor:
    """Assemble the correlation core from configuration."""
    if logs_client is None:
        logs_client = boto3.client("logs", region_name=app_config.AWS_REGION)
    sink = sink or LoggingObservationSink()

    poller = ReportLogPoller(
        logs_client,
        page_size=app_config.REPORT_PAGE_SIZE,
        backoff=app_config.REPORT_POLL_BACKOFF,
    )

    def job_factory(log_group_name: str, log_stream_name: str) -> CorrelationJob:
        return CorrelationJob(
            log_group_name,
            log_stream_name,
            poller=poller,
            sink=sink,
            poll_timeout=app_config.REPORT_POLL_TIMEOUT,
            poll_interval=app_config.REPORT_POLL_INTERVAL,
        )

    registry = JobRegistry(job_factory)
    return ExtensionEventProcessor(
        registry=registry,
        log_config_reader=LogConfigReader(
            app_config.LOG_CONFIG_FILE_PATH,
            timeout=app_config.LOG_CONFIG_WAIT_TIMEOUT,
            poll_interval=app_config.LOG_CONFIG_POLL_INTERVAL,
        ),
        coordinator=ShutdownCoordinator(registry),
    )


async def run_event_loop(extension: ExtensionClient, processor: ExtensionEventProcessor) -> None:
    """Read events until SHUTDOWN."""
    while True:
        event = await extension.next_event()
        if not await processor.handle_event(event):
            return


async def run_extension(app_config: LogIngestorConfig, processor=None) -> None:
    factory = HttpClientFactory(app_config)
    processor = processor or build_processor(app_config)

    async with factory.create_async_client() as client:
        extension = ExtensionClient(
            client, app_config.AWS_LAMBDA_RUNTIME_API, app_config.EXTENSION_NAME
        )
        logger.info("Registering log ingestor extension")
        extension_id = await extension.register([EVENT_INVOKE, EVENT_SHUTDOWN])
        logger.info(f"Got extension id {extension_id}")

        try:
            await run_event_loop(extension, processor)
        except UnknownEventTypeError:
            await extension.report_exit_error("Extension.UnknownEvent")
            raise
        except Exception:
            await extension.report_exit_error("Extension.Crash")
            raise

        # exit/error is not reported once SHUTDOWN has arrived.
        await processor.on_shutdown()


def main() -> int:
    setup_logging(config.LOG_CONFIG_PATH)
    try:
        asyncio.run(run_extension(config))
    except Exception as e:
        logger.error(f"Log ingestor extension failed: {e}", exc_info=True)
        return 1
    logger.info("Log ingestor extension exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
