"""
Where: services/log_ingestor/services/processor.py
What: Dispatch of Extensions API events to the correlation core.
Why: Keep main.py limited to process wiring; one invocation's failure must not stop the others.
"""

import logging

from services.common.core.request_context import clear_request_id, set_request_id

from ..core.exceptions import LogIngestorError, UnknownEventTypeError
from ..models.extension import EVENT_INVOKE, EVENT_SHUTDOWN, ExtensionEvent
from .job_registry import JobRegistry
from .log_config_reader import LogConfigReader
from .shutdown import ShutdownCoordinator

logger = logging.getLogger("log_ingestor.processor")


class ExtensionEventProcessor:
    def __init__(
        self,
        registry: JobRegistry,
        log_config_reader: LogConfigReader,
        coordinator: ShutdownCoordinator,
    ):
        self.registry = registry
        self.log_config_reader = log_config_reader
        self.coordinator = coordinator

    async def handle_event(self, event: ExtensionEvent) -> bool:
        """
        Handle one event and return whether more events should be read.

        Raises:
            UnknownEventTypeError: the event kind is not INVOKE or SHUTDOWN
        """
        if event.event_type == EVENT_SHUTDOWN:
            logger.info(f"Shutdown requested (reason: {event.shutdown_reason})")
            return False

        if event.event_type == EVENT_INVOKE:
            try:
                await self.on_invocation_start(event)
            except LogIngestorError as e:
                logger.error(f"Error processing invocation event: {e}")
            except Exception as e:
                logger.error(f"Error processing invocation event: {e}", exc_info=True)
            finally:
                clear_request_id()
            return True

        raise UnknownEventTypeError(event.event_type)

    async def on_invocation_start(self, event: ExtensionEvent) -> None:
        """Resolve the log destination and register the invocation as pending."""
        if not event.request_id:
            raise ValueError("INVOKE event without requestId")
        set_request_id(event.request_id)

        log_config = await self.log_config_reader.read()
        self.registry.route_notification(
            log_config.log_group_name, log_config.log_stream_name, event.request_id
        )

    async def on_shutdown(self) -> None:
        """Drain every job; failures propagate after all jobs have settled."""
        await self.coordinator.drain_all()
