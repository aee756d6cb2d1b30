from .correlation_job import CorrelationJob
from .extension_client import ExtensionClient
from .job_registry import JobEntry, JobRegistry
from .log_config_reader import LogConfigReader
from .log_poller import ReportLogPoller
from .observation import LoggingObservationSink, ObservationSink
from .processor import ExtensionEventProcessor
from .shutdown import ShutdownCoordinator

__all__ = [
    "CorrelationJob",
    "ExtensionClient",
    "ExtensionEventProcessor",
    "JobEntry",
    "JobRegistry",
    "LogConfigReader",
    "LoggingObservationSink",
    "ObservationSink",
    "ReportLogPoller",
    "ShutdownCoordinator",
]
