"""
Log ingestor configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys

from pydantic import Field

from services.common.core.config import BaseAppConfig


class LogIngestorConfig(BaseAppConfig):
    """
    Configuration management for the log ingestor extension.
    """

    EXTENSION_NAME: str = Field(
        default="log-ingestor", description="Lambda-Extension-Name sent on register"
    )
    LOG_CONFIG_PATH: str = Field(
        default="/opt/log-ingestor/log_ingestor_log.yaml", description="Logging YAML path"
    )

    # Side-channel with the function's log destination
    LOG_CONFIG_FILE_PATH: str = Field(
        default="/tmp/log-ingestor-config.json", description="Log destination JSON file"
    )
    LOG_CONFIG_WAIT_TIMEOUT: float = Field(
        default=2.0, gt=0, description="Wait for the log destination file (seconds)"
    )
    LOG_CONFIG_POLL_INTERVAL: float = Field(
        default=0.01, gt=0, description="Check interval for the log destination file (seconds)"
    )

    # CloudWatch Logs polling
    REPORT_POLL_TIMEOUT: float = Field(
        default=6.0, gt=0, description="Retry budget while the log stream does not exist (seconds)"
    )
    REPORT_POLL_BACKOFF: float = Field(
        default=0.01, gt=0, description="Backoff between stream-not-found retries (seconds)"
    )
    REPORT_PAGE_SIZE: int = Field(default=100, ge=1, le=10000, description="GetLogEvents limit")
    REPORT_POLL_INTERVAL: float = Field(
        default=0.0, ge=0, description="Pause between poll cycles of a job (seconds)"
    )

    # model_config is inherited


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = LogIngestorConfig()
except Exception as e:
    # Fail fast: the extension cannot register without AWS_LAMBDA_RUNTIME_API.
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
