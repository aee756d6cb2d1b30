"""
LogConfigReader - Side-channel for the function's log destination

AWS_LAMBDA_LOG_GROUP_NAME / AWS_LAMBDA_LOG_STREAM_NAME are not visible to
extensions, so the function writes them to a JSON file on every invocation:

    {"logGroupName": "/aws/lambda/fn", "logStreamName": "2024/01/01/[$LATEST]abc"}

The file is consumed: it is deleted as soon as it has been read.
"""

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from ..core.exceptions import InvalidLogConfigError, LogConfigUnavailableError
from ..models.report import LogConfig

logger = logging.getLogger("log_ingestor.log_config")

DEFAULT_LOG_CONFIG_PATH = "/tmp/log-ingestor-config.json"


class LogConfigReader:
    def __init__(
        self,
        path: Union[str, Path] = DEFAULT_LOG_CONFIG_PATH,
        timeout: float = 2.0,
        poll_interval: float = 0.01,
    ):
        self.path = Path(path)
        self.timeout = timeout
        self.poll_interval = poll_interval

    async def read(self) -> LogConfig:
        """
        Wait for the file, read it, delete it, and parse it.

        Raises:
            LogConfigUnavailableError: the file did not appear within the timeout
            InvalidLogConfigError: the file is not a valid log config
        """
        start_time = time.monotonic()
        while True:
            try:
                raw = self.path.read_bytes()
                break
            except FileNotFoundError:
                await asyncio.sleep(self.poll_interval)
                if time.monotonic() - start_time > self.timeout:
                    raise LogConfigUnavailableError(str(self.path), self.timeout)

        self.path.unlink(missing_ok=True)

        try:
            log_config = LogConfig.model_validate(json.loads(raw.decode("utf-8")))
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            raise InvalidLogConfigError(str(self.path), e) from e

        logger.debug(
            f"Log destination: {log_config.log_group_name}/{log_config.log_stream_name}"
        )
        return log_config
