"""
Logging Configuration
JSON logging for Lambda extension processes.

Provides:
- CustomJsonFormatter: one JSON object per line, CloudWatch Logs friendly
- setup_logging: YAML dictConfig loader with ${ENV} substitution
"""

import json
import logging
import logging.config
import os
import string
from datetime import datetime, timezone

import yaml

from .request_context import get_request_id

# LogRecord attributes that are not user supplied `extra=` fields.
_STANDARD_ATTRS = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


class CustomJsonFormatter(logging.Formatter):
    """
    JSON Formatter.

    Fields:
      - _time: ISO8601 timestamp (millisecond precision)
      - level: Log level
      - logger: Logger name (e.g. log_ingestor.job)
      - message: Log message
      - aws_request_id: invocation being handled, when one is bound
    """

    def format(self, record: logging.LogRecord) -> str:
        # An explicit extra={"aws_request_id": ...} wins over the context.
        request_id = getattr(record, "aws_request_id", None) or get_request_id()

        log_data = {
            "_time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if request_id:
            log_data["aws_request_id"] = request_id

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_") and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(config_path: str = "logging.yml"):
    """
    Load the YAML config, substitute environment variables, and initialize logging.
    """
    if not os.path.exists(config_path):
        logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
        return

    with open(config_path, "r", encoding="utf-8") as f:
        # Supports ${LOG_LEVEL} format.
        template = string.Template(f.read())

    mapping = os.environ.copy()
    if "LOG_LEVEL" not in mapping:
        mapping["LOG_LEVEL"] = "INFO"

    content = template.safe_substitute(mapping)
    config = yaml.safe_load(content)
    logging.config.dictConfig(config)
