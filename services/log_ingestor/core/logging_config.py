import logging
import os

from services.common.core.logging_config import setup_logging as common_setup_logging

DEFAULT_LOG_CONFIG_PATH = "/opt/log-ingestor/log_ingestor_log.yaml"


def setup_logging(config_path: str = None):
    """
    Load the YAML config and initialize logging.
    Keep botocore quiet unless explicitly configured.
    """
    config_path = config_path or os.getenv("LOG_CONFIG_PATH", DEFAULT_LOG_CONFIG_PATH)
    common_setup_logging(config_path)

    for noisy in ("botocore", "urllib3", "httpx", "httpcore"):
        if logging.getLogger(noisy).level == logging.NOTSET:
            logging.getLogger(noisy).setLevel(logging.WARNING)
