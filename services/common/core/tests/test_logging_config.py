import json
import logging
import sys

from services.common.core import logging_config, request_context


def _record(msg: str = "Test message", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test_logger",
        level=logging.INFO,
        pathname="test_path.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_custom_json_formatter_includes_request_id():
    """Ensure the formatter includes the RequestID from context."""
    request_context.set_request_id("req-ctx")
    try:
        log_json = json.loads(logging_config.CustomJsonFormatter().format(_record()))
    finally:
        request_context.clear_request_id()

    assert log_json["message"] == "Test message"
    assert log_json["level"] == "INFO"
    assert log_json["logger"] == "test_logger"
    assert log_json["aws_request_id"] == "req-ctx"


def test_explicit_request_id_wins_over_context():
    request_context.set_request_id("req-ctx")
    try:
        record = _record(aws_request_id="req-explicit")
        log_json = json.loads(logging_config.CustomJsonFormatter().format(record))
    finally:
        request_context.clear_request_id()

    assert log_json["aws_request_id"] == "req-explicit"


def test_extra_fields_are_included():
    record = _record(unresolved_request_ids=["a", "b"], _private="hidden")

    log_json = json.loads(logging_config.CustomJsonFormatter().format(record))

    assert log_json["unresolved_request_ids"] == ["a", "b"]
    assert "_private" not in log_json
    assert "aws_request_id" not in log_json


def test_exception_is_formatted():
    try:
        raise ValueError("bad value")
    except ValueError:
        record = _record(msg="failed")
        record.exc_info = sys.exc_info()

    log_json = json.loads(logging_config.CustomJsonFormatter().format(record))

    assert "ValueError: bad value" in log_json["exception"]


def test_setup_logging_substitutes_env(monkeypatch, tmp_path):
    config_path = tmp_path / "logging.yml"
    config_path.write_text(
        "version: 1\n"
        "disable_existing_loggers: false\n"
        "loggers:\n"
        "  yaml_configured:\n"
        "    level: ${LOG_LEVEL}\n"
    )
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    logging_config.setup_logging(str(config_path))

    assert logging.getLogger("yaml_configured").level == logging.WARNING
