"""Tests for structured logging configuration."""

import json
import logging

from pythonjsonlogger.json import JsonFormatter

from slack_knowledge.logging_config import LOGGING_CONFIG, configure_logging


def test_configure_logging_installs_json_handler():
    configure_logging("warning")
    try:
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    finally:
        configure_logging("INFO")


def test_configure_logging_leaves_base_config_untouched():
    configure_logging("DEBUG")
    configure_logging("INFO")
    assert LOGGING_CONFIG["root"]["level"] == "INFO"


def test_json_output_uses_renamed_fields():
    configure_logging("INFO")
    formatter = next(
        h.formatter for h in logging.getLogger().handlers if isinstance(h.formatter, JsonFormatter)
    )
    record = logging.LogRecord("slack_knowledge.store", logging.ERROR, __file__, 1, "disk %s", ("full",), None)

    payload = json.loads(formatter.format(record))

    assert payload["severity"] == "ERROR"
    assert payload["logger"] == "slack_knowledge.store"
    assert payload["message"] == "disk full"
    assert payload["service"] == "slack-knowledge"
