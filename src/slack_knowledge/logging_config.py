"""Structured JSON logging configuration.

Configures Python stdlib logging to emit one JSON object per line on stdout,
with ``severity``/``timestamp``/``logger`` field names so log collectors can
pick them up without a custom parser.

Usage:
    from slack_knowledge.logging_config import configure_logging
    configure_logging("INFO")
"""

import copy
import logging
import logging.config

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "slack-knowledge",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        # slack_sdk logs every request body at DEBUG
        "slack_sdk": {"level": "WARNING"},
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Apply structured JSON logging configuration.

    Call once at application startup (in the FastAPI lifespan). All
    subsequent ``logging.getLogger()`` calls emit JSON to stdout at or
    above ``level``.
    """
    config = copy.deepcopy(LOGGING_CONFIG)
    config["root"]["level"] = level.upper()
    logging.config.dictConfig(config)
