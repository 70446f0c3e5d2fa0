"""
Structured logging for the compliance engine.

JSON output (python-json-logger) by default so run/rule events can be shipped
to a log pipeline; a plain text format is available for local development.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Optional

from pythonjsonlogger.json import JsonFormatter

DEFAULT_LOGGER_NAME = "compliance-engine"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class EngineJsonFormatter(JsonFormatter):
    """Adds timestamp, level, logger, module, function and thread to each record."""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        if log_record.get("level"):
            log_record["level"] = str(log_record["level"]).upper()
        else:
            log_record["level"] = record.levelname

        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        # Rules run on pool threads; the thread name identifies the worker.
        log_record["thread"] = record.threadName


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: Optional[str] = None,
    format_type: str = "json",
) -> logging.Logger:
    """
    Configure a logger with a single stdout handler.

    Args:
        name: Logger name
        level: Log level name; falls back to the LOG_LEVEL env var, then INFO
        format_type: "json" or "text"

    Returns:
        Configured logger instance
    """
    log_level_str = level or os.getenv("LOG_LEVEL", "INFO")
    log_level = LOG_LEVELS.get(log_level_str.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format_type == "json":
        formatter: logging.Formatter = EngineJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger


class log_operation:
    """
    Log the start, completion and duration of an operation.

    Usage:
        with log_operation("run_all", logger=logger, rule_count=24):
            ...
    """

    def __init__(self, operation_name: str, logger: Optional[logging.Logger] = None, **extra_fields: Any):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.start_time: Optional[float] = None
        self.duration: float = 0.0

    def __enter__(self) -> "log_operation":
        self.start_time = time.perf_counter()
        self.logger.info(
            f"Starting: {self.operation_name}",
            extra={"operation": self.operation_name, **self.extra_fields},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.duration = time.perf_counter() - (self.start_time or time.perf_counter())
        if exc_type is None:
            self.logger.info(
                f"Completed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_seconds": round(self.duration, 3),
                    "status": "success",
                    **self.extra_fields,
                },
            )
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_seconds": round(self.duration, 3),
                    "status": "error",
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val),
                    **self.extra_fields,
                },
                exc_info=True,
            )
        return False
