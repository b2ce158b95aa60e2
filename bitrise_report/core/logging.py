"""Logging helpers for the report job."""

from __future__ import annotations

import logging
import sys
from typing import Any

from opentelemetry import trace
from pythonjsonlogger import jsonlogger

SERVICE_NAME = "bitrise-report"

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "pymongo", "celery.app.trace")


class ReportJSONFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter tagging every record with the service name and, when a
    span is active, the OpenTelemetry trace/span identifiers.
    """

    def __init__(self, *args: Any, service: str = SERVICE_NAME, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("service", self.service)

        ctx = trace.get_current_span().get_span_context()
        if ctx.is_valid:
            log_record["trace_id"] = trace.format_trace_id(ctx.trace_id)
            log_record["span_id"] = trace.format_span_id(ctx.span_id)

        log_record["level"] = str(log_record.get("level", record.levelname)).upper()


def setup_logging(level: str = "INFO", service: str = SERVICE_NAME) -> None:
    """Route the root logger to stdout as JSON lines."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ReportJSONFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level"},
            service=service,
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    # Replace handlers so repeated setup (Celery worker reloads) does not duplicate lines
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel("WARNING")
