"""
Central logging configuration for MindFlow.

JSON lines in production, one readable line per record in development. Both
carry the request id set by RequestIdMiddleware and any extra= fields, so a
failed generation can be traced from the proxy log line back to the upstream
status that caused it.

Usage:
    from mindflow.logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Curriculum generated", extra={"topic": topic})
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Set by middleware for the lifetime of one request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Loggers that are chatty at INFO (one line per upstream call or access)
_NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")

# Attributes every LogRecord has; anything else came in through extra=
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message", "asctime", "taskName", "request_id", "service",
}


def get_request_id() -> Optional[str]:
    """Get the current request ID from context, if set."""
    return request_id_var.get()


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Fields passed via extra= on the log call, JSON-safe."""
    fields: Dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_ATTRS or key.startswith("_") or value is None:
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = str(value)
        fields[key] = value
    return fields


class RequestIdFilter(logging.Filter):
    """Stamp request_id (or "-") and the service name on every record."""

    def __init__(self, service: str = "mindflow"):
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"  # type: ignore[attr-defined]
        record.service = self.service  # type: ignore[attr-defined]
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", None),
            "logger": record.name,
            "message": record.getMessage(),
        }
        req_id = getattr(record, "request_id", "-")
        if req_id != "-":
            entry["request_id"] = req_id
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(extra_fields(record))
        return json.dumps(entry)


class DevFormatter(logging.Formatter):
    """Human-readable line with extras appended as key=value."""

    def __init__(self):
        super().__init__(
            "%(asctime)s %(levelname)-5s [%(name)s] req=%(request_id)s %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "request_id"):
            record.request_id = "-"  # type: ignore[attr-defined]
        line = super().format(record)
        fields = extra_fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


def configure_logging(
    *,
    log_level: str = "INFO",
    environment: str = "development",
    debug: bool = False,
    service: str = "mindflow",
) -> None:
    """
    Configure application-wide logging. Safe to call more than once.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        environment: 'production' switches to JSON output
        debug: If True, use DEBUG level regardless of log_level
        service: value of the "service" field on every record
    """
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(RequestIdFilter(service))
    handler.setFormatter(JsonFormatter() if environment == "production" else DevFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the given module name.

    Records include request_id automatically while a request is in flight.
    """
    return logging.getLogger(name)
