"""
Structured logging for loginguard.

Every ``data`` payload passes through ``ContextLogger``, which merges the
fields bound to the logger (``get_logger(__name__).bind(...)``) and masks
credential material before a formatter ever sees it. Request-scoped fields
come from ``request_context``, set by the HTTP middleware.
"""

import json
import logging
import sys
from collections.abc import Mapping
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, Optional

# Context variable for request-scoped data
request_context: ContextVar[dict[str, Any]] = ContextVar("request_context", default={})

SENSITIVE_KEYS = frozenset(
    {"password", "token", "auth_token", "access_token", "authorization", "cookie"}
)
REDACTED = "***"


def redact(value: Any) -> Any:
    """Return ``value`` with sensitive mapping keys masked, recursively."""
    if isinstance(value, Mapping):
        return {
            key: REDACTED if str(key).lower() in SENSITIVE_KEYS else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact(item) for item in value]
    return value


def _request_fields() -> dict[str, Any]:
    ctx = request_context.get()
    if not ctx:
        return {}
    return {key: ctx[key] for key in ("request_id", "method", "path") if ctx.get(key)}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_request_fields(),
        }

        data = getattr(record, "data", None)
        if data:
            log_data["data"] = data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Coloured single-line output with ``key=value`` data."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.fromtimestamp(record.created, UTC).strftime("%H:%M:%S")
        request_id = _request_fields().get("request_id", "-")[:8]

        parts = [
            timestamp,
            f"{color}{record.levelname:8}{self.RESET}",
            request_id,
            record.name,
            record.getMessage(),
        ]
        data = getattr(record, "data", None)
        if data:
            parts.append(" ".join(f"{key}={value}" for key, value in data.items()))
        message = " | ".join(parts)

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"
        return message


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter accepting a ``data`` payload.

    Bound fields (``self.extra``) are merged under the call's own data and
    the result is redacted.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple:
        data = {**self.extra, **(kwargs.pop("data", None) or {})}
        extra = dict(kwargs.get("extra") or {})
        if data:
            extra["data"] = redact(data)
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **fields: Any) -> "ContextLogger":
        """Return a logger that adds ``fields`` to every payload."""
        return ContextLogger(self.logger, {**self.extra, **fields})


_loggers: dict[str, ContextLogger] = {}


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger."""
    if name not in _loggers:
        _loggers[name] = ContextLogger(logging.getLogger(name), {})
    return _loggers[name]


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Configure root handlers: console (JSON or coloured) plus an optional JSON file."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter() if json_output else ConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    # Transport chatter would drown out login transitions
    for noisy in ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
