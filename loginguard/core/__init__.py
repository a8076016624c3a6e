"""Core module with logging, errors, time, publishing and scheduling."""

from loginguard.core.errors import (
    AppError,
    AuthenticatorBadResponseError,
    AuthenticatorError,
    AuthenticatorUnavailableError,
    ConfigurationError,
    ControllerUnavailableError,
    ErrorCode,
    ErrorResponse,
    InvalidCredentialsError,
    RateLimitError,
)
from loginguard.core.logging import get_logger, request_context, setup_logging
from loginguard.core.publisher import Publisher, Subscription
from loginguard.core.scheduler import RepeatingTask
from loginguard.core.time import Clock, SystemClock, utcnow

__all__ = [
    # Errors
    "AppError",
    "AuthenticatorBadResponseError",
    "AuthenticatorError",
    "AuthenticatorUnavailableError",
    "ConfigurationError",
    "ControllerUnavailableError",
    "ErrorCode",
    "ErrorResponse",
    "InvalidCredentialsError",
    "RateLimitError",
    # Logging
    "get_logger",
    "request_context",
    "setup_logging",
    # Primitives
    "Publisher",
    "Subscription",
    "RepeatingTask",
    "Clock",
    "SystemClock",
    "utcnow",
]
