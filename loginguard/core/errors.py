"""
Structured error handling with stable error codes.

Controller-level failures are represented as login state, never raised.
These errors cover the collaborators (authenticator backends, configuration)
and the HTTP adapter, which maps them to stable codes without stack traces.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes."""

    # General errors (1xxx)
    INTERNAL_ERROR = "E1000"
    VALIDATION_ERROR = "E1001"
    NOT_FOUND = "E1002"
    METHOD_NOT_ALLOWED = "E1003"
    RATE_LIMITED = "E1005"
    CONFIGURATION_ERROR = "E1006"

    # Authentication errors (2xxx)
    INVALID_CREDENTIALS = "E2001"

    # Authenticator backend errors (4xxx)
    AUTHENTICATOR_UNAVAILABLE = "E4000"
    AUTHENTICATOR_ERROR = "E4001"
    AUTHENTICATOR_BAD_RESPONSE = "E4004"

    # Controller errors (5xxx)
    CONTROLLER_UNAVAILABLE = "E5000"


@dataclass(frozen=True)
class ErrorResponse:
    """Structured error response.

    Format: {error: {code, message, request_id, details?}}
    """

    code: ErrorCode
    message: str
    request_id: str | None = None
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        error: dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.request_id:
            error["request_id"] = self.request_id
        if self.details:
            error["details"] = self.details
        return {"error": error}


class AppError(Exception):
    """Base application error with structured error detail."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    def to_response(self, request_id: str | None = None) -> ErrorResponse:
        """Create error response with request ID."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            request_id=request_id,
            details=self.details,
        )


class ConfigurationError(AppError):
    """Invalid or incomplete configuration (500)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(ErrorCode.CONFIGURATION_ERROR, message, 500, details)


class RateLimitError(AppError):
    """Rate limit exceeded (429)."""

    def __init__(self, message: str = "Rate limit exceeded", details: dict[str, Any] | None = None):
        super().__init__(ErrorCode.RATE_LIMITED, message, 429, details)


class InvalidCredentialsError(AppError):
    """Invalid credentials (401)."""

    def __init__(
        self,
        message: str = "Invalid credentials",
        status_code: int = 401,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(ErrorCode.INVALID_CREDENTIALS, message, status_code, details)


class AuthenticatorError(AppError):
    """Authentication backend error (502)."""

    def __init__(
        self, message: str = "Authenticator error", details: dict[str, Any] | None = None
    ):
        super().__init__(ErrorCode.AUTHENTICATOR_ERROR, message, 502, details)


class AuthenticatorUnavailableError(AppError):
    """Authentication backend unreachable (503)."""

    def __init__(
        self, message: str = "Authenticator unavailable", details: dict[str, Any] | None = None
    ):
        super().__init__(ErrorCode.AUTHENTICATOR_UNAVAILABLE, message, 503, details)


class AuthenticatorBadResponseError(AppError):
    """Authentication backend returned a malformed response (502)."""

    def __init__(
        self,
        message: str = "Authenticator returned invalid response",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(ErrorCode.AUTHENTICATOR_BAD_RESPONSE, message, 502, details)


class ControllerUnavailableError(AppError):
    """Login controller not running (503)."""

    def __init__(self, message: str = "Login controller is not running"):
        super().__init__(ErrorCode.CONTROLLER_UNAVAILABLE, message, 503)
