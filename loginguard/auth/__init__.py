"""Authentication backends for the login controller."""

import httpx

from loginguard.auth.base import Authenticator, AuthResult
from loginguard.auth.demo import DemoAuthenticator
from loginguard.auth.remote import HttpAuthenticator
from loginguard.config import Settings
from loginguard.core import ConfigurationError, get_logger

logger = get_logger(__name__)


def build_authenticator(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Authenticator:
    """Instantiate the configured authenticator backend."""
    if settings.authenticator_backend == "demo":
        logger.warning("Using demo authenticator - NOT FOR PRODUCTION")
        return DemoAuthenticator()

    if settings.authenticator_backend == "http":
        if not settings.auth_base_url:
            raise ConfigurationError("AUTH_BASE_URL not set for HTTP authenticator")
        return HttpAuthenticator(
            settings.auth_base_url,
            login_path=settings.auth_login_path,
            token_field=settings.auth_token_field,
            timeout=settings.auth_timeout_seconds or 30.0,
            max_retries=settings.auth_max_retries,
            transport=transport,
        )

    raise ConfigurationError(
        f"Unknown authenticator backend: {settings.authenticator_backend}"
    )


__all__ = [
    "Authenticator",
    "AuthResult",
    "DemoAuthenticator",
    "HttpAuthenticator",
    "build_authenticator",
]
