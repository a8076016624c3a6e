"""
HTTP helpers for the remote authenticator and the connectivity probe.

A credential POST is not idempotent: a request that reached the server may
already have been counted against the account. Such requests are only
retried when the connection was never established. Responses are mapped
onto the login contract: rejected credentials, throttling, or an
unavailable service.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx

from loginguard.core import (
    AuthenticatorBadResponseError,
    AuthenticatorError,
    AuthenticatorUnavailableError,
    InvalidCredentialsError,
    RateLimitError,
    get_logger,
    request_context,
)

logger = get_logger(__name__)

# The request never left the client.
NOT_SENT_ERRORS: tuple[type[httpx.HTTPError], ...] = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.PoolTimeout,
)
# The request may have reached the server.
IN_FLIGHT_ERRORS: tuple[type[httpx.HTTPError], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
)

# 4xx statuses whose body describes why the credentials were refused
REJECTION_STATUSES = frozenset({400, 401, 403, 422})


def create_http_client(
    base_url: str,
    timeout_seconds: float,
    headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Build an AsyncClient with one timeout for every phase.

    ``transport`` lets tests substitute ``httpx.MockTransport``.
    """
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=httpx.Timeout(timeout_seconds),
        headers=headers or {},
        transport=transport,
    )


def _is_retryable(exc: httpx.HTTPError, idempotent: bool) -> bool:
    if isinstance(exc, NOT_SENT_ERRORS):
        return True
    return idempotent and isinstance(exc, IN_FLIGHT_ERRORS)


async def send_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    max_retries: int,
    idempotent: bool = False,
    **kwargs: Any,
) -> httpx.Response:
    """
    Send a request, retrying transport failures that are safe to repeat.

    Status codes are never retried. Transport failures surface as
    ``AuthenticatorUnavailableError``.
    """
    headers = dict(kwargs.pop("headers", None) or {})
    request_id = request_context.get().get("request_id")
    if request_id:
        headers.setdefault("X-Request-ID", request_id)

    attempt = 0
    while True:
        try:
            return await client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            retryable = _is_retryable(exc, idempotent)
            if retryable and attempt < max_retries:
                attempt += 1
                logger.info(
                    "Retrying request",
                    data={"url": url, "attempt": attempt, "error": type(exc).__name__},
                )
                await asyncio.sleep(min(0.1 * attempt, 1.0))
                continue
            if isinstance(exc, IN_FLIGHT_ERRORS):
                raise AuthenticatorUnavailableError(
                    "Authenticator unavailable",
                    details={"reason": str(exc), "attempts": attempt + 1},
                ) from exc
            raise AuthenticatorError(
                "Authenticator request failed", details={"reason": str(exc)}
            ) from exc


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except json.JSONDecodeError:
        return None


def _rejection_message(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    for key in ("message", "detail", "error"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def raise_for_login_status(response: httpx.Response) -> None:
    """Map a login response status onto the authenticator error types."""
    status = response.status_code
    if status < 400:
        return

    details: dict[str, Any] = {"status": status}

    if status in REJECTION_STATUSES:
        message = _rejection_message(_json_body(response)) or "Invalid credentials"
        raise InvalidCredentialsError(message, status_code=status, details=details)
    if status == 429:
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            details["retry_after"] = retry_after
        raise RateLimitError("Too many login attempts", details=details)
    if status == 408 or status >= 500:
        raise AuthenticatorUnavailableError("Authenticator unavailable", details=details)
    raise AuthenticatorError("Authenticator error", details=details)


def read_token(response: httpx.Response, field: str) -> str:
    """Return the non-empty string token under ``field`` in a JSON object body."""
    try:
        payload = response.json()
    except json.JSONDecodeError as exc:
        raise AuthenticatorBadResponseError(
            "Authenticator returned invalid response",
            details={"content_type": response.headers.get("Content-Type", "")},
        ) from exc

    token = payload.get(field) if isinstance(payload, dict) else None
    if not isinstance(token, str) or not token:
        raise AuthenticatorBadResponseError(
            "Authenticator response missing token", details={"field": field}
        )
    return token
