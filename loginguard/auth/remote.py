"""HTTP authenticator adapter."""

from __future__ import annotations

import httpx

from loginguard.auth.base import Authenticator, AuthResult
from loginguard.auth.http_client import (
    create_http_client,
    raise_for_login_status,
    read_token,
    send_request,
)
from loginguard.core import AppError, get_logger

logger = get_logger(__name__)


class HttpAuthenticator(Authenticator):
    """
    Posts credentials as JSON and reads a bearer token from the response.

    The POST is only retried when the connection could not be opened, so a
    server never sees the same attempt twice.
    """

    def __init__(
        self,
        base_url: str,
        *,
        login_path: str = "/auth/login",
        token_field: str = "token",
        timeout: float = 30.0,
        max_retries: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.login_path = login_path
        self.token_field = token_field
        self.max_retries = max_retries
        self.client = create_http_client(
            base_url=base_url,
            timeout_seconds=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )
        self._log = logger.bind(authenticator="http", endpoint=login_path)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def login(
        self, username: str, password: str, currently_online: bool
    ) -> AuthResult:
        if not currently_online:
            return AuthResult.failure("Offline")

        try:
            response = await send_request(
                self.client,
                "POST",
                self.login_path,
                max_retries=self.max_retries,
                json={"username": username, "password": password},
            )
            raise_for_login_status(response)
            token = read_token(response, self.token_field)
        except AppError as exc:
            self._log.warning(
                "Remote login failed",
                data={"username": username, "code": exc.code.value, "error": exc.message},
            )
            return AuthResult.failure(exc.message)

        self._log.info("Remote login succeeded", data={"username": username})
        return AuthResult.success(token)
