"""Offline demo authenticator with a fixed account table."""

from __future__ import annotations

from collections.abc import Mapping

from loginguard.auth.base import Authenticator, AuthResult
from loginguard.core import get_logger

logger = get_logger(__name__)

DEMO_ACCOUNTS = {"kayvan": "123456"}
DEMO_TOKEN = "fake-jwt-token"


class DemoAuthenticator(Authenticator):
    """Accepts the configured accounts and hands out a fixed token."""

    def __init__(
        self,
        accounts: Mapping[str, str] | None = None,
        token: str = DEMO_TOKEN,
    ):
        self.accounts = dict(DEMO_ACCOUNTS if accounts is None else accounts)
        self.token = token

    async def login(
        self, username: str, password: str, currently_online: bool
    ) -> AuthResult:
        if not currently_online:
            return AuthResult.failure("Offline")
        if self.accounts.get(username) != password:
            logger.info("Demo login rejected", data={"username": username})
            return AuthResult.failure("Invalid credentials")
        return AuthResult.success(self.token)
