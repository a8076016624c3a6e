"""
Base authenticator interface.

Defines the contract that every authentication backend implements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a login call: a token on success, an opaque reason otherwise."""

    token: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.token is not None

    @classmethod
    def success(cls, token: str) -> AuthResult:
        return cls(token=token)

    @classmethod
    def failure(cls, reason: str = "Login failed") -> AuthResult:
        return cls(reason=reason)


class Authenticator(ABC):
    """Validates credentials. Retries, if any, are the backend's concern."""

    @abstractmethod
    async def login(
        self, username: str, password: str, currently_online: bool
    ) -> AuthResult:
        """Authenticate ``username``/``password``."""

    async def aclose(self) -> None:
        """Release network resources."""
