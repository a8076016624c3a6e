"""
Credential store interface.

Persists the failure bookkeeping and the remembered token that the login
controller needs across restarts.
"""

from abc import ABC, abstractmethod

KEY_FAILURES = "failures"
KEY_LOCKOUT_UNTIL = "lockout_until"
KEY_AUTH_TOKEN = "auth_token"


class CredentialStore(ABC):
    """Key-value persistence for failure count, lockout deadline and token."""

    @abstractmethod
    def increment_failure_count(self) -> None:
        """Add one to the consecutive failure counter."""

    @abstractmethod
    def get_failure_count(self) -> int:
        """Return the consecutive failure counter (0 when unset)."""

    @abstractmethod
    def reset_failure_count(self) -> None:
        """Reset the failure counter to zero."""

    @abstractmethod
    def set_lockout_until(self, timestamp: int | None) -> None:
        """Persist the lockout deadline in epoch milliseconds, or clear it."""

    @abstractmethod
    def get_lockout_until(self) -> int | None:
        """Return the lockout deadline, or None if no lockout is recorded."""

    @abstractmethod
    def save_token(self, token: str | None) -> None:
        """Persist the remembered token, or clear it when ``token`` is None."""

    @abstractmethod
    def get_saved_token(self) -> str | None:
        """Return the remembered token, if any."""

    def close(self) -> None:
        """Release resources held by the store."""

    def healthcheck(self) -> bool:
        """Return True when the backing storage is reachable."""
        return True
