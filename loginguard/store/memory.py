"""In-process credential store."""

from __future__ import annotations

import threading

from loginguard.store.base import (
    KEY_AUTH_TOKEN,
    KEY_FAILURES,
    KEY_LOCKOUT_UNTIL,
    CredentialStore,
)


class InMemoryCredentialStore(CredentialStore):
    """Dictionary-backed store; contents are lost when the process exits."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._values: dict[str, int | str] = {}

    def increment_failure_count(self) -> None:
        with self._lock:
            self._values[KEY_FAILURES] = int(self._values.get(KEY_FAILURES, 0)) + 1

    def get_failure_count(self) -> int:
        with self._lock:
            return int(self._values.get(KEY_FAILURES, 0))

    def reset_failure_count(self) -> None:
        with self._lock:
            self._values.pop(KEY_FAILURES, None)

    def set_lockout_until(self, timestamp: int | None) -> None:
        with self._lock:
            if timestamp is None:
                self._values.pop(KEY_LOCKOUT_UNTIL, None)
            else:
                self._values[KEY_LOCKOUT_UNTIL] = int(timestamp)

    def get_lockout_until(self) -> int | None:
        with self._lock:
            value = self._values.get(KEY_LOCKOUT_UNTIL)
        return int(value) if value is not None else None

    def save_token(self, token: str | None) -> None:
        with self._lock:
            if token is None:
                self._values.pop(KEY_AUTH_TOKEN, None)
            else:
                self._values[KEY_AUTH_TOKEN] = token

    def get_saved_token(self) -> str | None:
        with self._lock:
            value = self._values.get(KEY_AUTH_TOKEN)
        return str(value) if value is not None else None
