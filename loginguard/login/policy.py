from __future__ import annotations

from dataclasses import dataclass

from loginguard.config import Settings


@dataclass(frozen=True)
class LockoutPolicy:
    # Thresholds
    failure_threshold: int = 3               # lock on the Nth consecutive failure
    lockout_duration_ms: int = 5 * 60 * 1000
    tick_interval_seconds: float = 1.0       # countdown refresh
    auth_timeout_seconds: float | None = 30.0  # None waits forever

    # Reconnect clears every error message when True, only the offline one otherwise
    clear_all_errors_on_reconnect: bool = True

    # Copy for the UI
    msg_offline: str = "No internet connection"
    msg_attempt_failed: str = "Login failed (Attempt {count}/{threshold})"

    def attempt_failed_message(self, count: int) -> str:
        return self.msg_attempt_failed.format(count=count, threshold=self.failure_threshold)

    @classmethod
    def from_settings(cls, settings: Settings) -> LockoutPolicy:
        return cls(
            failure_threshold=settings.failure_threshold,
            lockout_duration_ms=settings.lockout_duration_ms,
            tick_interval_seconds=settings.lockout_tick_seconds,
            auth_timeout_seconds=settings.auth_timeout_seconds,
            clear_all_errors_on_reconnect=settings.clear_all_errors_on_reconnect,
        )
