"""Login screen state snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

MIN_PASSWORD_LENGTH = 6


class LoginPhase(str, Enum):
    """Coarse state of the login state machine."""

    IDLE = "idle"
    LOADING = "loading"
    LOCKED_OUT = "locked_out"
    ERROR = "error"


@dataclass(frozen=True)
class LoginState:
    """
    Immutable snapshot of the login screen.

    A new instance replaces the old one on every transition. The button
    flag and the phase are computed from the fields, never stored.
    """

    user_name: str = ""
    password: str = ""
    remember_me: bool = False
    is_loading: bool = False
    error_message: str | None = None
    is_locked_out: bool = False
    lockout_seconds_remaining: int = 0
    navigate_to_home: bool = False

    @property
    def is_login_button_enabled(self) -> bool:
        return (
            bool(self.user_name)
            and len(self.password) >= MIN_PASSWORD_LENGTH
            and not self.is_loading
            and not self.is_locked_out
        )

    @property
    def phase(self) -> LoginPhase:
        if self.is_loading:
            return LoginPhase.LOADING
        if self.is_locked_out:
            return LoginPhase.LOCKED_OUT
        if self.error_message:
            return LoginPhase.ERROR
        return LoginPhase.IDLE

    def to_dict(self) -> dict[str, Any]:
        """Snapshot mapping consumed by the presentation layer."""
        return {
            "userName": self.user_name,
            "password": self.password,
            "rememberMe": self.remember_me,
            "isLoading": self.is_loading,
            "errorMessage": self.error_message,
            "isLockedOut": self.is_locked_out,
            "lockoutSecondsRemaining": self.lockout_seconds_remaining,
            "navigateToHome": self.navigate_to_home,
            "isLoginButtonEnabled": self.is_login_button_enabled,
            "phase": self.phase.value,
        }
