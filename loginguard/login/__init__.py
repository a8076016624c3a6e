"""Login state machine."""

from loginguard.login.controller import LoginController
from loginguard.login.policy import LockoutPolicy
from loginguard.login.state import MIN_PASSWORD_LENGTH, LoginPhase, LoginState

__all__ = [
    "LockoutPolicy",
    "LoginController",
    "LoginPhase",
    "LoginState",
    "MIN_PASSWORD_LENGTH",
]
