"""Tests for the LoginState snapshot."""

import dataclasses

import pytest

from loginguard.login import LoginPhase, LoginState


@pytest.mark.parametrize(
    ("user_name", "password", "is_loading", "is_locked_out", "expected"),
    [
        ("", "", False, False, False),
        ("kayvan", "", False, False, False),
        ("", "123456", False, False, False),
        ("kayvan", "12345", False, False, False),
        ("kayvan", "123456", False, False, True),
        ("k", "a much longer password", False, False, True),
        ("kayvan", "123456", True, False, False),
        ("kayvan", "123456", False, True, False),
        ("kayvan", "123456", True, True, False),
    ],
)
def test_login_button_enabled_rule(user_name, password, is_loading, is_locked_out, expected):
    state = LoginState(
        user_name=user_name,
        password=password,
        is_loading=is_loading,
        is_locked_out=is_locked_out,
    )
    assert state.is_login_button_enabled is expected


def test_button_flag_is_derived_after_replace():
    state = LoginState(user_name="kayvan", password="123456")
    assert state.is_login_button_enabled is True

    locked = dataclasses.replace(state, is_locked_out=True, lockout_seconds_remaining=300)
    assert locked.is_login_button_enabled is False
    assert state.is_login_button_enabled is True


def test_state_is_immutable():
    state = LoginState()
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.user_name = "kayvan"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("kwargs", "phase"),
    [
        ({}, LoginPhase.IDLE),
        ({"is_loading": True}, LoginPhase.LOADING),
        ({"is_locked_out": True, "lockout_seconds_remaining": 12}, LoginPhase.LOCKED_OUT),
        ({"error_message": "No internet connection"}, LoginPhase.ERROR),
        ({"is_loading": True, "error_message": "stale"}, LoginPhase.LOADING),
    ],
)
def test_phase_is_derived(kwargs, phase):
    assert LoginState(**kwargs).phase == phase


def test_to_dict_uses_snapshot_keys():
    snapshot = LoginState(
        user_name="kayvan",
        password="123456",
        remember_me=True,
        error_message="Login failed (Attempt 1/3)",
    ).to_dict()

    assert snapshot == {
        "userName": "kayvan",
        "password": "123456",
        "rememberMe": True,
        "isLoading": False,
        "errorMessage": "Login failed (Attempt 1/3)",
        "isLockedOut": False,
        "lockoutSecondsRemaining": 0,
        "navigateToHome": False,
        "isLoginButtonEnabled": True,
        "phase": "error",
    }
