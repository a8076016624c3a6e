"""Settings and lockout policy configuration tests."""

import pytest
from pydantic import ValidationError

from loginguard.config import Settings, get_settings
from loginguard.login import LockoutPolicy


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_match_lockout_rules():
    settings = Settings(_env_file=None)

    assert settings.failure_threshold == 3
    assert settings.lockout_duration_seconds == 300
    assert settings.lockout_duration_ms == 300_000
    assert settings.authenticator_backend == "demo"
    assert settings.store_backend == "sql"
    assert settings.is_sqlite is True


def test_env_prefix_is_applied(monkeypatch):
    monkeypatch.setenv("LOGINGUARD_FAILURE_THRESHOLD", "5")
    monkeypatch.setenv("LOGINGUARD_LOCKOUT_DURATION_SECONDS", "60")
    monkeypatch.setenv("LOGINGUARD_STORE_BACKEND", "Memory")
    monkeypatch.setenv("LOGINGUARD_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.failure_threshold == 5
    assert settings.lockout_duration_ms == 60_000
    assert settings.store_backend == "memory"
    assert settings.log_level == "DEBUG"


def test_non_positive_auth_timeout_disables_it():
    assert Settings(auth_timeout_seconds=0).auth_timeout_seconds is None
    assert Settings(auth_timeout_seconds=-1).auth_timeout_seconds is None
    assert Settings(auth_timeout_seconds=2.5).auth_timeout_seconds == 2.5


@pytest.mark.parametrize(
    "overrides",
    [
        {"log_level": "LOUD"},
        {"store_backend": "redis"},
        {"authenticator_backend": "ldap"},
        {"authenticator_backend": "http"},
        {"failure_threshold": 0},
        {"lockout_tick_seconds": 0},
    ],
)
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_http_backend_requires_base_url():
    settings = Settings(authenticator_backend="http", auth_base_url="http://auth.test")
    assert settings.auth_base_url == "http://auth.test"


def test_policy_from_settings():
    policy = LockoutPolicy.from_settings(
        Settings(
            failure_threshold=5,
            lockout_duration_seconds=60,
            lockout_tick_seconds=0.5,
            auth_timeout_seconds=0,
            clear_all_errors_on_reconnect=False,
        )
    )

    assert policy.failure_threshold == 5
    assert policy.lockout_duration_ms == 60_000
    assert policy.tick_interval_seconds == 0.5
    assert policy.auth_timeout_seconds is None
    assert policy.clear_all_errors_on_reconnect is False
    assert policy.attempt_failed_message(2) == "Login failed (Attempt 2/5)"
