from __future__ import annotations

import asyncio

import pytest
import pytest_asyncio

from loginguard.auth import Authenticator, AuthResult
from loginguard.login import LockoutPolicy, LoginController
from loginguard.network import ConnectivityPublisher
from loginguard.store import InMemoryCredentialStore


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now = start_ms

    def now_ms(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


class StubAuthenticator(Authenticator):
    """Authenticator stub returning queued results, then a default."""

    def __init__(
        self,
        results: list[AuthResult | Exception] | None = None,
        default: AuthResult | None = None,
    ):
        self.results = list(results or [])
        self.default = default or AuthResult.success("fake-jwt-token")
        self.calls: list[tuple[str, str, bool]] = []
        self.gate: asyncio.Event | None = None

    async def login(
        self, username: str, password: str, currently_online: bool
    ) -> AuthResult:
        self.calls.append((username, password, currently_online))
        if self.gate is not None:
            await self.gate.wait()
        if self.results:
            result = self.results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return self.default


class CountingStore(InMemoryCredentialStore):
    """In-memory store that counts failure-count resets."""

    def __init__(self) -> None:
        super().__init__()
        self.reset_calls = 0

    def reset_failure_count(self) -> None:
        self.reset_calls += 1
        super().reset_failure_count()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()


@pytest.fixture
def connectivity() -> ConnectivityPublisher:
    return ConnectivityPublisher(initial=True)


@pytest.fixture
def authenticator() -> StubAuthenticator:
    return StubAuthenticator()


@pytest.fixture
def policy() -> LockoutPolicy:
    return LockoutPolicy(tick_interval_seconds=0.01, auth_timeout_seconds=None)


@pytest_asyncio.fixture
async def controller(authenticator, store, connectivity, policy, clock):
    ctrl = LoginController(
        authenticator, store, connectivity, policy=policy, clock=clock
    )
    ctrl.start()
    yield ctrl
    await ctrl.close()


def fill_credentials(
    controller: LoginController, user_name: str = "kayvan", password: str = "123456"
) -> None:
    controller.on_user_name_change(user_name)
    controller.on_password_change(password)
