"""
Login controller.

Owns the observable LoginState and drives it through the login state
machine: field edits, connectivity-gated login attempts, failure counting
and the timed lockout countdown.

All transitions run on the event loop that called ``start()``. Connectivity
updates and countdown ticks re-enter through the same ``_update`` path, so
no two transitions interleave. The authenticator call is the only
suspension point; while it is outstanding the state is loading and further
attempts are rejected.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from loginguard.auth.base import Authenticator, AuthResult
from loginguard.core import (
    AppError,
    Clock,
    Publisher,
    RepeatingTask,
    Subscription,
    SystemClock,
    get_logger,
)
from loginguard.login.policy import LockoutPolicy
from loginguard.login.state import LoginState
from loginguard.network.connectivity import ConnectivityPublisher
from loginguard.store.base import CredentialStore

logger = get_logger(__name__)


class LoginController:
    """Single-session login state machine with lockout and connectivity gating."""

    def __init__(
        self,
        authenticator: Authenticator,
        store: CredentialStore,
        connectivity: ConnectivityPublisher,
        *,
        policy: LockoutPolicy | None = None,
        clock: Clock | None = None,
    ):
        self.policy = policy or LockoutPolicy()
        self._authenticator = authenticator
        self._store = store
        self._connectivity = connectivity
        self._clock = clock or SystemClock()
        self._log = logger.bind(
            failure_threshold=self.policy.failure_threshold,
            lockout_seconds=self.policy.lockout_duration_ms // 1000,
        )

        self._states: Publisher[LoginState] = Publisher(LoginState())
        self._lockout_timer: RepeatingTask | None = None
        self._auth_task: asyncio.Task | None = None
        self._connectivity_subscription: Subscription | None = None

    # -- observation -------------------------------------------------------

    @property
    def state(self) -> LoginState:
        return self._states.value  # type: ignore[return-value]

    @property
    def lockout_timer(self) -> RepeatingTask | None:
        return self._lockout_timer

    @property
    def started(self) -> bool:
        return self._connectivity_subscription is not None

    def subscribe(self, callback: Callable[[LoginState], None]) -> Subscription:
        """Receive the current snapshot now and every distinct one after it."""
        return self._states.subscribe(callback)

    # -- lifecycle ---------------------------------------------------------

    def start(self) -> None:
        """
        Subscribe to connectivity and resume a persisted lockout.

        Must be called from the event loop that will own the controller.
        """
        if self.started:
            return
        self._connectivity_subscription = self._connectivity.subscribe(
            self._on_connectivity_changed
        )
        deadline = self._store.get_lockout_until()
        if deadline is not None:
            self._log.info("Resuming persisted lockout", data={"lockout_until": deadline})
            self._start_lockout_countdown(deadline)

    async def close(self) -> None:
        """Stop the countdown, drop the connectivity subscription, cancel a pending login."""
        timer = self._lockout_timer
        self.cancel_lockout_timer()
        if timer is not None:
            await timer.join()
        if self._connectivity_subscription is not None:
            self._connectivity_subscription.dispose()
            self._connectivity_subscription = None
        task = self._auth_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._auth_task = None

    async def __aenter__(self) -> LoginController:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # -- user actions ------------------------------------------------------

    def on_user_name_change(self, user_name: str) -> None:
        if self._accepts_input():
            self._update(user_name=user_name.strip())

    def on_password_change(self, password: str) -> None:
        if self._accepts_input():
            self._update(password=password)

    def on_remember_me_change(self, remember_me: bool) -> None:
        if self._accepts_input():
            self._update(remember_me=bool(remember_me))

    def login(self) -> asyncio.Task | None:
        """
        Start a login attempt.

        Returns the task running the authenticator call, or None when the
        attempt was rejected (button disabled, or offline).
        """
        state = self.state
        if not state.is_login_button_enabled:
            self._log.debug("Login ignored", data={"phase": state.phase.value})
            return None

        # Cached status only; never poll the network here.
        if not self._connectivity.is_online:
            self._log.info("Login blocked while offline")
            self._update(error_message=self.policy.msg_offline)
            return None

        self._update(is_loading=True, error_message=None)
        self._auth_task = asyncio.get_running_loop().create_task(
            self._authenticate(state.user_name, state.password, state.remember_me),
            name="login-attempt",
        )
        return self._auth_task

    def cancel_lockout_timer(self) -> None:
        if self._lockout_timer is not None:
            self._lockout_timer.cancel()

    # -- transitions -------------------------------------------------------

    async def _authenticate(self, user_name: str, password: str, remember_me: bool) -> None:
        try:
            result = await self._call_authenticator(user_name, password)
        except asyncio.CancelledError:
            # Abandoned attempt: not a failure, but the form must be usable again.
            self._log.info("Login attempt cancelled")
            self._update(is_loading=False)
            raise
        except TimeoutError:
            self._log.warning(
                "Authenticator timed out",
                data={"timeout_seconds": self.policy.auth_timeout_seconds},
            )
            result = AuthResult.failure("Authentication timed out")
        except AppError as exc:
            result = AuthResult.failure(exc.message)
        except Exception:
            self._log.error("Authenticator raised", exc_info=True)
            result = AuthResult.failure("Authentication error")

        if result.ok:
            self._on_login_succeeded(result.token, remember_me)  # type: ignore[arg-type]
        else:
            self._on_login_failed(result.reason)

    async def _call_authenticator(self, user_name: str, password: str) -> AuthResult:
        call = self._authenticator.login(user_name, password, self._connectivity.is_online)
        timeout = self.policy.auth_timeout_seconds
        if timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout)

    def _on_login_succeeded(self, token: str, remember_me: bool) -> None:
        # Clear explicitly so a token from an earlier session does not linger.
        self._store.save_token(token if remember_me else None)
        self._store.reset_failure_count()
        self._log.info("Login succeeded", data={"remember_me": remember_me})
        self._update(navigate_to_home=True, is_loading=False)

    def _on_login_failed(self, reason: str | None) -> None:
        self._store.increment_failure_count()
        failures = self._store.get_failure_count()
        self._log.warning("Login failed", data={"failures": failures, "reason": reason})

        if failures >= self.policy.failure_threshold:
            deadline = self._clock.now_ms() + self.policy.lockout_duration_ms
            self._store.set_lockout_until(deadline)
            self._log.warning(
                "Locking out after failed attempts",
                data={"failures": failures, "lockout_until": deadline},
            )
            self._start_lockout_countdown(deadline, is_loading=False)
        else:
            self._update(
                error_message=self.policy.attempt_failed_message(failures),
                is_loading=False,
            )

    def _start_lockout_countdown(self, deadline: int, **changes: Any) -> None:
        """Publish the first tick now and schedule the rest; replaces any running countdown."""
        self.cancel_lockout_timer()
        self._lockout_timer = None
        if not self._tick_lockout(deadline, **changes):
            return
        self._lockout_timer = RepeatingTask(
            self.policy.tick_interval_seconds,
            lambda: self._tick_lockout(deadline),
            name="lockout-countdown",
        ).start()

    def _tick_lockout(self, deadline: int, **changes: Any) -> bool:
        remaining = math.ceil((deadline - self._clock.now_ms()) / 1000)
        if remaining <= 0:
            self._store.reset_failure_count()
            self._store.set_lockout_until(None)
            self._log.info("Lockout expired")
            self._update(is_locked_out=False, lockout_seconds_remaining=0, **changes)
            return False
        self._update(is_locked_out=True, lockout_seconds_remaining=remaining, **changes)
        return True

    def _on_connectivity_changed(self, online: bool) -> None:
        if not online:
            self._update(error_message=self.policy.msg_offline)
        elif (
            self.policy.clear_all_errors_on_reconnect
            or self.state.error_message == self.policy.msg_offline
        ):
            self._update(error_message=None)

    # -- helpers -----------------------------------------------------------

    def _accepts_input(self) -> bool:
        state = self.state
        if state.is_loading or state.is_locked_out:
            self._log.debug("Field edit ignored", data={"phase": state.phase.value})
            return False
        return True

    def _update(self, **changes: Any) -> None:
        new_state = replace(self.state, **changes)
        if self._states.publish(new_state):
            self._log.debug("State changed", data={"phase": new_state.phase.value})
