"""Cancellable repeating tasks on the running asyncio loop."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable

from loginguard.core.logging import get_logger

logger = get_logger(__name__)

TickCallback = Callable[[], bool | Awaitable[bool]]


class RepeatingTask:
    """
    Run ``callback`` every ``interval`` seconds until it returns False or
    the task is cancelled.

    The first call happens after ``initial_delay`` seconds (defaults to the
    interval). ``cancel()`` is the explicit stop handle; ``join()`` waits for
    the loop to finish.
    """

    def __init__(
        self,
        interval: float,
        callback: TickCallback,
        *,
        initial_delay: float | None = None,
        name: str = "repeating-task",
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.initial_delay = interval if initial_delay is None else initial_delay
        self.name = name
        self._callback = callback
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> RepeatingTask:
        """Schedule the loop on the running event loop."""
        if self.running:
            return self
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        return self

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def join(self) -> None:
        """Wait until the loop stops, whether finished or cancelled."""
        if self._task is None:
            return
        try:
            await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    async def _run(self) -> None:
        delay = self.initial_delay
        while True:
            if delay > 0:
                await asyncio.sleep(delay)
            result = self._callback()
            if inspect.isawaitable(result):
                result = await result
            if not result:
                logger.debug("Repeating task finished", data={"task": self.name})
                return
            delay = self.interval
