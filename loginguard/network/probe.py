"""Periodic HTTP reachability probe feeding a ConnectivityPublisher."""

from __future__ import annotations

import httpx

from loginguard.auth.http_client import create_http_client
from loginguard.core import RepeatingTask, get_logger
from loginguard.network.connectivity import ConnectivityPublisher

logger = get_logger(__name__)


class ConnectivityProbe:
    """
    Issue a ``HEAD`` request every ``interval`` seconds.

    Any HTTP response counts as online, any transport error as offline.
    """

    def __init__(
        self,
        publisher: ConnectivityPublisher,
        url: str,
        *,
        interval: float = 5.0,
        timeout: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.publisher = publisher
        self.url = url
        self.interval = interval
        self.client = create_http_client(
            base_url="", timeout_seconds=timeout, transport=transport
        )
        self._task: RepeatingTask | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and self._task.running

    async def check(self) -> bool:
        """Probe once and publish the result."""
        try:
            await self.client.head(self.url)
            online = True
        except httpx.HTTPError as exc:
            logger.debug("Connectivity probe failed", data={"url": self.url, "error": str(exc)})
            online = False
        self.publisher.set_online(online)
        return online

    async def _tick(self) -> bool:
        await self.check()
        return True

    def start(self) -> None:
        if self.running:
            return
        self._task = RepeatingTask(
            self.interval, self._tick, initial_delay=0.0, name="connectivity-probe"
        ).start()

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            await self._task.join()
            self._task = None

    async def aclose(self) -> None:
        await self.stop()
        await self.client.aclose()
