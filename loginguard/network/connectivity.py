"""Online/offline status publisher."""

from __future__ import annotations

from collections.abc import Callable

from loginguard.core import Publisher, Subscription, get_logger

logger = get_logger(__name__)


class ConnectivityPublisher:
    """
    Publishes connectivity as a boolean with last-value replay.

    Consecutive identical values are dropped. ``is_online`` is a
    non-blocking read of the cached value; an unknown status reads as
    offline.
    """

    def __init__(self, initial: bool | None = None):
        self._publisher: Publisher[bool] = Publisher()
        if initial is not None:
            self._publisher.publish(initial)

    @property
    def is_online(self) -> bool:
        return bool(self._publisher.value)

    @property
    def last_value(self) -> bool | None:
        return self._publisher.value

    def set_online(self, online: bool) -> bool:
        """Publish a status. Returns False if it repeats the current one."""
        changed = self._publisher.publish(bool(online))
        if changed:
            logger.info("Connectivity changed", data={"online": bool(online)})
        return changed

    def subscribe(self, callback: Callable[[bool], None]) -> Subscription:
        return self._publisher.subscribe(callback)
