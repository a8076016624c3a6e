"""Last-value publisher with de-duplication and disposable subscriptions.

A ``Publisher`` holds the most recent value. Subscribers receive it
immediately on ``subscribe()`` and afterwards only values that differ from
the previous one. Callbacks run synchronously on the publishing thread,
outside the subscriber lock.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class Subscription:
    """Disposer returned by ``Publisher.subscribe``."""

    def __init__(self, dispose: Callable[[], None]) -> None:
        self._dispose = dispose
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Stop receiving values. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        self._dispose()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class Publisher(Generic[T]):
    """Replaying, de-duplicating value publisher."""

    def __init__(self, initial: T | object = _UNSET) -> None:
        self._lock = threading.Lock()
        self._value: T | object = initial
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def has_value(self) -> bool:
        return self._value is not _UNSET

    @property
    def value(self) -> T | None:
        """Most recently published value, or None if nothing was published."""
        value = self._value
        return None if value is _UNSET else value  # type: ignore[return-value]

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, value: T) -> bool:
        """Publish ``value``. Returns False when it equals the current value."""
        with self._lock:
            if self._value is not _UNSET and self._value == value:
                return False
            self._value = value
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(value)
        return True

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Register ``callback`` and replay the current value to it."""
        with self._lock:
            self._subscribers.append(callback)
            current = self._value

        def _remove() -> None:
            with self._lock:
                try:
                    self._subscribers.remove(callback)
                except ValueError:
                    pass

        subscription = Subscription(_remove)
        if current is not _UNSET:
            callback(current)  # type: ignore[arg-type]
        return subscription
