"""Time helpers.

Persisted timestamps are naive UTC datetimes; lockout deadlines are epoch
milliseconds read through an injectable clock so tests can move time.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Protocol


def utcnow() -> datetime:
    """Naive UTC datetime (tzinfo stripped)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Clock(Protocol):
    """Source of wall-clock time in epoch milliseconds."""

    def now_ms(self) -> int: ...


class SystemClock:
    """Clock backed by ``time.time()``."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)
