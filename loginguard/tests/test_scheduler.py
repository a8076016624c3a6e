"""Tests for RepeatingTask."""

import asyncio

import pytest

from loginguard.core import RepeatingTask


@pytest.mark.asyncio
async def test_stops_when_callback_returns_false() -> None:
    calls = []

    def tick() -> bool:
        calls.append(len(calls))
        return len(calls) < 3

    task = RepeatingTask(0.001, tick, initial_delay=0.0).start()
    await asyncio.wait_for(task.join(), timeout=1)

    assert calls == [0, 1, 2]
    assert task.running is False


@pytest.mark.asyncio
async def test_accepts_async_callback() -> None:
    calls = 0

    async def tick() -> bool:
        nonlocal calls
        calls += 1
        await asyncio.sleep(0)
        return calls < 2

    task = RepeatingTask(0.001, tick).start()
    await asyncio.wait_for(task.join(), timeout=1)

    assert calls == 2


@pytest.mark.asyncio
async def test_cancel_stops_loop() -> None:
    calls = 0

    def tick() -> bool:
        nonlocal calls
        calls += 1
        return True

    task = RepeatingTask(0.001, tick, initial_delay=0.0).start()
    await asyncio.sleep(0.02)
    task.cancel()
    await task.join()
    seen = calls
    await asyncio.sleep(0.02)

    assert task.running is False
    assert calls == seen


@pytest.mark.asyncio
async def test_join_without_start_returns() -> None:
    task = RepeatingTask(1.0, lambda: False)
    await task.join()
    assert task.running is False


def test_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        RepeatingTask(0, lambda: True)
