import asyncio

import pytest

from core.timer import CountdownTimer


def test_one_minute_countdown_expires_once(loop: asyncio.AbstractEventLoop) -> None:
    ticks: list[int] = []
    expirations: list[bool] = []
    timer = CountdownTimer(
        on_tick=ticks.append,
        on_expire=lambda: expirations.append(True),
        loop=loop,
    )

    timer.start(1)
    assert timer.remaining_seconds == 60
    assert timer.is_running

    for _ in range(60):
        timer.tick()

    assert timer.remaining_seconds == 0
    assert expirations == [True]
    assert timer.is_expired
    assert not timer.is_running

    timer.tick()
    assert timer.remaining_seconds == 0
    assert expirations == [True]
    assert len(ticks) == 60
    assert ticks[0] == 59
    assert ticks[-1] == 0


def test_remaining_seconds_decrease_monotonically(loop: asyncio.AbstractEventLoop) -> None:
    timer = CountdownTimer(loop=loop).start(2)
    seen = [timer.remaining_seconds]
    for _ in range(130):
        timer.tick()
        seen.append(timer.remaining_seconds)

    assert seen == sorted(seen, reverse=True)
    assert seen[-1] == 0


@pytest.mark.parametrize("limit", [None, 0, -3])
def test_missing_or_non_positive_limit_is_untimed(limit: int | None) -> None:
    timer = CountdownTimer()
    assert timer.start(limit) is timer
    assert timer.remaining_seconds is None
    assert not timer.is_running

    timer.tick()
    assert timer.remaining_seconds is None


def test_tick_after_reset_has_no_effect(loop: asyncio.AbstractEventLoop) -> None:
    timer = CountdownTimer(loop=loop).start(1)
    timer.tick()
    timer.reset()

    timer.tick()
    assert timer.remaining_seconds == 59
    assert not timer.is_running


def test_context_manager_releases_timer(loop: asyncio.AbstractEventLoop) -> None:
    with CountdownTimer(loop=loop).start(1) as timer:
        assert timer.is_running
    assert not timer.is_running


def test_restart_resets_countdown(loop: asyncio.AbstractEventLoop) -> None:
    timer = CountdownTimer(loop=loop).start(1)
    for _ in range(10):
        timer.tick()

    timer.start(2)
    assert timer.remaining_seconds == 120
    assert timer.is_running


def test_ticks_fire_on_running_loop_until_expiry() -> None:
    async def scenario() -> tuple[CountdownTimer, list[int]]:
        expired = asyncio.Event()
        ticks: list[int] = []
        timer = CountdownTimer(on_tick=ticks.append, on_expire=expired.set, interval=0.001)
        timer.start(1)
        await asyncio.wait_for(expired.wait(), timeout=10)
        return timer, ticks

    timer, ticks = asyncio.run(scenario())
    assert timer.remaining_seconds == 0
    assert timer.is_expired
    assert ticks == list(range(59, -1, -1))


def test_no_tick_fires_after_reset_returns() -> None:
    async def scenario() -> tuple[int, list[int], CountdownTimer]:
        ticks: list[int] = []
        timer = CountdownTimer(on_tick=ticks.append, interval=0.01)
        timer.start(1)
        await asyncio.sleep(0.035)
        timer.reset()
        seen = len(ticks)
        await asyncio.sleep(0.05)
        return seen, ticks, timer

    seen, ticks, timer = asyncio.run(scenario())
    assert len(ticks) == seen
    assert not timer.is_running
    assert timer.remaining_seconds == 60 - seen


def test_failing_tick_listener_does_not_stall_countdown() -> None:
    calls: list[int] = []

    def on_tick(remaining: int) -> None:
        calls.append(remaining)
        if len(calls) == 3:
            raise RuntimeError("listener failed")

    async def scenario() -> CountdownTimer:
        expired = asyncio.Event()
        timer = CountdownTimer(on_tick=on_tick, on_expire=expired.set, interval=0.001)
        timer.start(1)
        await asyncio.wait_for(expired.wait(), timeout=10)
        return timer

    timer = asyncio.run(scenario())
    assert timer.is_expired
    assert not timer.is_running
    assert calls == list(range(59, -1, -1))


def test_expiry_fires_even_when_last_tick_listener_fails(
    loop: asyncio.AbstractEventLoop,
) -> None:
    expirations: list[bool] = []

    def on_tick(remaining: int) -> None:
        if remaining == 0:
            raise RuntimeError("listener failed")

    timer = CountdownTimer(
        on_tick=on_tick, on_expire=lambda: expirations.append(True), loop=loop
    ).start(1)
    for _ in range(59):
        timer.tick()
    with pytest.raises(RuntimeError):
        timer.tick()

    assert expirations == [True]
    assert timer.is_expired
    assert not timer.is_running
