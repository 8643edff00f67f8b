"""
Countdown timer for timed tests.

The timer ticks on an asyncio event loop through ``loop.call_later`` so that
ticks and session events share one thread. Only one tick is ever pending;
``reset()`` cancels it synchronously, so no tick runs after it returns.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)

TickListener = Callable[[int], None]
ExpireListener = Callable[[], None]


class CountdownTimer:
    """Counts down ``limit_minutes * 60`` seconds, one tick per interval."""

    def __init__(
        self,
        on_tick: TickListener | None = None,
        on_expire: ExpireListener | None = None,
        interval: float = 1.0,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._interval = interval
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._remaining_seconds: int | None = None
        self._running = False
        self._expired = False

    @property
    def remaining_seconds(self) -> int | None:
        """Seconds left, or None when the timer was never started."""
        return self._remaining_seconds

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_expired(self) -> bool:
        return self._expired

    def start(self, limit_minutes: int | None) -> "CountdownTimer":
        """
        Start counting down and return the timer as its own cancel handle.

        A missing or non-positive limit means the test is untimed: nothing is
        scheduled and ``remaining_seconds`` stays None.
        """
        self.reset()
        if limit_minutes is None or limit_minutes <= 0:
            logger.debug(f"Timer not started (limit={limit_minutes!r})")
            return self

        if self._loop is None:
            self._loop = asyncio.get_running_loop()

        self._remaining_seconds = limit_minutes * 60
        self._expired = False
        self._running = True
        self._schedule()
        logger.info(f"Timer started for {self._remaining_seconds}s")
        return self

    def tick(self) -> None:
        """Take one second off the countdown and fire expiry at zero."""
        if not self._running or self._remaining_seconds is None:
            return

        self._remaining_seconds = max(0, self._remaining_seconds - 1)
        try:
            if self._on_tick is not None:
                self._on_tick(self._remaining_seconds)
        finally:
            if self._remaining_seconds == 0 and not self._expired:
                self._expired = True
                self._stop()
                logger.info("Timer expired")
                if self._on_expire is not None:
                    self._on_expire()

    def reset(self) -> None:
        """Stop ticking. Safe to call repeatedly."""
        if self._running:
            logger.debug(f"Timer reset with {self._remaining_seconds}s left")
        self._stop()

    cancel = reset

    def __enter__(self) -> "CountdownTimer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.reset()

    def _stop(self) -> None:
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = self._loop.call_later(self._interval, self._run_scheduled)

    def _run_scheduled(self) -> None:
        self._handle = None
        try:
            self.tick()
        finally:
            # A failing listener must not stall the countdown
            if self._running:
                self._schedule()
