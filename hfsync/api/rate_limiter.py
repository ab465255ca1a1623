"""
Provides a coarse, per-second throttle for paced transfers.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable

log = logging.getLogger(__name__)


class TickThrottle:
    """
    Releases callers once per interval, on fixed boundaries of a monotonic clock.

    The first boundary falls one interval after the first wait. A caller that
    falls behind skips the boundaries it missed rather than bursting through
    them, so a transfer paced by this throttle moves at most one bounded copy
    per interval.
    """

    def __init__(
        self,
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initializes the throttle.

        Args:
            interval: Seconds between boundaries.
            clock: Monotonic time source.
            sleep: Coroutine used to suspend until the next boundary.
        """
        self._interval = interval
        self._clock = clock
        self._sleep = sleep
        self._next_tick: float | None = None
        self.ticks = 0

    async def wait(self) -> None:
        """Suspends until the next boundary."""
        now = self._clock()
        if self._next_tick is None:
            self._next_tick = now + self._interval

        delay = self._next_tick - now
        if delay > 0:
            await self._sleep(delay)

        self.ticks += 1
        self._next_tick += self._interval

        now = self._clock()
        if self._interval > 0 and self._next_tick <= now:
            missed = int((now - self._next_tick) // self._interval) + 1
            self._next_tick += missed * self._interval
            log.debug(f"Throttle fell behind, dropped {missed} tick(s)")
