"""Fixed-period tick source with a non-blocking check."""
import asyncio
import math
import time
from typing import Callable, Optional


class Ticker:
    """Periodic signal anchored at construction time.

    Behaves like a one-slot tick channel: boundaries that pass while nobody
    is looking collapse into a single pending tick.
    """

    def __init__(self, interval: float, clock: Callable[[], float] = time.monotonic):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self._clock = clock
        self._origin = clock()
        self._next = self._origin + interval

    @property
    def next_tick(self) -> float:
        return self._next

    def _consume(self, now: float) -> None:
        # Skip to the first boundary strictly after now
        periods = math.floor((now - self._origin) / self.interval) + 1
        self._next = self._origin + periods * self.interval

    def poll(self) -> bool:
        """Consume a pending tick without blocking; True if there was one."""
        now = self._clock()
        if now < self._next:
            return False
        self._consume(now)
        return True

    async def wait(self, sleep: Optional[Callable[[float], "asyncio.Future"]] = None) -> None:
        """Block until the pending or next tick, then consume it."""
        sleep = sleep or asyncio.sleep
        while True:
            now = self._clock()
            if now >= self._next:
                self._consume(now)
                return
            await sleep(self._next - now)
