"""Repeating tick driver for the game loop."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Union

from .errors import ConfigurationError
from .models import SpeedTier

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Union[None, Awaitable[None]]]


class GameClock:
    """Calls ``on_tick`` every ``interval`` seconds from a single asyncio task.

    Changing the interval while running moves the pending deadline to
    ``last tick + new interval`` inside the same task, so a swap never
    fires twice or skips a tick.
    """

    def __init__(self, on_tick: TickCallback, interval: float = SpeedTier.NORMAL.interval):
        self._on_tick = on_tick
        self._interval = self._check_interval(interval)
        self._task: Optional[asyncio.Task] = None
        self._rescheduled: Optional[asyncio.Event] = None

    @staticmethod
    def _check_interval(interval: float) -> float:
        if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval <= 0:
            raise ConfigurationError(f"tick interval must be a positive number of seconds, got {interval!r}")
        return float(interval)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def set_interval(self, interval: float):
        interval = self._check_interval(interval)
        if interval == self._interval:
            return
        logger.info("tick interval %.3fs -> %.3fs", self._interval, interval)
        self._interval = interval
        if self._rescheduled is not None:
            self._rescheduled.set()

    def set_speed_tier(self, tier):
        self.set_interval(SpeedTier.parse(tier).interval)

    def start(self):
        if self.running:
            return
        self._rescheduled = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self):
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self):
        loop = asyncio.get_running_loop()
        last_tick = loop.time()
        while True:
            delay = last_tick + self._interval - loop.time()
            if delay > 0:
                self._rescheduled.clear()
                try:
                    await asyncio.wait_for(self._rescheduled.wait(), timeout=delay)
                    continue
                except asyncio.TimeoutError:
                    pass
            last_tick = loop.time()
            result = self._on_tick()
            if asyncio.iscoroutine(result):
                await result
