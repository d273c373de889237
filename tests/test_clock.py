import asyncio

import pytest

from snake_arcade.clock import GameClock
from snake_arcade.errors import ConfigurationError, UnknownSpeedTierError
from snake_arcade.models import SpeedTier


def test_default_interval_is_normal_speed():
    clock = GameClock(lambda: None)
    assert clock.interval == SpeedTier.NORMAL.interval
    assert not clock.running


@pytest.mark.parametrize("bad", [0, -1, "fast", None, True])
def test_rejects_bad_interval(bad):
    with pytest.raises(ConfigurationError):
        GameClock(lambda: None, interval=bad)
    clock = GameClock(lambda: None)
    with pytest.raises(ConfigurationError):
        clock.set_interval(bad)
    assert clock.interval == SpeedTier.NORMAL.interval


def test_set_speed_tier():
    clock = GameClock(lambda: None)
    clock.set_speed_tier("insane")
    assert clock.interval == pytest.approx(0.1)
    with pytest.raises(UnknownSpeedTierError):
        clock.set_speed_tier("warp")


def test_ticks_repeatedly_until_stopped():
    fired = []

    async def scenario():
        clock = GameClock(lambda: fired.append(1), interval=0.01)
        clock.start()
        await asyncio.sleep(0.15)
        await clock.stop()
        assert not clock.running
        count = len(fired)
        await asyncio.sleep(0.05)
        return count

    count = asyncio.run(scenario())
    assert count >= 3
    assert len(fired) == count


def test_awaits_async_callbacks():
    fired = []

    async def on_tick():
        await asyncio.sleep(0)
        fired.append(1)

    async def scenario():
        clock = GameClock(on_tick, interval=0.01)
        clock.start()
        await asyncio.sleep(0.1)
        await clock.stop()

    asyncio.run(scenario())
    assert fired


def test_start_twice_keeps_one_timer():
    async def scenario():
        clock = GameClock(lambda: None, interval=1)
        clock.start()
        task = clock._task
        clock.start()
        assert clock._task is task
        await clock.stop()
        await clock.stop()

    asyncio.run(scenario())


def test_interval_swap_neither_doubles_nor_drops():
    fired = []

    async def scenario():
        clock = GameClock(lambda: fired.append(1), interval=5)
        clock.start()
        await asyncio.sleep(0.05)
        # still not due: the swap must not fire on its own
        clock.set_interval(2)
        await asyncio.sleep(0.1)
        assert fired == []
        # already overdue under the new interval: exactly one tick comes out
        clock.set_interval(0.05)
        await asyncio.sleep(0.02)
        assert fired == [1]
        await clock.stop()

    asyncio.run(scenario())
