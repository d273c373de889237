import pytest

from snake_arcade.errors import ConfigurationError, InvalidDirectionError, UnknownSpeedTierError
from snake_arcade.models import Phase, Snapshot, SpeedTier, TickResult, is_opposite, parse_direction


def test_speed_tier_intervals():
    assert [t.interval_ms for t in SpeedTier] == [300, 200, 150, 100]
    assert SpeedTier.INSANE.display_name == "INSANE"
    assert SpeedTier.FAST.interval == pytest.approx(0.15)


@pytest.mark.parametrize("raw", ["slow", "SLOW", " Slow ", SpeedTier.SLOW])
def test_speed_tier_parse(raw):
    assert SpeedTier.parse(raw) is SpeedTier.SLOW


@pytest.mark.parametrize("raw", ["ludicrous", "", None, 300])
def test_speed_tier_parse_rejects_unknown(raw):
    with pytest.raises(UnknownSpeedTierError) as exc:
        SpeedTier.parse(raw)
    assert isinstance(exc.value, ConfigurationError)
    assert "slow, normal, fast, insane" in str(exc.value)


def test_parse_direction_accepts_names_and_vectors():
    assert parse_direction("up") == (0, -1)
    assert parse_direction("RIGHT") == (1, 0)
    assert parse_direction([-1, 0]) == (-1, 0)
    assert parse_direction((0, 1)) == (0, 1)


@pytest.mark.parametrize("raw", [
    "north", (0, 0), (2, 0), (1, 1), None, 5, (1, 0, 0),
    (1.0, 0), [0, -1.0], (True, 0), (0, False),
])
def test_parse_direction_rejects_garbage(raw):
    with pytest.raises(InvalidDirectionError):
        parse_direction(raw)


def test_is_opposite():
    assert is_opposite((1, 0), (-1, 0))
    assert is_opposite((0, -1), (0, 1))
    assert not is_opposite((1, 0), (1, 0))
    assert not is_opposite((1, 0), (0, 1))


def test_tick_result_ended_run():
    assert TickResult.HIT_WALL.ended_run
    assert TickResult.BOARD_FULL.ended_run
    assert not TickResult.ATE.ended_run
    assert not TickResult.IDLE.ended_run


def test_snapshot_is_read_only_and_serializes():
    snap = Snapshot(
        phase=Phase.GAME_OVER,
        snake=((3, 4), (3, 5)),
        food=(7, 7),
        direction=(0, -1),
        score=4,
        high_score=9,
        speed_tier=SpeedTier.FAST,
    )
    with pytest.raises(AttributeError):
        snap.score = 10
    assert snap.to_dict() == {
        "phase": "gameOver",
        "snake": [[3, 4], [3, 5]],
        "food": [7, 7],
        "direction": [0, -1],
        "score": 4,
        "high_score": 9,
        "speed": "fast",
        "speed_name": "FAST",
        "grid": [20, 20],
    }


def test_parse_direction_returns_plain_int_cells():
    for raw in ("down", [0, 1], (0, 1)):
        cell = parse_direction(raw)
        assert cell == (0, 1)
        assert all(type(c) is int for c in cell)
