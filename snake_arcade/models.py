"""Data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .constants import (
    DIRECTIONS, GRID_SIZE, INITIAL_DIRECTION, INITIAL_FOOD, INITIAL_SNAKE,
    SPEED_SETTINGS,
)
from .errors import InvalidDirectionError, UnknownSpeedTierError

Cell = tuple[int, int]


class Phase(Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


class SpeedTier(Enum):
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"
    INSANE = "insane"

    @property
    def display_name(self) -> str:
        return SPEED_SETTINGS[self.value][0]

    @property
    def interval_ms(self) -> int:
        return SPEED_SETTINGS[self.value][1]

    @property
    def interval(self) -> float:
        """Tick interval in seconds."""
        return self.interval_ms / 1000

    @classmethod
    def parse(cls, value) -> "SpeedTier":
        """Resolve a tier from an enum member or its (case-insensitive) key."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnknownSpeedTierError(value)


class TickResult(Enum):
    IDLE = "idle"
    MOVED = "moved"
    ATE = "ate"
    HIT_WALL = "hit_wall"
    HIT_SELF = "hit_self"
    BOARD_FULL = "board_full"

    @property
    def ended_run(self) -> bool:
        return self in (TickResult.HIT_WALL, TickResult.HIT_SELF, TickResult.BOARD_FULL)


def parse_direction(value) -> Cell:
    """Accept a direction name ("up", "left", ...) or one of the four unit vectors."""
    if isinstance(value, str):
        try:
            return DIRECTIONS[value.strip().lower()]
        except KeyError:
            raise InvalidDirectionError(value) from None
    try:
        dx, dy = value
    except (TypeError, ValueError):
        raise InvalidDirectionError(value) from None
    if type(dx) is not int or type(dy) is not int or (dx, dy) not in DIRECTIONS.values():
        raise InvalidDirectionError(value)
    return (dx, dy)


def is_opposite(a: Cell, b: Cell) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


@dataclass
class EngineState:
    phase: Phase = Phase.WAITING
    snake: list = field(default_factory=lambda: list(INITIAL_SNAKE))
    food: Optional[Cell] = INITIAL_FOOD
    direction: Cell = INITIAL_DIRECTION
    pending_direction: Optional[Cell] = None
    score: int = 0
    high_score: int = 0
    speed_tier: SpeedTier = SpeedTier.NORMAL


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine handed to whatever renders the game."""

    phase: Phase
    snake: tuple
    food: Optional[Cell]
    direction: Cell
    score: int
    high_score: int
    speed_tier: SpeedTier
    grid_size: int = GRID_SIZE

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "snake": [list(c) for c in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "direction": list(self.direction),
            "score": self.score,
            "high_score": self.high_score,
            "speed": self.speed_tier.value,
            "speed_name": self.speed_tier.display_name,
            "grid": [self.grid_size, self.grid_size],
        }
