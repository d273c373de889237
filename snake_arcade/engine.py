"""Core game state and logic."""

import logging
import random
from typing import Optional

from .constants import (
    GRID_SIZE, FOOD_REWARD, INITIAL_SNAKE, INITIAL_FOOD, INITIAL_DIRECTION,
)
from .models import (
    Cell, EngineState, Phase, Snapshot, SpeedTier, TickResult,
    is_opposite, parse_direction,
)

logger = logging.getLogger(__name__)


class SnakeEngine:
    """Single-player snake rules driven by explicit ``tick()`` calls.

    All state lives in one :class:`EngineState` owned by the engine. Every
    public method applies its whole transition or nothing, and none of them
    block, so a caller on a single event loop never observes a half-applied
    move.
    """

    def __init__(self, seed: Optional[int] = None, speed_tier=SpeedTier.NORMAL):
        self.rng = random.Random(seed)
        self.state = EngineState(speed_tier=SpeedTier.parse(speed_tier))

    @property
    def phase(self) -> Phase:
        return self.state.phase

    # ── Lifecycle ──────────────────────────────────────────────────

    def _reinitialize(self):
        s = self.state
        s.snake = list(INITIAL_SNAKE)
        s.food = INITIAL_FOOD
        s.direction = INITIAL_DIRECTION
        s.pending_direction = None
        s.score = 0

    def reset(self):
        self._reinitialize()
        self._set_phase(Phase.WAITING)

    def start(self):
        self._reinitialize()
        self._set_phase(Phase.PLAYING)

    def toggle_pause(self) -> Phase:
        if self.state.phase == Phase.PLAYING:
            self._set_phase(Phase.PAUSED)
        elif self.state.phase == Phase.PAUSED:
            self._set_phase(Phase.PLAYING)
        return self.state.phase

    def set_speed_tier(self, tier) -> SpeedTier:
        tier = SpeedTier.parse(tier)
        if tier != self.state.speed_tier:
            logger.info("speed tier %s -> %s", self.state.speed_tier.value, tier.value)
            self.state.speed_tier = tier
        return tier

    def _set_phase(self, phase: Phase):
        if phase != self.state.phase:
            logger.info("phase %s -> %s", self.state.phase.value, phase.value)
        self.state.phase = phase

    # ── Input ──────────────────────────────────────────────────────

    def set_direction(self, direction) -> bool:
        """Buffer a direction change for the next tick.

        Returns True if the request was buffered. Requests outside active
        play, requests made while one is already buffered, and reversals of
        the current travel direction are dropped.
        """
        direction = parse_direction(direction)
        s = self.state
        if s.phase != Phase.PLAYING:
            return False
        if s.pending_direction is not None:
            logger.debug("direction %s dropped, %s already pending", direction, s.pending_direction)
            return False
        if is_opposite(direction, s.direction):
            logger.debug("direction %s rejected, reverses %s", direction, s.direction)
            return False
        s.pending_direction = direction
        return True

    # ── Simulation ─────────────────────────────────────────────────

    def tick(self) -> TickResult:
        s = self.state
        if s.phase != Phase.PLAYING:
            return TickResult.IDLE

        if s.pending_direction is not None:
            s.direction = s.pending_direction
        s.pending_direction = None

        dx, dy = s.direction
        hx, hy = s.snake[0]
        head = (hx + dx, hy + dy)

        if not (0 <= head[0] < GRID_SIZE and 0 <= head[1] < GRID_SIZE):
            self._end_run(TickResult.HIT_WALL)
            return TickResult.HIT_WALL
        # The tail still counts as occupied here, even though it would move.
        if head in s.snake:
            self._end_run(TickResult.HIT_SELF)
            return TickResult.HIT_SELF

        s.snake.insert(0, head)
        if head != s.food:
            s.snake.pop()
            return TickResult.MOVED

        s.score += FOOD_REWARD
        s.food = self.spawn_food()
        if s.food is None:
            self._end_run(TickResult.BOARD_FULL)
            return TickResult.BOARD_FULL
        return TickResult.ATE

    def _end_run(self, reason: TickResult):
        s = self.state
        if s.score > s.high_score:
            s.high_score = s.score
        logger.info("run over (%s), score=%d high=%d", reason.value, s.score, s.high_score)
        self._set_phase(Phase.GAME_OVER)

    def spawn_food(self) -> Optional[Cell]:
        """Pick a random free cell, or None when the snake fills the grid."""
        occupied = set(self.state.snake)
        if len(occupied) >= GRID_SIZE * GRID_SIZE:
            return None
        while True:
            x = self.rng.randrange(GRID_SIZE)
            y = self.rng.randrange(GRID_SIZE)
            if (x, y) not in occupied:
                return (x, y)

    # ── Output ─────────────────────────────────────────────────────

    def snapshot(self) -> Snapshot:
        s = self.state
        return Snapshot(
            phase=s.phase,
            snake=tuple(s.snake),
            food=s.food,
            direction=s.direction,
            score=s.score,
            high_score=s.high_score,
            speed_tier=s.speed_tier,
        )
