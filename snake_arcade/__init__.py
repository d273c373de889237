"""Tick-driven snake arcade engine."""

from .clock import GameClock
from .engine import SnakeEngine
from .errors import ConfigurationError, InvalidDirectionError, UnknownSpeedTierError
from .models import Phase, Snapshot, SpeedTier, TickResult, parse_direction

__all__ = [
    "GameClock", "SnakeEngine",
    "ConfigurationError", "InvalidDirectionError", "UnknownSpeedTierError",
    "Phase", "Snapshot", "SpeedTier", "TickResult", "parse_direction",
]
