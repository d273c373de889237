"""Process settings read from the environment (and a local .env file)."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .constants import DEFAULT_SPEED
from .errors import ConfigurationError
from .models import SpeedTier

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 8765
    speed: SpeedTier = SpeedTier.NORMAL
    seed: Optional[int] = None
    log_level: str = "INFO"


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(**overrides) -> Settings:
    """Build settings from the environment.

    Keyword overrides (e.g. from command-line flags) win over the
    environment; an overridden variable is not read at all, so a broken
    value in the environment can be corrected from the command line.
    """
    load_dotenv(find_dotenv(usecwd=True))
    overrides = {k: v for k, v in overrides.items() if v is not None}

    port = overrides["port"] if "port" in overrides else _int_env("SNAKE_PORT", 8765)
    if not 0 < port < 65536:
        raise ConfigurationError(f"SNAKE_PORT out of range: {port}")

    log_level = overrides.get("log_level") or os.getenv("SNAKE_LOG_LEVEL", "INFO")
    log_level = log_level.upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"SNAKE_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

    speed = overrides["speed"] if "speed" in overrides else os.getenv("SNAKE_SPEED", DEFAULT_SPEED)
    seed = overrides["seed"] if "seed" in overrides else _int_env("SNAKE_SEED", None)

    return Settings(
        host=overrides.get("host") or os.getenv("SNAKE_HOST", "0.0.0.0"),
        port=port,
        speed=SpeedTier.parse(speed),
        seed=seed,
        log_level=log_level,
    )
