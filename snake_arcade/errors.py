"""Configuration errors raised at the engine's call sites."""

from .constants import SPEED_SETTINGS


class ConfigurationError(ValueError):
    """A caller passed configuration the engine does not recognise."""


class UnknownSpeedTierError(ConfigurationError):
    def __init__(self, value):
        self.value = value
        super().__init__(
            f"unknown speed tier {value!r}, expected one of {', '.join(SPEED_SETTINGS)}"
        )


class InvalidDirectionError(ConfigurationError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"not a direction: {value!r}")
