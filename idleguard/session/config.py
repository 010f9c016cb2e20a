"""Inactivity timeout configuration."""

from dataclasses import dataclass
from typing import Any

WARNING_DELAY = 4 * 60.0  # seconds of inactivity before the warning appears
LOGOUT_DELAY = 5 * 60.0  # seconds of inactivity before forced logout
COUNTDOWN_SECONDS = int(LOGOUT_DELAY - WARNING_DELAY)
ACTIVITY_DEBOUNCE = 0.5  # seconds


@dataclass
class InactivityConfig:
    """Deadlines for the inactivity timer."""

    warning_delay: float = WARNING_DELAY
    logout_delay: float = LOGOUT_DELAY
    activity_debounce: float = ACTIVITY_DEBOUNCE
    tick_interval: float = 1.0  # Countdown resolution

    def __post_init__(self) -> None:
        if self.warning_delay <= 0:
            raise ValueError("warning_delay must be positive")
        if self.logout_delay <= self.warning_delay:
            raise ValueError("logout_delay must be later than warning_delay")
        if self.activity_debounce < 0:
            raise ValueError("activity_debounce must not be negative")
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")

    @property
    def countdown_seconds(self) -> int:
        """Length of the warning window in whole seconds."""
        return int(round(self.logout_delay - self.warning_delay))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InactivityConfig":
        """Create config from dictionary.

        Args:
            data: The ``session`` section of the configuration file.

        Returns:
            InactivityConfig instance.

        Raises:
            ValueError: If the logout deadline is not after the warning deadline.
        """
        return cls(
            warning_delay=float(data.get("warning_delay_seconds", WARNING_DELAY)),
            logout_delay=float(data.get("logout_delay_seconds", LOGOUT_DELAY)),
            activity_debounce=float(data.get("activity_debounce_ms", ACTIVITY_DEBOUNCE * 1000))
            / 1000,
            tick_interval=float(data.get("countdown_tick_seconds", 1.0)),
        )
