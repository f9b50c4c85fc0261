"""
Fixed-timestep gate for the simulation.

The loop polls input and redraws as fast as it likes; obstacles only move
when the FrameClock says a full tick interval has elapsed.
"""
from typing import Optional

MIN_LEVEL = 1
MAX_LEVEL = 5

BASE_INTERVAL_MS = 120
INTERVAL_STEP_MS = 20
MIN_INTERVAL_MS = 20


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def interval_for_level(level: int) -> float:
    """
    Tick interval in seconds for a difficulty level.

    Linear in the level: 100ms at level 1 down to the 20ms floor at level 5.
    """
    ms = BASE_INTERVAL_MS - clamp_level(level) * INTERVAL_STEP_MS
    return max(ms, MIN_INTERVAL_MS) / 1000.0


class FrameClock:
    """Decides when the simulation may advance by one tick."""

    def __init__(self, interval: float, start: float):
        self.interval = max(interval, MIN_INTERVAL_MS / 1000.0)
        self.last_update = start
        self._pending = False

    @classmethod
    def for_level(cls, level: int, start: float) -> "FrameClock":
        return cls(interval_for_level(level), start)

    def should_advance(self, now: float) -> bool:
        """
        True once at least one interval has passed since the last accepted tick.

        A true result stays unanswered (later calls return False) until
        mark_advanced() is called.
        """
        if self._pending:
            return False
        if now - self.last_update >= self.interval:
            self._pending = True
            return True
        return False

    def mark_advanced(self, now: Optional[float] = None) -> None:
        """Accept the tick; the next interval is measured from `now`."""
        if now is not None:
            self.last_update = now
        self._pending = False
