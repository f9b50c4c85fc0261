from dataclasses import dataclass, field
from typing import FrozenSet

from terminal_racer.core.clock import clamp_level
from terminal_racer.keyboard.keys import KeyToken

DEFAULT_HIGHSCORE_FILE = "highscore.txt"


def _default_quit_keys() -> FrozenSet[KeyToken]:
    return frozenset(KeyToken.char(c) for c in ("q", "Q", "\x03"))


@dataclass
class ControlBindings:
    """
    Which tokens steer the car.

    Bindings are plain tokens, so the controls menu can assign any key the
    decoder produces, arrows and unrecognized sequences included.
    """
    left: KeyToken = field(default_factory=lambda: KeyToken.char("a"))
    right: KeyToken = field(default_factory=lambda: KeyToken.char("d"))
    quit: FrozenSet[KeyToken] = field(default_factory=_default_quit_keys)

    def describe(self) -> str:
        return f"Left={self.left.describe()} Right={self.right.describe()}"


@dataclass
class GameSettings:
    """
    GameSettings holds the configuration that survives across games.
    """
    level: int = 1
    bindings: ControlBindings = field(default_factory=ControlBindings)
    highscore_file: str = DEFAULT_HIGHSCORE_FILE
    high_score: int = 0

    def set_level(self, level: int) -> bool:
        """Accept a level in the supported range; anything else is ignored."""
        if clamp_level(level) != level:
            return False
        self.level = level
        return True
