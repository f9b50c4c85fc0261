from dataclasses import dataclass
from typing import Tuple

# Track geometry, in 1-based screen coordinates. Column 1 and column
# TRACK_WIDTH + 2 are the borders; the player drives on row SCREEN_HEIGHT.
TRACK_WIDTH = 20
SCREEN_HEIGHT = 20
START_PLAYER_X = TRACK_WIDTH // 2 + 1

PLAYER_CHAR = '@'
OBSTACLE_CHAR = '#'
ROAD_CHAR = ' '
BORDER_CHAR = '|'


@dataclass
class Obstacle:
    """An obstacle scrolling down the track"""
    x: int  # lane column
    y: int  # row, 1 is the top of the track

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)
