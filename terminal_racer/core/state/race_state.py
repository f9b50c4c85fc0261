from dataclasses import dataclass, field
from typing import List, Optional

from terminal_racer.core.entities import (
    Obstacle, SCREEN_HEIGHT, START_PLAYER_X, TRACK_WIDTH
)


@dataclass
class RaceState:
    """
    Everything that changes during one game.

    A new RaceState is created for every game; nothing carries over.
    """
    level: int = 1
    track_width: int = TRACK_WIDTH
    screen_height: int = SCREEN_HEIGHT
    player_x: int = START_PLAYER_X
    obstacles: List[Obstacle] = field(default_factory=list)  # oldest first
    score: int = 0

    @property
    def min_x(self) -> int:
        """Leftmost drivable column"""
        return 2

    @property
    def max_x(self) -> int:
        """Rightmost drivable column"""
        return self.track_width + 1

    @property
    def player_y(self) -> int:
        return self.screen_height

    def move_player(self, dx: int) -> bool:
        """Shift the player by dx columns, clamped to the track. Returns True if it moved."""
        new_x = max(self.min_x, min(self.max_x, self.player_x + dx))
        moved = new_x != self.player_x
        self.player_x = new_x
        return moved

    def obstacle_at(self, x: int, y: int) -> Optional[Obstacle]:
        for obstacle in self.obstacles:
            if obstacle.x == x and obstacle.y == y:
                return obstacle
        return None
