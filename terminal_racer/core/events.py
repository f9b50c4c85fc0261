from dataclasses import dataclass


class Event:
    """Base class for all simulation events."""
    pass


@dataclass
class ObstacleSpawned(Event):
    """A new obstacle entered the top of the track."""
    x: int


@dataclass
class ObstaclePassed(Event):
    """An obstacle left past the bottom edge and was scored."""
    x: int
    points: int


@dataclass
class Collision(Event):
    """The player ran into an obstacle."""
    x: int
    y: int
