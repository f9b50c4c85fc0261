"""
Simulation rules for one tick: obstacle movement, scoring, spawning and
collision.
"""
import logging
import random
from typing import List, Optional

from terminal_racer.core.entities import Obstacle
from terminal_racer.core.events import Collision, Event, ObstaclePassed, ObstacleSpawned
from terminal_racer.core.state.race_state import RaceState

logger = logging.getLogger('system')

PASS_POINTS = 10
SPAWN_CHANCE = 0.3      # chance per tick of a spawn while the track is empty
SPAWN_GAP_ROWS = 2      # newest obstacle must be below this row before the next spawn


def advance_obstacles(state: RaceState) -> List[Event]:
    """Move every obstacle down one row and score those that left the track."""
    events = []
    for obstacle in state.obstacles:
        obstacle.y += 1

    # Oldest obstacles are furthest down, so they leave from the front
    while state.obstacles and state.obstacles[0].y > state.screen_height:
        passed = state.obstacles.pop(0)
        state.score += PASS_POINTS
        events.append(ObstaclePassed(x=passed.x, points=PASS_POINTS))
    return events


def should_spawn(state: RaceState, rng: random.Random) -> bool:
    """
    Keep roughly one obstacle in flight: an empty track fills up at random,
    otherwise the next one follows once the newest has cleared the top rows.
    """
    if not state.obstacles:
        return rng.random() < SPAWN_CHANCE
    return state.obstacles[-1].y > SPAWN_GAP_ROWS


def spawn_obstacle(state: RaceState, rng: random.Random) -> ObstacleSpawned:
    x = rng.randint(state.min_x, state.max_x)
    state.obstacles.append(Obstacle(x=x, y=1))
    return ObstacleSpawned(x=x)


def step(state: RaceState, rng: random.Random) -> List[Event]:
    """
    Advance the race by one tick.

    Args:
        state: Race state, modified in place
        rng: Random source for spawn decisions and columns

    Returns:
        events: What happened during the tick
    """
    events = advance_obstacles(state)
    if should_spawn(state, rng):
        events.append(spawn_obstacle(state, rng))
    for event in events:
        logger.debug(f"Tick event: {event}")
    return events


def check_collision(state: RaceState) -> Optional[Collision]:
    """Return a Collision if an obstacle sits on the player's cell."""
    obstacle = state.obstacle_at(state.player_x, state.player_y)
    if obstacle is None:
        return None
    return Collision(x=obstacle.x, y=obstacle.y)
