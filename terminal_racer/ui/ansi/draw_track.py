import logging
import time
from typing import List

from terminal_racer.core.entities import BORDER_CHAR, OBSTACLE_CHAR, PLAYER_CHAR, ROAD_CHAR
from terminal_racer.core.state.race_state import RaceState
from terminal_racer.core.state.settings import ControlBindings
from terminal_racer.ui.ansi.screen import goto

logger = logging.getLogger('graphics')


def build_rows(state: RaceState) -> List[str]:
    """Rows of the track, top to bottom, including both borders."""
    occupied = {obstacle.position for obstacle in state.obstacles}
    rows = []
    for y in range(1, state.screen_height + 1):
        cells = []
        for x in range(1, state.track_width + 3):
            if x == 1 or x == state.track_width + 2:
                cells.append(BORDER_CHAR)
            elif y == state.player_y and x == state.player_x:
                cells.append(PLAYER_CHAR)
            elif (x, y) in occupied:
                cells.append(OBSTACLE_CHAR)
            else:
                cells.append(ROAD_CHAR)
        rows.append("".join(cells))
    return rows


def status_line(state: RaceState, bindings: ControlBindings) -> str:
    # Trailing blanks wipe leftovers of a longer previous line
    return f"Score: {state.score} | Level: {state.level} | Controls: {bindings.describe()}    "


def build_frame(state: RaceState, bindings: ControlBindings) -> str:
    """The whole screen as one string, so it reaches the terminal in one write."""
    parts = [goto(1, 1), "\n".join(build_rows(state)), "\n"]
    parts.append(goto(state.screen_height + 1, 1))
    parts.append(status_line(state, bindings))
    return "".join(parts)


def render(backend, state: RaceState, bindings: ControlBindings) -> None:
    """
    Draw the track, the player, every obstacle and the HUD line.
    """
    start_time = time.time()

    backend.write(build_frame(state, bindings))
    backend.flush()

    execution_time_ms = (time.time() - start_time) * 1000
    if execution_time_ms > 10:  # Only log slow frames
        logger.debug(f"Track render executed in {execution_time_ms:.2f}ms")
