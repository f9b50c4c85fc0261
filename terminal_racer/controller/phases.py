from enum import Enum, auto


class Phase(Enum):
    """Game phases that control the flow of the game."""
    RUNNING = auto()    # Obstacles moving, player steering
    GAME_OVER = auto()  # Crashed or quit; the loop returns
