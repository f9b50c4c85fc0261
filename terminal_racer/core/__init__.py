from .clock import FrameClock, interval_for_level
from .entities import Obstacle
from .state.race_state import RaceState
from .state.settings import ControlBindings, GameSettings

__all__ = ['FrameClock', 'interval_for_level', 'Obstacle', 'RaceState',
           'ControlBindings', 'GameSettings']
