from .phases import Phase
from .mainloop import GameController, run_game

__all__ = ['Phase', 'GameController', 'run_game']
