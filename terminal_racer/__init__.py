"""
Terminal Racer - dodge the obstacles scrolling down a terminal track.
"""

# Main package initialization
from . import cli
from . import controller
from . import core
from . import keyboard
from . import persistence
from . import terminal
from . import ui

__all__ = ['cli', 'controller', 'core', 'keyboard', 'persistence', 'terminal', 'ui']

__version__ = "0.1.0"
