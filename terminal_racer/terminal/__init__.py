from .backend import TerminalBackend, TerminalError, get_backend
from .session import TerminalSession

__all__ = ['TerminalBackend', 'TerminalError', 'get_backend', 'TerminalSession']
