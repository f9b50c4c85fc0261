"""
Terminal backend interface shared by the POSIX and Windows implementations.
"""
import os
from abc import ABC, abstractmethod
from typing import Any


class TerminalError(Exception):
    """A terminal attribute could not be queried or changed."""
    pass


class TerminalBackend(ABC):
    """
    Capability interface over the controlling terminal.

    Everything above this layer (raw mode bookkeeping, key decoding, the game
    loop, rendering) is written once against these methods.
    """

    @abstractmethod
    def capture_mode(self) -> Any:
        """Return an opaque snapshot of the current input configuration."""

    @abstractmethod
    def apply_raw_mode(self) -> None:
        """Disable line buffering and echo; reads must not block."""

    @abstractmethod
    def restore_mode(self, saved: Any) -> None:
        """Reapply a snapshot returned by capture_mode()."""

    @abstractmethod
    def bytes_available(self) -> int:
        """Number of input bytes that can be read without blocking."""

    @abstractmethod
    def read(self, count: int) -> bytes:
        """Read up to `count` bytes that bytes_available() reported."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Queue text for output."""

    @abstractmethod
    def flush(self) -> None:
        """Push queued output to the terminal."""

    def set_cursor_visible(self, visible: bool) -> None:
        self.write("\033[?25h" if visible else "\033[?25l")
        self.flush()


def get_backend() -> TerminalBackend:
    """Pick the backend for the running platform."""
    if os.name == "nt":
        from terminal_racer.terminal.windows import WindowsTerminalBackend
        return WindowsTerminalBackend()

    from terminal_racer.terminal.unix import UnixTerminalBackend
    return UnixTerminalBackend()
