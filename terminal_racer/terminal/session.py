"""
Raw mode bookkeeping for the controlling terminal.

The original configuration is captured once, the first time raw mode is
entered, and is what every later restore goes back to. Failures from the
backend are logged and otherwise ignored so the game stays playable on a
terminal that refuses some of the settings.
"""
import atexit
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from terminal_racer.terminal.backend import TerminalBackend, TerminalError

logger = logging.getLogger('terminal')


class TerminalSession:
    """Owns the terminal for the lifetime of the process."""

    def __init__(self, backend: TerminalBackend):
        self.backend = backend
        self._saved: Optional[Any] = None
        self._captured = False
        self._raw = False
        self._atexit_registered = False

    @property
    def is_raw(self) -> bool:
        return self._raw

    @property
    def saved_mode(self) -> Optional[Any]:
        return self._saved

    def enter_raw_mode(self) -> None:
        """Switch to non-canonical, no-echo input and hide the cursor."""
        if self._raw:
            return

        if not self._captured:
            try:
                self._saved = self.backend.capture_mode()
                self._captured = True
            except TerminalError as e:
                logger.warning(f"Could not capture terminal mode: {e}")

        try:
            self.backend.apply_raw_mode()
        except TerminalError as e:
            logger.warning(f"Continuing without raw mode: {e}")

        self.backend.set_cursor_visible(False)
        self._raw = True

        if not self._atexit_registered:
            # Safety net for exits that bypass the context managers
            atexit.register(self.exit_raw_mode)
            self._atexit_registered = True
        logger.debug("Entered raw mode")

    def exit_raw_mode(self) -> None:
        """Restore the captured configuration and show the cursor. No-op when not raw."""
        if not self._raw:
            return
        self._raw = False

        if self._captured:
            try:
                self.backend.restore_mode(self._saved)
            except TerminalError as e:
                logger.warning(f"Could not restore terminal mode: {e}")

        self.backend.set_cursor_visible(True)
        logger.debug("Exited raw mode")

    @contextmanager
    def raw_mode(self) -> Iterator["TerminalSession"]:
        """Hold raw mode for the duration of the block, whatever way it exits."""
        self.enter_raw_mode()
        try:
            yield self
        finally:
            self.exit_raw_mode()

    @contextmanager
    def suspended(self) -> Iterator["TerminalSession"]:
        """Temporarily give the cooked terminal back, e.g. for a line prompt."""
        was_raw = self._raw
        self.exit_raw_mode()
        try:
            yield self
        finally:
            if was_raw:
                self.enter_raw_mode()
