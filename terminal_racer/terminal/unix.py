"""
POSIX terminal backend: termios for the input mode, select/FIONREAD for
non-blocking reads.
"""
import fcntl
import logging
import os
import select
import struct
import sys
import termios
from typing import List, Optional

from terminal_racer.terminal.backend import TerminalBackend, TerminalError

logger = logging.getLogger('terminal')

# termios attribute list indices
LFLAG = 3
CC = 6


class UnixTerminalBackend(TerminalBackend):
    def __init__(self, stdin=None, stdout=None):
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    def _fd(self) -> int:
        return self._stdin.fileno()

    def capture_mode(self) -> List:
        try:
            return termios.tcgetattr(self._fd())
        except (termios.error, OSError, ValueError) as e:
            raise TerminalError(f"tcgetattr failed: {e}") from e

    def apply_raw_mode(self) -> None:
        fd = self._fd()
        try:
            attrs = termios.tcgetattr(fd)
            # Non-canonical, no echo, no signal keys: Ctrl-C arrives as 0x03
            attrs[LFLAG] &= ~(termios.ICANON | termios.ECHO | termios.ISIG)
            attrs[CC][termios.VMIN] = 0
            attrs[CC][termios.VTIME] = 0
            termios.tcsetattr(fd, termios.TCSANOW, attrs)
        except (termios.error, OSError, ValueError) as e:
            raise TerminalError(f"could not enter raw mode: {e}") from e
        logger.debug("Raw mode applied on fd %d", fd)

    def restore_mode(self, saved: Optional[List]) -> None:
        if saved is None:
            return
        try:
            termios.tcsetattr(self._fd(), termios.TCSANOW, saved)
        except (termios.error, OSError, ValueError) as e:
            raise TerminalError(f"could not restore terminal: {e}") from e

    def bytes_available(self) -> int:
        fd = self._fd()
        readable, _, _ = select.select([fd], [], [], 0)
        if not readable:
            return 0
        try:
            buf = fcntl.ioctl(fd, termios.FIONREAD, b"\0\0\0\0")
            count = struct.unpack("i", buf)[0]
        except OSError:
            # Not every file supports FIONREAD; select() said one byte is there
            count = 1
        # Readable with zero bytes pending means EOF, which read() reports as b""
        return max(count, 1)

    def read(self, count: int) -> bytes:
        try:
            return os.read(self._fd(), count)
        except BlockingIOError:
            return b""

    def write(self, text: str) -> None:
        try:
            self._stdout.write(text)
        except OSError as e:
            logger.warning(f"Terminal write failed: {e}")

    def flush(self) -> None:
        try:
            self._stdout.flush()
        except OSError as e:
            logger.warning(f"Terminal flush failed: {e}")
