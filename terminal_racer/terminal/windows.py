"""
Windows console backend: kernel32 console modes and msvcrt keyboard polling.

Extended keys arrive from msvcrt as a 0x00/0xE0 prefix followed by a scan
code. They are rewritten to the byte sequences a VT100 terminal would send so
the decoder sees the same input on every platform.
"""
import logging
import sys
from collections import deque
from typing import Optional, Tuple

from terminal_racer.terminal.backend import TerminalBackend, TerminalError

logger = logging.getLogger('terminal')

STD_INPUT_HANDLE = -10
STD_OUTPUT_HANDLE = -11

ENABLE_PROCESSED_INPUT = 0x0001
ENABLE_LINE_INPUT = 0x0002
ENABLE_ECHO_INPUT = 0x0004
ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004

EXTENDED_KEY_PREFIXES = (0x00, 0xE0)

# Scan code -> CSI final byte
SCAN_CODE_ARROWS = {
    72: b"A",  # Up
    80: b"B",  # Down
    77: b"C",  # Right
    75: b"D",  # Left
}


def translate_extended_key(prefix: int, code: int) -> bytes:
    """Map a prefixed console key to terminal input bytes."""
    final = SCAN_CODE_ARROWS.get(code)
    if final is not None:
        return b"\x1b[" + final
    # No VT equivalent: keep the console bytes behind ESC so the decoder
    # reports them as an unrecognized sequence
    return b"\x1b" + bytes((prefix, code))


class WindowsTerminalBackend(TerminalBackend):
    def __init__(self):
        import ctypes
        import msvcrt

        self._msvcrt = msvcrt
        self._ctypes = ctypes
        self._kernel32 = ctypes.windll.kernel32
        self._stdin_handle = self._kernel32.GetStdHandle(STD_INPUT_HANDLE)
        self._stdout_handle = self._kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
        self._pending = deque()

    def _get_mode(self, handle) -> int:
        from ctypes import wintypes

        mode = wintypes.DWORD()
        if not self._kernel32.GetConsoleMode(handle, self._ctypes.byref(mode)):
            raise TerminalError("GetConsoleMode failed")
        return mode.value

    def _set_mode(self, handle, mode: int) -> None:
        if not self._kernel32.SetConsoleMode(handle, mode):
            raise TerminalError(f"SetConsoleMode({mode:#x}) failed")

    def capture_mode(self) -> Tuple[int, int]:
        return self._get_mode(self._stdin_handle), self._get_mode(self._stdout_handle)

    def apply_raw_mode(self) -> None:
        in_mode = self._get_mode(self._stdin_handle)
        # Without processed input Ctrl-C is read by getch() as 0x03
        self._set_mode(self._stdin_handle,
                       in_mode & ~(ENABLE_PROCESSED_INPUT | ENABLE_LINE_INPUT | ENABLE_ECHO_INPUT))

        # ANSI cursor addressing needs VT processing (Windows 10+)
        out_mode = self._get_mode(self._stdout_handle)
        try:
            self._set_mode(self._stdout_handle, out_mode | ENABLE_VIRTUAL_TERMINAL_PROCESSING)
        except TerminalError:
            logger.warning("VT output processing unavailable, display may be garbled")

    def restore_mode(self, saved: Optional[Tuple[int, int]]) -> None:
        if saved is None:
            return
        in_mode, out_mode = saved
        self._set_mode(self._stdin_handle, in_mode)
        self._set_mode(self._stdout_handle, out_mode)

    def _pump(self) -> None:
        while self._msvcrt.kbhit():
            ch = self._msvcrt.getch()[0]
            if ch in EXTENDED_KEY_PREFIXES:
                code = self._msvcrt.getch()[0]
                self._pending.extend(translate_extended_key(ch, code))
            else:
                self._pending.append(ch)

    def bytes_available(self) -> int:
        self._pump()
        return len(self._pending)

    def read(self, count: int) -> bytes:
        out = bytearray()
        while self._pending and len(out) < count:
            out.append(self._pending.popleft())
        return bytes(out)

    def write(self, text: str) -> None:
        try:
            sys.stdout.write(text)
        except OSError as e:
            logger.warning(f"Console write failed: {e}")

    def flush(self) -> None:
        try:
            sys.stdout.flush()
        except OSError as e:
            logger.warning(f"Console flush failed: {e}")
