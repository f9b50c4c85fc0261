"""
Non-blocking key decoder.

Bytes are pulled from the terminal backend into a buffer and cut into
KeyTokens. A lone ESC is ambiguous (the Escape key, or the start of an arrow
key sequence still in flight), so after an ESC the decoder keeps polling for
a short, fixed window before deciding. Bytes left over after a token stay
buffered for the next poll.
"""
import logging
import time
from enum import Enum, auto
from typing import Callable, Tuple

from terminal_racer.keyboard.keys import ESC, NAMED_SEQUENCES, NO_KEY, KeyKind, KeyToken

logger = logging.getLogger('input')

ESCAPE_TIMEOUT = 0.1  # seconds to wait for the rest of a sequence
ESCAPE_POLL_INTERVAL = 0.008
KEY_WAIT_INTERVAL = 0.025

CSI_INTRODUCER = ord("[")
SS3_INTRODUCER = ord("O")
CONSOLE_KEY_PREFIXES = (0x00, 0xE0)


class EscapeState(Enum):
    """Where the scanner is inside an escape sequence."""
    ESCAPE = auto()   # Seen ESC
    CSI = auto()      # Seen ESC [
    SS3 = auto()      # Seen ESC O
    EXTENDED = auto()  # Seen ESC 0x00 or ESC 0xE0 (Windows console key)
    COMPLETE = auto()


def scan_escape(buf) -> Tuple[EscapeState, int]:
    """
    Scan the escape sequence at the start of `buf` (buf[0] is ESC).

    Returns the state reached and how many bytes belong to the sequence. The
    state is COMPLETE once the sequence is known to be finished; anything else
    means more bytes could still extend it.
    """
    if len(buf) < 2:
        return EscapeState.ESCAPE, 1

    second = buf[1]
    if second == ESC:
        # Bare escape; the second ESC starts the next key
        return EscapeState.COMPLETE, 1

    if second == SS3_INTRODUCER or second in CONSOLE_KEY_PREFIXES:
        # One more byte names the key
        if len(buf) < 3:
            return (EscapeState.SS3 if second == SS3_INTRODUCER else EscapeState.EXTENDED), 2
        return EscapeState.COMPLETE, 3

    if second != CSI_INTRODUCER:
        # ESC + key, as sent for Alt-modified keys
        return EscapeState.COMPLETE, 2

    # CSI: parameter/intermediate bytes 0x20-0x3F, final byte 0x40-0x7E
    for i in range(2, len(buf)):
        b = buf[i]
        if 0x40 <= b <= 0x7E:
            return EscapeState.COMPLETE, i + 1
        if not 0x20 <= b <= 0x3F:
            # Malformed: end the sequence before the stray byte
            return EscapeState.COMPLETE, i
    return EscapeState.CSI, len(buf)


def classify(seq: bytes) -> KeyToken:
    """Map a complete byte sequence to its token."""
    if len(seq) == 1:
        return KeyToken.char(seq)
    named = NAMED_SEQUENCES.get(seq)
    if named is not None:
        return named
    return KeyToken.sequence(seq)


class InputDecoder:
    """
    Turns the backend's byte stream into KeyTokens, one per poll_key() call.

    `clock` and `sleep` are injectable so the escape timeout can be driven by
    tests without a terminal or real time passing.
    """

    def __init__(self, source, clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep,
                 escape_timeout: float = ESCAPE_TIMEOUT,
                 poll_interval: float = ESCAPE_POLL_INTERVAL):
        self.source = source
        self.clock = clock
        self.sleep = sleep
        self.escape_timeout = escape_timeout
        self.poll_interval = poll_interval
        self._buffer = bytearray()
        self.at_eof = False

    @property
    def pending(self) -> bytes:
        """Bytes read from the source but not yet turned into tokens."""
        return bytes(self._buffer)

    def _fill(self) -> bool:
        """Move every byte the source has ready into the buffer."""
        count = self.source.bytes_available()
        if count <= 0:
            return False
        data = self.source.read(count)
        if not data:
            # Readable but empty: the input was closed
            if not self.at_eof:
                logger.info("Input reached end of file")
            self.at_eof = True
            return False
        self._buffer.extend(data)
        return True

    def _take(self, length: int) -> bytes:
        seq = bytes(self._buffer[:length])
        del self._buffer[:length]
        return seq

    def poll_key(self) -> KeyToken:
        """
        Return the next token, or NO_KEY when no input is waiting.

        Only a pending escape sequence can pause the caller, for at most
        escape_timeout seconds.
        """
        self._fill()
        if not self._buffer:
            return NO_KEY

        if self._buffer[0] != ESC:
            return KeyToken.char(self._take(1))

        deadline = self.clock() + self.escape_timeout
        state, length = scan_escape(self._buffer)
        while state is not EscapeState.COMPLETE:
            if self.clock() >= deadline:
                break
            if not self._fill():
                self.sleep(self.poll_interval)
            state, length = scan_escape(self._buffer)

        token = classify(self._take(length))
        if state is not EscapeState.COMPLETE and len(token.data) > 1:
            logger.debug(f"Escape sequence timed out incomplete: {token.describe()}")
        elif token.kind is KeyKind.SEQUENCE:
            logger.debug(f"Unrecognized key sequence: {token.describe()}")
        return token

    def wait_for_key(self) -> KeyToken:
        """
        Block until any key arrives; used when capturing a new binding.

        Raises EOFError once the input is closed and nothing is left to decode.
        """
        while True:
            token = self.poll_key()
            if not token.is_none:
                return token
            if self.at_eof:
                raise EOFError("input closed while waiting for a key")
            self.sleep(KEY_WAIT_INTERVAL)
