#
# Shared fixtures and fakes for the terminal_racer pytest suite: a scripted
# terminal backend and a manually driven clock, so the decoder, the session
# and the game loop run without a real terminal or real time passing.

import os
import random
import sys

import pytest

# Ensure terminal_racer is importable from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from terminal_racer.core.state.settings import GameSettings  # noqa: E402
from terminal_racer.keyboard.decoder import InputDecoder  # noqa: E402
from terminal_racer.terminal.backend import TerminalBackend, TerminalError  # noqa: E402

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when told to (or when slept on)."""

    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeBackend(TerminalBackend):
    """
    Terminal backend fed from a script of (arrival_time, bytes) chunks.

    A chunk becomes readable once the attached clock reaches its arrival
    time. Mode changes, output and cursor visibility are recorded.
    """

    def __init__(self, clock=None, fail_capture=False, fail_apply=False, fail_restore=False):
        self.clock = clock or FakeClock()
        self.scheduled = []
        self.ready = bytearray()
        self.output = []
        self.cursor_visible = True
        self.mode = "cooked"
        self.calls = []
        self.fail_capture = fail_capture
        self.fail_apply = fail_apply
        self.fail_restore = fail_restore
        self.closed = False

    # Script helpers

    def feed(self, data, at=None):
        """Make `data` readable at time `at` (default: right now)."""
        when = self.clock.now if at is None else at
        self.scheduled.append((when, bytes(data)))
        self.scheduled.sort(key=lambda item: item[0])

    def feed_after(self, delay, data):
        self.feed(data, at=self.clock.now + delay)

    def close(self):
        """Behave like a file at EOF once the script runs out: readable, but empty."""
        self.closed = True

    @property
    def text(self):
        return "".join(self.output)

    # TerminalBackend

    def capture_mode(self):
        self.calls.append("capture")
        if self.fail_capture:
            raise TerminalError("capture refused")
        return {"mode": self.mode}

    def apply_raw_mode(self):
        self.calls.append("apply")
        if self.fail_apply:
            raise TerminalError("apply refused")
        self.mode = "raw"

    def restore_mode(self, saved):
        self.calls.append("restore")
        if self.fail_restore:
            raise TerminalError("restore refused")
        self.mode = saved["mode"]

    def bytes_available(self):
        while self.scheduled and self.scheduled[0][0] <= self.clock.now:
            self.ready.extend(self.scheduled.pop(0)[1])
        if not self.ready and not self.scheduled and self.closed:
            return 1
        return len(self.ready)

    def read(self, count):
        data = bytes(self.ready[:count])
        del self.ready[:count]
        return data

    def write(self, text):
        self.output.append(text)

    def flush(self):
        pass

    def set_cursor_visible(self, visible):
        self.cursor_visible = visible


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend(clock):
    return FakeBackend(clock)


@pytest.fixture
def decoder(backend, clock):
    return InputDecoder(backend, clock=clock, sleep=clock.sleep)


@pytest.fixture
def settings(tmp_path):
    return GameSettings(highscore_file=str(tmp_path / "highscore.txt"))


@pytest.fixture
def rng():
    return random.Random(1234)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def drain_tokens(decoder, limit=100):
    """Poll until the decoder reports NO_KEY; return the tokens seen."""
    tokens = []
    for _ in range(limit):
        token = decoder.poll_key()
        if token.is_none:
            break
        tokens.append(token)
    return tokens
