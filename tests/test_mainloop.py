#
# Game loop tests: bindings, quit, tick gating, collision and scoring, driven
# through GameController with a scripted backend and a fake clock.

import pytest

from conftest import FakeBackend, FakeClock
from terminal_racer.controller.mainloop import GameController, run_game
from terminal_racer.controller.phases import Phase
from terminal_racer.core.entities import Obstacle
from terminal_racer.core.state.settings import ControlBindings, GameSettings
from terminal_racer.core.systems.step_round import PASS_POINTS
from terminal_racer.keyboard.decoder import InputDecoder
from terminal_racer.keyboard.keys import LEFT_ARROW, RIGHT_ARROW


class NeverSpawn:
    """rng stand-in that keeps an empty track empty."""

    def random(self):
        return 1.0

    def randint(self, a, b):
        return a


@pytest.fixture
def controller(backend, decoder, settings, clock):
    return GameController(backend, decoder, settings, rng=NeverSpawn(), clock=clock)


def tick(controller, clock):
    """Let one full interval pass, then run one loop iteration."""
    clock.advance(controller.frame_clock.interval)
    return controller.iterate()


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


def test_starts_running(controller):
    assert controller.phase == Phase.RUNNING
    assert controller.state.player_x == controller.state.track_width // 2 + 1


def test_default_bindings_move_player(controller, backend):
    start = controller.state.player_x
    backend.feed(b"a")
    controller.iterate()
    assert controller.state.player_x == start - 1
    backend.feed(b"dd")
    controller.iterate()
    controller.iterate()
    assert controller.state.player_x == start + 1


def test_one_key_per_iteration(controller, backend):
    start = controller.state.player_x
    backend.feed(b"aaa")
    controller.iterate()
    assert controller.state.player_x == start - 1


def test_movement_clamped_to_track(controller, backend):
    backend.feed(b"a" * 50)
    for _ in range(50):
        controller.iterate()
    assert controller.state.player_x == 2
    backend.feed(b"d" * 50)
    for _ in range(50):
        controller.iterate()
    assert controller.state.player_x == controller.state.track_width + 1


def test_rebound_arrow_keys(backend, decoder, clock):
    settings = GameSettings(bindings=ControlBindings(left=LEFT_ARROW, right=RIGHT_ARROW))
    controller = GameController(backend, decoder, settings, rng=NeverSpawn(), clock=clock)
    start = controller.state.player_x

    backend.feed(b"\x1b[D")
    controller.iterate()
    assert controller.state.player_x == start - 1

    # The old letter bindings no longer steer
    backend.feed(b"a")
    controller.iterate()
    assert controller.state.player_x == start - 1

    backend.feed(b"\x1b[C\x1b[C")
    controller.iterate()
    controller.iterate()
    assert controller.state.player_x == start + 1


def test_bindings_changed_between_iterations(controller, backend, settings):
    start = controller.state.player_x
    settings.bindings.left = RIGHT_ARROW
    backend.feed(b"\x1b[C")
    controller.iterate()
    assert controller.state.player_x == start - 1


@pytest.mark.parametrize("key", [b"q", b"Q", b"\x03"])
def test_quit_ends_game_without_further_processing(controller, backend, clock, key):
    rendered = []
    controller.render_fn = lambda *args: rendered.append(args)
    controller.state.obstacles = [Obstacle(5, 5)]
    clock.advance(1.0)
    backend.feed(key)

    assert controller.iterate() is False
    assert controller.phase == Phase.GAME_OVER
    # No tick and no draw after the quit key
    assert controller.state.obstacles[0].y == 5
    assert rendered == []


def test_unbound_keys_are_ignored(controller, backend):
    start = controller.state.player_x
    backend.feed(b"x\x1b[A\x1b[5~")
    for _ in range(3):
        assert controller.iterate()
    assert controller.state.player_x == start


# ---------------------------------------------------------------------------
# Ticks
# ---------------------------------------------------------------------------


def test_obstacles_only_move_on_ticks(controller, clock):
    controller.state.obstacles = [Obstacle(3, 1)]
    for _ in range(20):
        controller.iterate()
    assert controller.state.obstacles[0].y == 1

    tick(controller, clock)
    assert controller.state.obstacles[0].y == 2
    assert controller.ticked


def test_higher_level_ticks_faster(backend, decoder, clock):
    slow = GameController(backend, decoder, GameSettings(level=1), clock=clock)
    fast = GameController(backend, decoder, GameSettings(level=5), clock=clock)
    assert fast.frame_clock.interval < slow.frame_clock.interval


def test_collision_on_bottom_row_ends_game(controller, clock):
    state = controller.state
    state.obstacles = [Obstacle(state.player_x, state.screen_height - 1)]
    assert tick(controller, clock) is False
    assert controller.phase == Phase.GAME_OVER


def test_obstacle_in_other_column_passes(controller, clock):
    state = controller.state
    state.obstacles = [Obstacle(state.player_x + 1, state.screen_height - 1)]
    assert tick(controller, clock) is True
    assert state.obstacles[0].y == state.screen_height
    assert tick(controller, clock) is True
    assert state.score == PASS_POINTS
    for _ in range(10):
        tick(controller, clock)
    assert state.score == PASS_POINTS


def test_steering_into_obstacle_on_bottom_row(controller, backend):
    state = controller.state
    state.obstacles = [Obstacle(state.player_x - 1, state.screen_height)]
    backend.feed(b"a")
    assert controller.iterate() is False
    assert controller.phase == Phase.GAME_OVER


def test_render_each_iteration(controller):
    rendered = []
    controller.render_fn = lambda backend, state, bindings: rendered.append(state.player_x)
    for _ in range(3):
        controller.iterate()
    assert len(rendered) == 3


# ---------------------------------------------------------------------------
# run_game
# ---------------------------------------------------------------------------


def test_run_game_until_quit(settings):
    clock = FakeClock()
    backend = FakeBackend(clock)
    decoder = InputDecoder(backend, clock=clock, sleep=clock.sleep)
    backend.feed_after(0.5, b"q")

    state = run_game(backend, decoder, settings, rng=NeverSpawn(), clock=clock, sleep=clock.sleep)

    assert state.score == 0
    assert clock.now >= 100.5
    assert "Score: 0 | Level: 1 | Controls: Left=a Right=d" in backend.text


def test_run_game_until_crash(settings):
    clock = FakeClock()
    backend = FakeBackend(clock)
    decoder = InputDecoder(backend, clock=clock, sleep=clock.sleep)

    class SpawnAbovePlayer(NeverSpawn):
        def random(self):
            return 0.0

        def randint(self, a, b):
            return 11  # start column

    state = run_game(backend, decoder, settings, rng=SpawnAbovePlayer(), clock=clock, sleep=clock.sleep)

    assert state.obstacle_at(state.player_x, state.screen_height) is not None
    # First obstacle needs screen_height - 1 ticks to fall, nothing passed yet
    assert state.score == 0
