import logging
import random
import time
from typing import Callable, List, Optional

from terminal_racer.controller.phases import Phase
from terminal_racer.core.clock import FrameClock
from terminal_racer.core.events import Event, ObstaclePassed
from terminal_racer.core.state.race_state import RaceState
from terminal_racer.core.state.settings import GameSettings
from terminal_racer.core.systems.step_round import check_collision, step
from terminal_racer.keyboard.decoder import InputDecoder
from terminal_racer.keyboard.keys import KeyToken
from terminal_racer.ui.ansi import draw_track, screen

# Get the appropriate loggers
system_logger = logging.getLogger('system')
graphics_logger = logging.getLogger('graphics')

IDLE_SLEEP = 0.001  # per-iteration yield so the loop does not spin a core
STATS_PERIOD = 1.0


class GameController:
    """
    Runs one game: input, simulation ticks, collision and drawing.
    """
    def __init__(self, backend, decoder: InputDecoder, settings: GameSettings,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic,
                 render_fn=draw_track.render):
        self.backend = backend
        self.decoder = decoder
        self.settings = settings
        self.rng = rng or random.Random()
        self.clock = clock
        self.render_fn = render_fn

        self.state = RaceState(level=settings.level)
        self.frame_clock = FrameClock.for_level(settings.level, clock())
        self.phase = Phase.RUNNING
        self.last_events: List[Event] = []
        self.ticked = False

        system_logger.info(
            f"Game started at level {settings.level}, tick interval "
            f"{self.frame_clock.interval * 1000:.0f}ms, controls {settings.bindings.describe()}"
        )

    @property
    def running(self) -> bool:
        return self.phase == Phase.RUNNING

    def handle_input(self) -> Optional[KeyToken]:
        """Poll one key and apply it through the current bindings."""
        token = self.decoder.poll_key()
        if token.is_none:
            return None

        bindings = self.settings.bindings
        if token == bindings.left:
            self.state.move_player(-1)
        elif token == bindings.right:
            self.state.move_player(1)
        elif token in bindings.quit:
            self.phase = Phase.GAME_OVER
            system_logger.info("Quit requested")
        return token

    def step_game(self, now: float) -> bool:
        """
        Advance the simulation if the frame clock allows it.

        Returns:
            True if a tick happened
        """
        if not self.frame_clock.should_advance(now):
            return False
        self.last_events = step(self.state, self.rng)
        self.frame_clock.mark_advanced(now)
        for event in self.last_events:
            if isinstance(event, ObstaclePassed):
                system_logger.debug(f"Obstacle passed, score {self.state.score}")
        return True

    def check_collision(self) -> bool:
        collision = check_collision(self.state)
        if collision is None:
            return False
        self.phase = Phase.GAME_OVER
        system_logger.info(f"Collision at ({collision.x}, {collision.y}), final score {self.state.score}")
        return True

    def render(self) -> None:
        self.render_fn(self.backend, self.state, self.settings.bindings)

    def iterate(self) -> bool:
        """
        One pass of poll, tick, collision check and draw.

        Returns:
            True while the game is still running
        """
        self.ticked = False
        self.handle_input()
        if not self.running:
            return False

        self.ticked = self.step_game(self.clock())
        self.check_collision()
        self.render()
        return self.running


def run_game(backend, decoder: InputDecoder, settings: GameSettings,
             rng: Optional[random.Random] = None,
             clock: Callable[[], float] = time.monotonic,
             sleep: Callable[[float], None] = time.sleep) -> RaceState:
    """
    Main game loop. Returns the final race state once the game is over.
    """
    screen.clear(backend)
    controller = GameController(backend, decoder, settings, rng=rng, clock=clock)

    # Performance tracking
    frame_count = 0
    tick_count = 0
    fps_timer = clock()
    iteration_time_total = 0.0

    while controller.running:
        iteration_start = clock()
        controller.iterate()

        frame_count += 1
        iteration_time_total += clock() - iteration_start
        if controller.ticked:
            tick_count += 1

        current_time = clock()
        if current_time - fps_timer >= STATS_PERIOD:
            elapsed = current_time - fps_timer
            graphics_logger.debug(
                f"Performance: FPS={frame_count / elapsed:.1f}, "
                f"Iteration={iteration_time_total / max(1, frame_count) * 1000:.2f}ms, "
                f"Ticks={tick_count}"
            )
            frame_count = 0
            tick_count = 0
            iteration_time_total = 0.0
            fps_timer = current_time

        sleep(IDLE_SLEEP)

    return controller.state
