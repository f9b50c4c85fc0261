"""
Text menus shown between games: main menu, level select, control
customization and the game over screen.

Choices are typed as a line and confirmed with ENTER, so line prompts run with
the terminal session suspended (cooked mode). Capturing a new control key is
the exception: it happens in raw mode through the key decoder so that arrows
and any other sequence can be bound.
"""
import logging
from enum import IntEnum
from typing import Callable, Optional

from terminal_racer.core.clock import MAX_LEVEL, MIN_LEVEL
from terminal_racer.core.entities import SCREEN_HEIGHT
from terminal_racer.core.state.race_state import RaceState
from terminal_racer.core.state.settings import GameSettings
from terminal_racer.keyboard.decoder import InputDecoder
from terminal_racer.terminal.session import TerminalSession
from terminal_racer.ui.ansi.screen import CLEAR_SCREEN, goto

logger = logging.getLogger('cli')


class MenuChoice(IntEnum):
    NEW_GAME = 1
    SELECT_LEVEL = 2
    CONTROLS = 3
    HIGH_SCORE = 4
    EXIT = 5


class Menus:
    """
    Menu screens over a terminal backend.

    `read_line` returns one line of user input (without the newline), or
    raises EOFError when input is closed.
    """

    def __init__(self, session: TerminalSession, decoder: InputDecoder,
                 settings: GameSettings, read_line: Callable[[], str] = input):
        self.session = session
        self.backend = session.backend
        self.decoder = decoder
        self.settings = settings
        self.read_line = read_line

    def _write(self, text: str) -> None:
        self.backend.write(text)
        self.backend.flush()

    def _prompt(self, text: str) -> Optional[str]:
        """Show text, then read a line in cooked mode. None means input is closed."""
        self._write(text)
        with self.session.suspended():
            try:
                return self.read_line()
            except EOFError:
                logger.info("Input closed while waiting at a prompt")
                return None

    def _pause(self, row: int, text: str) -> None:
        self._prompt(goto(row, 1) + text)

    def show_main_menu(self) -> MenuChoice:
        """Loop on the main menu until the player starts a game or exits."""
        bindings = self.settings.bindings
        while True:
            self._write(
                CLEAR_SCREEN
                + goto(2, 1) + "--- TERMINAL RACER MENU ---"
                + goto(4, 1) + f"1. New Game (Level: {self.settings.level})"
                + goto(5, 1) + f"2. Select Level ({MIN_LEVEL}-{MAX_LEVEL})"
                + goto(6, 1) + f"3. Controls (Left: '{bindings.left.describe()}', "
                               f"Right: '{bindings.right.describe()}')"
                + goto(7, 1) + f"4. Highest Score: {self.settings.high_score}"
                + goto(8, 1) + "5. Exit"
            )
            line = self._prompt(goto(10, 1) + "Enter choice (1-5) and press ENTER: ")
            if line is None:
                return MenuChoice.EXIT

            choice = parse_choice(line)
            logger.debug(f"Menu input {line!r} parsed as {choice}")
            if choice in (MenuChoice.NEW_GAME, MenuChoice.EXIT):
                return choice
            if choice == MenuChoice.SELECT_LEVEL:
                self.select_level()
            elif choice == MenuChoice.CONTROLS:
                self.configure_controls()
            elif choice == MenuChoice.HIGH_SCORE:
                self._pause(12, "Highest score displayed. Press ENTER to return to menu.")
            else:
                self._pause(12, "Invalid choice. Press ENTER to continue...")

    def select_level(self) -> int:
        mid = SCREEN_HEIGHT // 2
        self._write(
            CLEAR_SCREEN
            + goto(mid - 2, 1) + "--- SELECT DIFFICULTY ---"
            + goto(mid, 1) + f"Levels: {MIN_LEVEL} (Easy) to {MAX_LEVEL} (Hardest). "
                             f"Current: {self.settings.level}"
        )
        line = self._prompt(goto(mid + 1, 1) + f"Enter new level ({MIN_LEVEL}-{MAX_LEVEL}) and press ENTER: ")
        try:
            requested = int(line.strip()) if line is not None else None
        except ValueError:
            requested = None

        if requested is None or not self.settings.set_level(requested):
            logger.warning(f"Ignoring invalid level input: {line!r}")
        else:
            logger.info(f"Level set to {self.settings.level}")
        self._prompt(f"Level set to {self.settings.level}. Press ENTER to return to menu.")
        return self.settings.level

    def configure_controls(self) -> None:
        bindings = self.settings.bindings
        self._write(
            CLEAR_SCREEN + goto(2, 1) + "--- CONTROL CUSTOMIZATION ---\n\n"
            + f"Current Left Key : {bindings.left.describe()}\n"
            + f"Current Right Key: {bindings.right.describe()}\n\n"
            + "Press any key now to set NEW Left control (arrow keys work)."
        )
        try:
            left = self.decoder.wait_for_key()
            self._write(
                f"\n\nLeft key assigned to: {left.describe()}"
                + "\nNow press any key to set NEW Right control (arrow keys work)."
            )
            right = self.decoder.wait_for_key()
        except EOFError:
            logger.info("Input closed during key capture, controls unchanged")
            return
        bindings.left, bindings.right = left, right
        logger.info(f"Controls updated: {bindings.describe()}")

        self._write(
            f"\n\nRight key assigned to: {bindings.right.describe()}\n\n"
            + f"Controls Updated! Left: '{bindings.left.describe()}'  "
              f"Right: '{bindings.right.describe()}'\n\n"
        )
        self._prompt("Press ENTER to return to the menu...")

    def show_game_over(self, state: RaceState) -> None:
        self._prompt(
            "\n\n  *** GAME OVER ***\n"
            + f"  Final Score: {state.score}\n"
            + f"  Highest Score: {self.settings.high_score}\n\n"
            + "Press ENTER to return to the main menu..."
        )


def parse_choice(line: str) -> Optional[MenuChoice]:
    """Map a typed menu line to a choice; None when it is not one."""
    try:
        return MenuChoice(int(line.strip()))
    except ValueError:
        return None
