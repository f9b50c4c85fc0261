#!/usr/bin/env python3
import logging
import sys
from typing import Callable, List, Optional

from terminal_racer import logging_setup
from terminal_racer.cli.args import parse_args
from terminal_racer.cli.menus import MenuChoice, Menus
from terminal_racer.controller.mainloop import run_game
from terminal_racer.core.state.settings import GameSettings
from terminal_racer.keyboard.decoder import InputDecoder
from terminal_racer.persistence.highscore import load_high_score, save_high_score
from terminal_racer.terminal.backend import TerminalBackend, get_backend
from terminal_racer.terminal.session import TerminalSession

logger = logging.getLogger('system')


def play(session: TerminalSession, decoder: InputDecoder, settings: GameSettings,
         read_line: Callable[[], str] = input) -> None:
    """Menu, game, game over screen; repeat until the player picks Exit."""
    menus = Menus(session, decoder, settings, read_line=read_line)
    while True:
        choice = menus.show_main_menu()
        if choice == MenuChoice.EXIT:
            return

        state = run_game(session.backend, decoder, settings)
        if save_high_score(settings.highscore_file, state.score, settings.high_score):
            settings.high_score = state.score
        menus.show_game_over(state)


def main(argv: Optional[List[str]] = None, backend: Optional[TerminalBackend] = None,
         read_line: Callable[[], str] = input) -> int:
    """Main entry point for Terminal Racer."""
    args, settings = parse_args(argv)
    logging_setup.setup_logs(args.log_file, args.log_level)
    logger.debug("game started")

    settings.high_score = load_high_score(settings.highscore_file)

    try:
        session = TerminalSession(backend or get_backend())
        decoder = InputDecoder(session.backend)
        # Raw mode is released on every way out of this block
        with session.raw_mode():
            play(session, decoder, settings, read_line=read_line)
    except KeyboardInterrupt:
        print("Game terminated by user.")
        return 0
    except Exception as e:
        logger.exception("Unhandled error, terminal restored")
        print(f"\n\nAn unexpected error occurred: {e}", file=sys.stderr)
        return 1

    logger.debug("game ended")
    print("\n\nThanks for playing Terminal Racer!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
