import argparse
from typing import List, Optional, Tuple

from terminal_racer.core.clock import MAX_LEVEL, MIN_LEVEL
from terminal_racer.core.state.settings import DEFAULT_HIGHSCORE_FILE, ControlBindings, GameSettings
from terminal_racer.keyboard.keys import KeyToken, parse_key_name

DEFAULT_LOG_FILE = "game.log"


def _key_arg(text: str) -> KeyToken:
    try:
        return parse_key_name(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_args(argv: Optional[List[str]] = None) -> Tuple[argparse.Namespace, GameSettings]:
    """
    Parse command line arguments for game configuration.

    Returns:
        args: Parsed arguments
        settings: Initial game settings built from them
    """
    parser = argparse.ArgumentParser(description='Terminal Racer - dodge the obstacles on a terminal track')

    parser.add_argument('--level', type=int, default=MIN_LEVEL,
                        choices=range(MIN_LEVEL, MAX_LEVEL + 1),
                        help=f'Difficulty level {MIN_LEVEL}-{MAX_LEVEL} (default: {MIN_LEVEL})')
    parser.add_argument('--left', type=_key_arg, default=KeyToken.char('a'),
                        help="Key that steers left: an ASCII character or up/down/left/right/space (default: a)")
    parser.add_argument('--right', type=_key_arg, default=KeyToken.char('d'),
                        help="Key that steers right (default: d)")
    parser.add_argument('--highscore-file', type=str, default=DEFAULT_HIGHSCORE_FILE,
                        help=f'Where the high score is kept (default: {DEFAULT_HIGHSCORE_FILE})')
    parser.add_argument('--log-file', type=str, default=DEFAULT_LOG_FILE,
                        help=f'Log file (default: {DEFAULT_LOG_FILE})')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Log level (default: INFO)')

    args = parser.parse_args(argv)

    settings = GameSettings(
        level=args.level,
        bindings=ControlBindings(left=args.left, right=args.right),
        highscore_file=args.highscore_file,
    )
    return args, settings
