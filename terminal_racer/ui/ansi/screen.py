"""
ANSI control sequences used for drawing.
"""

CLEAR_SCREEN = "\033[2J\033[1;1H"


def goto(y: int, x: int) -> str:
    """Cursor addressing, 1-based row and column"""
    return f"\033[{y};{x}H"


def clear(backend) -> None:
    backend.write(CLEAR_SCREEN)
    backend.flush()
