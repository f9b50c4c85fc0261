import logging


def setup_logs(filename: str = 'game.log', level: str = 'INFO') -> None:
    """
    Send all logging to a file. The terminal itself is the game display, so
    nothing may be logged to stdout or stderr while a game is running.

    Modules log through the category loggers 'system', 'terminal', 'input',
    'graphics' and 'cli', which all propagate to this root handler.
    """
    logging.basicConfig(
        filename=filename,
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        filemode='w'
    )
