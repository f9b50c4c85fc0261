import logging
import os

logger = logging.getLogger('system')


def load_high_score(filename: str) -> int:
    """
    Read the stored high score.

    Args:
        filename: Path to the plain-text score file

    Returns:
        The stored score, or 0 if the file is missing or unreadable
    """
    try:
        with open(filename, 'r') as f:
            return int(f.read().strip())
    except FileNotFoundError:
        logger.info(f"No high score file at {filename}, starting from 0")
        return 0
    except (OSError, ValueError) as e:
        logger.warning(f"Error loading high score from {filename}: {e}")
        return 0


def save_high_score(filename: str, score: int, stored: int) -> bool:
    """
    Write `score` if it beats the stored value.

    Args:
        filename: Path to the plain-text score file
        score: Score of the game that just ended
        stored: High score currently on record

    Returns:
        True if the file was written, False if the score did not beat the
        record or the write failed
    """
    if score <= stored:
        return False
    try:
        directory = os.path.dirname(os.path.abspath(filename))
        os.makedirs(directory, exist_ok=True)
        with open(filename, 'w') as f:
            f.write(str(score))
        logger.info(f"New high score {score} saved to {filename}")
        return True
    except OSError as e:
        logger.warning(f"Error saving high score to {filename}: {e}")
        return False
