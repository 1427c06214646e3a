"""Maps keyboard and touch input onto engine moves."""
import logging

from .game import Direction, initialize

logger = logging.getLogger(__name__)

TOUCH_MOVE_THRESHOLD = 30

KEY_CODES = {
    37: Direction.LEFT,
    38: Direction.UP,
    39: Direction.RIGHT,
    40: Direction.DOWN,
}

KEY_NAMES = {
    'ArrowLeft': Direction.LEFT,
    'ArrowUp': Direction.UP,
    'ArrowRight': Direction.RIGHT,
    'ArrowDown': Direction.DOWN,
}


def direction_for_key(key):
    """Accepts a legacy ``keyCode`` or a DOM ``key`` name."""
    if isinstance(key, str):
        return KEY_NAMES.get(key)
    return KEY_CODES.get(key)


def direction_for_swipe(dx, dy, threshold=TOUCH_MOVE_THRESHOLD):
    """Direction of a swipe in screen coordinates (y grows downwards).

    Swipes shorter than ``threshold`` on both axes are ignored.
    """
    if abs(dx) < threshold and abs(dy) < threshold:
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class GameSession:
    """Holds the board a single player is on."""

    def __init__(self, rng=None):
        self._rng = rng
        self.board = initialize(rng)

    @property
    def lost(self):
        return self.board.is_stuck()

    def new_game(self):
        logger.debug("New game, previous score %d", self.board.score)
        self.board = initialize(self._rng)
        return self.board

    def play(self, direction):
        return self.board.attempt(direction)

    def handle_key(self, key):
        direction = direction_for_key(key)
        if direction is None:
            return None
        return self.play(direction)

    def handle_swipe(self, dx, dy):
        direction = direction_for_swipe(dx, dy)
        if direction is None:
            return None
        return self.play(direction)
