"""Board engine for the 4x4 sliding-tile merge puzzle.

Every directional move is computed the same way: the grid is rotated so the
move becomes "slide right", a single canonical reduction runs on each row,
and the result is rotated back.
"""
import logging
import random
from enum import Enum

import numpy as np

logger = logging.getLogger(__name__)

BOARD_SIZE = 4
QUARTER_TURNS = 4
CHANCE_FOR_TWO = 0.9


class Direction(Enum):
    LEFT = 'left'
    RIGHT = 'right'
    UP = 'up'
    DOWN = 'down'

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None

    @property
    def rotations(self):
        """Clockwise quarter turns that turn this move into a slide right."""
        return _ROTATIONS[self]


_ROTATIONS = {
    Direction.RIGHT: 0,
    Direction.UP: 1,
    Direction.LEFT: 2,
    Direction.DOWN: 3,
}


class MoveOutcome(Enum):
    ACCEPTED = 'accepted'
    REJECTED_NO_OP = 'rejected_no_op'
    TERMINAL_LOSS = 'terminal_loss'


def get_empty_board():
    return np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=int)


def get_empty_cells(board):
    rows, cols = np.where(np.asarray(board) == 0)
    return [(int(i), int(j)) for i, j in zip(rows, cols)]


def is_board_full(board):
    return not (np.asarray(board) == 0).any()


def add_random_tile(board, rng=None):
    """Return a copy of board with one new tile in a random empty cell.

    The cell is drawn uniformly and the value is 2 with probability 0.9,
    otherwise 4. A full board comes back unchanged.
    """
    rng = rng if rng is not None else random
    new_board = np.array(board, dtype=int)
    empty_cells = get_empty_cells(new_board)

    if not empty_cells:
        return new_board

    i, j = rng.choice(empty_cells)
    new_board[i, j] = 2 if rng.random() < CHANCE_FOR_TWO else 4
    return new_board


def rotate(board):
    """One clockwise quarter turn."""
    return np.rot90(np.asarray(board), -1).copy()


def rotate_times(board, n):
    rotated_board = np.array(board)
    for _ in range(n % QUARTER_TURNS):
        rotated_board = rotate(rotated_board)
    return rotated_board


def compact_row(row):
    row = np.asarray(row)
    values = row[row != 0]
    return np.concatenate([np.zeros(BOARD_SIZE - len(values), dtype=row.dtype), values])


def slide_and_combine(row):
    new_row = compact_row(row)
    score_gained = 0

    # Scan from the wall so the tile nearest to it merges first.
    i = BOARD_SIZE - 1
    while i > 0:
        if new_row[i] != 0 and new_row[i] == new_row[i - 1]:
            merged_value = new_row[i] * 2
            new_row[i] = merged_value
            new_row[i - 1] = 0
            score_gained += int(merged_value)
            # a merged tile cannot merge again this move
            i -= 2
        else:
            i -= 1

    return compact_row(new_row), score_gained


def slide_right(board):
    board = np.asarray(board)
    new_board = np.zeros_like(board)
    total_score_gained = 0

    for i, row in enumerate(board):
        new_row, score_gained = slide_and_combine(row)
        new_board[i] = new_row
        total_score_gained += score_gained

    return new_board, total_score_gained


def move_board(board, direction):
    """Compute the grid and score gain of a move without touching board."""
    rotations = Direction(direction).rotations
    rotated_board = rotate_times(board, rotations)
    new_board, total_score_gained = slide_right(rotated_board)
    return rotate_times(new_board, QUARTER_TURNS - rotations), total_score_gained


def move_is_valid(board, direction):
    new_board, _ = move_board(board, direction)
    return not np.array_equal(np.asarray(board), new_board)


def is_game_over(board):
    return not any(move_is_valid(board, direction) for direction in Direction)


def _is_tile_value(value):
    return value == 0 or (value >= 2 and value & (value - 1) == 0)


def _checked_cells(cells):
    grid = np.array(cells, dtype=int)
    if grid.shape != (BOARD_SIZE, BOARD_SIZE):
        raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}, got shape {grid.shape}")
    for value in grid.flat:
        if not _is_tile_value(int(value)):
            raise ValueError(f"Invalid tile value: {value}")
    return grid


class Board:
    """A 4x4 grid plus the running score.

    ``rng`` is the random source used for spawning; anything with the
    ``choice``/``random`` methods of :class:`random.Random` will do. Each
    board gets its own generator by default.
    """

    def __init__(self, cells=None, score=0, rng=None):
        if score < 0:
            raise ValueError(f"Score must be non-negative, got {score}")
        self._cells = get_empty_board() if cells is None else _checked_cells(cells)
        self._score = int(score)
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def initialize(cls, rng=None):
        board = cls(rng=rng)
        board._spawn()
        board._spawn()
        return board

    @property
    def cells(self):
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def score(self):
        return self._score

    def attempt(self, direction):
        direction = Direction(direction)
        new_cells, score_increase = move_board(self._cells, direction)

        if np.array_equal(new_cells, self._cells):
            logger.debug("Move %s rejected: board unchanged", direction.value)
            return MoveOutcome.REJECTED_NO_OP

        self._cells = new_cells
        self._score += score_increase
        self._spawn()

        if self.is_stuck():
            logger.debug("No moves left, final score %d", self._score)
            return MoveOutcome.TERMINAL_LOSS
        return MoveOutcome.ACCEPTED

    def is_stuck(self):
        return is_game_over(self._cells)

    def valid_moves(self):
        return [direction for direction in Direction if move_is_valid(self._cells, direction)]

    def empty_cells(self):
        return get_empty_cells(self._cells)

    def is_full(self):
        return is_board_full(self._cells)

    def max_tile(self):
        return int(self._cells.max())

    def _spawn(self):
        self._cells = add_random_tile(self._cells, self._rng)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._score == other._score and np.array_equal(self._cells, other._cells)

    __hash__ = None

    def __repr__(self):
        return f"Board(cells={self._cells.tolist()}, score={self._score})"

    def __str__(self):
        lines = [f"Score: {self._score}", "+------+------+------+------+"]
        for row in self._cells:
            cells = ["      " if value == 0 else f"{value:^6}" for value in row]
            lines.append("|" + "|".join(cells) + "|")
            lines.append("+------+------+------+------+")
        return "\n".join(lines)


def initialize(rng=None):
    return Board.initialize(rng)


def attempt(board, direction):
    return board.attempt(direction)


def cells(board):
    return board.cells


def score(board):
    return board.score


def is_stuck(board):
    return board.is_stuck()
