from .game import (
    Board,
    Direction,
    MoveOutcome,
    attempt,
    cells,
    initialize,
    is_stuck,
    score,
)

__all__ = [
    "Board",
    "Direction",
    "MoveOutcome",
    "attempt",
    "cells",
    "initialize",
    "is_stuck",
    "score",
]
