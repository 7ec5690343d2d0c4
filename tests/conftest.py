"""Shared fixtures and board builders for the engine tests."""

import pytest

from connect4_engine.debug import debug, DebugLevel
from connect4_engine.game.board import BoardState
from connect4_engine.utils import Player

SYMBOLS = {'X': Player.ONE, 'O': Player.TWO}

# Full 7x6 board without any four-in-a-row, top row first
DRAW_ROWS = [
    "XOXOXOX",
    "XOXOXOX",
    "OXOXOXO",
    "OXOXOXO",
    "XOXOXOX",
    "OXOXOXO",
]

# Column order reaching DRAW_ROWS with X moving first
DRAW_MOVES = (
    [1, 0, 0, 1, 1, 0, 1, 0, 0, 1, 0, 1]
    + [3, 2, 2, 3, 3, 2, 3, 2, 2, 3, 2, 3]
    + [5, 6, 6, 4, 4, 5, 5, 6, 5, 6, 6, 4, 6, 4, 4, 5, 4, 5]
)


def board_from_rows(rows):
    """
    Build a BoardState from strings of 'X', 'O' and '.', top row first.

    Each column is filled bottom-up, so a floating piece makes occupy raise.
    """
    board = BoardState(width=len(rows[0]), height=len(rows))
    for col in range(board.width):
        for row in range(board.height - 1, -1, -1):
            symbol = rows[row][col]
            if symbol == '.':
                continue
            board.occupy(row, col, SYMBOLS[symbol])
    return board


def rotate_rows(rows):
    """Rotate a row-string board by 180 degrees."""
    return [row[::-1] for row in reversed(rows)]


@pytest.fixture(autouse=True)
def quiet_debug():
    """Keep engine logging at WARNING during tests, restoring afterwards."""
    previous = debug.level
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=previous, enabled=True, components=[])
