"""
utils.py - Constants, enumerations and helpers for the Connect Four engine

This module holds the board defaults, the player/outcome/direction enums
and small grid helpers shared by the board and the game controller.
"""

from enum import Enum, auto
from typing import Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

Coord = Tuple[int, int]  # (row, col)


class Player(Enum):
    """Seat tokens stored in the grid, plus the empty marker."""
    EMPTY = 0
    ONE = 1    # Moves first
    TWO = 2

    def other(self) -> 'Player':
        """Get the opposing seat."""
        if self is Player.ONE:
            return Player.TWO
        if self is Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self is Player.EMPTY:
            return "."
        elif self is Player.ONE:
            return "X"
        else:
            return "O"


class Outcome(Enum):
    """Result of a single move."""
    CONTINUE = auto()
    WIN = auto()
    TIE = auto()

    def is_terminal(self) -> bool:
        return self is not Outcome.CONTINUE


class Direction(Enum):
    """Rays tested from every candidate start cell, in scan order."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# (d_row, d_col) per direction; rows grow downward
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def is_valid_position(row: int, col: int, rows: int = ROWS, cols: int = COLS) -> bool:
    """True if (row, col) lies on a rows x cols board."""
    return 0 <= row < rows and 0 <= col < cols


def ray_cells(row: int, col: int, direction: Direction, length: int = CONNECT_N) -> Tuple[Coord, ...]:
    """
    Coordinates of a ray of ``length`` cells starting at (row, col).

    Cells may fall outside the board; callers check bounds.
    """
    dr, dc = DIRECTION_VECTORS[direction]
    return tuple((row + k * dr, col + k * dc) for k in range(length))


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Plain text dump of a grid of Player values, top row first.

    Args:
        grid: 2D array of Player values

    Returns:
        Multi-line string with column numbers underneath
    """
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"

    lines = [border]
    for row in range(rows):
        cells = (str(Player(int(grid[row, col]))) for col in range(cols))
        lines.append("|" + " ".join(cells) + "|")
    lines.append(border)
    lines.append("|" + " ".join(str(col % 10) for col in range(cols)) + "|")

    return "\n".join(lines)
