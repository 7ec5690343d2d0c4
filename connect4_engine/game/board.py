"""
board.py - Board state for Connect Four

This module implements BoardState, the sole owner of the grid. It answers
landing-row and win queries and exposes a single mutating operation,
``occupy``, which enforces the gravity invariant. It knows nothing about
turns or game termination.
"""

import numpy as np
from typing import List, Optional, Tuple

from connect4_engine.debug import debug, DebugLevel
from connect4_engine.errors import InvalidColumn, InvalidPlacement
from connect4_engine.utils import (ROWS, COLS, CONNECT_N, Coord, Direction, Player,
                                   is_valid_position, ray_cells, render_board_ascii)


class BoardState:
    """
    A height x width grid of Player values, row 0 at the top.

    Cells fill bottom-up: within a column, an occupied row implies that
    every row below it is occupied too.
    """

    def __init__(self, width: int = COLS, height: int = ROWS):
        """
        Create an empty board.

        Args:
            width: Number of columns (at least CONNECT_N)
            height: Number of rows (at least CONNECT_N)

        Raises:
            ValueError: If either dimension is too small to admit a win
        """
        if width < CONNECT_N or height < CONNECT_N:
            raise ValueError(
                f"Board must be at least {CONNECT_N}x{CONNECT_N}, got {width}x{height}")

        self.width = int(width)
        self.height = int(height)
        self._grid = np.full((self.height, self.width), Player.EMPTY.value, dtype=np.int8)
        debug.debug(f"Created empty {self.width}x{self.height} board", "board")

    def _check_column(self, column) -> int:
        if isinstance(column, bool):
            raise InvalidColumn(column, self.width)
        try:
            col = int(column)
        except (TypeError, ValueError, OverflowError):
            raise InvalidColumn(column, self.width) from None
        if col != column or not 0 <= col < self.width:
            raise InvalidColumn(column, self.width)
        return col

    def landing_row(self, column: int) -> Optional[int]:
        """
        Find where a piece dropped into ``column`` would settle.

        Returns:
            The lowest empty row index, or None if the column is full

        Raises:
            InvalidColumn: If column is outside [0, width)
        """
        col = self._check_column(column)
        for row in range(self.height - 1, -1, -1):
            if self._grid[row, col] == Player.EMPTY.value:
                return row
        return None

    def occupy(self, row: int, column: int, player: Player) -> None:
        """
        Mark (row, column) as owned by ``player``.

        Raises:
            InvalidColumn: If column is outside [0, width)
            InvalidPlacement: If player is not a seat, or the cell is not
                the column's current landing row
        """
        col = self._check_column(column)
        if player not in (Player.ONE, Player.TWO):
            raise InvalidPlacement(f"Cannot place {player!r} on the board")

        expected = self.landing_row(col)
        if expected is None or row != expected:
            raise InvalidPlacement(
                f"Cell ({row}, {col}) is not the landing cell of column {col} "
                f"(expected {expected})")

        self._grid[expected, col] = player.value
        if debug.level is DebugLevel.TRACE:
            debug.trace(f"{player!s} placed at ({expected}, {col})\n{self.render()}", "board")

    def is_full(self) -> bool:
        """True iff every cell is occupied."""
        return bool(np.all(self._grid != Player.EMPTY.value))

    def _ray_wins(self, cells: Tuple[Coord, ...], value: int) -> bool:
        return all(
            is_valid_position(r, c, self.height, self.width) and self._grid[r, c] == value
            for r, c in cells
        )

    def winning_line(self, player: Player) -> Tuple[Coord, ...]:
        """
        Find the first four-in-a-row owned by ``player``.

        Every cell is a candidate start, scanned in row-major order; from
        each, the rays are tried in Direction order.

        Returns:
            The four (row, col) cells of the line, or an empty tuple
        """
        if player is Player.EMPTY:
            return ()

        value = player.value
        for row in range(self.height):
            for col in range(self.width):
                if self._grid[row, col] != value:
                    continue
                for direction in Direction:
                    cells = ray_cells(row, col, direction)
                    if self._ray_wins(cells, value):
                        return cells
        return ()

    def has_win_from(self, player: Player) -> bool:
        """True iff ``player`` owns at least one four-in-a-row."""
        return bool(self.winning_line(player))

    def cell_at(self, row: int, column: int) -> Player:
        """
        Occupant of a cell.

        Raises:
            IndexError: If (row, column) is off the board
        """
        if not is_valid_position(row, column, self.height, self.width):
            raise IndexError(f"Cell ({row}, {column}) is off the {self.width}x{self.height} board")
        return Player(int(self._grid[row, column]))

    def valid_moves(self) -> List[int]:
        """Columns that still accept a piece."""
        return [col for col in range(self.width) if self._grid[0, col] == Player.EMPTY.value]

    def get_state(self) -> np.ndarray:
        """
        Get a copy of the grid.

        Returns:
            2D int8 array of Player values
        """
        return self._grid.copy()

    def render(self) -> str:
        """
        Render the board as text, top row first.

        Returns:
            Multi-line string with column numbers underneath
        """
        return render_board_ascii(self._grid)

    def __str__(self) -> str:
        return self.render()
