"""
rules.py - Turn management for Connect Four

This module provides GameController, the turn-based state machine that
applies moves to a BoardState and reports win/tie outcomes, and the
new_game constructor used by callers.
"""

from dataclasses import dataclass
from typing import Hashable, List, Optional, Tuple

from connect4_engine.debug import debug
from connect4_engine.errors import ColumnFull, GameAlreadyOver, InvalidColumn
from connect4_engine.game.board import BoardState
from connect4_engine.utils import ROWS, COLS, Coord, Outcome, Player


@dataclass(frozen=True)
class MoveResult:
    """What a successful drop changed and where the game now stands."""
    row: int
    column: int
    player: Hashable
    outcome: Outcome
    winning_line: Tuple[Coord, ...] = ()

    @property
    def winner(self) -> Optional[Hashable]:
        return self.player if self.outcome is Outcome.WIN else None


class GameController:
    """
    Runs one game of Connect Four on its own BoardState.

    Seat ONE moves first. The controller enters a terminal state (a win
    or a tie) at most once; afterwards every move raises GameAlreadyOver.
    Build a new controller to play again.
    """

    def __init__(self, width: int = COLS, height: int = ROWS,
                 player1_id: Hashable = Player.ONE, player2_id: Hashable = Player.TWO):
        """
        Initialize a new game.

        Args:
            width: Number of columns
            height: Number of rows
            player1_id: Caller's identity for the player moving first
            player2_id: Caller's identity for the other player

        Raises:
            ValueError: If the identities are equal or the board is too small
        """
        if player1_id == player2_id:
            raise ValueError(f"Player identities must differ, got {player1_id!r} twice")

        self._board = BoardState(width, height)
        self._ids = {Player.ONE: player1_id, Player.TWO: player2_id}
        self._current = Player.ONE
        self._outcome = Outcome.CONTINUE
        self._winner: Optional[Player] = None
        self.moves_made = 0
        self.last_move: Optional[Coord] = None
        debug.debug(f"New game {player1_id!r} vs {player2_id!r} "
                    f"on {width}x{height}", "game")

    @property
    def board(self) -> BoardState:
        return self._board

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    @property
    def outcome(self) -> Outcome:
        """CONTINUE while in progress, else WIN or TIE."""
        return self._outcome

    @property
    def current_seat(self) -> Player:
        return self._current

    def player_id(self, seat: Player) -> Hashable:
        """
        Caller identity attached to a seat.

        Args:
            seat: Player.ONE or Player.TWO

        Returns:
            The identity passed to the constructor for that seat
        """
        return self._ids[seat]

    def drop_piece(self, column: int) -> MoveResult:
        """
        Drop the current player's piece into ``column``.

        Nothing is mutated unless the move is accepted.

        Args:
            column: Column to play (0-indexed)

        Returns:
            The occupied cell, the mover and the resulting outcome

        Raises:
            GameAlreadyOver: If the game already ended
            InvalidColumn: If column is outside [0, width)
            ColumnFull: If the column has no empty cell
        """
        mover = self._ids[self._current]

        if self.is_over():
            debug.debug(f"Rejected move by {mover!r}: game is over", "game")
            raise GameAlreadyOver()

        try:
            row = self._board.landing_row(column)
        except InvalidColumn as e:
            debug.debug(f"Rejected move by {mover!r}: {e}", "game")
            raise
        if row is None:
            debug.debug(f"Rejected move by {mover!r}: column {column} is full", "game")
            raise ColumnFull(column)

        column = int(column)
        self._board.occupy(row, column, self._current)
        self.moves_made += 1
        self.last_move = (row, column)
        debug.debug(f"{mover!r} dropped into column {column}, landed on row {row}", "game")

        debug.start_timer("win_check")
        line = self._board.winning_line(self._current)
        debug.end_timer("win_check", "game")

        if line:
            self._outcome = Outcome.WIN
            self._winner = self._current
            debug.info(f"{mover!r} wins after {self.moves_made} moves with {list(line)}", "game")
            return MoveResult(row, column, mover, Outcome.WIN, line)

        if self._board.is_full():
            self._outcome = Outcome.TIE
            debug.info(f"Game tied after {self.moves_made} moves", "game")
            return MoveResult(row, column, mover, Outcome.TIE)

        self._current = self._current.other()
        return MoveResult(row, column, mover, Outcome.CONTINUE)

    def cell_at(self, row: int, column: int) -> Optional[Hashable]:
        """Identity of the player occupying a cell, or None if it is empty."""
        seat = self._board.cell_at(row, column)
        if seat is Player.EMPTY:
            return None
        return self._ids[seat]

    def current_player(self) -> Hashable:
        """Identity of the player to move (the winner, once the game is won)."""
        return self._ids[self._current]

    def is_over(self) -> bool:
        """True once the game was won or tied."""
        return self._outcome.is_terminal()

    def winner(self) -> Optional[Hashable]:
        """
        Get the winner of the game.

        Returns:
            The winning identity, or None while in progress or after a tie
        """
        if self._winner is None:
            return None
        return self._ids[self._winner]

    def valid_moves(self) -> List[int]:
        """Playable columns; empty once the game is over."""
        if self.is_over():
            return []
        return self._board.valid_moves()

    def winning_line(self) -> Tuple[Coord, ...]:
        """
        Cells of the line that decided the game.

        Returns:
            Four (row, col) cells, or an empty tuple if nobody has won
        """
        if self._winner is None:
            return ()
        return self._board.winning_line(self._winner)


def new_game(width: int = COLS, height: int = ROWS,
             player1_id: Hashable = Player.ONE,
             player2_id: Hashable = Player.TWO) -> GameController:
    """Start a fresh game; see GameController for the arguments."""
    return GameController(width, height, player1_id, player2_id)
