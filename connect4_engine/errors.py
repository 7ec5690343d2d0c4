"""
errors.py - Exceptions raised by the Connect Four rules engine
"""


class ConnectFourError(Exception):
    """Base class for every error raised by the engine."""


class InvalidColumn(ConnectFourError, ValueError):
    """The requested column lies outside the board."""

    def __init__(self, column, width: int):
        self.column = column
        self.width = width
        super().__init__(f"Column {column!r} out of range [0, {width})")


class ColumnFull(ConnectFourError, ValueError):
    """The requested column has no empty cell left."""

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} is full")


class GameAlreadyOver(ConnectFourError):
    """A move was requested after the game reached a win or a tie."""

    def __init__(self, message: str = "Game is already over"):
        super().__init__(message)


class InvalidPlacement(ConnectFourError):
    """
    A cell write that breaks the gravity invariant.

    Only reachable by misusing BoardState directly; the controller never
    triggers it through its public contract.
    """
