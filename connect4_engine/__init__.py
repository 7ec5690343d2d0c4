"""
connect4_engine - Rules engine for Connect Four

This package provides the board state model, win detection and the
turn-based game controller for two-player Connect Four. Rendering and
input handling are left to the caller.
"""

from connect4_engine.errors import (ColumnFull, ConnectFourError, GameAlreadyOver,
                                    InvalidColumn, InvalidPlacement)
from connect4_engine.game import BoardState, GameController, MoveResult, new_game
from connect4_engine.utils import Outcome, Player

# Version number
__version__ = '0.1.0'

__all__ = [
    'BoardState', 'GameController', 'MoveResult', 'new_game',
    'Player', 'Outcome',
    'ConnectFourError', 'InvalidColumn', 'ColumnFull', 'GameAlreadyOver', 'InvalidPlacement',
]
