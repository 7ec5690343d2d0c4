"""
connect4_engine.game - Board state and turn management for Connect Four

This package contains the board representation, the game controller
state machine and the Gymnasium environment built on top of them.
"""

from connect4_engine.game.board import BoardState
from connect4_engine.game.rules import GameController, MoveResult, new_game
from connect4_engine.game.env import ConnectFourEnv

__all__ = ['BoardState', 'GameController', 'MoveResult', 'new_game', 'ConnectFourEnv']
