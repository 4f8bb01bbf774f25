"""
Reversi game module.
This package contains the rules engine.
"""

from .board import Board, EMPTY, BLACK, WHITE, opponent
from .errors import ReversiError, OutOfRange, IllegalMove, NotYourTurn, InvariantViolation
from .moves import Move, capture_set, legal_moves, has_legal_move, apply_move
from .turn import Transition, TurnController, GameResult

__all__ = [
    'Board', 'EMPTY', 'BLACK', 'WHITE', 'opponent',
    'ReversiError', 'OutOfRange', 'IllegalMove', 'NotYourTurn', 'InvariantViolation',
    'Move', 'capture_set', 'legal_moves', 'has_legal_move', 'apply_move',
    'Transition', 'TurnController', 'GameResult',
]
