"""
CPU opponent for Reversi.
"""
from .policy import (
    Difficulty,
    POSITION_WEIGHTS,
    Policy,
    RandomPolicy,
    GreedyPolicy,
    PositionalPolicy,
    get_policy,
    select_move,
)

__all__ = [
    'Difficulty', 'POSITION_WEIGHTS', 'Policy', 'RandomPolicy',
    'GreedyPolicy', 'PositionalPolicy', 'get_policy', 'select_move',
]
