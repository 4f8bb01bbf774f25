"""
CPU move selection policies.

Each difficulty level maps to one strategy class. All strategies are
one-ply: they score the legal moves on the current board and pick one,
without looking ahead.
"""
import random
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Type

import numpy as np

from ..game.board import Board
from ..game.errors import InvariantViolation
from ..game.moves import Move, capture_set

# Classic Othello positional weights, indexed [row][col]
POSITION_WEIGHTS = np.array([
    [100, -20, 10,  5,  5, 10, -20, 100],
    [-20, -50, -2, -2, -2, -2, -50, -20],
    [ 10,  -2,  0,  0,  0,  0,  -2,  10],
    [  5,  -2,  0,  0,  0,  0,  -2,   5],
    [  5,  -2,  0,  0,  0,  0,  -2,   5],
    [ 10,  -2,  0,  0,  0,  0,  -2,  10],
    [-20, -50, -2, -2, -2, -2, -50, -20],
    [100, -20, 10,  5,  5, 10, -20, 100],
], dtype=np.int32)
POSITION_WEIGHTS.setflags(write=False)


class Difficulty(IntEnum):
    """CPU difficulty levels."""
    RANDOM = 1
    GREEDY = 2
    POSITIONAL = 3


class Policy:
    """Base class for CPU strategies."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def select_move(self, board: Board, moves: Sequence[Move]) -> Move:
        """
        Pick one move from ``moves``.

        Args:
            board: Current board (not modified)
            moves: Legal moves in row-major order, must be non-empty

        Returns:
            One element of ``moves``
        """
        if not moves:
            raise InvariantViolation("CPU asked to choose from an empty move list")
        return self._choose(board, moves)

    def _choose(self, board: Board, moves: Sequence[Move]) -> Move:
        raise NotImplementedError


class ScoringPolicy(Policy):
    """Pick the strictly highest-scoring move; earlier moves win ties."""

    def score(self, board: Board, move: Move) -> int:
        raise NotImplementedError

    def _choose(self, board: Board, moves: Sequence[Move]) -> Move:
        best = moves[0]
        best_score = self.score(board, best)
        for move in moves[1:]:
            sc = self.score(board, move)
            if sc > best_score:
                best_score = sc
                best = move
        return best


class RandomPolicy(Policy):
    """Uniformly random legal move."""

    def _choose(self, board: Board, moves: Sequence[Move]) -> Move:
        return self.rng.choice(list(moves))


class GreedyPolicy(ScoringPolicy):
    """Maximise the number of flipped stones."""

    def score(self, board: Board, move: Move) -> int:
        return len(capture_set(board, move.col, move.row, move.player))


class PositionalPolicy(ScoringPolicy):
    """Positional weight plus twice the number of flipped stones."""

    def score(self, board: Board, move: Move) -> int:
        flips = len(capture_set(board, move.col, move.row, move.player))
        return int(POSITION_WEIGHTS[move.row, move.col]) + 2 * flips


POLICIES: Dict[Difficulty, Type[Policy]] = {
    Difficulty.RANDOM: RandomPolicy,
    Difficulty.GREEDY: GreedyPolicy,
    Difficulty.POSITIONAL: PositionalPolicy,
}


def to_difficulty(level) -> Difficulty:
    """Convert 1/2/3 (or a Difficulty) to a Difficulty, rejecting anything else."""
    try:
        value = int(level)
        # 2.9 must not quietly become 2
        if value != level:
            raise ValueError(level)
        return Difficulty(value)
    except (TypeError, ValueError):
        raise ValueError(f"Unknown difficulty level: {level!r}") from None


def get_policy(level, rng: Optional[random.Random] = None) -> Policy:
    """Instantiate the strategy for a difficulty level."""
    return POLICIES[to_difficulty(level)](rng)


def select_move(board: Board, moves: List[Move], level, rng: Optional[random.Random] = None) -> Move:
    """Choose a move for the CPU at the given difficulty level."""
    return get_policy(level, rng).select_move(board, moves)
