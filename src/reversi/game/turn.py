"""
Turn handling: who moves next after a completed move, and the final result.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board, BLACK, WHITE, PLAYER_NAMES, opponent
from .moves import has_legal_move

logger = logging.getLogger(__name__)


class Transition(Enum):
    """Outcome of advancing the turn after a move."""
    NEXT = 'next'            # opponent moves
    PASS = 'pass'            # opponent is skipped, mover moves again
    GAME_OVER = 'game_over'  # neither side can move


def classify(board: Board, mover: int) -> Transition:
    """Decide which transition applies after ``mover`` has played onto ``board``."""
    if has_legal_move(board, opponent(mover)):
        return Transition.NEXT
    if has_legal_move(board, mover):
        return Transition.PASS
    return Transition.GAME_OVER


class TurnController:
    """
    State machine with states AwaitingMove(player) and GameOver.

    Starts in AwaitingMove(Black).
    """

    def __init__(self):
        self.player_to_move: Optional[int] = BLACK
        self.is_terminal = False

    def reset(self) -> None:
        self.player_to_move = BLACK
        self.is_terminal = False

    def advance(self, board: Board, mover: int) -> Transition:
        """
        Advance the state after ``mover`` completed a move.

        Args:
            board: Board after the move
            mover: Player who just moved

        Returns:
            The transition that was taken
        """
        transition = classify(board, mover)
        if transition is Transition.NEXT:
            self.player_to_move = opponent(mover)
        elif transition is Transition.PASS:
            self.player_to_move = mover
            logger.info("%s has no legal move and passes", PLAYER_NAMES[opponent(mover)])
        else:
            self.player_to_move = None
            self.is_terminal = True
            logger.info("No legal moves for either side, game over")
        return transition

    def settle(self, board: Board) -> Optional[Transition]:
        """
        Make sure the player to move can move on ``board``.

        Needed when play starts from an arbitrary position. Returns None if
        the player to move has a legal move, otherwise PASS (the other side
        takes over) or GAME_OVER.
        """
        player = self.player_to_move
        if player is None or has_legal_move(board, player):
            return None
        # Same as if the other side had just moved onto this board
        return self.advance(board, opponent(player))


@dataclass(frozen=True)
class GameResult:
    """Final stone counts and winner (None for a draw)."""
    black_count: int
    white_count: int
    winner: Optional[int]

    @classmethod
    def from_board(cls, board: Board) -> 'GameResult':
        black, white = board.get_score()
        if black > white:
            winner = BLACK
        elif white > black:
            winner = WHITE
        else:
            winner = None
        return cls(black, white, winner)

    @property
    def outcome(self) -> str:
        if self.winner is None:
            return "Draw"
        return f"{PLAYER_NAMES[self.winner]} wins"

    def __str__(self) -> str:
        return f"Black: {self.black_count} - White: {self.white_count}, {self.outcome}"
