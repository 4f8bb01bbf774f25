"""
Exceptions raised by the Reversi engine and game session.
"""


class ReversiError(Exception):
    """Base class for all engine errors."""


class OutOfRange(ReversiError, IndexError):
    """A coordinate lies outside the 8x8 grid."""

    def __init__(self, col: int, row: int):
        super().__init__(f"Coordinate ({col}, {row}) is outside the board")
        self.col = col
        self.row = row


class IllegalMove(ReversiError, ValueError):
    """The target cell is occupied or the move captures nothing."""


class NotYourTurn(ReversiError):
    """A human move was proposed while the human side is not to move."""


class InvariantViolation(ReversiError, RuntimeError):
    """A programming contract was broken (e.g. choosing from no moves)."""
