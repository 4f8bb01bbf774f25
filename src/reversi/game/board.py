"""
Board module for Reversi.
Holds the 8x8 grid of cell states and read-only accessors.
"""
from typing import List, Sequence, Tuple
import numpy as np

from .errors import OutOfRange

# Cell states
EMPTY = 0
BLACK = 1
WHITE = 2

PLAYER_NAMES = {BLACK: 'Black', WHITE: 'White'}


def opponent(player: int) -> int:
    """Return the other player."""
    if player not in (BLACK, WHITE):
        raise ValueError(f"Invalid player: {player!r}")
    return 3 - player


def in_bounds(col: int, row: int) -> bool:
    """Check whether (col, row) lies on the board."""
    return 0 <= col < Board.SIZE and 0 <= row < Board.SIZE


class Board:
    """
    Represents the Reversi game board.

    The grid is a numpy array indexed ``[row, col]``; every public accessor
    takes ``(col, row)`` to match the addressing used by callers.
    Only the move applicator writes to the board after construction.
    """

    # Board dimensions
    SIZE = 8

    # Player constants
    EMPTY = EMPTY
    BLACK = BLACK
    WHITE = WHITE

    def __init__(self):
        """Create a board in the standard starting layout."""
        self._grid = np.zeros((self.SIZE, self.SIZE), dtype=np.int8)
        mid = self.SIZE // 2
        self._grid[mid - 1, mid - 1] = WHITE
        self._grid[mid - 1, mid] = BLACK
        self._grid[mid, mid - 1] = BLACK
        self._grid[mid, mid] = WHITE

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'Board':
        """
        Build a board from text rows, top row first.

        Each row is 8 characters of ``.`` (empty), ``B`` (black) or ``W`` (white).
        """
        symbols = {'.': EMPTY, 'B': BLACK, 'W': WHITE}
        if len(rows) != cls.SIZE or any(len(r) != cls.SIZE for r in rows):
            raise ValueError("Board must be 8x8")
        board = cls()
        for row, text in enumerate(rows):
            for col, ch in enumerate(text):
                if ch not in symbols:
                    raise ValueError(f"Invalid cell: {ch!r}")
                board._grid[row, col] = symbols[ch]
        return board

    def copy(self) -> 'Board':
        """Create a deep copy of the board."""
        new_board = Board()
        new_board._grid = self._grid.copy()
        return new_board

    def get(self, col: int, row: int) -> int:
        """Return the state of the cell at (col, row)."""
        if not in_bounds(col, row):
            raise OutOfRange(col, row)
        return int(self._grid[row, col])

    def _set(self, col: int, row: int, value: int) -> None:
        # Reserved for the move applicator.
        self._grid[row, col] = value

    def count(self, player: int) -> int:
        """Number of stones owned by ``player``."""
        return int(np.count_nonzero(self._grid == player))

    def get_score(self) -> Tuple[int, int]:
        """
        Get the current stone counts.

        Returns:
            Tuple of (black_count, white_count)
        """
        return self.count(BLACK), self.count(WHITE)

    def empty_cells(self) -> List[Tuple[int, int]]:
        """Empty (col, row) cells in row-major order."""
        rows, cols = np.nonzero(self._grid == EMPTY)
        return [(int(c), int(r)) for r, c in zip(rows, cols)]

    def get_board_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array indexed [row, col]
        """
        return self._grid.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._grid, other._grid))

    def __str__(self) -> str:
        """Return a string representation of the board."""
        symbols = {EMPTY: '.', BLACK: 'B', WHITE: 'W'}
        rows = []
        for row in range(self.SIZE):
            rows.append(' '.join(symbols[int(v)] for v in self._grid[row]))
        black, white = self.get_score()
        rows.append(f"Score - Black: {black}, White: {white}")
        return "\n".join(rows)
