"""
Move generation and application.

Capture sets are always recomputed from the board passed in; nothing here
is cached between mutations.
"""
import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

from .board import Board, EMPTY, PLAYER_NAMES, in_bounds, opponent
from .errors import IllegalMove, OutOfRange

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]  # (col, row)

# (dcol, drow): N, S, E, W, NE, NW, SE, SW
DIRECTIONS: Tuple[Coord, ...] = (
    (0, -1), (0, 1), (1, 0), (-1, 0),
    (1, -1), (-1, -1), (1, 1), (-1, 1),
)


@dataclass(frozen=True)
class Move:
    """A placement at (col, row) by ``player``."""
    col: int
    row: int
    player: int

    @property
    def coord(self) -> Coord:
        return (self.col, self.row)

    def __str__(self) -> str:
        return f"{PLAYER_NAMES.get(self.player, self.player)} {coord_to_str(self.coord)}"


def coord_to_str(coord: Coord) -> str:
    """(col, row) -> "D3" style label."""
    col, row = coord
    return f"{chr(ord('A') + col)}{row + 1}"


def parse_coord(text: str):
    """
    Parse a coordinate such as "d3" or "3d" into (col, row).

    Returns None for malformed input; range checking is left to the board.
    """
    s = text.strip().lower()
    if len(s) < 2:
        return None
    if s[0].isalpha() and s[1:].isdigit():
        letter, digits = s[0], s[1:]
    elif s[-1].isalpha() and s[:-1].isdigit():
        letter, digits = s[-1], s[:-1]
    else:
        return None
    return (ord(letter) - ord('a'), int(digits) - 1)


def _ray(board: Board, col: int, row: int, dcol: int, drow: int, player: int) -> List[Coord]:
    """Opponent stones bracketed by ``player`` walking from (col, row) along one direction."""
    other = opponent(player)
    line: List[Coord] = []
    c, r = col + dcol, row + drow
    while in_bounds(c, r):
        cell = board.get(c, r)
        if cell == other:
            line.append((c, r))
        elif cell == player:
            return line
        else:
            break
        c += dcol
        r += drow
    # Ran off the edge or hit an empty cell
    return []


def capture_set(board: Board, col: int, row: int, player: int) -> FrozenSet[Coord]:
    """
    Compute the stones that a placement at (col, row) would flip.

    Args:
        board: Board to inspect
        col: Column of the candidate cell
        row: Row of the candidate cell
        player: The player placing the stone

    Returns:
        Frozen set of (col, row) coordinates; empty if the cell is occupied
        or no direction is bracketed.
    """
    if not in_bounds(col, row):
        raise OutOfRange(col, row)
    if board.get(col, row) != EMPTY:
        return frozenset()
    captured: List[Coord] = []
    for dcol, drow in DIRECTIONS:
        captured.extend(_ray(board, col, row, dcol, drow, player))
    return frozenset(captured)


def legal_moves(board: Board, player: int) -> List[Move]:
    """
    All legal moves for ``player`` in row-major scan order.

    The ordering is relied upon by CPU tie-breaking.
    """
    return [
        Move(col, row, player)
        for col, row in board.empty_cells()
        if capture_set(board, col, row, player)
    ]


def has_legal_move(board: Board, player: int) -> bool:
    """Check if ``player`` has at least one legal move."""
    return any(capture_set(board, col, row, player) for col, row in board.empty_cells())


def apply_move_with_flips(board: Board, move: Move) -> Tuple[Board, FrozenSet[Coord]]:
    """
    Place ``move`` on ``board`` and flip its capture set in place.

    Returns:
        The mutated board and the coordinates that were flipped.

    Raises:
        IllegalMove: if the cell is occupied or nothing would be captured.
    """
    if board.get(move.col, move.row) != EMPTY:
        raise IllegalMove(f"Cell {coord_to_str(move.coord)} is occupied")
    flips = capture_set(board, move.col, move.row, move.player)
    if not flips:
        raise IllegalMove(f"Move {move} captures no stones")

    board._set(move.col, move.row, move.player)
    for col, row in flips:
        board._set(col, row, move.player)

    logger.debug("Applied %s, flipped %d stone(s)", move, len(flips))
    return board, flips


def apply_move(board: Board, move: Move) -> Board:
    """Apply ``move`` to ``board`` and return the updated board."""
    new_board, _ = apply_move_with_flips(board, move)
    return new_board
