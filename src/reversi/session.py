"""
Game session: the orchestrator a front end talks to.

Handles game flow between the human side and the CPU side. The CPU move is
deferred through a scheduler so the front end can pace it; while it is
pending the human cannot move.
"""
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .config import GameConfig
from .cpu.policy import Difficulty, select_move, to_difficulty
from .game.board import Board, BLACK, WHITE, PLAYER_NAMES, in_bounds, opponent
from .game.errors import IllegalMove, NotYourTurn, OutOfRange
from .game.moves import Move, apply_move_with_flips, coord_to_str, legal_moves
from .game.turn import GameResult, Transition, TurnController

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], None]


def run_after_delay(delay: float, callback: Callable[[], None]) -> None:
    """Default scheduler: wait ``delay`` seconds, then run ``callback`` inline."""
    if delay > 0:
        time.sleep(delay)
    callback()


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a front end needs to redraw."""
    board: Board
    player_to_move: Optional[int]
    is_terminal: bool
    black_count: int
    white_count: int
    cpu_pending: bool
    result: Optional[GameResult]


class GameSession:
    """
    One game between a human and the CPU.

    Args:
        config: Game settings (CPU level, side and pacing delay)
        scheduler: Runs the CPU move after a delay; see ``run_after_delay``
        on_pass: Called with the skipped player whenever a pass occurs
        on_game_over: Called once with the ``GameResult`` when the game ends
        rng: Random source for the random CPU level
        board: Starting position (defaults to the standard layout);
            Black moves first unless it has no legal move there
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        scheduler: Optional[Scheduler] = None,
        on_pass: Optional[Callable[[int], None]] = None,
        on_game_over: Optional[Callable[[GameResult], None]] = None,
        rng: Optional[random.Random] = None,
        board: Optional[Board] = None,
    ):
        self.config = config if config is not None else GameConfig()
        self.config.validate()
        self.cpu_player = WHITE if self.config.cpu_player == 'white' else BLACK
        self.human_player = opponent(self.cpu_player)
        self.difficulty: Difficulty = to_difficulty(self.config.cpu_level)
        self.scheduler = scheduler if scheduler is not None else run_after_delay
        self.on_pass = on_pass
        self.on_game_over = on_game_over
        self.rng = rng if rng is not None else random.Random()

        self.turns = TurnController()
        self._generation = 0
        self._start(board.copy() if board is not None else Board())

    def _start(self, board: Board) -> None:
        self._generation += 1
        self.board = board
        self.turns.reset()
        self.move_history: List[Move] = []
        self.result: Optional[GameResult] = None
        self.cpu_pending = False
        # A custom position may leave Black without a move
        skipped = self.turns.player_to_move
        self._after_transition(self.turns.settle(self.board), skipped)

    def reset(self) -> None:
        """Reset the game to its initial state, discarding any pending CPU move."""
        logger.info("Resetting game session")
        self._start(Board())

    def configure_difficulty(self, level) -> None:
        """Set the CPU level (1, 2 or 3); takes effect on the next CPU move."""
        self.difficulty = to_difficulty(level)
        logger.info("CPU difficulty set to %s", self.difficulty.name)

    def get_state(self) -> GameSnapshot:
        """Snapshot of the current game state."""
        black, white = self.board.get_score()
        return GameSnapshot(
            board=self.board.copy(),
            player_to_move=self.turns.player_to_move,
            is_terminal=self.turns.is_terminal,
            black_count=black,
            white_count=white,
            cpu_pending=self.cpu_pending,
            result=self.result,
        )

    def legal_moves(self, player: Optional[int] = None) -> List[Tuple[int, int]]:
        """
        Legal (col, row) placements, recomputed on every call.

        Args:
            player: Player to list moves for (default: the player to move)
        """
        if player is None:
            player = self.turns.player_to_move
            if player is None:
                return []
        return [move.coord for move in legal_moves(self.board, player)]

    def highlight_moves(self) -> List[Tuple[int, int]]:
        """Moves to highlight for the human; empty unless it is the human's turn."""
        if not self._human_to_move():
            return []
        return self.legal_moves(self.human_player)

    def move_count(self, player: int) -> int:
        """Number of moves ``player`` has made this game."""
        return sum(1 for move in self.move_history if move.player == player)

    def _human_to_move(self) -> bool:
        return (not self.turns.is_terminal
                and not self.cpu_pending
                and self.turns.player_to_move == self.human_player)

    def propose_move(self, col: int, row: int) -> GameSnapshot:
        """
        Play a human move at (col, row).

        Returns:
            The state after the move (and after the CPU reply if the
            scheduler runs it inline)

        Raises:
            NotYourTurn: the game is over, the CPU is to move or its move is pending
            OutOfRange: the coordinate is off the board
            IllegalMove: the cell is occupied or captures nothing
        """
        if self.turns.is_terminal:
            raise NotYourTurn("The game is over")
        if not self._human_to_move():
            logger.info("Rejected move at (%d, %d): CPU is to move", col, row)
            raise NotYourTurn(f"It is not {PLAYER_NAMES[self.human_player]}'s turn")
        if not in_bounds(col, row):
            raise OutOfRange(col, row)

        try:
            self._play(Move(col, row, self.human_player))
        except IllegalMove as e:
            logger.info("Rejected move: %s", e)
            raise
        return self.get_state()

    def _play(self, move: Move) -> None:
        # Raises IllegalMove before touching the board
        apply_move_with_flips(self.board, move)
        self.move_history.append(move)

        transition = self.turns.advance(self.board, move.player)
        self._after_transition(transition, opponent(move.player))

    def _after_transition(self, transition: Optional[Transition], skipped: int) -> None:
        if transition is Transition.PASS:
            self._notify(self.on_pass, skipped)
        elif transition is Transition.GAME_OVER:
            self.result = GameResult.from_board(self.board)
            logger.info("Game over: %s", self.result)
            self._notify(self.on_game_over, self.result)

        self._schedule_cpu_if_needed()

    @staticmethod
    def _notify(callback, payload) -> None:
        if callback is not None:
            callback(payload)

    def _schedule_cpu_if_needed(self) -> None:
        if self.turns.is_terminal or self.cpu_pending:
            return
        if self.turns.player_to_move != self.cpu_player:
            return
        self.cpu_pending = True
        generation = self._generation
        self.scheduler(self.config.cpu_delay, lambda: self._run_cpu_move(generation))

    def _run_cpu_move(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("Discarding CPU move scheduled before reset")
            return
        self.cpu_pending = False
        moves = legal_moves(self.board, self.cpu_player)
        move = select_move(self.board, moves, self.difficulty, self.rng)
        logger.info("CPU (%s) plays %s", self.difficulty.name.lower(), coord_to_str(move.coord))
        self._play(move)

    def __str__(self) -> str:
        """String representation of the game state."""
        result = str(self.board)
        if self.turns.is_terminal:
            result += f"\nGame over! {self.result.outcome}"
        else:
            result += f"\nCurrent player: {PLAYER_NAMES[self.turns.player_to_move]}"
        return result
