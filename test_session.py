"""
Tests for the game session orchestrator.
"""
import random

import pytest

from reversi.config import GameConfig
from reversi.cpu import Difficulty, PositionalPolicy
from reversi.game import Board, BLACK, WHITE, IllegalMove, NotYourTurn, OutOfRange
from reversi.game.moves import legal_moves
from reversi.session import GameSession

EMPTY_ROW = "........"


class ManualScheduler:
    """Captures scheduled CPU moves so tests decide when they run."""

    def __init__(self):
        self.pending = []
        self.delays = []

    def __call__(self, delay, callback):
        self.delays.append(delay)
        self.pending.append(callback)

    def run_next(self):
        self.pending.pop(0)()


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, payload):
        self.calls.append(payload)


def make_session(**kwargs):
    scheduler = ManualScheduler()
    on_pass, on_game_over = Recorder(), Recorder()
    session = GameSession(
        kwargs.pop('config', GameConfig(cpu_level=2)),
        scheduler=scheduler,
        on_pass=on_pass,
        on_game_over=on_game_over,
        rng=random.Random(1),
        **kwargs
    )
    return session, scheduler, on_pass, on_game_over


def test_initial_state():
    session, scheduler, _, _ = make_session()
    state = session.get_state()

    assert state.player_to_move == BLACK
    assert not state.is_terminal
    assert (state.black_count, state.white_count) == (2, 2)
    assert state.board == Board()
    assert not scheduler.pending
    assert session.legal_moves() == [(3, 2), (2, 3), (5, 4), (4, 5)]


def test_human_move_schedules_cpu():
    session, scheduler, _, _ = make_session()
    state = session.propose_move(3, 2)

    assert state.cpu_pending
    assert state.player_to_move == WHITE
    assert (state.black_count, state.white_count) == (4, 1)
    assert scheduler.delays == [0.5]
    assert session.highlight_moves() == []

    scheduler.run_next()
    state = session.get_state()
    assert not state.cpu_pending
    assert state.player_to_move == BLACK
    assert state.black_count + state.white_count == 6
    assert session.move_count(WHITE) == 1


def test_moves_rejected_while_cpu_pending():
    session, scheduler, _, _ = make_session()
    session.propose_move(3, 2)
    before = session.get_state()

    with pytest.raises(NotYourTurn):
        session.propose_move(2, 4)
    assert session.get_state() == before
    assert len(scheduler.pending) == 1


def test_illegal_moves_leave_session_unchanged():
    session, scheduler, _, _ = make_session()
    before = session.get_state()

    with pytest.raises(IllegalMove):
        session.propose_move(0, 0)
    with pytest.raises(IllegalMove):
        session.propose_move(3, 3)
    with pytest.raises(OutOfRange):
        session.propose_move(8, 8)

    assert session.get_state() == before
    assert session.move_history == []
    assert not scheduler.pending


def test_difficulty_read_when_cpu_runs():
    session, scheduler, _, _ = make_session()
    session.propose_move(3, 2)
    session.configure_difficulty(3)
    board = session.board.copy()

    expected = PositionalPolicy().select_move(board, legal_moves(board, WHITE))
    scheduler.run_next()

    assert session.difficulty is Difficulty.POSITIONAL
    assert session.move_history[-1] == expected


def test_configure_difficulty_rejects_unknown_level():
    session, _, _, _ = make_session()
    with pytest.raises(ValueError):
        session.configure_difficulty(0)


def test_configure_difficulty_rejects_fractional_level():
    session, _, _, _ = make_session()
    with pytest.raises(ValueError):
        session.configure_difficulty(2.9)
    assert session.difficulty is Difficulty.GREEDY


def test_custom_start_with_black_to_move():
    board = Board.from_rows(["BW......"] + [EMPTY_ROW] * 7)
    session, scheduler, on_pass, _ = make_session(board=board)

    state = session.get_state()
    assert state.player_to_move == BLACK
    assert not state.is_terminal
    assert on_pass.calls == []
    assert session.legal_moves() == [(2, 0)]


def test_custom_start_where_black_must_pass():
    board = Board.from_rows(["WB......"] + [EMPTY_ROW] * 7)
    session, scheduler, on_pass, on_game_over = make_session(board=board)

    state = session.get_state()
    assert on_pass.calls == [BLACK]
    assert state.player_to_move == WHITE
    assert state.cpu_pending
    with pytest.raises(NotYourTurn):
        session.propose_move(2, 0)

    scheduler.run_next()
    state = session.get_state()
    assert session.move_history[-1].coord == (2, 0)
    assert state.is_terminal
    assert on_game_over.calls[0].outcome == "White wins"
    assert (state.black_count, state.white_count) == (0, 3)


def test_custom_start_with_no_moves_is_over():
    board = Board.from_rows(["B.W....."] + [EMPTY_ROW] * 7)
    session, scheduler, on_pass, on_game_over = make_session(board=board)

    state = session.get_state()
    assert state.is_terminal
    assert state.player_to_move is None
    assert state.result.outcome == "Draw"
    assert len(on_game_over.calls) == 1
    assert on_pass.calls == []
    assert not scheduler.pending
    with pytest.raises(NotYourTurn):
        session.propose_move(1, 0)


def test_reset_discards_pending_cpu_move():
    session, scheduler, _, _ = make_session()
    session.propose_move(3, 2)
    session.reset()
    scheduler.run_next()

    state = session.get_state()
    assert state.board == Board()
    assert state.player_to_move == BLACK
    assert not state.cpu_pending
    assert session.move_history == []


def test_cpu_pass_returns_control_to_human():
    board = Board.from_rows([".WBW...."] + [EMPTY_ROW] * 7)
    session, scheduler, on_pass, on_game_over = make_session(board=board)

    state = session.propose_move(0, 0)
    assert on_pass.calls == [WHITE]
    assert state.player_to_move == BLACK
    assert not state.cpu_pending
    assert not scheduler.pending
    assert session.move_count(WHITE) == 0

    state = session.propose_move(4, 0)
    assert state.is_terminal
    assert state.result.outcome == "Black wins"
    assert len(on_game_over.calls) == 1
    assert on_game_over.calls[0].black_count == 5

    with pytest.raises(NotYourTurn):
        session.propose_move(5, 0)


def test_cpu_moves_again_when_human_must_pass():
    board = Board.from_rows([".WBW...."] + [EMPTY_ROW] * 7)
    session, scheduler, on_pass, on_game_over = make_session(
        config=GameConfig(cpu_level=2, cpu_player='black'), board=board)

    assert session.human_player == WHITE
    assert session.get_state().cpu_pending
    scheduler.run_next()

    assert session.move_history[-1].coord == (0, 0)
    assert on_pass.calls == [WHITE]
    assert session.get_state().cpu_pending, "CPU should be scheduled again"
    with pytest.raises(NotYourTurn):
        session.propose_move(4, 0)

    scheduler.run_next()
    state = session.get_state()
    assert state.is_terminal
    assert (state.black_count, state.white_count) == (5, 0)
    assert on_game_over.calls[0].outcome == "Black wins"


def test_full_game_with_inline_scheduler():
    over = Recorder()
    session = GameSession(GameConfig(cpu_level=3, cpu_delay=0), on_game_over=over)

    while not session.get_state().is_terminal:
        col, row = session.legal_moves()[0]
        session.propose_move(col, row)

    state = session.get_state()
    assert len(over.calls) == 1
    assert over.calls[0] == state.result
    assert state.black_count + state.white_count <= 64
    assert (state.result.black_count, state.result.white_count) == (state.black_count, state.white_count)
    assert session.legal_moves() == []
