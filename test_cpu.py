"""
Tests for the CPU move selection policies.
"""
import random

import pytest

from reversi.cpu import (
    Difficulty, POSITION_WEIGHTS, GreedyPolicy, PositionalPolicy, RandomPolicy,
    get_policy, select_move,
)
from reversi.game import Board, WHITE, InvariantViolation
from reversi.game.moves import legal_moves

EMPTY_ROW = "........"


def test_greedy_tie_goes_to_first_in_scan_order():
    board = Board.from_rows([".BW....."] + [EMPTY_ROW] * 6 + [".BW....."])
    moves = legal_moves(board, WHITE)
    assert [m.coord for m in moves] == [(0, 0), (0, 7)]

    move = select_move(board, moves, 2)
    assert move.coord == (0, 0)
    # Both corners score 100 + 2 * 1 at level 3
    assert select_move(board, moves, 3).coord == (0, 0)


def test_greedy_prefers_more_captures():
    board = Board.from_rows([".BW....."] + [EMPTY_ROW] * 6 + [".BBW...."])
    move = select_move(board, legal_moves(board, WHITE), Difficulty.GREEDY)
    assert move.coord == (0, 7)


def test_positional_prefers_corner():
    board = Board.from_rows([
        ".BW.....",
        EMPTY_ROW,
        EMPTY_ROW,
        "..WBBB..",
        EMPTY_ROW,
        EMPTY_ROW,
        EMPTY_ROW,
        EMPTY_ROW,
    ])
    moves = legal_moves(board, WHITE)
    assert [m.coord for m in moves] == [(0, 0), (6, 3)]

    assert select_move(board, moves, 2).coord == (6, 3)
    assert select_move(board, moves, 3).coord == (0, 0)
    assert PositionalPolicy().score(board, moves[0]) == 102
    assert PositionalPolicy().score(board, moves[1]) == 4


def test_random_policy_picks_legal_moves():
    board = Board()
    moves = legal_moves(board, WHITE)
    policy = RandomPolicy(random.Random(0))
    seen = {policy.select_move(board, moves) for _ in range(200)}
    assert seen == set(moves), "All moves should be reachable"


def test_random_policy_is_reproducible_with_seed():
    moves = legal_moves(Board(), WHITE)
    first = [select_move(Board(), moves, 1, random.Random(5)) for _ in range(3)]
    second = [select_move(Board(), moves, 1, random.Random(5)) for _ in range(3)]
    assert first == second


def test_empty_move_list_is_a_contract_violation():
    for level in (1, 2, 3):
        with pytest.raises(InvariantViolation):
            select_move(Board(), [], level)


def test_unknown_level():
    with pytest.raises(ValueError):
        get_policy(4)
    with pytest.raises(ValueError):
        get_policy("hard")


def test_fractional_level_rejected():
    with pytest.raises(ValueError):
        get_policy(2.9)
    with pytest.raises(ValueError):
        get_policy(1.5)
    assert isinstance(get_policy(3.0), PositionalPolicy)


def test_policy_classes():
    assert isinstance(get_policy(1), RandomPolicy)
    assert isinstance(get_policy(2), GreedyPolicy)
    assert isinstance(get_policy(3), PositionalPolicy)


def test_position_weights():
    assert POSITION_WEIGHTS.shape == (8, 8)
    for row, col in [(0, 0), (0, 7), (7, 0), (7, 7)]:
        assert POSITION_WEIGHTS[row, col] == 100
    assert POSITION_WEIGHTS[1, 1] == -50
    assert POSITION_WEIGHTS[0, 1] == -20
    assert (POSITION_WEIGHTS == POSITION_WEIGHTS.T).all()
