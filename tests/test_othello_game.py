"""Tests for Othello capture execution, rewards and turn control."""

import pytest

from reversi_rl.agents import RandomAgent
from reversi_rl.envs.othello import (
    Board,
    Cell,
    Move,
    OthelloGame,
    PositionalRewards,
    Side,
    count_pieces,
    legal_moves,
)
from reversi_rl.errors import GameOverError, IllegalMoveError


def rows_with(**overrides):
    rows = ["........"] * 8
    for key, value in overrides.items():
        rows[int(key[1:]) - 1] = value
    return rows


@pytest.fixture
def game():
    return OthelloGame()


def corner_board():
    return Board.from_rows(rows_with(
        r1=".WWB....",
        r4="...BW...",
        r5="...WB...",
    ))


def forced_pass_board():
    # White has nothing to play; Black can play c1 or f8.
    return Board.from_rows(rows_with(
        r1="BW......",
        r8="......WB",
    ))


def test_apply_move_places_and_flips(game):
    board = Board.initial()
    reward = game.apply_move(board, Side.BLACK, 5, 3)

    assert board.get(5, 3) == Cell.BLACK
    assert board.get(5, 4) == Cell.BLACK
    assert count_pieces(board) == (4, 1)
    assert reward == 2


def test_apply_move_rejects_illegal_and_leaves_board(game):
    board = Board.initial()
    before = board.snapshot()

    with pytest.raises(IllegalMoveError):
        game.apply_move(board, Side.BLACK, 1, 1)
    with pytest.raises(IllegalMoveError):
        game.apply_move(board, Side.BLACK, 4, 4)
    with pytest.raises(IllegalMoveError):
        game.apply_move(board, Side.BLACK, 9, 1)

    assert board.snapshot() == before


def test_corner_capture_gets_top_reward(game):
    board = corner_board()
    moves = legal_moves(board, Side.BLACK)
    assert Move(1, 1) in moves

    rewards = {m: game.apply_move(board.copy(), Side.BLACK, m.col, m.row) for m in moves}

    tiers = game.rewards
    assert rewards[Move(1, 1)] == tiers.corner_bonus + tiers.base + 2 * tiers.per_flip
    assert all(rewards[Move(1, 1)] > r for m, r in rewards.items() if m != Move(1, 1))


def test_corner_capture_flips_edge_run(game):
    board = corner_board()
    game.apply_move(board, Side.BLACK, 1, 1)

    assert [board.get(col, 1) for col in range(1, 5)] == [Cell.BLACK] * 4


def test_x_square_next_to_empty_corner_scores_zero(game):
    board = Board.from_rows(rows_with(
        r2="..WWB...",
        r3=".W......",
        r4=".B......",
    ))
    assert board.get(1, 1) == Cell.EMPTY

    reward = game.apply_move(board, Side.BLACK, 2, 2)

    assert reward == 0
    # the capture itself still happens
    assert board.get(3, 2) == board.get(4, 2) == board.get(2, 3) == Cell.BLACK


def test_x_square_next_to_owned_corner_scores_as_interior(game):
    board = Board.from_rows(rows_with(
        r1="B.......",
        r2="..WWB...",
        r3=".W......",
        r4=".B......",
    ))

    reward = game.apply_move(board, Side.BLACK, 2, 2)

    assert reward == game.rewards.base + 3 * game.rewards.per_flip


def test_edge_reward_beats_interior(game):
    board = Board.from_rows(rows_with(
        r4=".WB.....",
        r5="...WB...",
    ))

    edge = game.apply_move(board.copy(), Side.BLACK, 1, 4)
    interior = game.apply_move(board.copy(), Side.BLACK, 3, 5)

    assert edge == game.rewards.edge_bonus + game.rewards.base + game.rewards.per_flip
    assert interior == game.rewards.base + game.rewards.per_flip
    assert edge > interior


def test_custom_reward_tiers_validated():
    with pytest.raises(ValueError):
        PositionalRewards(corner_bonus=1, edge_bonus=5)
    with pytest.raises(ValueError):
        PositionalRewards(x_square=3)

    game = OthelloGame(rewards=PositionalRewards(corner_bonus=50, edge_bonus=10))
    assert game.apply_move(corner_board(), Side.BLACK, 1, 1) == 53


@pytest.mark.parametrize(
    "tiers",
    [
        dict(corner_bonus=6, edge_bonus=5),
        dict(corner_bonus=20, edge_bonus=5),
        dict(corner_bonus=30, edge_bonus=5, per_flip=2),
    ],
)
def test_reward_tiers_letting_edge_beat_corner_are_rejected(tiers):
    with pytest.raises(ValueError):
        PositionalRewards(**tiers)


def test_one_flip_corner_outranks_large_edge_capture():
    # d1 captures 14 tokens; a1 captures only b1.
    board = Board.from_rows([
        ".WB.WWWB",
        "..WWW...",
        ".W.W.W..",
        "B..W..W.",
        "...W...B",
        "...W....",
        "...W....",
        "...B....",
    ])
    tiers = PositionalRewards(corner_bonus=21, edge_bonus=5)
    game = OthelloGame(rewards=tiers)

    edge_board = board.copy()
    edge = game.apply_move(edge_board, Side.BLACK, 4, 1)
    corner = game.apply_move(board.copy(), Side.BLACK, 1, 1)

    assert edge_board.count(Cell.BLACK) == board.count(Cell.BLACK) + 1 + 14
    assert edge == 5 + 1 + 14
    assert corner == 21 + 1 + 1
    assert corner > edge


def test_turn_alternates(game):
    state = game.initial_state()
    assert state.side == Side.BLACK

    state = game.apply_action(state, Move(5, 3))
    assert state.side == Side.WHITE
    assert not state.passed
    assert state.last_move == Move(5, 3)
    assert state.last_reward == 2


def test_apply_action_does_not_mutate_previous_state(game):
    state = game.initial_state()
    before = state.board.snapshot()
    game.apply_action(state, Move(5, 3))

    assert state.board.snapshot() == before


def test_forced_pass_keeps_turn(game):
    state = game.initial_state(board=forced_pass_board(), side=Side.BLACK)
    assert legal_moves(state.board, Side.WHITE) == []
    assert set(game.legal_actions(state)) == {Move(3, 1), Move(6, 8)}

    state = game.apply_action(state, Move(3, 1))

    assert not state.done
    assert state.side == Side.BLACK
    assert state.passed
    assert game.legal_actions(state) == [Move(6, 8)]


def test_game_over_after_last_move(game):
    state = game.initial_state(board=forced_pass_board(), side=Side.BLACK)
    state = game.apply_action(state, Move(3, 1))
    state = game.apply_action(state, Move(6, 8))

    assert state.done
    assert game.is_terminal(state)
    assert game.winner(state) == Side.BLACK
    assert state.outcome().result == "black"
    assert game.legal_actions(state) == []
    with pytest.raises(GameOverError):
        game.apply_action(state, Move(1, 2))


@pytest.mark.parametrize(
    "rows,expected_winner,result",
    [
        (rows_with(r1="BB......", r8=".......W"), Side.BLACK, "black"),
        (rows_with(r1="WW......", r8=".......B"), Side.WHITE, "white"),
        (rows_with(r1="B.......", r8=".......W"), None, "tie"),
    ],
)
def test_stuck_position_is_terminal(game, rows, expected_winner, result):
    state = game.initial_state(board=Board.from_rows(rows), side=Side.BLACK)

    assert state.done
    assert state.outcome().winner == expected_winner
    assert state.outcome().result == result
    assert state.winner == (0 if expected_winner is None else expected_winner.value)


def test_initial_state_passes_stuck_first_side(game):
    board = forced_pass_board()
    state = game.initial_state(board=board, side=Side.WHITE)

    assert not state.done
    assert state.side == Side.BLACK
    assert state.passed


def test_legal_move_grows_mover_and_never_shrinks_board(game):
    agents = {Side.BLACK: RandomAgent(seed=3), Side.WHITE: RandomAgent(seed=4)}
    for _ in range(3):
        state = game.initial_state()
        while not state.done:
            side = state.side
            for move in game.legal_actions(state):
                board = state.board.copy()
                mover_before = board.count(side.token)
                total_before = 64 - board.empty_cells()
                game.apply_move(board, side, move.col, move.row)
                assert board.count(side.token) > mover_before
                assert 64 - board.empty_cells() >= total_before
            state = game.apply_action(state, agents[side].act(state.board, side))

        black, white = count_pieces(state.board)
        assert state.outcome().black == black and state.outcome().white == white
