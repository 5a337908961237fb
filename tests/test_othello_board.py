"""Tests for the Othello board and move validation."""

import numpy as np
import pytest

from reversi_rl.envs.othello import (
    DIRECTIONS,
    Board,
    Cell,
    Move,
    Side,
    count_pieces,
    get_flips,
    is_legal,
    legal_moves,
)


def empty_rows():
    return ["........"] * 8


def test_initial_board():
    board = Board.initial()

    assert board.get(4, 4) == Cell.BLACK
    assert board.get(5, 5) == Cell.BLACK
    assert board.get(5, 4) == Cell.WHITE
    assert board.get(4, 5) == Cell.WHITE
    assert count_pieces(board) == (2, 2)
    assert board.empty_cells() == 60
    # flat indices 27/36 black, 28/35 white
    flat = board.flat()
    assert flat[27] == flat[36] == Cell.BLACK
    assert flat[28] == flat[35] == Cell.WHITE


def test_move_index_mapping():
    assert Move(1, 1).index == 0
    assert Move(8, 1).index == 7
    assert Move(1, 8).index == 56
    assert Move(8, 8).index == 63
    assert Move(4, 5).index == (5 - 1) * 8 + (4 - 1)
    for index in range(64):
        assert Move.from_index(index).index == index

    with pytest.raises(ValueError):
        Move(0, 3).index
    with pytest.raises(ValueError):
        Move.from_index(64)


def test_from_rows_rejects_bad_input():
    with pytest.raises(ValueError):
        Board.from_rows(["........"] * 7)
    with pytest.raises(ValueError):
        Board.from_rows([".......X"] + ["........"] * 7)


def test_snapshot_and_copy_are_independent():
    board = Board.initial()
    copy = board.copy()
    copy.set(1, 1, Cell.BLACK)

    assert board.get(1, 1) == Cell.EMPTY
    assert board != copy
    assert board.snapshot() != copy.snapshot()
    assert Board.initial().snapshot() == board.snapshot()


def test_cells_view_is_read_only():
    board = Board.initial()
    with pytest.raises(ValueError):
        board.cells[0, 0] = 1


def test_directions_cover_all_neighbours():
    assert len(set(DIRECTIONS)) == 8
    assert (0, 0) not in DIRECTIONS
    assert all(abs(dr) <= 1 and abs(dc) <= 1 for dr, dc in DIRECTIONS)


def test_opening_legal_moves():
    board = Board.initial()

    assert legal_moves(board, Side.BLACK) == [Move(5, 3), Move(6, 4), Move(3, 5), Move(4, 6)]
    assert len(legal_moves(board, Side.WHITE)) == 4


def test_occupied_cell_is_illegal():
    board = Board.initial()
    assert not is_legal(board, Side.BLACK, 4, 4)
    assert not is_legal(board, Side.BLACK, 5, 4)


@pytest.mark.parametrize("col,row", [(0, 1), (9, 1), (1, 0), (1, 9), (-3, 4), (4, 100)])
def test_out_of_range_fails_closed(col, row):
    board = Board.initial()
    assert not is_legal(board, Side.BLACK, col, row)
    assert get_flips(board, Side.BLACK, col, row) == []


def test_no_capture_across_row_wrap_west():
    # In flat terms (1, 2) sits right after (8, 1); stepping west must not wrap.
    rows = empty_rows()
    rows[0] = "......BW"
    board = Board.from_rows(rows)

    assert not is_legal(board, Side.BLACK, 1, 2)


def test_no_capture_across_row_wrap_east():
    rows = empty_rows()
    rows[1] = "WB......"
    board = Board.from_rows(rows)

    assert not is_legal(board, Side.BLACK, 8, 1)


def test_no_capture_across_diagonal_wrap():
    # (8, 2) -> (1, 4) -> (2, 5) is flat +9 twice; it is not a diagonal.
    rows = empty_rows()
    rows[3] = "W......."
    rows[4] = ".B......"
    board = Board.from_rows(rows)

    assert not is_legal(board, Side.BLACK, 8, 2)


def test_open_run_is_not_captured():
    rows = empty_rows()
    rows[0] = ".WW....."
    board = Board.from_rows(rows)

    assert not is_legal(board, Side.BLACK, 1, 1)


def test_flips_in_multiple_directions():
    rows = empty_rows()
    rows[0] = "..B....."
    rows[1] = "..W....."
    rows[2] = "BW.WB..."
    rows[3] = "...W...."
    rows[4] = "....B..."
    board = Board.from_rows(rows)

    flips = set(get_flips(board, Side.BLACK, 3, 3))
    assert flips == {Move(3, 2), Move(2, 3), Move(4, 3), Move(4, 4)}


def test_corner_restricts_directions():
    rows = empty_rows()
    rows[0] = ".W......"
    rows[1] = "WW......"
    rows[2] = "B.B....."
    board = Board.from_rows(rows)

    # only S and SE leave the corner, E has an open run
    assert set(get_flips(board, Side.BLACK, 1, 1)) == {Move(1, 2), Move(2, 2)}


def test_is_legal_is_idempotent_and_pure():
    board = Board.initial()
    before = board.snapshot()

    for row in range(1, 9):
        for col in range(1, 9):
            first = is_legal(board, Side.BLACK, col, row)
            second = is_legal(board, Side.BLACK, col, row)
            assert first == second

    assert board.snapshot() == before


def test_from_flat_round_trip():
    board = Board.initial()
    assert Board.from_flat(board.flat()) == board
    with pytest.raises(ValueError):
        Board.from_flat([0] * 63)
    with pytest.raises(ValueError):
        Board.from_flat([2] + [0] * 63)


def test_render_marks_cursor():
    board = Board.initial()
    text = board.render(cursor=(1, 1))

    lines = text.splitlines()
    assert lines[1].split()[1] == "*"
    assert "X" in text and "O" in text
    assert np.sum(board.cells != 0) == 4
