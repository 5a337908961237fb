"""Shared utilities for Othello move validation."""

from __future__ import annotations

from typing import List, Tuple

from .board import DIRECTIONS, OTHELLO_SIZE, Board, Cell, Move, Side


def _ray(board: Board, r: int, c: int, dr: int, dc: int, player: int) -> List[Tuple[int, int]]:
    """
    Opponent cells captured along one direction from ``(r, c)``.

    The run counts only if it is closed by a ``player`` token before leaving
    the board or reaching an empty cell; an open run yields an empty list.
    """
    opponent = -player
    run = []
    r, c = r + dr, c + dc
    while Board.in_bounds(r, c) and board.at(r, c) == opponent:
        run.append((r, c))
        r += dr
        c += dc
    if run and Board.in_bounds(r, c) and board.at(r, c) == player:
        return run
    return []


def get_flips(board: Board, side: Side, col: int, row: int) -> List[Move]:
    """
    Get all pieces that would be flipped by ``side`` placing at ``(col, row)``.

    Args:
        board: Board to inspect (not modified).
        side: Side making the move.
        col: 1-based column.
        row: 1-based row.

    Returns:
        Captured cells as moves; empty if the placement is off the board,
        onto an occupied cell, or captures nothing.
    """
    r, c = row - 1, col - 1
    if not Board.in_bounds(r, c) or board.at(r, c) != Cell.EMPTY:
        return []

    flips: List[Move] = []
    for dr, dc in DIRECTIONS:
        flips.extend(Move(col=fc + 1, row=fr + 1) for fr, fc in _ray(board, r, c, dr, dc, side.value))
    return flips


def is_legal(board: Board, side: Side, col: int, row: int) -> bool:
    """Check whether ``side`` may place a token at ``(col, row)``."""
    r, c = row - 1, col - 1
    if not Board.in_bounds(r, c) or board.at(r, c) != Cell.EMPTY:
        return False
    return any(_ray(board, r, c, dr, dc, side.value) for dr, dc in DIRECTIONS)


def legal_moves(board: Board, side: Side) -> List[Move]:
    """All legal placements for ``side`` in row-major order."""
    return [
        Move(col=col, row=row)
        for row in range(1, OTHELLO_SIZE + 1)
        for col in range(1, OTHELLO_SIZE + 1)
        if is_legal(board, side, col, row)
    ]


def has_legal_move(board: Board, side: Side) -> bool:
    return any(
        is_legal(board, side, col, row)
        for row in range(1, OTHELLO_SIZE + 1)
        for col in range(1, OTHELLO_SIZE + 1)
    )


def count_pieces(board: Board) -> Tuple[int, int]:
    """
    Count pieces for each side.

    Returns:
        Tuple of (black_count, white_count).
    """
    return board.count(Cell.BLACK), board.count(Cell.WHITE)
