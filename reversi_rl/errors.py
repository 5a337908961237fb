"""Exceptions raised by the rule engine, agents and session layer."""

from __future__ import annotations


class OthelloError(Exception):
    """Base class for recoverable engine errors."""


class IllegalMoveError(OthelloError, ValueError):
    """Placement rejected: occupied, off the board, or captures nothing."""

    def __init__(self, col: int, row: int, reason: str = "captures nothing"):
        super().__init__(f"Illegal move at ({col}, {row}): {reason}")
        self.col = col
        self.row = row
        self.reason = reason


class GameOverError(OthelloError, ValueError):
    """The game has ended and no longer accepts moves."""


class NoLegalMoveError(OthelloError, ValueError):
    """An agent was asked to act on a position where its side cannot move."""


class NoSuchQueryError(OthelloError, KeyError):
    """Unknown query key passed to :meth:`OthelloSession.query`."""

    def __init__(self, query: str):
        super().__init__(query)
        self.query = query

    def __str__(self) -> str:
        return f"No such query: {self.query!r}"
