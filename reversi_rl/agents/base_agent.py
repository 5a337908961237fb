"""Base agent interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..envs.othello.board import Board, Move, Side
from ..errors import NoLegalMoveError


class BaseAgent(ABC):
    """Base class for all agents."""

    @abstractmethod
    def act(self, board: Board, side: Side, deterministic: bool = False) -> Move:
        """
        Return a move for ``side`` on ``board``.

        Raises:
            NoLegalMoveError: If ``side`` has no legal move.
        """

    def select_move(self, board: Board, side: Side) -> Optional[Move]:
        """Like :meth:`act`, but returns ``None`` when the agent cannot act."""
        try:
            return self.act(board, side)
        except NoLegalMoveError:
            return None

    @abstractmethod
    def save(self, path: str) -> None:
        """Persist agent state to ``path``."""

    @classmethod
    @abstractmethod
    def load(cls, path: str, **kwargs: Any) -> "BaseAgent":
        """Create an agent instance from ``path``."""

    def train(self) -> None:
        """Set agent to training mode."""

    def eval(self) -> None:
        """Set agent to evaluation mode."""
