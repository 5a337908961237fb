"""Random agent implementation."""

import random
from typing import Optional

from ..envs.othello.board import Board, Move, Side
from ..envs.othello.utils import legal_moves
from ..errors import NoLegalMoveError
from .base_agent import BaseAgent


class RandomAgent(BaseAgent):
    """Agent that selects moves uniformly from the legal moves."""

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random agent.

        Args:
            seed: Random seed for reproducibility
        """
        self._rng = random.Random(seed)

    def act(self, board: Board, side: Side, deterministic: bool = False) -> Move:
        """
        Select a random legal move.

        Args:
            board: Current position (not modified)
            side: Side to move
            deterministic: Ignored for random policy

        Returns:
            Randomly selected move
        """
        moves = legal_moves(board, side)
        if not moves:
            raise NoLegalMoveError(f"{side.name.lower()} has no legal moves")
        return self._rng.choice(moves)

    def save(self, path: str) -> None:
        """Random agent has no state to persist."""
        return None

    @classmethod
    def load(cls, path: str, **kwargs: object) -> "RandomAgent":
        """Return a new random agent instance."""
        return cls(**kwargs)
