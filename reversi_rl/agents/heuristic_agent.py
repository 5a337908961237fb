"""Heuristic agent implementation for Othello."""

import random
from typing import Optional

from ..envs.othello.board import Board, Move, Side
from ..envs.othello.game import OthelloGame
from ..envs.othello.rewards import PositionalRewards
from ..envs.othello.utils import legal_moves
from ..errors import NoLegalMoveError
from .base_agent import BaseAgent


class OthelloHeuristicAgent(BaseAgent):
    """
    Greedy agent for Othello using the positional reward tiers.

    Strategy:
    1. Corners are most valuable (stable positions)
    2. Edges are valuable
    3. X-squares next to an empty corner are avoided
    4. Otherwise capture as many tokens as possible
    """

    def __init__(self, seed: Optional[int] = None, rewards: Optional[PositionalRewards] = None):
        """
        Initialize heuristic agent.

        Args:
            seed: Random seed used to break ties
            rewards: Reward tiers to rank moves by
        """
        self._rng = random.Random(seed)
        self._game = OthelloGame(rewards=rewards)

    def act(self, board: Board, side: Side, deterministic: bool = False) -> Move:
        """Select the move with the highest immediate positional reward."""
        moves = legal_moves(board, side)
        if not moves:
            raise NoLegalMoveError(f"{side.name.lower()} has no legal moves")

        best_score = float("-inf")
        best_moves = []
        for move in moves:
            score = self._game.apply_move(board.copy(), side, move.col, move.row)
            if score > best_score:
                best_score = score
                best_moves = [move]
            elif score == best_score:
                best_moves.append(move)

        if deterministic:
            return best_moves[0]
        return self._rng.choice(best_moves)

    def save(self, path: str) -> None:
        """Heuristic agent has no persistent state."""
        return None

    @classmethod
    def load(cls, path: str, **kwargs: object) -> "OthelloHeuristicAgent":
        """Return a new heuristic agent."""
        return cls(**kwargs)
