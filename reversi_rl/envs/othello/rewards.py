"""Positional reward configuration for Othello moves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .board import OTHELLO_SIZE, Board, Cell

_LAST = OTHELLO_SIZE - 1

# Most tokens a single non-corner edge placement can capture: 5 along the
# edge, 6 inward and 5 across the two inward diagonals.
MAX_EDGE_FLIPS = 16

CORNERS: Tuple[Tuple[int, int], ...] = ((0, 0), (0, _LAST), (_LAST, 0), (_LAST, _LAST))

# X-square (row, col) -> the corner it sits diagonally next to.
X_SQUARES: Dict[Tuple[int, int], Tuple[int, int]] = {
    (1, 1): (0, 0),
    (1, _LAST - 1): (0, _LAST),
    (_LAST - 1, 1): (_LAST, 0),
    (_LAST - 1, _LAST - 1): (_LAST, _LAST),
}


@dataclass
class PositionalRewards:
    """
    Reward tiers for a placement.

    Attributes:
        corner_bonus: Added on top of the base reward for corner cells (default: 25)
        edge_bonus: Added for non-corner cells on the outer ring (default: 5)
        base: Reward for any accepted placement (default: 1)
        per_flip: Reward per captured token (default: 1)
        x_square: Flat reward for a cell diagonally next to an empty corner (default: 0)
    """

    corner_bonus: int = 25
    edge_bonus: int = 5
    base: int = 1
    per_flip: int = 1
    x_square: int = 0

    def __post_init__(self) -> None:
        if self.edge_bonus <= 0 or self.per_flip < 0:
            raise ValueError("Rewards must satisfy edge_bonus > 0 and per_flip >= 0")
        # a one-flip corner must outscore the largest edge capture
        if self.corner_bonus + self.per_flip <= self.edge_bonus + self.per_flip * MAX_EDGE_FLIPS:
            raise ValueError(
                "corner_bonus must exceed edge_bonus + per_flip * "
                f"{MAX_EDGE_FLIPS - 1} so corners always outrank edges"
            )
        if self.x_square > self.base:
            raise ValueError("x_square reward must not exceed the base reward")

    def score(self, board: Board, row: int, col: int, flips: int) -> int:
        """
        Reward for a token placed at 0-based ``(row, col)``.

        ``board`` is the position after the move; only the corner next to an
        X-square is inspected.
        """
        gained = self.base + self.per_flip * flips
        if (row, col) in CORNERS:
            return self.corner_bonus + gained
        corner = X_SQUARES.get((row, col))
        if corner is not None and board.at(*corner) == Cell.EMPTY:
            return self.x_square
        if row in (0, _LAST) or col in (0, _LAST):
            return self.edge_bonus + gained
        return gained
