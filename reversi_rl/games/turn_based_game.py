from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, Sequence, TypeVar

S = TypeVar("S")  # state type
A = TypeVar("A")  # action type


class TurnBasedGame(ABC, Generic[S, A]):
    """
    Common interface for a deterministic two-player perfect-information game.
    No environment concerns, only the rules.
    """

    @abstractmethod
    def initial_state(self) -> S:
        """State at the start of a new game."""

    @abstractmethod
    def legal_actions(self, state: S) -> Sequence[A]:
        """All legal actions in the given state."""

    @abstractmethod
    def apply_action(self, state: S, action: A) -> S:
        """Return the new state after the move."""

    @abstractmethod
    def current_player(self, state: S) -> int:
        """
        Who moves now: the token of the side to move
        (1 for Black, -1 for White).
        """

    @abstractmethod
    def is_terminal(self, state: S) -> bool:
        """Is the state final (win/draw/loss)?"""

    @abstractmethod
    def winner(self, state: S) -> Optional[int]:
        """
        Who won:

        * 1 : the +1 token won
        * -1: the -1 token won
        * 0 : draw
        * None: not finished yet
        """
