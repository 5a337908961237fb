"""Pure game-rule interfaces."""

from .turn_based_game import TurnBasedGame

__all__ = ["TurnBasedGame"]
