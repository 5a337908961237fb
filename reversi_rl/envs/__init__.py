"""Environment modules."""

from .othello import OthelloGame, OthelloSession
from ..registry import list_games, register_game

if "othello" not in list_games():
    register_game("othello", OthelloSession)

__all__ = ["OthelloGame", "OthelloSession"]
