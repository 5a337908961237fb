"""Othello environment package."""

from .board import DIRECTIONS, OTHELLO_SIZE, Board, Cell, Move, Side
from .config import OthelloConfig, TileConfig
from .env import Action, InputEvent, OthelloSession
from .game import GameOutcome, OthelloGame, OthelloState
from .rewards import PositionalRewards
from .utils import count_pieces, get_flips, has_legal_move, is_legal, legal_moves

__all__ = [
    "DIRECTIONS",
    "OTHELLO_SIZE",
    "Action",
    "Board",
    "Cell",
    "GameOutcome",
    "InputEvent",
    "Move",
    "OthelloConfig",
    "OthelloGame",
    "OthelloSession",
    "OthelloState",
    "PositionalRewards",
    "Side",
    "TileConfig",
    "count_pieces",
    "get_flips",
    "has_legal_move",
    "is_legal",
    "legal_moves",
]
