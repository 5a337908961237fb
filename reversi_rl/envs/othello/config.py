"""Session configuration for the Othello environment."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

from .board import OTHELLO_SIZE, Side
from .rewards import PositionalRewards


@dataclass
class TileConfig:
    reward: int = 0
    walkable: bool = True
    playable: bool = True
    terminal: bool = False
    color: Tuple[int, int, int] = (0, 255, 0)


def _default_tiles() -> Dict[str, TileConfig]:
    return {
        "0": TileConfig(reward=0, walkable=True, playable=True, color=(0, 255, 0)),
        "1": TileConfig(reward=1, walkable=True, playable=False, color=(0, 0, 0)),
        "2": TileConfig(reward=1, walkable=True, playable=False, color=(255, 255, 255)),
        "3": TileConfig(reward=0, walkable=False, playable=False, color=(211, 211, 211)),
    }


def _default_grid() -> List[str]:
    return [
        "3333333333",
        "3000000003",
        "3000000003",
        "3000000003",
        "3000120003",
        "3000210003",
        "3000000003",
        "3000000003",
        "3000000003",
        "3333333333",
    ]


def parse_side(name: Union[str, Side]) -> Side:
    if isinstance(name, Side):
        return name
    try:
        return Side[str(name).upper()]
    except KeyError:
        raise ValueError(f"Unknown side {name!r}, expected 'black' or 'white'") from None


@dataclass
class OthelloConfig:
    """
    Session configuration.

    ``grid`` is the 10x10 tile map including the one-cell border; grid
    coordinate ``(x, y)`` is board ``(col, row)``. The tile map only governs
    cursor movement and rendering, the rule engine ignores it.
    """

    tiles: Dict[str, TileConfig] = field(default_factory=_default_tiles)
    grid: List[str] = field(default_factory=_default_grid)
    player_start: Tuple[int, int] = (4, 4)
    diagonal_support: bool = False
    first_side: str = "black"
    human_side: str = "black"
    opponent_delay: float = 0.0
    rewards: PositionalRewards = field(default_factory=PositionalRewards)

    def __post_init__(self) -> None:
        size = OTHELLO_SIZE + 2
        if len(self.grid) != size or any(len(row) != size for row in self.grid):
            raise ValueError(f"grid must be {size} rows of {size} tiles")
        unknown = {ch for row in self.grid for ch in row} - set(self.tiles)
        if unknown:
            raise ValueError(f"grid uses undefined tiles: {sorted(unknown)}")
        if self.diagonal_support:
            raise ValueError("diagonal cursor movement is not supported")
        if self.opponent_delay < 0:
            raise ValueError("opponent_delay must be non-negative")
        x, y = self.player_start
        if not (1 <= x <= OTHELLO_SIZE and 1 <= y <= OTHELLO_SIZE):
            raise ValueError(f"player_start {self.player_start} is off the board")
        parse_side(self.first_side)
        parse_side(self.human_side)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OthelloConfig":
        data = dict(data)
        if "tiles" in data:
            data["tiles"] = {
                str(ch): TileConfig(**{**tile, "color": tuple(tile.get("color", (0, 255, 0)))})
                for ch, tile in data["tiles"].items()
            }
        if "grid" in data:
            data["grid"] = [str(row) for row in data["grid"]]
        if "player_start" in data:
            data["player_start"] = tuple(data["player_start"])
        if "rewards" in data:
            data["rewards"] = PositionalRewards(**data["rewards"])
        return cls(**data)
