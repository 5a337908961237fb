"""Othello game session: cursor-driven play, queries and snapshots."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from ...errors import NoSuchQueryError
from .board import Board, Move, Side
from .config import OthelloConfig, TileConfig, parse_side
from .game import GameOutcome, OthelloGame, OthelloState
from .utils import count_pieces

if TYPE_CHECKING:
    from ...agents.base_agent import BaseAgent


class Action(IntEnum):
    """Discrete host actions (ALE numbering)."""

    NOOP = 0
    FIRE = 1
    UP = 2
    RIGHT = 3
    LEFT = 4
    DOWN = 5


@dataclass(frozen=True)
class InputEvent:
    """Button state delivered by the host for one frame."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    fire: bool = False

    @classmethod
    def from_action(cls, action: Action) -> "InputEvent":
        return cls(
            up=action == Action.UP,
            down=action == Action.DOWN,
            left=action == Action.LEFT,
            right=action == Action.RIGHT,
            fire=action == Action.FIRE,
        )

    def is_empty(self) -> bool:
        return not (self.up or self.down or self.left or self.right or self.fire)

    def delta(self) -> Optional[Tuple[int, int]]:
        """Cursor delta ``(dx, dy)``; ``None`` for no movement or a diagonal chord."""
        dx = int(self.right) - int(self.left)
        dy = int(self.down) - int(self.up)
        if dx and dy:
            return None
        if not (dx or dy):
            return None
        return dx, dy


class OthelloSession:
    """
    A single game of Othello driven by a host.

    A human moves a cursor over the board and confirms a placement; an agent
    can be asked to move for the side to move. The session keeps a cumulative
    score (rewards of the human side's moves) and a frame step counter.
    """

    def __init__(
        self,
        config: Optional[OthelloConfig] = None,
        game: Optional[OthelloGame] = None,
    ):
        self.config = config if config is not None else OthelloConfig()
        self._game = game if game is not None else OthelloGame(rewards=self.config.rewards)
        self.human_side = parse_side(self.config.human_side)

        self._tiles: List[TileConfig] = []
        char_to_index: Dict[str, int] = {}
        for ch, tile in self.config.tiles.items():
            char_to_index[ch] = len(self._tiles)
            self._tiles.append(tile)
        self._grid = [[char_to_index[ch] for ch in row] for row in self.config.grid]

        self.reset()

    def reset(self, board: Optional[Board] = None, side: Optional[Side] = None) -> OthelloState:
        if side is None:
            side = parse_side(self.config.first_side)
        self._state: OthelloState = self._game.initial_state(board=board, side=side)
        self.cursor: Tuple[int, int] = tuple(self.config.player_start)
        self.score = 0
        self.step = 0
        return self._state

    @property
    def state(self) -> OthelloState:
        return self._state

    @property
    def board(self) -> Board:
        """Copy of the live board."""
        return self.state.board.copy()

    @property
    def side(self) -> Side:
        return self.state.side

    @property
    def done(self) -> bool:
        return self.state.done

    @property
    def last_move(self) -> Optional[Move]:
        return self.state.last_move

    def lives(self) -> int:
        return 0 if self.done else 1

    def outcome(self) -> GameOutcome:
        return self.state.outcome()

    def legal_moves(self) -> List[Move]:
        return list(self._game.legal_actions(self.state))

    @staticmethod
    def legal_action_set() -> List[Action]:
        """Host actions accepted by :meth:`handle_input`; independent of board state."""
        return sorted([Action.NOOP, Action.FIRE, Action.UP, Action.LEFT, Action.RIGHT, Action.DOWN])

    def tile_at(self, x: int, y: int) -> Optional[TileConfig]:
        if y < 0 or y >= len(self._grid) or x < 0 or x >= len(self._grid[y]):
            return None
        return self._tiles[self._grid[y][x]]

    def walkable(self, x: int, y: int) -> bool:
        tile = self.tile_at(x, y)
        return tile is not None and tile.walkable

    def move_cursor(self, dx: int, dy: int) -> bool:
        x, y = self.cursor
        dest = (x + dx, y + dy)
        if not self.walkable(*dest):
            return False
        self.cursor = dest
        return True

    def play(self, col: int, row: int) -> int:
        """
        Place a token for the side to move.

        Raises:
            GameOverError: If the game has ended.
            IllegalMoveError: If the placement is not legal; state is unchanged.
        """
        mover = self.state.side
        self._state = self._game.apply_action(self.state, Move(col=col, row=row))
        reward = self._state.last_reward
        if mover == self.human_side:
            self.score += reward
        return reward

    def handle_input(self, event: InputEvent) -> Optional[int]:
        """
        Process one frame of host input.

        Fire places a token at the cursor if legal. A fire press that cannot
        place (illegal cell or game over) only counts the step; any direction
        held in the same event is dropped with it. Returns the reward of a placement,
        else ``None``.
        """
        if event.is_empty():
            return None

        self.step += 1
        reward = None
        if event.fire:
            col, row = self.cursor
            if self.done or Move(col=col, row=row) not in self.legal_moves():
                return None
            reward = self.play(col, row)

        delta = event.delta()
        if delta is not None:
            self.move_cursor(*delta)
        return reward

    def play_opponent(self, agent: "BaseAgent") -> Optional[Move]:
        """
        Let ``agent`` move for the side to move.

        The agent works on a copy of the board; only the chosen move is
        committed. Returns ``None`` if the agent cannot act.
        """
        if self.done:
            return None
        move = agent.select_move(self.state.board.copy(), self.state.side)
        if move is None:
            return None
        self.play(move.col, move.row)
        return move

    def query(self, name: str, args: Optional[Dict[str, Any]] = None) -> str:
        """Answer a host query as a JSON string."""
        x, y = self.cursor
        if name == "xy":
            return json.dumps([x, y])
        if name == "xyt":
            return json.dumps([x, y, self.step])
        raise NoSuchQueryError(name)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "game_over": self.done,
            "turn": self.side.name.lower(),
            "cursor": list(self.cursor),
            "step": self.step,
            "board": self.state.board.flat(),
        }

    def restore(self, snapshot: Dict[str, Any]) -> None:
        """Restore a session from :meth:`snapshot` output."""
        board = Board.from_flat(snapshot["board"])
        side = parse_side(snapshot["turn"])
        state = self._game.initial_state(board=board, side=side)
        if snapshot.get("game_over") and not state.done:
            raise ValueError("Snapshot is marked game over but moves remain")
        self._state = state
        self.cursor = tuple(snapshot["cursor"])
        self.score = int(snapshot["score"])
        self.step = int(snapshot["step"])

    def render(self, mode: str = "human") -> Optional[str]:
        lines = [self.state.board.render(cursor=None if self.done else self.cursor)]
        black, white = count_pieces(self.state.board)
        lines.append(f"X: {black}, O: {white}")
        if self.done:
            result = self.outcome().result
            lines.append("Draw!" if result == "tie" else f"{result.capitalize()} wins!")
        else:
            lines.append(f"Current player: {self.side.symbol} ({self.side.name.lower()})")
            if self.state.passed:
                lines.append(f"{self.side.opponent.name.lower()} has no move and passes")
        text = "\n".join(lines)
        if mode == "human":
            print(text)
            print()
            return None
        return text
