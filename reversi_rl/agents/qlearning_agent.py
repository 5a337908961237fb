"""Q-learning agent implementation (tabular)."""

from __future__ import annotations

import os
import pickle
import random
from typing import Dict, Iterator, List, Optional, Tuple

from ..envs.othello.board import Board, Move, Side
from ..envs.othello.game import OthelloGame
from ..envs.othello.rewards import PositionalRewards
from ..envs.othello.utils import has_legal_move, legal_moves
from ..errors import NoLegalMoveError
from .base_agent import BaseAgent
from .random_agent import RandomAgent

Key = Tuple[bytes, Move]


class ValueTable:
    """
    Action values keyed by ``(board snapshot, move)``.

    Entries are created with ``default_value`` on first lookup and updated in
    place; they are never removed.
    """

    def __init__(self, default_value: float = 1.0):
        self.default_value = default_value
        self._values: Dict[Key, float] = {}

    def get(self, board: Board, move: Move) -> float:
        key = (board.snapshot(), move)
        if key not in self._values:
            self._values[key] = self.default_value
        return self._values[key]

    def peek(self, board: Board, move: Move) -> float:
        """Value without creating an entry."""
        return self._values.get((board.snapshot(), move), self.default_value)

    def set(self, board: Board, move: Move, value: float) -> None:
        self._values[(board.snapshot(), move)] = float(value)

    def best_value(self, board: Board, moves: List[Move]) -> float:
        return max(self.get(board, move) for move in moves)

    def best_moves(self, board: Board, moves: List[Move]) -> List[Move]:
        best = self.best_value(board, moves)
        return [move for move in moves if self.get(board, move) == best]

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: Key) -> bool:
        return key in self._values

    def items(self) -> Iterator[Tuple[Key, float]]:
        return iter(self._values.items())

    def to_dict(self) -> Dict[Tuple[bytes, Tuple[int, int]], float]:
        return {(snap, (move.col, move.row)): value for (snap, move), value in self._values.items()}

    @classmethod
    def from_dict(
        cls,
        data: Dict[Tuple[bytes, Tuple[int, int]], float],
        default_value: float = 1.0,
    ) -> "ValueTable":
        table = cls(default_value=default_value)
        for (snap, (col, row)), value in data.items():
            table._values[(snap, Move(col=col, row=row))] = float(value)
        return table


class QLearningAgent(BaseAgent):
    """
    Tabular Q-learning agent.

    Chooses moves epsilon-greedily over a :class:`ValueTable` and learns from
    simulated rollouts: after its own move, an internal opponent policy replies
    on a scratch board until the learner has a choice again or the game ends.
    """

    def __init__(
        self,
        value_table: Optional[ValueTable] = None,
        learning_rate: float = 0.2,
        discount_factor: float = 0.8,
        epsilon: float = 0.2,
        epsilon_decay: float = 1.0,
        epsilon_min: float = 0.0,
        default_value: float = 1.0,
        rewards: Optional[PositionalRewards] = None,
        opponent: Optional[BaseAgent] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize Q-learning agent.

        Args:
            value_table: Table to read and update; a new one is created if omitted
            learning_rate: Learning rate (alpha)
            discount_factor: Discount factor (gamma)
            epsilon: Initial epsilon for epsilon-greedy
            epsilon_decay: Multiplicative epsilon decay applied by :meth:`decay_epsilon`
            epsilon_min: Minimum epsilon value
            default_value: Initial value of unseen entries when creating a table
            rewards: Reward tiers used when simulating moves
            opponent: Policy for simulated replies (random by default)
            seed: Random seed
        """
        self.value_table = value_table if value_table is not None else ValueTable(default_value)
        self.learning_rate = learning_rate
        self.discount_factor = discount_factor
        self.epsilon = epsilon
        self.epsilon_decay = epsilon_decay
        self.epsilon_min = epsilon_min

        self._rng = random.Random(seed)
        self._game = OthelloGame(rewards=rewards)
        if opponent is None:
            opponent = RandomAgent(seed=None if seed is None else seed + 1)
        self.opponent = opponent
        self.training = True

    def act(self, board: Board, side: Side, deterministic: bool = False) -> Move:
        """Select a move using the epsilon-greedy policy."""
        moves = legal_moves(board, side)
        if not moves:
            raise NoLegalMoveError(f"{side.name.lower()} has no legal moves")

        explore = not deterministic and self.training and self._rng.random() < self.epsilon
        if explore:
            return self._rng.choice(moves)

        return self._rng.choice(self.value_table.best_moves(board, moves))

    def select_move(self, board: Board, side: Side) -> Optional[Move]:
        if self.training:
            return self.choose_and_learn(board, side)
        return super().select_move(board, side)

    def choose_and_learn(self, board: Board, side: Side) -> Optional[Move]:
        """
        Pick a move for ``board`` and update its value from a simulated rollout.

        ``board`` is not modified; the caller commits the returned move.
        Returns ``None`` if ``side`` has no legal move.
        """
        if not has_legal_move(board, side):
            return None
        move = self.act(board, side)
        self.learn(board, side, move)
        return move

    def learn(self, board: Board, side: Side, move: Optional[Move] = None) -> float:
        """
        One temporal-difference update for ``(board, move)``.

        Q(s,a) += alpha * (r + gamma * max_a' Q(s',a') - Q(s,a)), where s' is
        the first position after ``move`` in which the learner can move again.
        If the game ends first, the target is r alone.

        Returns:
            The updated value.
        """
        if move is None:
            move = self.act(board, side)

        scratch = board.copy()
        reward = self._game.apply_move(scratch, side, move.col, move.row)
        next_value = self._rollout(scratch, side)

        current_q = self.value_table.get(board, move)
        if next_value is None:
            target_q = reward
        else:
            target_q = reward + self.discount_factor * next_value

        new_q = current_q + self.learning_rate * (target_q - current_q)
        self.value_table.set(board, move, new_q)
        return new_q

    def _rollout(self, scratch: Board, side: Side) -> Optional[float]:
        """
        Play opponent replies on ``scratch`` until ``side`` has a choice.

        Returns the best value for ``side`` on the reached position, or
        ``None`` if neither side can move.
        """
        opponent = side.opponent
        while True:
            if has_legal_move(scratch, opponent):
                reply = self.opponent.act(scratch, opponent)
                self._game.apply_move(scratch, opponent, reply.col, reply.row)
                if has_legal_move(scratch, side):
                    break
                continue
            if has_legal_move(scratch, side):
                break
            return None
        return self.value_table.best_value(scratch, legal_moves(scratch, side))

    def decay_epsilon(self) -> float:
        self.epsilon = max(self.epsilon_min, self.epsilon * self.epsilon_decay)
        return self.epsilon

    def train(self) -> None:
        """Set agent to training mode."""
        self.training = True

    def eval(self) -> None:
        """Set agent to evaluation mode."""
        self.training = False

    def save(self, path: str) -> None:
        """
        Save value table to file.

        Args:
            path: Path to save file
        """
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, "wb") as f:
            pickle.dump({
                "values": self.value_table.to_dict(),
                "default_value": self.value_table.default_value,
                "epsilon": self.epsilon,
                "learning_rate": self.learning_rate,
                "discount_factor": self.discount_factor,
            }, f)

    @classmethod
    def load(cls, path: str, **kwargs: object) -> "QLearningAgent":
        """
        Load value table from file and return a new agent instance.
        """
        with open(path, "rb") as f:
            data = pickle.load(f)

        table = ValueTable.from_dict(data["values"], default_value=data.get("default_value", 1.0))
        agent = cls(value_table=table, **kwargs)
        agent.epsilon = data.get("epsilon", agent.epsilon)
        agent.learning_rate = data.get("learning_rate", agent.learning_rate)
        agent.discount_factor = data.get("discount_factor", agent.discount_factor)
        return agent
