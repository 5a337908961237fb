"""Othello game rules: capture execution and turn control."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from ...errors import GameOverError, IllegalMoveError
from ...games.turn_based_game import TurnBasedGame
from .board import Board, Cell, Move, Side
from .rewards import PositionalRewards
from .utils import count_pieces, get_flips, has_legal_move, legal_moves


@dataclass(frozen=True)
class GameOutcome:
    black: int
    white: int

    @property
    def winner(self) -> Optional[Side]:
        if self.black > self.white:
            return Side.BLACK
        if self.white > self.black:
            return Side.WHITE
        return None

    @property
    def result(self) -> str:
        winner = self.winner
        return "tie" if winner is None else winner.name.lower()


@dataclass(frozen=True)
class OthelloState:
    """
    Immutable game state.

    ``side`` is the side to move; after the game ends it keeps whichever side
    moved last. ``passed`` marks that the opponent of the last mover had no
    reply and the turn stayed put.
    """

    board: Board
    side: Side = Side.BLACK
    done: bool = False
    winner: Optional[int] = None
    last_move: Optional[Move] = None
    last_reward: int = 0
    passed: bool = False

    def outcome(self) -> GameOutcome:
        black, white = count_pieces(self.board)
        return GameOutcome(black=black, white=white)


class OthelloGame(TurnBasedGame[OthelloState, Move]):
    """
    Pure Othello rules without environment: only state transitions.
    """

    def __init__(self, rewards: Optional[PositionalRewards] = None) -> None:
        self.rewards = rewards if rewards is not None else PositionalRewards()

    def initial_state(self, board: Optional[Board] = None, side: Side = Side.BLACK) -> OthelloState:
        """
        Fresh state from the standard opening or a given position.

        A custom position in which neither side can move is returned already
        terminal.
        """
        board = Board.initial() if board is None else board.copy()
        state = OthelloState(board=board, side=side)
        if not has_legal_move(board, side):
            if has_legal_move(board, side.opponent):
                return replace(state, side=side.opponent, passed=True)
            return self._finish(state)
        return state

    def legal_actions(self, state: OthelloState) -> Sequence[Move]:
        if state.done:
            return []
        return legal_moves(state.board, state.side)

    def apply_move(self, board: Board, side: Side, col: int, row: int) -> int:
        """
        Place ``side``'s token at ``(col, row)`` on ``board`` in place.

        Flips every opponent run bounded by the mover's token in all eight
        directions and returns the positional reward.

        Raises:
            IllegalMoveError: If the placement is off the board, occupied, or
                captures nothing. The board is left untouched.
        """
        move = Move(col=col, row=row)
        if not move.in_bounds():
            raise IllegalMoveError(col, row, "off the board")
        if board.get(col, row) != Cell.EMPTY:
            raise IllegalMoveError(col, row, "cell is occupied")
        flips = get_flips(board, side, col, row)
        if not flips:
            raise IllegalMoveError(col, row)

        board.set(col, row, side.token)
        for flipped in flips:
            board.set(flipped.col, flipped.row, side.token)
        return self.rewards.score(board, row - 1, col - 1, len(flips))

    def apply_action(self, state: OthelloState, action: Move) -> OthelloState:
        if state.done:
            raise GameOverError("Cannot apply action in terminal state")

        board = state.board.copy()
        reward = self.apply_move(board, state.side, action.col, action.row)

        mover = state.side
        next_side = mover.opponent
        passed = False
        if not has_legal_move(board, next_side):
            if not has_legal_move(board, mover):
                return self._finish(
                    OthelloState(board=board, side=mover, last_move=action, last_reward=reward)
                )
            next_side = mover
            passed = True

        return OthelloState(
            board=board,
            side=next_side,
            last_move=action,
            last_reward=reward,
            passed=passed,
        )

    def _finish(self, state: OthelloState) -> OthelloState:
        winner = state.outcome().winner
        return replace(state, done=True, winner=0 if winner is None else winner.value)

    def current_player(self, state: OthelloState) -> int:
        return state.side.value

    def is_terminal(self, state: OthelloState) -> bool:
        return state.done

    def winner(self, state: OthelloState) -> Optional[int]:
        return state.winner
