"""CLI for playing Othello against an agent."""

from __future__ import annotations

import sys
import time
from typing import Literal, Optional

import tyro

from ..agents import BaseAgent, OthelloHeuristicAgent, QLearningAgent, RandomAgent
from ..config import AppConfig, load_config
from ..envs.othello import Action, InputEvent, Move, OthelloSession
from ..errors import OthelloError

KEYS = {
    "w": Action.UP,
    "a": Action.LEFT,
    "s": Action.DOWN,
    "d": Action.RIGHT,
    "f": Action.FIRE,
    "": Action.NOOP,
}


def parse_square(text: str) -> Optional[Move]:
    """Parse algebraic notation like ``c4`` into a move."""
    if len(text) != 2 or text[0] not in "abcdefgh" or not text[1].isdigit():
        return None
    return Move(col="abcdefgh".index(text[0]) + 1, row=int(text[1]))


def build_agent(
    agent_type: str,
    agent_path: Optional[str],
    seed: int,
    cfg: AppConfig,
    learn: bool,
) -> BaseAgent:
    if agent_type == "random":
        return RandomAgent(seed=seed)
    if agent_type == "heuristic":
        return OthelloHeuristicAgent(seed=seed, rewards=cfg.game.rewards)

    kwargs = dict(cfg.learner.agent_kwargs(), rewards=cfg.game.rewards, seed=seed)
    if agent_path is not None:
        kwargs.pop("default_value")
        agent = QLearningAgent.load(agent_path, **kwargs)
    else:
        agent = QLearningAgent(**kwargs)
    if not learn:
        agent.epsilon = 0.0  # greedy policy against a human
        agent.eval()
    return agent


def play_human_vs_agent(
    agent_type: Literal["random", "heuristic", "qlearning"] = "qlearning",
    agent_path: Optional[str] = None,
    config_path: Optional[str] = None,
    learn: bool = True,
    seed: int = 42,
):
    """
    Play a game against an agent.

    Move the cursor with w/a/s/d and place a token with f, or type a square
    such as ``c4``. ``q`` quits.

    Args:
        agent_type: Type of agent ('random', 'heuristic' or 'qlearning')
        agent_path: Path to a saved value table for the qlearning agent
        config_path: YAML config; defaults are used if omitted
        learn: Whether the qlearning agent keeps learning during the game
        seed: Random seed
    """
    cfg = load_config(config_path) if config_path else AppConfig()
    session = OthelloSession(config=cfg.game)
    agent = build_agent(agent_type, agent_path, seed, cfg, learn)

    print("=" * 50)
    print("Othello - Human vs Agent")
    print("=" * 50)
    print(f"Agent type: {agent_type}")
    print(f"Human plays: {session.human_side.name.lower()} ({session.human_side.symbol})")
    print("=" * 50)
    print()

    while not session.done:
        session.render()

        if session.side != session.human_side:
            print("Agent's turn...")
            time.sleep(cfg.game.opponent_delay)
            move = session.play_opponent(agent)
            print(f"Agent played: {move}")
            print()
            continue

        command = input("Move (w/a/s/d, f to place, or a square like c4): ").strip().lower()
        if command == "q":
            print("Bye!")
            return
        square = parse_square(command)
        if square is not None:
            try:
                session.play(square.col, square.row)
            except OthelloError as exc:
                print(f"{exc}. Legal moves: {', '.join(str(m) for m in session.legal_moves())}")
            continue
        if command not in KEYS:
            print("Unknown command!")
            continue

        before = session.state
        session.handle_input(InputEvent.from_action(KEYS[command]))
        if KEYS[command] == Action.FIRE and session.state is before:
            print("You can't place a token there!")

    session.render()
    result = session.outcome().result
    if result == "tie":
        print("It's a draw!")
    elif result == session.human_side.name.lower():
        print("You win!")
    else:
        print("Agent wins!")
    print(f"Score: {session.score}")


def main() -> None:
    try:
        tyro.cli(play_human_vs_agent)
    except (KeyboardInterrupt, EOFError):
        print()
        sys.exit(0)


if __name__ == "__main__":
    main()
