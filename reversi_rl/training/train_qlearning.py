"""Training script for the Q-learning opponent."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Tuple

import tyro

from ..agents import BaseAgent, QLearningAgent
from ..config import load_config
from ..envs.othello.board import Side
from ..envs.othello.config import parse_side
from ..envs.othello.game import OthelloGame, OthelloState
from ..envs.othello.rewards import PositionalRewards
from ..errors import NoLegalMoveError
from ..registry import make_agent
from ..utils import MetricsLogger


@dataclass
class EpisodeResult:
    state: OthelloState
    length: int
    rewards: Dict[Side, int] = field(default_factory=dict)

    def won(self, side: Side) -> bool:
        return self.state.winner == side.value


def play_game(game: OthelloGame, agents: Dict[Side, BaseAgent]) -> EpisodeResult:
    """
    Play one game from the opening position.

    Each agent receives a copy of the board; moves are committed through
    ``game.apply_action``.
    """
    state = game.initial_state()
    rewards = {Side.BLACK: 0, Side.WHITE: 0}
    length = 0
    while not state.done:
        side = state.side
        move = agents[side].select_move(state.board.copy(), side)
        if move is None:
            raise NoLegalMoveError(f"{side.name.lower()} is to move but has no legal move")
        state = game.apply_action(state, move)
        rewards[side] += state.last_reward
        length += 1
    return EpisodeResult(state=state, length=length, rewards=rewards)


def make_opponent(opponent_type: str, seed: Optional[int], rewards: PositionalRewards) -> BaseAgent:
    if opponent_type == "heuristic":
        return make_agent("heuristic", seed=seed, rewards=rewards)
    return make_agent(opponent_type, seed=seed)


def train_qlearning(
    num_episodes: int = 1000,
    learning_rate: float = 0.2,
    discount_factor: float = 0.8,
    epsilon: float = 0.2,
    epsilon_decay: float = 1.0,
    epsilon_min: float = 0.0,
    default_value: float = 1.0,
    opponent_type: Literal["random", "heuristic"] = "random",
    learner_side: Literal["black", "white"] = "white",
    eval_freq: int = 100,
    eval_episodes: int = 20,
    save_freq: int = 500,
    checkpoint_dir: str = "data/checkpoints",
    log_dir: str = "data/logs",
    seed: Optional[int] = 42,
    rewards: Optional[PositionalRewards] = None,
    verbose: bool = True,
) -> QLearningAgent:
    """
    Train the Q-learning opponent by playing full games.

    The learner updates its table from simulated rollouts on every move it
    makes; the opponent plays the live replies.

    Args:
        num_episodes: Number of training games
        learning_rate: Learning rate (alpha)
        discount_factor: Discount factor (gamma)
        epsilon: Initial epsilon
        epsilon_decay: Epsilon decay applied after each game
        epsilon_min: Minimum epsilon
        default_value: Initial value of unseen table entries
        opponent_type: Opponent for live and simulated replies
        learner_side: Side the learner plays
        eval_freq: Evaluation frequency in games (0 disables)
        eval_episodes: Number of games per evaluation
        save_freq: Checkpoint save frequency in games (0 disables)
        checkpoint_dir: Directory for checkpoints
        log_dir: Directory for metrics CSV
        seed: Random seed
        rewards: Positional reward tiers

    Returns:
        The trained agent.
    """
    os.makedirs(checkpoint_dir, exist_ok=True)

    rewards = rewards if rewards is not None else PositionalRewards()
    game = OthelloGame(rewards=rewards)
    side = parse_side(learner_side)

    def _seed(offset: int) -> Optional[int]:
        return None if seed is None else seed + offset

    learning_agent = QLearningAgent(
        learning_rate=learning_rate,
        discount_factor=discount_factor,
        epsilon=epsilon,
        epsilon_decay=epsilon_decay,
        epsilon_min=epsilon_min,
        default_value=default_value,
        rewards=rewards,
        opponent=make_opponent(opponent_type, _seed(1), rewards),
        seed=seed,
    )
    opponent = make_opponent(opponent_type, _seed(2), rewards)
    agents = {side: learning_agent, side.opponent: opponent}

    if verbose:
        print("Starting Q-learning training...")
        print(f"Episodes: {num_episodes}")
        print(f"Learning rate: {learning_rate}")
        print(f"Discount factor: {discount_factor}")
        print(f"Initial epsilon: {epsilon}")
        print(f"Learner plays: {side.name.lower()}")
        print(f"Opponent: {opponent_type}")
        print()

    with MetricsLogger(log_dir=log_dir) as logger:
        for episode in range(num_episodes):
            learning_agent.train()
            result = play_game(game, agents)

            logger.log_dict({
                "episode_reward": result.rewards[side],
                "episode_length": result.length,
                "epsilon": learning_agent.epsilon,
                "won": float(result.won(side)),
                "table_size": len(learning_agent.value_table),
            }, step=episode)
            learning_agent.decay_epsilon()
            logger.increment_episode()

            if eval_freq and (episode + 1) % eval_freq == 0:
                win_rate, draw_rate, loss_rate = evaluate_agent(
                    learning_agent, opponent, eval_episodes, side, game=game
                )
                logger.log_dict({
                    "win_rate": win_rate,
                    "draw_rate": draw_rate,
                    "loss_rate": loss_rate,
                }, step=episode)
                if verbose:
                    print(
                        f"Episode {episode + 1}/{num_episodes} | "
                        f"Win rate: {win_rate:.2%} | "
                        f"Draw rate: {draw_rate:.2%} | "
                        f"Loss rate: {loss_rate:.2%} | "
                        f"Epsilon: {learning_agent.epsilon:.4f} | "
                        f"Table: {len(learning_agent.value_table)}"
                    )

            if save_freq and (episode + 1) % save_freq == 0:
                checkpoint_path = os.path.join(checkpoint_dir, f"qlearning_episode_{episode + 1}.pkl")
                learning_agent.save(checkpoint_path)
                if verbose:
                    print(f"Checkpoint saved: {checkpoint_path}")

    final_path = os.path.join(checkpoint_dir, "qlearning_final.pkl")
    learning_agent.save(final_path)
    if verbose:
        print(f"\nTraining completed! Final model saved: {final_path}")
    return learning_agent


def evaluate_agent(
    agent: QLearningAgent,
    opponent: BaseAgent,
    num_episodes: int,
    side: Side,
    game: Optional[OthelloGame] = None,
) -> Tuple[float, float, float]:
    """
    Evaluate the greedy policy of ``agent`` against ``opponent``.

    Returns:
        Tuple of (win_rate, draw_rate, loss_rate)
    """
    if num_episodes <= 0:
        return 0.0, 0.0, 0.0
    game = game if game is not None else OthelloGame()

    agent.eval()
    wins = draws = losses = 0
    try:
        for _ in range(num_episodes):
            result = play_game(game, {side: agent, side.opponent: opponent})
            if result.state.winner == 0:
                draws += 1
            elif result.won(side):
                wins += 1
            else:
                losses += 1
    finally:
        agent.train()

    return wins / num_episodes, draws / num_episodes, losses / num_episodes


def train_from_config(config_path: str = "configs/othello.yaml", verbose: bool = True) -> QLearningAgent:
    """Train with settings from a YAML config file."""
    cfg = load_config(config_path)
    return train_qlearning(
        num_episodes=cfg.train.num_episodes,
        opponent_type=cfg.learner.opponent,
        learner_side=cfg.train.learner_side,
        eval_freq=cfg.train.eval_freq,
        eval_episodes=cfg.train.eval_episodes,
        save_freq=cfg.train.save_freq,
        checkpoint_dir=cfg.train.checkpoint_dir,
        log_dir=cfg.train.log_dir,
        seed=cfg.seed,
        rewards=cfg.game.rewards,
        verbose=verbose,
        **cfg.learner.agent_kwargs(),
    )


def main() -> None:
    tyro.extras.subcommand_cli_from_dict(
        {
            "train": train_qlearning,
            "from-config": train_from_config,
        }
    )


if __name__ == "__main__":
    main()
