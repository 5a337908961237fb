"""Training loops."""

from .train_qlearning import EpisodeResult, evaluate_agent, play_game, train_qlearning

__all__ = ["EpisodeResult", "evaluate_agent", "play_game", "train_qlearning"]
