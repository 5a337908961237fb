"""Config package exports."""

from .schema import AppConfig, LearnerConfig, OthelloConfig, TrainConfig, load_config

__all__ = [
    "AppConfig",
    "LearnerConfig",
    "OthelloConfig",
    "TrainConfig",
    "load_config",
]
