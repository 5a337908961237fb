"""Configuration schema for the learning opponent and training runs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..envs.othello.config import OthelloConfig, parse_side


@dataclass
class LearnerConfig:
    learning_rate: float = 0.2
    discount_factor: float = 0.8
    epsilon: float = 0.2
    epsilon_decay: float = 1.0
    epsilon_min: float = 0.0
    default_value: float = 1.0
    opponent: str = "random"

    def __post_init__(self) -> None:
        if not 0.0 < self.learning_rate <= 1.0:
            raise ValueError("learning_rate must be in (0, 1]")
        if not 0.0 <= self.discount_factor <= 1.0:
            raise ValueError("discount_factor must be in [0, 1]")
        if not 0.0 <= self.epsilon_min <= self.epsilon <= 1.0:
            raise ValueError("epsilon values must satisfy 0 <= epsilon_min <= epsilon <= 1")

    def agent_kwargs(self) -> Dict[str, Any]:
        params = asdict(self)
        params.pop("opponent")
        return params


@dataclass
class TrainConfig:
    num_episodes: int = 1000
    learner_side: str = "white"
    eval_freq: int = 100
    eval_episodes: int = 20
    save_freq: int = 500
    checkpoint_dir: str = "data/checkpoints"
    log_dir: str = "data/logs"


@dataclass
class AppConfig:
    game: OthelloConfig = field(default_factory=OthelloConfig)
    learner: LearnerConfig = field(default_factory=LearnerConfig)
    train: TrainConfig = field(default_factory=TrainConfig)
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        game = OthelloConfig.from_dict(data.get("game") or {})
        learner = LearnerConfig(**(data.get("learner") or {}))
        train = TrainConfig(**(data.get("train") or {}))
        parse_side(train.learner_side)

        seed = data.get("seed")
        if seed is not None:
            seed = int(seed)

        return cls(game=game, learner=learner, train=train, seed=seed)


def load_config(path: Union[str, Path]) -> AppConfig:
    """Load AppConfig from a YAML file."""
    path = Path(path)
    with path.open() as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data)}")
    return AppConfig.from_dict(data)
