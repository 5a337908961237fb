"""Tests for game and agent registries."""

from __future__ import annotations

from uuid import uuid4

import pytest

from reversi_rl.registry import (
    list_agents,
    list_games,
    make_agent,
    make_game,
    register_agent,
    register_game,
)
import reversi_rl.agents  # noqa: F401 - ensures default agents are registered
import reversi_rl.envs  # noqa: F401 - ensures default games are registered
from reversi_rl.agents import OthelloHeuristicAgent, QLearningAgent
from reversi_rl.envs import OthelloSession


class _StubAgent:
    def __init__(self, name: str, epsilon: float) -> None:
        self.name = name
        self.epsilon = epsilon


def test_register_and_make_agent():
    agent_id = f"stub_agent_{uuid4().hex}"
    register_agent(agent_id, _StubAgent)

    instance = make_agent(agent_id, name="test", epsilon=0.1)
    assert isinstance(instance, _StubAgent)
    assert instance.epsilon == 0.1

    with pytest.raises(ValueError):
        register_agent(agent_id, _StubAgent)


def test_register_game_with_defaults():
    game_id = f"stub_game_{uuid4().hex}"
    register_game(game_id, dict, size=8, reward=1)

    assert make_game(game_id, reward=2) == {"size": 8, "reward": 2}
    with pytest.raises(ValueError):
        register_game(game_id, dict)


def test_registry_lists_include_defaults():
    assert "othello" in list_games()
    assert {"random", "heuristic", "qlearning"}.issubset(set(list_agents()))

    assert isinstance(make_game("othello"), OthelloSession)
    assert isinstance(make_agent("heuristic", seed=1), OthelloHeuristicAgent)
    assert isinstance(make_agent("qlearning", epsilon=0.0), QLearningAgent)


def test_registry_make_missing_entries():
    with pytest.raises(KeyError):
        make_game("missing_game")
    with pytest.raises(KeyError):
        make_agent("missing_agent")
