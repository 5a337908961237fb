"""Tests for the human-vs-agent CLI helpers."""

import pytest

from reversi_rl.agents import OthelloHeuristicAgent, QLearningAgent, RandomAgent
from reversi_rl.cli import play_human_vs_agent as cli
from reversi_rl.config import AppConfig
from reversi_rl.envs.othello import Move


@pytest.mark.parametrize(
    "text,expected",
    [("a1", Move(1, 1)), ("h8", Move(8, 8)), ("c4", Move(3, 4)), ("z1", None), ("a", None), ("wa", None)],
)
def test_parse_square(text, expected):
    assert cli.parse_square(text) == expected


def test_build_agent_types():
    cfg = AppConfig()

    assert isinstance(cli.build_agent("random", None, 0, cfg, learn=False), RandomAgent)
    assert isinstance(cli.build_agent("heuristic", None, 0, cfg, learn=False), OthelloHeuristicAgent)

    agent = cli.build_agent("qlearning", None, 0, cfg, learn=False)
    assert isinstance(agent, QLearningAgent)
    assert agent.epsilon == 0.0
    assert not agent.training


def test_cli_game_against_random_agent(monkeypatch, capsys):
    # Always place at the first legal square, so the game finishes.
    def fake_input(prompt):
        session = sessions[-1]
        return str(session.legal_moves()[0])

    sessions = []
    original = cli.OthelloSession

    def tracking_session(*args, **kwargs):
        sessions.append(original(*args, **kwargs))
        return sessions[-1]

    monkeypatch.setattr(cli, "OthelloSession", tracking_session)
    monkeypatch.setattr("builtins.input", fake_input)

    cli.play_human_vs_agent(agent_type="random", seed=0)

    assert sessions[-1].done
    out = capsys.readouterr().out
    assert "Score:" in out
