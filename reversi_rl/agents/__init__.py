"""Agent modules."""

from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .heuristic_agent import OthelloHeuristicAgent
from .qlearning_agent import QLearningAgent, ValueTable
from ..registry import list_agents, register_agent

if "random" not in list_agents():
    register_agent("random", RandomAgent)
if "heuristic" not in list_agents():
    register_agent("heuristic", OthelloHeuristicAgent)
if "qlearning" not in list_agents():
    register_agent("qlearning", QLearningAgent)

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "OthelloHeuristicAgent",
    "QLearningAgent",
    "ValueTable",
]
