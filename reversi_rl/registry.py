"""Registries for game sessions and opponent policies."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Tuple

SessionFactory = Callable[..., Any]
AgentFactory = Callable[..., Any]

_GAME_REGISTRY: Dict[str, Tuple[SessionFactory, Dict[str, Any]]] = {}
_AGENT_REGISTRY: Dict[str, AgentFactory] = {}


def register_game(game_id: str, entry_point: SessionFactory, **default_kwargs: Any) -> None:
    """Register a game session constructor with default keyword arguments."""
    if game_id in _GAME_REGISTRY:
        raise ValueError(f"Game id '{game_id}' is already registered.")
    _GAME_REGISTRY[game_id] = (entry_point, dict(default_kwargs))


def make_game(game_id: str, **overrides: Any) -> Any:
    if game_id not in _GAME_REGISTRY:
        raise KeyError(f"Game id '{game_id}' is not registered.")
    entry_point, defaults = _GAME_REGISTRY[game_id]
    return entry_point(**{**defaults, **overrides})


def list_games() -> Iterable[str]:
    return tuple(_GAME_REGISTRY.keys())


def register_agent(agent_id: str, ctor: AgentFactory) -> None:
    """Register an opponent policy constructor."""
    if agent_id in _AGENT_REGISTRY:
        raise ValueError(f"Agent id '{agent_id}' is already registered.")
    _AGENT_REGISTRY[agent_id] = ctor


def make_agent(agent_id: str, **kwargs: Any) -> Any:
    if agent_id not in _AGENT_REGISTRY:
        raise KeyError(f"Agent id '{agent_id}' is not registered.")
    return _AGENT_REGISTRY[agent_id](**kwargs)


def list_agents() -> Iterable[str]:
    return tuple(_AGENT_REGISTRY.keys())
