"""Reversi/Othello rule engine with a tabular Q-learning opponent."""

__version__ = "0.1.0"
