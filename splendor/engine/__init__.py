"""Search engine: move generation, heuristic evaluation, alpha-beta, agents."""

from splendor.engine.movegen import generate_moves, legal_actions
from splendor.engine.heuristic import Heuristic
from splendor.engine.alphabeta import AlphaBeta, SearchStats, minimax, WIN_SCORE
from splendor.engine.agents import (
    Agent, AlphaBetaAgent, FirstLegalAgent, RandomAgent, create_agent,
)

__all__ = [
    "generate_moves", "legal_actions", "Heuristic",
    "AlphaBeta", "SearchStats", "minimax", "WIN_SCORE",
    "Agent", "AlphaBetaAgent", "FirstLegalAgent", "RandomAgent", "create_agent",
]
