"""Negamax search with alpha-beta pruning.

Score convention: every call returns a score from the perspective of the
player to move at that node; the parent negates it. The horizon and
terminal tests only fire when seat 0 is to move, so static values are
always taken from seat 0's side of the table.

Depth decrements on every ply, but the search only stops at the horizon
once control is back with seat 0, so the opponent always gets its reply.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from splendor.engine.heuristic import Heuristic
from splendor.engine.movegen import generate_moves
from splendor.game.state import Action, GameState, Skip

logger = logging.getLogger("splendor.search")

# Terminal values dominate any heuristic value
WIN_SCORE = 1_000_000_000
INFINITY = 2_000_000_000

MoveGenerator = Callable[[GameState], list[tuple[GameState, Action]]]
Evaluator = Callable[[GameState], int]


@dataclass
class SearchStats:
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0
    elapsed: float = 0.0


def _terminal_score(state: GameState) -> int:
    return WIN_SCORE if state.winner() == 0 else -WIN_SCORE


class AlphaBeta:
    """Fixed-depth negamax with alpha-beta pruning, expanding moves in generation order."""

    def __init__(self, depth: int = 3, heuristic: Optional[Heuristic] = None,
                 move_generator: MoveGenerator = generate_moves,
                 evaluate: Optional[Evaluator] = None):
        self.depth = depth
        self.heuristic = heuristic or Heuristic()
        self.move_generator = move_generator
        self.evaluate = evaluate or self._heuristic_value
        self.stats = SearchStats()

    def _heuristic_value(self, state: GameState) -> int:
        return self.heuristic.evaluate(state, seat=0)

    def search(self, state: GameState) -> Action:
        """Run the search and return the best action."""
        score, action = self.search_with_score(state)
        return action

    def search_with_score(self, state: GameState) -> tuple[int, Action]:
        """Run the search and return (score, best action)."""
        self.stats = SearchStats()
        start = time.time()
        score, action = self.negamax(state, self.depth, -INFINITY, INFINITY)
        self.stats.elapsed = time.time() - start
        logger.info(f"depth {self.depth}: score={score} nodes={self.stats.nodes} "
                    f"cutoffs={self.stats.cutoffs} ({self.stats.elapsed:.2f}s)")
        return score, action

    def negamax(self, state: GameState, depth: int, alpha: int,
                beta: int) -> tuple[int, Action]:
        """Best (score, action) for the player to move, within (alpha, beta)."""
        self.stats.nodes += 1

        if state.is_finished():
            self.stats.leaves += 1
            return _terminal_score(state), Skip()
        if state.turn == 0 and depth <= 0:
            self.stats.leaves += 1
            return self.evaluate(state), Skip()

        best_score, best_action = -WIN_SCORE - 1, Skip()
        for child, action in self.move_generator(state):
            score = -self.negamax(child, depth - 1, -beta, -alpha)[0]
            # Strictly greater: the first action in generation order wins ties
            if score > best_score:
                best_score, best_action = score, action
                alpha = max(alpha, score)
                if score >= beta:
                    self.stats.cutoffs += 1
                    break
        return best_score, best_action


def minimax(state: GameState, depth: int,
            move_generator: MoveGenerator = generate_moves,
            evaluate: Optional[Evaluator] = None) -> tuple[int, Action]:
    """Exhaustive negamax without pruning. Slow; used to cross-check AlphaBeta."""
    if evaluate is None:
        heuristic = Heuristic()
        evaluate = lambda s: heuristic.evaluate(s, seat=0)

    if state.is_finished():
        return _terminal_score(state), Skip()
    if state.turn == 0 and depth <= 0:
        return evaluate(state), Skip()

    best_score, best_action = -WIN_SCORE - 1, Skip()
    for child, action in move_generator(state):
        score = -minimax(child, depth - 1, move_generator, evaluate)[0]
        if score > best_score:
            best_score, best_action = score, action
    return best_score, best_action
