"""Agents that choose an action for the player to move."""

from __future__ import annotations

import logging
import random
from typing import Optional

from splendor.engine.alphabeta import AlphaBeta
from splendor.engine.heuristic import Heuristic
from splendor.engine.movegen import candidate_actions, legal_actions
from splendor.game.rules import try_apply
from splendor.game.state import Action, GameState, Skip

logger = logging.getLogger("splendor.agent")


class Agent:
    """Base agent interface."""

    name = "agent"

    def get_action(self, state: GameState) -> Action:
        raise NotImplementedError


class FirstLegalAgent(Agent):
    """Plays the first legal action in generation order, or Skip if there is none."""

    name = "first_legal"

    def get_action(self, state: GameState) -> Action:
        for action in candidate_actions(state):
            if try_apply(state.clone(), action):
                return action
        return Skip()


class RandomAgent(Agent):
    """Plays uniformly random legal actions."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def get_action(self, state: GameState) -> Action:
        return self.rng.choice(legal_actions(state))


class AlphaBetaAgent(Agent):
    """Plays using fixed-depth negamax with alpha-beta pruning."""

    name = "alphabeta"

    def __init__(self, depth: int = 3, heuristic: Optional[Heuristic] = None):
        self.search = AlphaBeta(depth=depth, heuristic=heuristic)

    def get_action(self, state: GameState) -> Action:
        if len(state.players) != 2:
            raise ValueError(f"Alpha-beta search needs exactly 2 players, "
                             f"got {len(state.players)}")
        return self.search.search(state)


AGENT_TYPES = {
    FirstLegalAgent.name: FirstLegalAgent,
    RandomAgent.name: RandomAgent,
    AlphaBetaAgent.name: AlphaBetaAgent,
}


def create_agent(agent_config: dict, heuristic_config: Optional[dict] = None) -> Agent:
    """Create an agent from a configuration dict.

    Args:
        agent_config: Dict with a 'type' key ('alphabeta', 'random' or 'first_legal')
              and type-specific keys ('depth', 'seed').
        heuristic_config: Optional heuristic weights for search agents.
    """
    kind = agent_config.get("type", "alphabeta")
    if kind == AlphaBetaAgent.name:
        return AlphaBetaAgent(depth=agent_config.get("depth", 3),
                              heuristic=Heuristic.from_config(heuristic_config))
    elif kind == RandomAgent.name:
        return RandomAgent(seed=agent_config.get("seed"))
    elif kind == FirstLegalAgent.name:
        return FirstLegalAgent()
    raise ValueError(f"Unknown agent type: {kind!r} (expected one of {sorted(AGENT_TYPES)})")
