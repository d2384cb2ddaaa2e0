"""Run a match between agents reached through channels."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence

from splendor.arena.protocol import Channel, ProtocolError
from splendor.game.board import new_game, render_state
from splendor.game.errors import IllegalActionError
from splendor.game.notation import action_to_text
from splendor.game.rules import apply_action
from splendor.game.state import GameState

logger = logging.getLogger("splendor.host")


@dataclass
class MatchResult:
    """Outcome of one match."""
    players: list[str]
    winner: Optional[int]  # None if the ply cap was reached first
    scores: list[int]
    plies: int
    ruleset: str
    actions: list[str] = field(default_factory=list)
    elapsed_sec: float = 0.0

    @property
    def finished(self) -> bool:
        return self.winner is not None

    def to_dict(self) -> dict:
        return {
            "players": self.players,
            "winner": self.winner,
            "scores": self.scores,
            "plies": self.plies,
            "ruleset": self.ruleset,
            "actions": self.actions,
            "elapsed_sec": self.elapsed_sec,
        }

    @classmethod
    def from_dict(cls, d: dict) -> MatchResult:
        return cls(
            players=list(d["players"]),
            winner=d["winner"],
            scores=list(d["scores"]),
            plies=d["plies"],
            ruleset=d.get("ruleset", "standard"),
            actions=list(d.get("actions", [])),
            elapsed_sec=d.get("elapsed_sec", 0.0),
        )


def play_match(channels: Sequence[Channel], state: Optional[GameState] = None,
               max_plies: int = 400) -> MatchResult:
    """Play one match, asking the channel of the seat to move for each action.

    Raises:
        ProtocolError: If an agent fails to answer or answers with an illegal
            action. The state is not modified by the rejected action.
    """
    if state is None:
        state = new_game([c.name for c in channels])
    if len(channels) != len(state.players):
        raise ValueError(f"{len(channels)} channels for {len(state.players)} players")

    start = time.time()
    actions: list[str] = []

    while not state.is_finished() and len(actions) < max_plies:
        seat = state.turn
        logger.debug(f"\n{render_state(state)}")
        action = channels[seat].request(state.clone())
        text = action_to_text(action)
        try:
            apply_action(state, action)
        except IllegalActionError as e:
            raise ProtocolError(
                f"Seat {seat} ({channels[seat].name}) played illegal action "
                f"'{text}': {e}") from e
        actions.append(text)
        logger.info(f"[{len(actions):3d}] {state.players[seat].name}: {text}")

    winner = state.winner() if state.is_finished() else None
    result = MatchResult(
        players=[p.name for p in state.players],
        winner=winner,
        scores=[p.score for p in state.players],
        plies=len(actions),
        ruleset=state.ruleset.name,
        actions=actions,
        elapsed_sec=time.time() - start,
    )
    if winner is None:
        logger.warning(f"Match stopped after {max_plies} plies without a winner")
    else:
        logger.info(f"{result.players[winner]} wins with scores {result.scores} "
                    f"after {result.plies} plies")
    return result
