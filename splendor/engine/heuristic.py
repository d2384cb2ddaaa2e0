"""Static evaluation of non-terminal positions.

A player's value is a weighted sum of coins held, cards owned (permanent
production) and an exponential bonus on score, plus wild coins and
nearness to each nobel when the ruleset scores nobels. A position is worth
the seat's value minus the best opponent's value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from splendor.game.state import GameState, Player

# Keeps every heuristic value far below the search's win sentinel
MAX_SCORE_EXPONENT = 24


@dataclass
class PlayerEval:
    """Breakdown of one player's heuristic value."""
    coins: int
    cards: int
    score: int
    wilds: int
    nobels: int

    @property
    def total(self) -> int:
        return self.coins + self.cards + self.score + self.wilds + self.nobels


class Heuristic:
    """Hand-tuned evaluation, monotone in score, coins and cards."""

    def __init__(self, coin_weight: int = 1, card_weight: int = 100,
                 wild_weight: int = 2, nobel_weight: int = 4096):
        self.coin_weight = coin_weight
        self.card_weight = card_weight
        self.wild_weight = wild_weight
        self.nobel_weight = nobel_weight

    @classmethod
    def from_config(cls, config: Optional[dict]) -> Heuristic:
        config = config or {}
        return cls(
            coin_weight=config.get("coin_weight", 1),
            card_weight=config.get("card_weight", 100),
            wild_weight=config.get("wild_weight", 2),
            nobel_weight=config.get("nobel_weight", 4096),
        )

    def evaluate(self, state: GameState, seat: int = 0) -> int:
        """Value of ``state`` for ``seat`` (seat 0 is the maximizing player)."""
        mine = self.player_eval(state, state.players[seat]).total
        theirs = max(self.player_eval(state, p).total
                     for i, p in enumerate(state.players) if i != seat)
        return mine - theirs

    def player_eval(self, state: GameState, player: Player) -> PlayerEval:
        nobels = 0
        wilds = 0
        if state.ruleset.score_nobels:
            wilds = player.wilds * self.wild_weight
            for nobel in state.nobels:
                # Cards still missing; the bonus halves with each one
                missing = player.permanent.shortfall(nobel.cost).total()
                nobels += self.nobel_weight >> missing
        return PlayerEval(
            coins=player.spendable.total() * self.coin_weight,
            cards=player.permanent.total() * self.card_weight,
            score=1 << min(player.score, MAX_SCORE_EXPONENT),
            wilds=wilds,
            nobels=nobels,
        )
