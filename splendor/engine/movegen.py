"""Move generation by speculative application.

Each candidate action is applied to a clone of the state; the pair is kept
only if the rules engine accepts it. Legality therefore lives in exactly one
place (rules.apply_action).

Generation order (alpha-beta pruning is sensitive to it):
  1. Purchase of every face-up card
  2. PurchaseReserved of every reserved card
  3. PickThree over the fixed triples
  4. PickTwo over kinds with enough coins
  5. Reserve of every face-up card
If none of these is legal, Skip is offered so the move list is never empty.
"""

from __future__ import annotations

from typing import Iterator

from splendor.game.rules import (
    pick_three_candidates, pick_two_candidates, try_apply, visible_slots,
)
from splendor.game.state import (
    Action, GameState, PickThree, PickTwo, Purchase, PurchaseReserved,
    Reserve, Skip,
)


def candidate_actions(state: GameState) -> Iterator[Action]:
    """Yield every action worth trying, in generation order."""
    slots = visible_slots(state)
    for deck, card in slots:
        yield Purchase(deck, card)
    for index in range(len(state.current_player.reserved)):
        yield PurchaseReserved(index)
    for one, two, three in pick_three_candidates(state):
        yield PickThree(one, two, three)
    for color in pick_two_candidates(state):
        yield PickTwo(color)
    for deck, card in slots:
        yield Reserve(deck, card)


def generate_moves(state: GameState) -> list[tuple[GameState, Action]]:
    """All legal (resulting_state, action) pairs from ``state``."""
    moves = []
    for action in candidate_actions(state):
        child = state.clone()
        if try_apply(child, action):
            moves.append((child, action))

    if not moves:
        child = state.clone()
        try_apply(child, Skip())
        moves.append((child, Skip()))
    return moves


def legal_actions(state: GameState) -> list[Action]:
    """Just the actions of generate_moves."""
    return [action for _, action in generate_moves(state)]
