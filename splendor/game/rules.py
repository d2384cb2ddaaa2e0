"""Action validation and execution, purchase settlement, end-of-game detection.

Every action is validated completely before the state is touched, so a
rejected action (IllegalActionError) leaves the state exactly as it was.
"""

from __future__ import annotations

from typing import Optional

from splendor.game.errors import IllegalActionError
from splendor.game.resources import (
    PICK_THREE_CANDIDATES, ResourceKind, ResourceMap,
)
from splendor.game.state import (
    Action, Card, GameState, PickThree, PickTwo, Player, Purchase,
    PurchaseReserved, Reserve, Skip,
)

# A two-coin take must leave at least two coins of that kind behind
PICK_TWO_MIN_BANK = 4


def can_purchase(player: Player, cost: ResourceMap) -> bool:
    """Whether cost minus permanent holdings is covered by spendable plus wild coins."""
    return player.can_purchase(cost)


def settle_purchase(player: Player, cost: ResourceMap, state: GameState):
    """Pay ``cost`` for ``player``: spendable coins first, wild coins for the rest.

    Spent coins go back to the bank, spent wild coins back to the wild bank.
    """
    if not player.can_purchase(cost):
        raise IllegalActionError("You don't have enough resources")
    for kind, amount in cost:
        need = max(0, amount - player.permanent[kind])
        have = player.spendable[kind]
        if have >= need:
            player.spendable[kind] = have - need
            state.coins[kind] = state.coins[kind] + need
        else:
            short = need - have
            player.wilds -= short
            state.wilds += short
            state.coins[kind] = state.coins[kind] + have
            player.spendable[kind] = 0


def _visible_card(state: GameState, deck: int, card: int) -> Card:
    """Look up a face-up card, raising IllegalActionError if it is not addressable."""
    if not 0 <= deck < len(state.decks):
        raise IllegalActionError(f"Invalid deck {deck}")
    if card >= state.ruleset.visible_cards:
        raise IllegalActionError(f"Card {card} of deck {deck} is not face up")
    if not 0 <= card < len(state.decks[deck]):
        raise IllegalActionError(f"Invalid card {card} in deck {deck}")
    return state.decks[deck][card]


def _gain_card(state: GameState, player: Player, card: Card):
    player.permanent[card.produces] = player.permanent[card.produces] + 1
    player.score += card.score
    if state.ruleset.score_nobels:
        award_nobel(state, player)


def award_nobel(state: GameState, player: Player) -> bool:
    """Give ``player`` the first nobel their card holdings cover (at most one).

    Returns True if a nobel was awarded.
    """
    for i, nobel in enumerate(state.nobels):
        if player.permanent.shortfall(nobel.cost).total() == 0:
            player.score += nobel.score
            del state.nobels[i]
            return True
    return False


def apply_action(state: GameState, action: Action) -> GameState:
    """Apply an action for the player whose turn it is and advance the turn.

    This modifies the state in place, so clone first if needed.
    Raises IllegalActionError (state untouched) if the action is not legal.
    """
    player = state.players[state.turn]
    rules = state.ruleset

    if isinstance(action, PickThree):
        kinds = (action.one, action.two, action.three)
        if len(set(kinds)) != 3:
            raise IllegalActionError("No duplicate kind in a three-coin pick")
        for kind in kinds:
            if state.coins[kind] == 0:
                raise IllegalActionError(f"No coin of {kind.label} left")
        for kind in kinds:
            state.coins[kind] = state.coins[kind] - 1
            player.spendable[kind] = player.spendable[kind] + 1

    elif isinstance(action, PickTwo):
        color = action.color
        if state.coins[color] < PICK_TWO_MIN_BANK:
            raise IllegalActionError(
                f"At least two coins of {color.label} should remain")
        state.coins[color] = state.coins[color] - 2
        player.spendable[color] = player.spendable[color] + 2

    elif isinstance(action, Purchase):
        card = _visible_card(state, action.deck, action.card)
        settle_purchase(player, card.cost, state)
        del state.decks[action.deck][action.card]
        _gain_card(state, player, card)

    elif isinstance(action, PurchaseReserved):
        if not rules.allow_purchase_reserved:
            raise IllegalActionError(
                f"Reserved cards cannot be purchased in the {rules.name} ruleset")
        if not 0 <= action.index < len(player.reserved):
            raise IllegalActionError(f"Invalid reserved index {action.index}")
        card = player.reserved[action.index]
        settle_purchase(player, card.cost, state)
        del player.reserved[action.index]
        _gain_card(state, player, card)

    elif isinstance(action, Reserve):
        card = _visible_card(state, action.deck, action.card)
        del state.decks[action.deck][action.card]
        if rules.reserve_to_hand:
            player.reserved.append(card)
            if rules.reserve_grants_wild and state.wilds > 0:
                state.wilds -= 1
                player.wilds += 1
        else:
            # Prototype ruleset: the card is scored immediately and discarded
            player.score += card.score

    elif isinstance(action, Skip):
        pass

    else:
        raise IllegalActionError(f"Unknown action type: {type(action).__name__}")

    state.advance_turn()
    return state


def try_apply(state: GameState, action: Action) -> bool:
    """Apply ``action`` in place, returning False instead of raising if illegal."""
    try:
        apply_action(state, action)
    except IllegalActionError:
        return False
    return True


def visible_slots(state: GameState) -> list[tuple[int, int]]:
    """All addressable (deck, slot) pairs of face-up cards."""
    window = state.ruleset.visible_cards
    return [(d, c) for d, deck in enumerate(state.decks)
            for c in range(min(window, len(deck)))]


def pick_two_candidates(state: GameState) -> list[ResourceKind]:
    """Kinds with enough coins in the bank for a two-coin take."""
    return [kind for kind, count in state.coins if count >= PICK_TWO_MIN_BANK]


def pick_three_candidates(state: GameState) -> tuple[tuple[ResourceKind, ResourceKind, ResourceKind], ...]:
    """The fixed list of distinct triples; bank availability is checked on apply."""
    return PICK_THREE_CANDIDATES


def check_winner(state: GameState) -> tuple[bool, Optional[int]]:
    """Check if the game is over.

    Returns (is_done, winner_seat) where winner_seat is None while the game runs.
    """
    if state.is_finished():
        return True, state.winner()
    return False, None
