"""Splendor rules engine: resources, state, rules, setup, notation."""

from splendor.game.errors import IllegalActionError, MalformedInputError
from splendor.game.resources import ResourceKind, ResourceMap, PICK_THREE_CANDIDATES
from splendor.game.state import (
    GameState, Player, Card, Nobel, Ruleset, RULESETS,
    Action, PickThree, PickTwo, Purchase, PurchaseReserved, Reserve, Skip,
)
from splendor.game.rules import apply_action, try_apply, check_winner, can_purchase
from splendor.game.board import new_game, render_state
from splendor.game.notation import (
    action_to_json, action_from_json, action_to_text, text_to_action,
    state_to_json, state_from_json,
)

__all__ = [
    "IllegalActionError", "MalformedInputError",
    "ResourceKind", "ResourceMap", "PICK_THREE_CANDIDATES",
    "GameState", "Player", "Card", "Nobel", "Ruleset", "RULESETS",
    "Action", "PickThree", "PickTwo", "Purchase", "PurchaseReserved", "Reserve", "Skip",
    "apply_action", "try_apply", "check_winner", "can_purchase",
    "new_game", "render_state",
    "action_to_json", "action_from_json", "action_to_text", "text_to_action",
    "state_to_json", "state_from_json",
]
