"""Action notation: the tagged JSON wire format and a short text form.

Wire format (one JSON value per action):
  {"PickThree": {"one": "Red", "two": "Green", "three": "Blue"}}
  {"PickTwo": {"color": "Red"}}
  {"Purchase": {"deck": 0, "card": 1}}
  {"PurchaseReserved": {"index": 0}}
  {"Reserve": {"deck": 0, "card": 1}}
  "Skip"

Text form (logs and match records):
  take3 r g u    take2 r    buy 0.1    buyres 0    reserve 0.1    skip
"""

from __future__ import annotations

import json
import re

from splendor.game.errors import MalformedInputError
from splendor.game.resources import RESOURCE_CODES, RESOURCE_LETTERS, ResourceKind
from splendor.game.state import (
    Action, GameState, PickThree, PickTwo, Purchase, PurchaseReserved,
    Reserve, Skip,
)


def action_to_dict(action: Action):
    """Convert an action to its tagged JSON-compatible value."""
    if isinstance(action, PickThree):
        return {"PickThree": {"one": action.one.label, "two": action.two.label,
                              "three": action.three.label}}
    elif isinstance(action, PickTwo):
        return {"PickTwo": {"color": action.color.label}}
    elif isinstance(action, Purchase):
        return {"Purchase": {"deck": action.deck, "card": action.card}}
    elif isinstance(action, PurchaseReserved):
        return {"PurchaseReserved": {"index": action.index}}
    elif isinstance(action, Reserve):
        return {"Reserve": {"deck": action.deck, "card": action.card}}
    elif isinstance(action, Skip):
        return "Skip"
    raise ValueError(f"Unknown action type: {type(action)}")


def _index(value) -> int:
    # bool is an int subclass; reject it along with floats and strings
    if not isinstance(value, int) or isinstance(value, bool):
        raise MalformedInputError(f"Expected an integer index, got {value!r}")
    return value


def action_from_dict(data) -> Action:
    """Parse a tagged action value.

    Raises:
        MalformedInputError: If the value is not a well-formed action.
    """
    if data == "Skip":
        return Skip()
    if not isinstance(data, dict) or len(data) != 1:
        raise MalformedInputError(f"Invalid action: {data!r}")

    (tag, body), = data.items()
    if not isinstance(body, dict):
        raise MalformedInputError(f"Invalid payload for {tag}: {body!r}")
    try:
        if tag == "PickThree":
            return PickThree(ResourceKind.from_label(body["one"]),
                             ResourceKind.from_label(body["two"]),
                             ResourceKind.from_label(body["three"]))
        if tag == "PickTwo":
            return PickTwo(ResourceKind.from_label(body["color"]))
        if tag == "Purchase":
            return Purchase(_index(body["deck"]), _index(body["card"]))
        if tag == "PurchaseReserved":
            return PurchaseReserved(_index(body["index"]))
        if tag == "Reserve":
            return Reserve(_index(body["deck"]), _index(body["card"]))
    except (KeyError, AttributeError, ValueError) as e:
        raise MalformedInputError(f"Invalid payload for {tag}: {e}") from e
    raise MalformedInputError(f"Unknown action tag: {tag!r}")


def action_to_json(action: Action) -> str:
    return json.dumps(action_to_dict(action), separators=(",", ":"))


def action_from_json(line: str) -> Action:
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Unparseable action line: {e}") from e
    return action_from_dict(data)


def state_to_json(state: GameState) -> str:
    return state.serialize()


def state_from_json(line: str) -> GameState:
    """Parse a state line, wrapping every decoding failure in MalformedInputError."""
    try:
        return GameState.deserialize(line)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedInputError(f"Unparseable state line: {e}") from e


def action_to_text(action: Action) -> str:
    """Convert an action to the short text form."""
    if isinstance(action, PickThree):
        letters = (RESOURCE_LETTERS[k] for k in (action.one, action.two, action.three))
        return "take3 " + " ".join(letters)
    elif isinstance(action, PickTwo):
        return f"take2 {RESOURCE_LETTERS[action.color]}"
    elif isinstance(action, Purchase):
        return f"buy {action.deck}.{action.card}"
    elif isinstance(action, PurchaseReserved):
        return f"buyres {action.index}"
    elif isinstance(action, Reserve):
        return f"reserve {action.deck}.{action.card}"
    elif isinstance(action, Skip):
        return "skip"
    raise ValueError(f"Unknown action type: {type(action)}")


# Regex patterns for parsing
_TAKE3_RE = re.compile(r"^take3\s+([rugwk])\s+([rugwk])\s+([rugwk])$")
_TAKE2_RE = re.compile(r"^take2\s+([rugwk])$")
_SLOT_RE = re.compile(r"^(buy|reserve)\s+(\d+)\.(\d+)$")
_BUYRES_RE = re.compile(r"^buyres\s+(\d+)$")


def text_to_action(text: str) -> Action:
    """Parse the short text form into an Action.

    Raises:
        MalformedInputError: If the text is not valid notation.
    """
    text = text.strip().lower()

    if text == "skip":
        return Skip()

    m = _TAKE3_RE.match(text)
    if m:
        return PickThree(*(RESOURCE_CODES[g] for g in m.groups()))

    m = _TAKE2_RE.match(text)
    if m:
        return PickTwo(RESOURCE_CODES[m.group(1)])

    m = _SLOT_RE.match(text)
    if m:
        deck, card = int(m.group(2)), int(m.group(3))
        return Purchase(deck, card) if m.group(1) == "buy" else Reserve(deck, card)

    m = _BUYRES_RE.match(text)
    if m:
        return PurchaseReserved(int(m.group(1)))

    raise MalformedInputError(f"Invalid action notation: {text!r}")
