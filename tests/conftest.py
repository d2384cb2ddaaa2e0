"""Shared fixtures and state builders."""

from typing import Optional

import pytest

from splendor.game.board import new_game
from splendor.game.resources import ResourceMap
from splendor.game.state import Card, GameState, Player, Ruleset, STANDARD


def make_state(num_players: int = 2, coins: Optional[ResourceMap] = None,
               decks: Optional[list] = None, wilds: int = 5,
               ruleset: Ruleset = STANDARD, turn: int = 0) -> GameState:
    """A small hand-built state: empty decks and a bank of 4 per kind unless given."""
    return GameState(
        decks=decks if decks is not None else [[], [], []],
        players=[Player(f"P{i}") for i in range(num_players)],
        coins=coins if coins is not None else ResourceMap.filled(4),
        wilds=wilds,
        turn=turn,
        ruleset=ruleset,
    )


def card(produces: str, score: int, cost: str) -> Card:
    return Card.from_code(produces, score, cost)


@pytest.fixture
def game():
    """A freshly dealt standard game."""
    return new_game(["Alice", "Bob"], seed=0)


@pytest.fixture
def small_state():
    return make_state()
