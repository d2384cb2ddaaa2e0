"""Card and nobel tables, game setup, and text-based rendering."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from splendor.game.resources import ResourceMap
from splendor.game.state import Card, GameState, Nobel, Player, Ruleset, STANDARD

NUM_DECKS = 3

# Tier tables: (produces, score, cost). Letters: r=Red u=Blue g=Green w=White k=Black
TIER_1_CARDS: list[tuple[str, int, str]] = [
    ("u", 0, "1w+1g+1r+1k"), ("u", 0, "1w+1g+2r+1k"), ("u", 0, "2w+2g+1k"),
    ("u", 0, "1g+3r+1k"), ("u", 0, "4w"), ("u", 1, "2u+2g+3r"),
    ("u", 0, "2w+1g"), ("u", 0, "3w"),
    ("g", 0, "1w+1u+1r+1k"), ("g", 0, "1w+1u+1r+2k"), ("g", 0, "2u+2r+1k"),
    ("g", 0, "1w+3u+1k"), ("g", 0, "4u"), ("g", 1, "3w+2g+2k"),
    ("g", 0, "2u+1k"), ("g", 0, "3u"),
    ("r", 0, "1w+1u+1g+1k"), ("r", 0, "2w+1u+1g+1k"), ("r", 0, "1w+2g+2k"),
    ("r", 0, "3w+1g+1k"), ("r", 0, "4g"), ("r", 1, "2w+3r+2k"),
    ("r", 0, "2g+1k"), ("r", 0, "3g"),
    ("k", 0, "1w+1u+1g+1r"), ("k", 0, "1w+2u+1g+1r"), ("k", 0, "2w+1u+2g"),
    ("k", 0, "1w+1u+3r"), ("k", 0, "4r"), ("k", 1, "3u+3g+2r"),
    ("k", 0, "1w+2r"), ("k", 0, "3r"),
    ("w", 0, "1u+1g+1r+1k"), ("w", 0, "1u+2g+1r+1k"), ("w", 0, "2u+1g+2r"),
    ("w", 0, "1u+3g+1r"), ("w", 0, "4k"), ("w", 1, "2w+2u+3k"),
    ("w", 0, "1u+2g"), ("w", 0, "3k"),
]

TIER_2_CARDS: list[tuple[str, int, str]] = [
    ("u", 1, "2u+4g+1r"), ("u", 2, "5u"), ("u", 2, "5w+3u"),
    ("u", 2, "5g+3r"), ("u", 3, "6u"), ("u", 1, "3w+2u+3k"),
    ("g", 1, "1w+4u+2g"), ("g", 2, "5g"), ("g", 2, "5g+3r"),
    ("g", 2, "3w+5k"), ("g", 3, "6g"), ("g", 1, "3w+2g+3r"),
    ("r", 1, "4w+2r+1k"), ("r", 2, "5r"), ("r", 2, "5u+3r"),
    ("r", 2, "3g+5r"), ("r", 3, "6r"), ("r", 1, "3u+2r+3k"),
    ("k", 1, "1w+4r+2k"), ("k", 2, "5k"), ("k", 2, "5w+3k"),
    ("k", 2, "3u+5k"), ("k", 3, "6k"), ("k", 1, "2w+3g+3k"),
    ("w", 1, "1u+1g+4k"), ("w", 2, "5w"), ("w", 2, "5r+3k"),
    ("w", 2, "5w+3g"), ("w", 3, "6w"), ("w", 1, "3g+2r+2k"),
]

TIER_3_CARDS: list[tuple[str, int, str]] = [
    ("u", 3, "3w+3g+5r+3k"), ("u", 4, "7w"), ("u", 4, "6w+3u+3k"), ("u", 5, "7w+3u"),
    ("g", 3, "3w+3u+3r+5k"), ("g", 4, "7u"), ("g", 4, "3w+6u+3g"), ("g", 5, "7u+3g"),
    ("r", 3, "5w+3u+3g+3k"), ("r", 4, "7g"), ("r", 4, "3u+6g+3r"), ("r", 5, "7g+3r"),
    ("k", 3, "3w+5u+3g+3r"), ("k", 4, "7r"), ("k", 4, "3g+6r+3k"), ("k", 5, "7r+3k"),
    ("w", 3, "3u+5g+3r+3k"), ("w", 4, "7k"), ("w", 4, "3w+3r+6k"), ("w", 5, "3w+7k"),
]

NOBEL_TABLE: list[tuple[int, str]] = [
    (3, "4u+4g"), (3, "4g+4r"), (3, "4r+4k"), (3, "4k+4w"), (3, "4w+4u"),
    (3, "3u+3g+3r"), (3, "3w+3u+3g"), (3, "3w+3r+3k"), (3, "3g+3r+3k"),
    (3, "3w+3u+3k"),
]


def build_decks() -> list[list[Card]]:
    """Build the three unshuffled decks, cheapest tier first."""
    return [[Card.from_code(*row) for row in table]
            for table in (TIER_1_CARDS, TIER_2_CARDS, TIER_3_CARDS)]


def build_nobels() -> list[Nobel]:
    return [Nobel.from_code(score, cost) for score, cost in NOBEL_TABLE]


def new_game(player_names: Sequence[str] = ("Player 0", "Player 1"),
             ruleset: Ruleset = STANDARD, seed: Optional[int] = None) -> GameState:
    """Deal a fresh game: shuffled decks, full banks, first seat to move."""
    if not 2 <= len(player_names) <= 4:
        raise ValueError(f"Invalid number of players: {len(player_names)}")
    rng = np.random.default_rng(seed)

    decks = []
    for deck in build_decks():
        order = rng.permutation(len(deck))
        decks.append([deck[i] for i in order])

    nobels: list[Nobel] = []
    if ruleset.score_nobels:
        count = ruleset.num_nobels or len(player_names) + 1
        pool = build_nobels()
        nobels = [pool[i] for i in rng.permutation(len(pool))[:count]]

    return GameState(
        decks=decks,
        players=[Player(name) for name in player_names],
        coins=ResourceMap.filled(ruleset.starting_coins),
        wilds=ruleset.starting_wilds,
        turn=0,
        nobels=nobels,
        ruleset=ruleset,
    )


def render_state(state: GameState) -> str:
    """Render the state as a text string, marking cards the mover can afford."""
    mover = state.current_player
    window = state.ruleset.visible_cards
    lines = []

    for i, deck in enumerate(state.decks):
        lines.append(f"Deck {i} ({len(deck)} cards):")
        for j, card in enumerate(deck[:window]):
            mark = " (you can purchase)" if mover.can_purchase(card.cost) else ""
            lines.append(f"   Card {j}: {card}{mark}")

    lines.append(f"Coins: {state.coins.to_code() or '-'}  Wild: {state.wilds}")
    if state.nobels:
        lines.append("Nobels: " + ", ".join(
            f"+{n.score} [{n.cost.to_code()}]" for n in state.nobels))

    for seat, p in enumerate(state.players):
        lines.append(f"{p.name}:")
        lines.append(f"   Score: {p.score}")
        lines.append(f"   Resource Cards: {p.permanent.to_code() or '-'}")
        lines.append(f"   Resource Coins: {p.spendable.to_code() or '-'}")
        lines.append(f"   Wild Coins: {p.wilds}")
        if p.reserved:
            lines.append("   Reserved Cards:")
            for k, card in enumerate(p.reserved):
                lines.append(f"      {k}: {card}")

    lines.append(f"Turn: {mover.name}")
    return "\n".join(lines)
