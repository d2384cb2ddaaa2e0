"""Game state representation: cards, nobels, players, actions and rulesets."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Optional

from splendor.game.resources import ResourceKind, ResourceMap, RESOURCE_CODES, check_count


@dataclass(frozen=True)
class Ruleset:
    """Rule variant chosen at setup time and carried with the state."""
    name: str = "standard"
    starting_coins: int = 5      # per resource kind
    starting_wilds: int = 5
    win_threshold: int = 14      # game ends once a score exceeds this
    visible_cards: int = 4       # face-up window per deck
    reserve_to_hand: bool = True
    reserve_grants_wild: bool = False
    allow_purchase_reserved: bool = True
    score_nobels: bool = False
    num_nobels: int = 0          # 0 with score_nobels means players + 1

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Ruleset:
        # Annotations are strings here (postponed evaluation)
        known = {f.name: f.type for f in dataclasses.fields(cls)}
        unknown = set(data) - set(known)
        if unknown:
            raise ValueError(f"Unknown ruleset fields: {sorted(unknown)}")
        for name, value in data.items():
            if known[name] == "bool":
                if not isinstance(value, bool):
                    raise ValueError(f"Ruleset field {name} must be a bool, got {value!r}")
            elif known[name] == "int":
                check_count(value, f"Ruleset field {name}")
            elif not isinstance(value, str):
                raise ValueError(f"Ruleset field {name} must be a string, got {value!r}")
        return cls(**data)


STANDARD = Ruleset()
NOBLES = Ruleset(name="nobles", reserve_grants_wild=True, score_nobels=True)
BASIC = Ruleset(name="basic", starting_wilds=0, reserve_to_hand=False,
                allow_purchase_reserved=False)

RULESETS = {r.name: r for r in (STANDARD, NOBLES, BASIC)}


@dataclass(frozen=True)
class Card:
    """Immutable card. Cards are shared by reference between cloned states."""
    cost: ResourceMap
    score: int
    produces: ResourceKind

    def __post_init__(self):
        self.cost.counts.flags.writeable = False

    @classmethod
    def from_code(cls, produces: str, score: int, cost: str) -> Card:
        """Build a card from a letter code, e.g. ``Card.from_code("k", 0, "1w+1u")``."""
        return cls(ResourceMap.from_code(cost), score, RESOURCE_CODES[produces])

    def to_dict(self) -> dict:
        return {"cost": self.cost.to_dict(), "score": self.score,
                "produces": self.produces.label}

    @classmethod
    def from_dict(cls, d: dict) -> Card:
        return cls(ResourceMap.from_dict(d["cost"]), check_count(d["score"], "Card score"),
                   ResourceKind.from_label(d["produces"]))

    def __str__(self):
        return f"{self.produces.label}+{self.score} [{self.cost.to_code()}]"


@dataclass(frozen=True)
class Nobel:
    """Score bonus for owning enough cards (permanent holdings, not coins)."""
    cost: ResourceMap
    score: int = 3

    def __post_init__(self):
        self.cost.counts.flags.writeable = False

    @classmethod
    def from_code(cls, score: int, cost: str) -> Nobel:
        return cls(ResourceMap.from_code(cost), score)

    def to_dict(self) -> dict:
        return {"cost": self.cost.to_dict(), "score": self.score}

    @classmethod
    def from_dict(cls, d: dict) -> Nobel:
        return cls(ResourceMap.from_dict(d["cost"]), check_count(d["score"], "Nobel score"))


class Player:
    """Holdings of one seat."""

    def __init__(self, name: str):
        self.name = name
        self.spendable = ResourceMap()  # coins, returned to the bank when spent
        self.permanent = ResourceMap()  # production from owned cards
        self.wilds = 0
        self.score = 0
        self.reserved: list[Card] = []

    def clone(self) -> Player:
        new = Player.__new__(Player)
        new.name = self.name
        new.spendable = self.spendable.copy()
        new.permanent = self.permanent.copy()
        new.wilds = self.wilds
        new.score = self.score
        new.reserved = list(self.reserved)
        return new

    def shortfall(self, cost: ResourceMap) -> int:
        """Wild coins needed on top of spendable and permanent holdings."""
        covered = self.permanent.copy().add(self.spendable)
        return covered.shortfall(cost).total()

    def can_purchase(self, cost: ResourceMap) -> bool:
        return self.shortfall(cost) <= self.wilds

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "spendable": self.spendable.to_dict(),
            "permanent": self.permanent.to_dict(),
            "wilds": self.wilds,
            "score": self.score,
            "reserved": [c.to_dict() for c in self.reserved],
        }

    @classmethod
    def from_dict(cls, d: dict) -> Player:
        player = cls(d["name"])
        player.spendable = ResourceMap.from_dict(d["spendable"])
        player.permanent = ResourceMap.from_dict(d["permanent"])
        player.wilds = check_count(d["wilds"], "Player wilds")
        player.score = check_count(d["score"], "Player score")
        player.reserved = [Card.from_dict(c) for c in d["reserved"]]
        return player

    def __repr__(self):
        return (f"Player({self.name!r}, score={self.score}, "
                f"spendable={self.spendable!r}, permanent={self.permanent!r}, "
                f"wilds={self.wilds}, reserved={len(self.reserved)})")


# Action types
@dataclass(frozen=True)
class Action:
    """A single action taken by the player whose turn it is."""
    pass


@dataclass(frozen=True)
class PickThree(Action):
    """Take one coin each of three different kinds."""
    one: ResourceKind
    two: ResourceKind
    three: ResourceKind


@dataclass(frozen=True)
class PickTwo(Action):
    """Take two coins of one kind (needs at least four in the bank)."""
    color: ResourceKind


@dataclass(frozen=True)
class Purchase(Action):
    """Buy a face-up card from a deck."""
    deck: int
    card: int


@dataclass(frozen=True)
class PurchaseReserved(Action):
    """Buy a card from the player's reserved list."""
    index: int


@dataclass(frozen=True)
class Reserve(Action):
    """Take a face-up card into the player's reserved list without paying."""
    deck: int
    card: int


@dataclass(frozen=True)
class Skip(Action):
    """Pass the turn."""
    pass


class GameState:
    """Complete game state: decks, players, banks and the turn pointer."""

    def __init__(self, decks: list[list[Card]], players: list[Player],
                 coins: ResourceMap, wilds: int = 0, turn: int = 0,
                 nobels: Optional[list[Nobel]] = None,
                 ruleset: Ruleset = STANDARD, ply: int = 0):
        if not players:
            raise ValueError("A game needs at least one player")
        if not 0 <= turn < len(players):
            raise ValueError(f"Turn {turn} out of range for {len(players)} players")
        self.decks = decks
        self.players = players
        self.coins = coins
        self.wilds = wilds
        self.turn = turn
        self.nobels: list[Nobel] = nobels if nobels is not None else []
        self.ruleset = ruleset
        self.ply = ply

    def clone(self) -> GameState:
        """Return an independent copy. Cards and nobels are immutable and shared."""
        new = GameState.__new__(GameState)
        new.decks = [list(deck) for deck in self.decks]
        new.players = [p.clone() for p in self.players]
        new.coins = self.coins.copy()
        new.wilds = self.wilds
        new.turn = self.turn
        new.nobels = list(self.nobels)
        new.ruleset = self.ruleset
        new.ply = self.ply
        return new

    @property
    def current_player(self) -> Player:
        return self.players[self.turn]

    def is_finished(self) -> bool:
        """True once the round has wrapped and someone passed the threshold."""
        return self.turn == 0 and any(
            p.score > self.ruleset.win_threshold for p in self.players)

    def winner(self) -> int:
        """Seat with the highest score; the lowest seat wins ties."""
        best = 0
        for seat, player in enumerate(self.players):
            if player.score > self.players[best].score:
                best = seat
        return best

    def advance_turn(self):
        self.turn += 1
        if self.turn == len(self.players):
            self.turn = 0
        self.ply += 1

    def to_dict(self) -> dict:
        return {
            "decks": [[c.to_dict() for c in deck] for deck in self.decks],
            "players": [p.to_dict() for p in self.players],
            "coins": self.coins.to_dict(),
            "wilds": self.wilds,
            "turn": self.turn,
            "nobels": [n.to_dict() for n in self.nobels],
            "ruleset": self.ruleset.to_dict(),
            "ply": self.ply,
        }

    @classmethod
    def from_dict(cls, d: dict) -> GameState:
        wilds = check_count(d["wilds"], "Wild bank")
        return cls(
            decks=[[Card.from_dict(c) for c in deck] for deck in d["decks"]],
            players=[Player.from_dict(p) for p in d["players"]],
            coins=ResourceMap.from_dict(d["coins"]),
            wilds=wilds,
            turn=check_count(d["turn"], "Turn"),
            nobels=[Nobel.from_dict(n) for n in d.get("nobels", [])],
            ruleset=Ruleset.from_dict(d["ruleset"]) if "ruleset" in d else STANDARD,
            ply=check_count(d.get("ply", 0), "Ply"),
        )

    def serialize(self) -> str:
        """Serialize game state to a single-line JSON string."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def deserialize(cls, data: str) -> GameState:
        """Deserialize game state from a JSON string."""
        return cls.from_dict(json.loads(data))

    def __eq__(self, other):
        if not isinstance(other, GameState):
            return NotImplemented
        return self.serialize() == other.serialize()

    __hash__ = None
