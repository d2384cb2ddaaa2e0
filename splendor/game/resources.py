"""Resource kinds, fixed-size resource counters, and the resource-code language.

Resource codes describe costs compactly:
  1w+1u+1g+1r    one White, one Blue, one Green, one Red
  3k             three Black
  (empty)        nothing
"""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Iterator, Mapping

import numpy as np


class ResourceKind(IntEnum):
    RED = 0
    BLUE = 1
    GREEN = 2
    WHITE = 3
    BLACK = 4

    @property
    def label(self) -> str:
        """Name used on the wire ("Red", "Blue", ...)."""
        return self.name.capitalize()

    @classmethod
    def from_label(cls, label: str) -> ResourceKind:
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"Unknown resource kind: {label!r}") from None


def check_count(value, what: str) -> int:
    """Validate a decoded count: a plain non-negative int (bool and float rejected)."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{what} cannot be negative ({value})")
    return value


NUM_KINDS = len(ResourceKind)

# Map letter codes to ResourceKind
RESOURCE_CODES = {
    "r": ResourceKind.RED,
    "u": ResourceKind.BLUE,
    "g": ResourceKind.GREEN,
    "w": ResourceKind.WHITE,
    "k": ResourceKind.BLACK,
}
RESOURCE_LETTERS = {v: k for k, v in RESOURCE_CODES.items()}

_TERM_RE = re.compile(r"^(\d+)([rugwk])$")

# Every distinct triple of kinds, in the order the search expands them
PICK_THREE_CANDIDATES: tuple[tuple[ResourceKind, ResourceKind, ResourceKind], ...] = (
    (ResourceKind.RED, ResourceKind.GREEN, ResourceKind.BLUE),
    (ResourceKind.RED, ResourceKind.GREEN, ResourceKind.WHITE),
    (ResourceKind.RED, ResourceKind.GREEN, ResourceKind.BLACK),
    (ResourceKind.RED, ResourceKind.BLUE, ResourceKind.WHITE),
    (ResourceKind.RED, ResourceKind.BLUE, ResourceKind.BLACK),
    (ResourceKind.RED, ResourceKind.WHITE, ResourceKind.BLACK),
    (ResourceKind.GREEN, ResourceKind.BLUE, ResourceKind.WHITE),
    (ResourceKind.GREEN, ResourceKind.BLUE, ResourceKind.BLACK),
    (ResourceKind.GREEN, ResourceKind.WHITE, ResourceKind.BLACK),
    (ResourceKind.BLUE, ResourceKind.BLACK, ResourceKind.WHITE),
)


class ResourceMap:
    """Non-negative count for every resource kind.

    Backed by a small int64 array indexed by ResourceKind, so every kind
    always has a slot. Any operation that would leave a negative count
    raises ValueError and leaves the map unchanged.
    """

    __slots__ = ("counts",)

    def __init__(self, counts=None):
        if counts is None:
            self.counts = np.zeros(NUM_KINDS, dtype=np.int64)
        else:
            arr = np.array(counts, dtype=np.int64)
            if arr.shape != (NUM_KINDS,):
                raise ValueError(f"Expected {NUM_KINDS} counts, got shape {arr.shape}")
            if (arr < 0).any():
                raise ValueError(f"Resource counts must be non-negative: {arr.tolist()}")
            self.counts = arr

    @classmethod
    def zeros(cls) -> ResourceMap:
        return cls()

    @classmethod
    def filled(cls, count: int) -> ResourceMap:
        return cls([count] * NUM_KINDS)

    @classmethod
    def from_code(cls, code: str) -> ResourceMap:
        """Parse a resource code such as ``"2w+1g"``."""
        result = cls()
        code = code.strip()
        if not code:
            return result
        for term in code.split("+"):
            m = _TERM_RE.match(term.strip())
            if not m:
                raise ValueError(f"Invalid resource code term {term!r} in {code!r}")
            kind = RESOURCE_CODES[m.group(2)]
            if result.counts[kind]:
                raise ValueError(f"Resource {kind.label} repeated in {code!r}")
            result.counts[kind] = int(m.group(1))
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> ResourceMap:
        """Parse the wire form, which must list every kind by label exactly once."""
        labels = [kind.label for kind in ResourceKind]
        if not isinstance(data, Mapping) or set(data) != set(labels):
            raise ValueError(f"Expected counts for exactly {labels}, got {data!r}")
        return cls([check_count(data[label], label) for label in labels])

    def to_dict(self) -> dict[str, int]:
        return {kind.label: int(self.counts[kind]) for kind in ResourceKind}

    def to_code(self) -> str:
        return "+".join(f"{int(self.counts[kind])}{RESOURCE_LETTERS[kind]}"
                        for kind in ResourceKind if self.counts[kind])

    def copy(self) -> ResourceMap:
        new = ResourceMap.__new__(ResourceMap)
        new.counts = self.counts.copy()
        return new

    def __getitem__(self, kind: ResourceKind) -> int:
        return int(self.counts[kind])

    def __setitem__(self, kind: ResourceKind, value: int):
        if value < 0:
            raise ValueError(f"Resource {ResourceKind(kind).label} cannot be negative ({value})")
        self.counts[kind] = value

    def __iter__(self) -> Iterator[tuple[ResourceKind, int]]:
        for kind in ResourceKind:
            yield kind, int(self.counts[kind])

    def __eq__(self, other):
        if not isinstance(other, ResourceMap):
            return NotImplemented
        return bool(np.array_equal(self.counts, other.counts))

    def __hash__(self):
        return hash(tuple(self.counts.tolist()))

    def __repr__(self):
        return f"ResourceMap({self.to_code() or '0'})"

    def add(self, other: ResourceMap) -> ResourceMap:
        """Element-wise addition in place. Returns self."""
        self.counts += other.counts
        return self

    def subtract(self, other: ResourceMap) -> ResourceMap:
        """Element-wise subtraction in place; fails instead of going negative."""
        result = self.counts - other.counts
        if (result < 0).any():
            raise ValueError(f"Cannot subtract {other!r} from {self!r}")
        self.counts = result
        return self

    def total(self) -> int:
        return int(self.counts.sum())

    def shortfall(self, other: ResourceMap) -> ResourceMap:
        """Per-kind amount by which ``other`` exceeds this map (floored at 0)."""
        new = ResourceMap.__new__(ResourceMap)
        new.counts = np.maximum(other.counts - self.counts, 0)
        return new
