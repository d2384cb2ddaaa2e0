"""YAML configuration loading."""

from __future__ import annotations

import copy
import logging
from typing import Optional, Union

import yaml

from splendor.game.state import RULESETS, Ruleset

logger = logging.getLogger("splendor.config")

DEFAULT_CONFIG: dict = {
    "ruleset": "standard",
    "players": ["Player 0", "Player 1"],
    "seed": None,
    "search": {"depth": 3},
    "heuristic": {
        "coin_weight": 1,
        "card_weight": 100,
        "wild_weight": 2,
        "nobel_weight": 4096,
    },
    "match": {
        "max_plies": 400,
        "agents": [
            {"type": "alphabeta", "depth": 3},
            {"type": "first_legal"},
        ],
        "records": None,
        "subprocess": False,
    },
    "logging": {"level": "INFO"},
}


def _merge(base: dict, override: dict) -> dict:
    """Recursively overlay ``override`` on ``base`` (nested dicts merge, others replace)."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[str] = None) -> dict:
    """Load a YAML config file on top of DEFAULT_CONFIG."""
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    with open(path) as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(loaded).__name__}")
    logger.debug(f"Loaded config from {path}")
    return _merge(DEFAULT_CONFIG, loaded)


def ruleset_from_config(value: Union[str, dict, None]) -> Ruleset:
    """Resolve a ruleset given by preset name, or by a mapping of overrides.

    A mapping may name a ``base`` preset (default "standard"); the remaining
    keys override its fields.
    """
    if value is None:
        return RULESETS["standard"]
    if isinstance(value, str):
        if value not in RULESETS:
            raise ValueError(f"Unknown ruleset {value!r} (expected one of {sorted(RULESETS)})")
        return RULESETS[value]
    overrides = dict(value)
    base = ruleset_from_config(overrides.pop("base", "standard"))
    fields = {**base.to_dict(), **overrides}
    if "name" not in overrides:
        fields["name"] = f"{base.name}-custom"
    return Ruleset.from_dict(fields)
