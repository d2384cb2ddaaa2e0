"""Save and load match records as JSON lines (one match per line)."""

from __future__ import annotations

import json
import os

from splendor.arena.host import MatchResult


def save_match(filepath: str, result: MatchResult):
    """Append a match record to a JSON-lines file."""
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
    with open(filepath, "a") as f:
        f.write(json.dumps(result.to_dict()) + "\n")


def load_matches(filepath: str) -> list[MatchResult]:
    """Load every match record from a JSON-lines file.

    Raises:
        ValueError: If a line is not a valid record.
    """
    results = []
    with open(filepath) as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                results.append(MatchResult.from_dict(json.loads(line)))
            except (json.JSONDecodeError, KeyError, TypeError) as e:
                raise ValueError(f"{filepath}:{lineno}: invalid match record: {e}") from e
    return results


def summarize(results: list[MatchResult]) -> dict[str, dict[str, int]]:
    """Wins, losses and unfinished matches per player name."""
    summary: dict[str, dict[str, int]] = {}
    for r in results:
        for seat, name in enumerate(r.players):
            entry = summary.setdefault(name, {"wins": 0, "losses": 0, "unfinished": 0})
            if r.winner is None:
                entry["unfinished"] += 1
            elif r.winner == seat:
                entry["wins"] += 1
            else:
                entry["losses"] += 1
    return summary
