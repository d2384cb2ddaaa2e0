#!/usr/bin/env python3
"""Play matches between configured agents.

Usage:
    python scripts/play_match.py                                  # defaults
    python scripts/play_match.py --config configs/default.yaml --games 10
    python scripts/play_match.py --subprocess --ruleset nobles
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from splendor.arena.agent_process import agent_command, agent_env
from splendor.arena.host import play_match
from splendor.arena.protocol import LocalChannel, ProtocolError, SubprocessChannel
from splendor.config import load_config, ruleset_from_config
from splendor.data.storage import save_match, summarize
from splendor.engine.agents import create_agent
from splendor.game.board import new_game, render_state

logger = logging.getLogger("splendor.match")


def build_channels(config: dict, use_subprocess: bool, config_path):
    """One channel per configured seat."""
    channels = []
    names = config["players"]
    for seat, agent_config in enumerate(config["match"]["agents"]):
        name = names[seat] if seat < len(names) else f"Player {seat}"
        if use_subprocess:
            channels.append(SubprocessChannel(
                agent_command(agent_config, seat, config_path), name=name, env=agent_env()))
        else:
            channels.append(LocalChannel(
                create_agent(agent_config, heuristic_config=config["heuristic"]), name=name))
    return channels


def main():
    parser = argparse.ArgumentParser(description="Play Splendor matches between agents")
    parser.add_argument("--config", type=str, default=None)
    parser.add_argument("--games", type=int, default=1)
    parser.add_argument("--ruleset", type=str, default=None,
                        help="Ruleset preset (overrides the config)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--subprocess", action="store_true",
                        help="Run each agent in its own process")
    parser.add_argument("--records", type=str, default=None,
                        help="Append match records to this JSON-lines file")
    args = parser.parse_args()

    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, config["logging"]["level"].upper()),
        format="%(asctime)s [%(name)s] %(message)s",
    )

    ruleset = ruleset_from_config(args.ruleset or config["ruleset"])
    seed = args.seed if args.seed is not None else config["seed"]
    records = args.records or config["match"]["records"]
    use_subprocess = args.subprocess or config["match"].get("subprocess", False)

    results = []
    for game_idx in range(args.games):
        game_seed = None if seed is None else seed + game_idx
        channels = build_channels(config, use_subprocess, args.config)
        # Alternate seats so neither agent always moves first
        if game_idx % 2 == 1:
            channels.reverse()
        state = new_game([c.name for c in channels], ruleset=ruleset, seed=game_seed)
        try:
            result = play_match(channels, state, max_plies=config["match"]["max_plies"])
        except ProtocolError as e:
            logger.error(f"Match {game_idx + 1} aborted: {e}")
            sys.exit(1)
        finally:
            for c in channels:
                c.close()

        print(render_state(state))
        results.append(result)
        if records:
            save_match(records, result)

    for name, entry in summarize(results).items():
        logger.info(f"{name}: {entry['wins']}W {entry['losses']}L "
                    f"{entry['unfinished']} unfinished")


if __name__ == "__main__":
    main()
