"""Agent process: answers JSON state lines on stdin with JSON action lines on stdout.

Usage:
    python -m splendor.arena.agent_process --agent alphabeta --depth 3
    python -m splendor.arena.agent_process --agent first_legal
    python -m splendor.arena.agent_process --config configs/default.yaml --seat 0

Logs go to stderr; stdout carries only the protocol.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from splendor.arena.protocol import run_agent_loop
from splendor.config import load_config
from splendor.engine.agents import AGENT_TYPES, create_agent
from splendor.game.errors import MalformedInputError

logger = logging.getLogger("splendor.agent")

EXIT_MALFORMED_INPUT = 2

# Directory holding the splendor package
PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def agent_command(agent_config: dict, seat: int = 0,
                  config_path: Optional[str] = None) -> list[str]:
    """Command line that runs this module as an agent for ``agent_config``."""
    cmd = [sys.executable, "-m", "splendor.arena.agent_process",
           "--seat", str(seat), "--agent", agent_config.get("type", "alphabeta")]
    if config_path:
        cmd += ["--config", os.path.abspath(config_path)]
    if "depth" in agent_config:
        cmd += ["--depth", str(agent_config["depth"])]
    if agent_config.get("seed") is not None:
        cmd += ["--seed", str(agent_config["seed"])]
    return cmd


def agent_env() -> dict:
    """Environment for agent processes, with the package importable without installing."""
    env = dict(os.environ)
    paths = [PACKAGE_ROOT]
    if env.get("PYTHONPATH"):
        paths.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(paths)
    return env


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run a Splendor agent over stdin/stdout")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML config (agent settings taken from match.agents[--seat])")
    parser.add_argument("--seat", type=int, default=0,
                        help="Which match.agents entry to use from the config")
    parser.add_argument("--agent", choices=sorted(AGENT_TYPES), default=None,
                        help="Agent type (overrides the config)")
    parser.add_argument("--depth", type=int, default=None, help="Search depth")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random agents")
    parser.add_argument("--log-level", type=str, default=None)
    args = parser.parse_args(argv)

    config = load_config(args.config)
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, (args.log_level or config["logging"]["level"]).upper()),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    agents = config["match"]["agents"]
    agent_config = dict(agents[args.seat]) if args.seat < len(agents) else {}
    agent_config.setdefault("depth", config["search"]["depth"])
    if args.agent is not None:
        agent_config["type"] = args.agent
    if args.depth is not None:
        agent_config["depth"] = args.depth
    if args.seed is not None:
        agent_config["seed"] = args.seed

    agent = create_agent(agent_config, heuristic_config=config["heuristic"])
    logger.info(f"Agent {agent.name} ready ({agent_config})")

    try:
        count = run_agent_loop(agent, sys.stdin, sys.stdout)
    except MalformedInputError as e:
        logger.error(f"Malformed input, terminating: {e}")
        return EXIT_MALFORMED_INPUT
    logger.info(f"Input closed after {count} actions")
    return 0


if __name__ == "__main__":
    sys.exit(main())
