"""Line protocol between a game host and its agents.

Each request is one JSON-encoded state on its own line; each reply is one
JSON-encoded action on its own line. The host only talks to a Channel, so
an agent may live in the same process (LocalChannel) or in a child process
speaking over pipes (SubprocessChannel).
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from splendor.engine.agents import Agent
from splendor.game.errors import MalformedInputError
from splendor.game.notation import (
    action_from_json, action_to_json, state_from_json, state_to_json,
)
from splendor.game.state import Action, GameState

logger = logging.getLogger("splendor.protocol")


class ProtocolError(RuntimeError):
    """An agent broke the request/response contract. Fatal to the match."""


class Channel(ABC):
    """Request/response link to one agent: send a state, receive an action."""

    name: str = "channel"

    @abstractmethod
    def request(self, state: GameState) -> Action:
        """Send ``state`` and block until the agent answers with an action."""

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class LocalChannel(Channel):
    """In-process agent. The state still goes through the wire format."""

    def __init__(self, agent: Agent, name: Optional[str] = None):
        self.agent = agent
        self.name = name or agent.name

    def request(self, state: GameState) -> Action:
        try:
            line = action_to_json(self.agent.get_action(state_from_json(state_to_json(state))))
        except Exception as e:
            # A crashing agent ends the match, as with a subprocess agent
            raise ProtocolError(f"{self.name}: agent failed: {e}") from e
        try:
            return action_from_json(line)
        except MalformedInputError as e:
            raise ProtocolError(f"{self.name}: invalid action {line!r}") from e


class SubprocessChannel(Channel):
    """Agent running as a child process, one line per message over its pipes."""

    def __init__(self, command: list[str], name: Optional[str] = None,
                 cwd: Optional[str] = None, env: Optional[dict] = None):
        self.command = command
        self.name = name or " ".join(command)
        self.proc = subprocess.Popen(
            command, stdin=subprocess.PIPE, stdout=subprocess.PIPE,
            text=True, bufsize=1, cwd=cwd, env=env,
        )
        logger.debug(f"Started agent {self.name!r} (pid {self.proc.pid})")

    def request(self, state: GameState) -> Action:
        code = self.proc.poll()
        if code is not None:
            raise ProtocolError(f"{self.name}: agent exited with code {code}")
        try:
            self.proc.stdin.write(state_to_json(state) + "\n")
            self.proc.stdin.flush()
        except (BrokenPipeError, OSError) as e:
            raise ProtocolError(f"{self.name}: cannot write state: {e}") from e

        line = self.proc.stdout.readline()
        if not line:
            raise ProtocolError(f"{self.name}: agent closed its output "
                                f"(exit code {self.proc.poll()})")
        try:
            return action_from_json(line)
        except MalformedInputError as e:
            raise ProtocolError(f"{self.name}: invalid action line {line.strip()!r}") from e

    def close(self, timeout: float = 5.0):
        if self.proc.poll() is None:
            try:
                self.proc.stdin.close()
            except OSError:
                pass
            try:
                self.proc.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                logger.warning(f"Agent {self.name!r} did not exit, killing it")
                self.proc.kill()
                self.proc.wait()
        if self.proc.stdout is not None:
            self.proc.stdout.close()


def run_agent_loop(agent: Agent, infile: TextIO, outfile: TextIO) -> int:
    """Answer every state line on ``infile`` with one action line on ``outfile``.

    Runs until end of input. Blank lines are ignored; a malformed line raises
    MalformedInputError.

    Returns:
        Number of actions written.
    """
    count = 0
    for line in infile:
        line = line.strip()
        if not line:
            continue
        state = state_from_json(line)
        action = agent.get_action(state)
        outfile.write(action_to_json(action) + "\n")
        outfile.flush()
        count += 1
    return count
