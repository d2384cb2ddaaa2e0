"""Agent boundary: line protocol, channels, and the match host."""

from splendor.arena.protocol import (
    Channel, LocalChannel, SubprocessChannel, ProtocolError, run_agent_loop,
)
from splendor.arena.host import MatchResult, play_match

__all__ = [
    "Channel", "LocalChannel", "SubprocessChannel", "ProtocolError", "run_agent_loop",
    "MatchResult", "play_match",
]
