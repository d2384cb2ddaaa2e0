"""Splendor-style board game engine with alpha-beta search agents."""

__version__ = "0.1.0"
