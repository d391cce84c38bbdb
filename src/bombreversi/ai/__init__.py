"""Automated players."""

from typing import Optional

from ..core import Seat
from .base import AIPlayer
from .greedy_ai import GreedyAI
from .random_ai import RandomAI

AI_TYPES = ("random", "greedy")


def create_ai(name: str, seat: Seat, seed: Optional[int] = None) -> AIPlayer:
    """
    Create an automated player by name.

    Args:
        name: One of AI_TYPES
        seat: Which side the player sits on
        seed: Random seed (random AI only)

    Returns:
        New AIPlayer
    """
    if name == "random":
        return RandomAI(seat, seed=seed)
    if name == "greedy":
        return GreedyAI(seat)
    raise ValueError(f"Unknown AI type {name!r}, expected one of {AI_TYPES}")


__all__ = [
    "AI_TYPES",
    "AIPlayer",
    "GreedyAI",
    "RandomAI",
    "create_ai",
]
