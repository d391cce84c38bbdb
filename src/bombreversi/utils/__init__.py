"""Utility modules for bomb reversi."""

from .rich_display import GameDisplay, setup_rich_logging

__all__ = [
    "GameDisplay",
    "setup_rich_logging",
]
