"""Reversi engine with bomb and unflippable pieces."""

__version__ = "0.1.0"
