"""Shared fixtures for engine tests."""

import pytest
from bombreversi.core import GameLogic, Position


@pytest.fixture
def game():
    """Fresh game between two human players on the starting board."""
    return GameLogic()


@pytest.fixture
def empty_game():
    """Game with every cell cleared, first player to move."""
    game = GameLogic()
    for row in range(game.board_size):
        for col in range(game.board_size):
            game.set_piece(Position(row, col), None)
    return game
