"""Core game state representation and rules."""

from .game_state import GameState, Piece, PieceKind, Position, Seat
from .history import MoveHistory, MoveRecord
from .player import Player
from .rules import (
    BOARD_SIZE,
    INITIAL_BOMBS,
    INITIAL_UNFLIPPABLES,
    create_starting_board,
    generate_valid_moves,
    get_flippable_positions,
    count_flips,
    count_pieces,
    is_on_board,
)
from .game import GameLogic, GameOutcome

__all__ = [
    "GameState",
    "Piece",
    "PieceKind",
    "Position",
    "Seat",
    "MoveHistory",
    "MoveRecord",
    "Player",
    "BOARD_SIZE",
    "INITIAL_BOMBS",
    "INITIAL_UNFLIPPABLES",
    "create_starting_board",
    "generate_valid_moves",
    "get_flippable_positions",
    "count_flips",
    "count_pieces",
    "is_on_board",
    "GameLogic",
    "GameOutcome",
]
