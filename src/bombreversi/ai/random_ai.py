"""
Random AI: uniform choice over legal placements.

The piece kind is a 3-way random choice. A special kind the player has
run out of falls back to a simple piece.
"""

import random
from typing import Optional

from ..core import GameLogic, MoveRecord, Piece, PieceKind, Seat
from .base import AIPlayer

_KIND_CHOICES = (PieceKind.SIMPLE, PieceKind.UNFLIPPABLE, PieceKind.BOMB)


class RandomAI(AIPlayer):
    """AI that selects random valid moves."""

    def __init__(self, seat: Seat, seed: Optional[int] = None):
        """
        Initialize random AI.

        Args:
            seat: Which side this player sits on
            seed: Random seed for reproducibility
        """
        super().__init__(seat)
        self.rng = random.Random(seed)

    def make_move(self, game: GameLogic) -> Optional[MoveRecord]:
        valid_moves = game.valid_moves()
        if not valid_moves:
            return None

        position = self.rng.choice(valid_moves)

        kind = self.rng.choice(_KIND_CHOICES)
        if not self.has_special(kind):
            kind = PieceKind.SIMPLE

        return MoveRecord(position, Piece(kind, self.seat))
