"""Greedy AI: the placement that captures the most pieces right now."""

from typing import Optional, Tuple

from ..core import GameLogic, MoveRecord, Piece, PieceKind, Position
from .base import AIPlayer


class GreedyAI(AIPlayer):
    """
    AI that maximizes immediate captures.

    Ties go to the rightmost column, then to the topmost row. Always
    places a simple piece.
    """

    def make_move(self, game: GameLogic) -> Optional[MoveRecord]:
        valid_moves = game.valid_moves()
        if not valid_moves:
            return None

        def preference(position: Position) -> Tuple[int, int, int]:
            # Larger is better: flips, then column, then smaller row
            return game.count_flips(position), position.col, -position.row

        best_move = max(valid_moves, key=preference)
        return MoveRecord(best_move, Piece(PieceKind.SIMPLE, self.seat))
