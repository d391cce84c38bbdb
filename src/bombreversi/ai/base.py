"""Abstract base class for automated players."""

from abc import ABC, abstractmethod
from typing import Optional

from ..core import GameLogic, MoveRecord, Player, Seat


class AIPlayer(Player, ABC):
    """
    A player whose moves are chosen by a policy.

    Policies only read the engine; the caller applies the proposed move
    with GameLogic.locate_disc. Games with an automated seat cannot be
    undone.
    """

    def __init__(self, seat: Seat):
        super().__init__(seat, is_human=False)

    @abstractmethod
    def make_move(self, game: GameLogic) -> Optional[MoveRecord]:
        """
        Propose a move for the side to move.

        Args:
            game: Game whose current side is this player

        Returns:
            Proposed move (flipped left empty), or None if there is no
            legal placement
        """
        pass
