"""Side records: seat identity, win counter and special piece inventory."""

from typing import Optional

from .game_state import PieceKind, Seat
from .rules import INITIAL_BOMBS, INITIAL_UNFLIPPABLES


class Player:
    """
    One side of a game.

    The bomb and unflippable counters are the only inventory of special
    pieces; the engine consumes them on placement and restores them on
    undo.
    """

    def __init__(self, seat: Seat, is_human: bool = True):
        """
        Initialize player.

        Args:
            seat: Which side this player sits on
            is_human: False for automated players (disables undo)
        """
        self.seat = seat
        self._is_human = is_human
        self.wins = 0
        self.bombs = INITIAL_BOMBS
        self.unflippables = INITIAL_UNFLIPPABLES

    def is_human(self) -> bool:
        return self._is_human

    def add_win(self) -> None:
        self.wins += 1

    def remove_win(self) -> None:
        self.wins -= 1

    def reset_specials(self) -> None:
        """Restore special piece counters for a new game."""
        self.bombs = INITIAL_BOMBS
        self.unflippables = INITIAL_UNFLIPPABLES

    def remaining(self, kind: PieceKind) -> Optional[int]:
        """Remaining pieces of a special kind, None for unlimited simple pieces."""
        if kind is PieceKind.BOMB:
            return self.bombs
        if kind is PieceKind.UNFLIPPABLE:
            return self.unflippables
        return None

    def has_special(self, kind: PieceKind) -> bool:
        """True if a piece of this kind may be placed."""
        if kind is PieceKind.SIMPLE:
            return True
        return self.remaining(kind) > 0

    def consume_special(self, kind: PieceKind) -> None:
        """Use up one special piece. No-op for simple pieces."""
        if kind is PieceKind.SIMPLE:
            return
        if not self.has_special(kind):
            raise ValueError(f"Player {self.seat.number} has no {kind.value} pieces left")

        if kind is PieceKind.BOMB:
            self.bombs -= 1
        else:
            self.unflippables -= 1

    def restore_special(self, kind: PieceKind) -> None:
        """Give back one special piece (undo of a placement)."""
        if kind is PieceKind.BOMB:
            self.bombs += 1
        elif kind is PieceKind.UNFLIPPABLE:
            self.unflippables += 1

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(seat={self.seat.name}, wins={self.wins}, "
            f"bombs={self.bombs}, unflippables={self.unflippables})"
        )
