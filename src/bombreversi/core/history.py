"""Move records and the undo log."""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .game_state import Piece, Position


@dataclass(frozen=True)
class MoveRecord:
    """
    A single applied placement.

    flipped holds every captured position in capture order (directional
    runs, then bomb blast victims). Proposals from automated players
    carry an empty tuple.
    """

    position: Position
    piece: Piece
    flipped: Tuple[Position, ...] = ()

    @property
    def flip_count(self) -> int:
        return len(self.flipped)


class MoveHistory:
    """
    Last-in-first-out log of applied moves since the last reset.

    Records are only ever appended or removed from the top.
    """

    def __init__(self) -> None:
        self._moves: List[MoveRecord] = []

    def push(self, move: MoveRecord) -> None:
        self._moves.append(move)

    def pop(self) -> Optional[MoveRecord]:
        """Remove and return the most recent move, or None if empty."""
        if not self._moves:
            return None
        return self._moves.pop()

    def peek(self) -> Optional[MoveRecord]:
        return self._moves[-1] if self._moves else None

    def clear(self) -> None:
        self._moves.clear()

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[MoveRecord]:
        """Iterate oldest move first."""
        return iter(list(self._moves))
