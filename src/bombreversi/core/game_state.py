"""
Game state representation for bomb reversi.

A game is described by:
- An 8x8 grid of optional pieces
- The side to move
- Each side's remaining special pieces (bombs and unflippables)

Pieces are immutable values: a capture replaces the piece in its cell
with a copy owned by the capturing side. That keeps move records and
snapshots free of aliasing, so an undo can be checked by comparing two
snapshots for equality.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class Seat(Enum):
    """One of the two fixed sides of a game."""

    FIRST = 0
    SECOND = 1

    @property
    def opponent(self) -> "Seat":
        return Seat.SECOND if self is Seat.FIRST else Seat.FIRST

    @property
    def number(self) -> int:
        """1-based seat number for display."""
        return self.value + 1


@dataclass(frozen=True)
class Position:
    """
    A (row, col) cell coordinate.

    Positions are plain values and are not bounds-checked, so an
    off-board request can be represented and rejected by the engine.
    """

    row: int
    col: int

    def offset(self, drow: int, dcol: int) -> "Position":
        return Position(self.row + drow, self.col + dcol)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


class PieceKind(Enum):
    """Capture behaviour of a piece."""

    SIMPLE = "simple"
    BOMB = "bomb"
    UNFLIPPABLE = "unflippable"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def is_special(self) -> bool:
        return self is not PieceKind.SIMPLE


_SYMBOLS = {
    PieceKind.SIMPLE: "⬤",
    PieceKind.BOMB: "💣",
    PieceKind.UNFLIPPABLE: "⭕",
}


@dataclass(frozen=True)
class Piece:
    """A piece on the board: its kind and the side that currently owns it."""

    kind: PieceKind
    owner: Seat

    @property
    def is_bomb(self) -> bool:
        return self.kind is PieceKind.BOMB

    @property
    def is_unflippable(self) -> bool:
        return self.kind is PieceKind.UNFLIPPABLE

    def flipped_to(self, seat: Seat) -> "Piece":
        """
        Return this piece as owned by `seat`.

        Unflippable pieces keep the owner they were placed with, so a
        capture attempt on one returns the piece unchanged.
        """
        if self.kind is PieceKind.UNFLIPPABLE:
            return self
        return Piece(kind=self.kind, owner=seat)

    def __str__(self) -> str:
        return f"{self.kind.symbol} (P{self.owner.number})"


Row = Tuple[Optional[Piece], ...]


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of a game.

    Board layout (row, col), first seat at (3,3)/(4,4) on a new game:

          0 1 2 3 4 5 6 7
        0 . . . . . . . .
        ...
        3 . . . X O . . .
        4 . . . O X . . .
        ...
    """

    board: Tuple[Row, ...]  # board[row][col]
    player: Seat  # Side to move
    bombs: Dict[Seat, int]
    unflippables: Dict[Seat, int]
    history_length: int = 0

    def __post_init__(self) -> None:
        """Validate state invariants."""
        size = len(self.board)
        if size == 0 or any(len(row) != size for row in self.board):
            raise ValueError(f"Board must be square, got {size} rows")
        if not isinstance(self.player, Seat):
            raise ValueError(f"Invalid player {self.player!r}, must be a Seat")
        for counters in (self.bombs, self.unflippables):
            if set(counters) != {Seat.FIRST, Seat.SECOND}:
                raise ValueError("Special counters must cover both seats")
            if any(count < 0 for count in counters.values()):
                raise ValueError("Negative special piece count not allowed")
        if self.history_length < 0:
            raise ValueError("Negative history length not allowed")

    def __hash__(self) -> int:
        return hash(
            (
                self.board,
                self.player,
                tuple(sorted((s.value, n) for s, n in self.bombs.items())),
                tuple(sorted((s.value, n) for s, n in self.unflippables.items())),
                self.history_length,
            )
        )

    @property
    def board_size(self) -> int:
        return len(self.board)

    def piece_at(self, position: Position) -> Optional[Piece]:
        return self.board[position.row][position.col]

    @property
    def occupied(self) -> int:
        """Number of occupied cells."""
        return sum(1 for row in self.board for piece in row if piece is not None)

    def __str__(self) -> str:
        """Human-readable board representation."""
        marks = {Seat.FIRST: "X", Seat.SECOND: "O"}
        special = {PieceKind.BOMB: "b", PieceKind.UNFLIPPABLE: "u"}

        lines = ["   " + " ".join(str(c) for c in range(self.board_size))]
        for r, row in enumerate(self.board):
            cells = []
            for piece in row:
                if piece is None:
                    cells.append(".")
                elif piece.kind is PieceKind.SIMPLE:
                    cells.append(marks[piece.owner])
                else:
                    # Lowercase special marker, uppercase for the second seat
                    mark = special[piece.kind]
                    cells.append(mark if piece.owner is Seat.FIRST else mark.upper())
            lines.append(f"{r:>2} " + " ".join(cells))

        lines.append("")
        lines.append(f"Player {self.player.number}'s turn")
        return "\n".join(lines) + "\n"
