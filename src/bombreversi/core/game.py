"""
Mutable game engine.

Owns one board, the turn flag, the move history and both players.
Every rule failure is reported through the return value and leaves the
game untouched; nothing here raises during normal play.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .game_state import GameState, Piece, PieceKind, Position, Seat
from .history import MoveHistory, MoveRecord
from .player import Player
from .rules import (
    BOARD_SIZE,
    count_flips,
    count_pieces,
    create_starting_board,
    generate_valid_moves,
    get_flippable_positions,
    is_on_board,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameOutcome:
    """Piece tally of a board. winner is None on a tie."""

    first_count: int
    second_count: int
    winner: Optional[Seat]

    @property
    def is_tie(self) -> bool:
        return self.winner is None


class GameLogic:
    """
    Bomb reversi engine for one game.

    Instances share no state; callers serialize access to a single
    instance.
    """

    def __init__(self, first: Optional[Player] = None, second: Optional[Player] = None):
        """
        Initialize a game on the starting board.

        Args:
            first: Player for the first seat (default: human)
            second: Player for the second seat (default: human)
        """
        self._players: Dict[Seat, Player] = {
            Seat.FIRST: first if first is not None else Player(Seat.FIRST),
            Seat.SECOND: second if second is not None else Player(Seat.SECOND),
        }
        self._check_seats(self._players)
        self._history = MoveHistory()
        self.reset()

    @staticmethod
    def _check_seats(players: Dict[Seat, Player]) -> None:
        for seat, player in players.items():
            if player.seat is not seat:
                raise ValueError(
                    f"Player for seat {seat.name} is seated at {player.seat.name}"
                )

    # Read API

    @property
    def board_size(self) -> int:
        return BOARD_SIZE

    @property
    def first_player(self) -> Player:
        return self._players[Seat.FIRST]

    @property
    def second_player(self) -> Player:
        return self._players[Seat.SECOND]

    def player(self, seat: Seat) -> Player:
        return self._players[seat]

    @property
    def current_seat(self) -> Seat:
        return self._turn

    @property
    def current_player(self) -> Player:
        return self._players[self._turn]

    @property
    def is_first_player_turn(self) -> bool:
        return self._turn is Seat.FIRST

    @property
    def history(self) -> Tuple[MoveRecord, ...]:
        """Applied moves, oldest first."""
        return tuple(self._history)

    @property
    def last_move(self) -> Optional[MoveRecord]:
        return self._history.peek()

    def get_piece(self, position: Position) -> Optional[Piece]:
        """Piece at a position, or None for empty and off-board cells."""
        if not is_on_board(position):
            return None
        return self._board[position.row][position.col]

    def valid_moves(self) -> List[Position]:
        """All legal placements for the side to move."""
        return generate_valid_moves(self._board, self._turn)

    def count_flips(self, position: Position) -> int:
        """Pieces the side to move would capture at `position`."""
        return count_flips(self._board, position, self._turn)

    def snapshot(self) -> GameState:
        return GameState(
            board=tuple(tuple(row) for row in self._board),
            player=self._turn,
            bombs={seat: p.bombs for seat, p in self._players.items()},
            unflippables={seat: p.unflippables for seat, p in self._players.items()},
            history_length=len(self._history),
        )

    # Mutations

    def locate_disc(self, position: Position, kind: PieceKind = PieceKind.SIMPLE) -> bool:
        """
        Place a piece for the side to move.

        Fails without touching the game if the position is off the board
        or occupied, if the placement captures nothing, or if the side
        has no pieces of a special kind left.

        Args:
            position: Target cell
            kind: Kind of piece to place

        Returns:
            True if the move was applied
        """
        if not is_on_board(position):
            return False
        if self._board[position.row][position.col] is not None:
            return False

        mover = self.current_player
        flipped = get_flippable_positions(self._board, position, mover.seat)
        if not flipped:
            return False
        if not mover.has_special(kind):
            return False

        piece = Piece(kind, mover.seat)
        self._board[position.row][position.col] = piece
        mover.consume_special(kind)
        logger.debug(f"Player {mover.seat.number} placed {kind.value} at {position}")

        for pos in flipped:
            target = self._board[pos.row][pos.col]
            self._board[pos.row][pos.col] = target.flipped_to(mover.seat)
            logger.debug(f"Player {mover.seat.number} flipped {target.kind.value} at {pos}")

        self._history.push(MoveRecord(position, piece, tuple(flipped)))
        self._turn = self._turn.opponent
        return True

    def undo_last_move(self) -> Optional[MoveRecord]:
        """
        Reverse the most recent move.

        Only allowed when both seats are human. Removes the placed piece,
        hands every flipped piece back to the opponent of the mover,
        restores the mover's special counter and passes the turn back.

        Returns:
            The undone move, or None if nothing changed
        """
        if not (self.first_player.is_human() and self.second_player.is_human()):
            logger.info("Undo is only available when both players are human")
            return None

        move = self._history.pop()
        if move is None:
            logger.info("No previous move available to undo")
            return None

        mover = move.piece.owner
        self._board[move.position.row][move.position.col] = None
        logger.debug(f"Undo: removing {move.piece.kind.value} from {move.position}")

        for pos in move.flipped:
            piece = self._board[pos.row][pos.col]
            self._board[pos.row][pos.col] = piece.flipped_to(mover.opponent)
            logger.debug(f"Undo: flipping back {piece.kind.value} at {pos}")

        self._players[mover].restore_special(move.piece.kind)
        self._turn = mover

        # A recorded result no longer stands once its final move is gone
        if self._recorded_outcome is not None:
            if self._recorded_outcome.winner is not None:
                self._players[self._recorded_outcome.winner].remove_win()
            self._recorded_outcome = None
        return move

    def set_piece(self, position: Position, piece: Optional[Piece]) -> None:
        """
        Put a piece directly on the board (scenario setup).

        Bypasses the rules and the history.
        """
        if not is_on_board(position):
            raise ValueError(f"Position {position} is off the board")
        self._board[position.row][position.col] = piece

    def set_players(self, first: Player, second: Player) -> None:
        """Seat new players and start a fresh game."""
        players = {Seat.FIRST: first, Seat.SECOND: second}
        self._check_seats(players)
        self._players = players
        self.reset()

    def reset(self) -> None:
        """Start a new game. Win counters are kept."""
        self._board = create_starting_board()
        self._turn = Seat.FIRST
        self._history.clear()
        self._recorded_outcome: Optional[GameOutcome] = None
        for player in self._players.values():
            player.reset_specials()

    # End of game

    def is_game_finished(self) -> bool:
        """True when the side to move has no legal placement."""
        return not self.valid_moves()

    def score(self) -> GameOutcome:
        """Tally pieces by owner. Does not change any counter."""
        counts = count_pieces(self._board)
        first, second = counts[Seat.FIRST], counts[Seat.SECOND]

        if first > second:
            winner = Seat.FIRST
        elif second > first:
            winner = Seat.SECOND
        else:
            winner = None

        return GameOutcome(first_count=first, second_count=second, winner=winner)

    def conclude(self) -> Optional[GameOutcome]:
        """
        Record the result of a finished game.

        The winner's win counter is incremented once per finished game;
        calling again returns the same tally without counting twice.
        Undoing the final move takes the win back.

        Returns:
            Final tally, or None if the game is not finished
        """
        if not self.is_game_finished():
            return None

        if self._recorded_outcome is not None:
            return self._recorded_outcome

        outcome = self.score()
        if outcome.winner is not None:
            self._players[outcome.winner].add_win()
            logger.info(
                f"Player {outcome.winner.number} wins "
                f"{outcome.first_count}-{outcome.second_count}"
            )
        else:
            logger.info(f"Tie game {outcome.first_count}-{outcome.second_count}")
        self._recorded_outcome = outcome

        return outcome
