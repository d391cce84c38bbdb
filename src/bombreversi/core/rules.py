"""
Bomb reversi rules implementation.

Implements reversi capture rules with two special pieces:
- Captures run in all 8 directions and must close on an own piece
- A captured bomb detonates, capturing its opposing neighbours (chains)
- Unflippable pieces block capture runs and are immune to blasts
- A move is legal only if it captures at least one piece
"""

from typing import Dict, List, Optional, Tuple

from .game_state import Piece, PieceKind, Position, Seat

BOARD_SIZE = 8
INITIAL_BOMBS = 3
INITIAL_UNFLIPPABLES = 2

# (drow, dcol) for the 8 compass directions
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

Board = List[List[Optional[Piece]]]


def is_on_board(position: Position, board_size: int = BOARD_SIZE) -> bool:
    """Check that both coordinates lie in [0, board_size)."""
    return 0 <= position.row < board_size and 0 <= position.col < board_size


def create_empty_board(board_size: int = BOARD_SIZE) -> Board:
    return [[None] * board_size for _ in range(board_size)]


def create_starting_board() -> Board:
    """
    Create the initial board.

    The first seat owns (3,3) and (4,4), the second seat (3,4) and (4,3).

    Returns:
        Fresh mutable board
    """
    board = create_empty_board()
    board[3][3] = Piece(PieceKind.SIMPLE, Seat.FIRST)
    board[4][4] = Piece(PieceKind.SIMPLE, Seat.FIRST)
    board[3][4] = Piece(PieceKind.SIMPLE, Seat.SECOND)
    board[4][3] = Piece(PieceKind.SIMPLE, Seat.SECOND)
    return board


def _directional_run(
    board: Board, origin: Position, drow: int, dcol: int, owner: Seat
) -> List[Position]:
    """Opposing pieces bracketed between origin and an own piece in one direction."""
    size = len(board)
    run: List[Position] = []
    current = origin.offset(drow, dcol)

    while is_on_board(current, size):
        piece = board[current.row][current.col]

        if piece is None:
            return []
        if piece.owner is owner:
            return run
        if piece.is_unflippable:
            # Opposing unflippable: the chain cannot pass through it
            return []

        run.append(current)
        current = current.offset(drow, dcol)

    # Ran off the edge without closing
    return []


def _detonate(
    board: Board, bomb: Position, owner: Seat, captured: List[Position], seen: set
) -> None:
    """
    Add the opposing neighbours of a captured bomb to `captured`.

    Recurses into neighbouring bombs. `seen` mirrors `captured` and is
    the visited set, so bomb cycles terminate.
    """
    size = len(board)
    for drow, dcol in DIRECTIONS:
        neighbour = bomb.offset(drow, dcol)
        if not is_on_board(neighbour, size) or neighbour in seen:
            continue

        piece = board[neighbour.row][neighbour.col]
        if piece is None or piece.owner is owner or piece.is_unflippable:
            continue

        captured.append(neighbour)
        seen.add(neighbour)
        if piece.is_bomb:
            _detonate(board, neighbour, owner, captured, seen)


def get_flippable_positions(board: Board, position: Position, owner: Seat) -> List[Position]:
    """
    Compute every position captured by placing a piece for `owner`.

    Does not modify the board. The placed piece's own kind does not
    matter: capture runs depend only on its owner.

    Args:
        board: Current board
        position: Cell where the piece would be placed
        owner: Side placing the piece

    Returns:
        Captured positions, directional runs first (in DIRECTIONS order),
        then bomb blast victims in detonation order
    """
    captured: List[Position] = []
    for drow, dcol in DIRECTIONS:
        captured.extend(_directional_run(board, position, drow, dcol, owner))

    # Directions are disjoint rays, so the runs hold no duplicates
    seen = set(captured)
    for pos in list(captured):
        if board[pos.row][pos.col].is_bomb:
            _detonate(board, pos, owner, captured, seen)

    return captured


def count_flips(board: Board, position: Position, owner: Seat) -> int:
    """Number of pieces a placement would capture (0 for occupied/off-board cells)."""
    if not is_on_board(position, len(board)) or board[position.row][position.col] is not None:
        return 0
    return len(get_flippable_positions(board, position, owner))


def generate_valid_moves(board: Board, seat: Seat) -> List[Position]:
    """
    Generate all legal placements for a side.

    A cell is legal if it is empty and a piece placed there would
    capture at least one opposing piece.

    Args:
        board: Current board
        seat: Side to move

    Returns:
        Legal positions in row-major order
    """
    valid_moves = []
    size = len(board)

    for row in range(size):
        for col in range(size):
            if board[row][col] is not None:
                continue
            position = Position(row, col)
            if get_flippable_positions(board, position, seat):
                valid_moves.append(position)

    return valid_moves


def count_pieces(board: Board) -> Dict[Seat, int]:
    """Count occupied cells by owner."""
    counts = {Seat.FIRST: 0, Seat.SECOND: 0}
    for row in board:
        for piece in row:
            if piece is not None:
                counts[piece.owner] += 1
    return counts
