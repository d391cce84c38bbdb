"""Tests for the game engine: placement, undo and scoring."""

import random

import pytest
from bombreversi.ai import GreedyAI, RandomAI
from bombreversi.core import (
    BOARD_SIZE,
    INITIAL_BOMBS,
    INITIAL_UNFLIPPABLES,
    GameLogic,
    Piece,
    PieceKind,
    Player,
    Position,
    Seat,
)

F, S = Seat.FIRST, Seat.SECOND


# --- Setup ---


def test_initial_board_setup(game):
    assert game.get_piece(Position(3, 3)) == Piece(PieceKind.SIMPLE, F)
    assert game.get_piece(Position(4, 4)) == Piece(PieceKind.SIMPLE, F)
    assert game.get_piece(Position(3, 4)) == Piece(PieceKind.SIMPLE, S)
    assert game.get_piece(Position(4, 3)) == Piece(PieceKind.SIMPLE, S)
    assert game.board_size == BOARD_SIZE
    assert game.is_first_player_turn
    assert game.history == ()


def test_get_piece_off_board(game):
    assert game.get_piece(Position(-1, 0)) is None
    assert game.get_piece(Position(0, 8)) is None


def test_reset_restores_initial_state(game):
    start = game.snapshot()
    assert game.locate_disc(Position(4, 2), PieceKind.BOMB)

    game.reset()

    assert game.snapshot() == start
    assert game.first_player.bombs == INITIAL_BOMBS


def test_mismatched_seats_rejected():
    with pytest.raises(ValueError):
        GameLogic(Player(S), Player(S))

    game = GameLogic()
    first = game.first_player
    before = game.snapshot()
    with pytest.raises(ValueError):
        game.set_players(Player(S), Player(F))

    # The rejected call leaves the seated players and the board alone
    assert game.first_player is first
    assert game.first_player.seat is F
    assert game.snapshot() == before
    assert game.locate_disc(Position(2, 4))


def test_set_piece_off_board(game):
    with pytest.raises(ValueError):
        game.set_piece(Position(8, 0), Piece(PieceKind.SIMPLE, F))


# --- Placement ---


@pytest.mark.parametrize(
    "position",
    [Position(-1, -1), Position(8, 8), Position(0, 8), Position(8, 0), Position(-1, 3)],
)
def test_place_out_of_bounds(game, position):
    before = game.snapshot()
    assert not game.locate_disc(position)
    assert game.snapshot() == before


def test_place_on_occupied_position(game):
    before = game.snapshot()
    assert not game.locate_disc(Position(3, 3))
    assert not game.locate_disc(Position(3, 4))
    assert game.snapshot() == before


@pytest.mark.parametrize("kind", list(PieceKind))
def test_place_without_captures_fails(game, kind):
    """Every legal move must flip something, whatever the piece kind."""
    before = game.snapshot()
    assert not game.locate_disc(Position(0, 0), kind)
    assert not game.locate_disc(Position(2, 3), kind)
    assert game.snapshot() == before


def test_place_valid_disc(game):
    before = game.snapshot()

    assert game.locate_disc(Position(2, 4))

    after = game.snapshot()
    assert after.occupied == before.occupied + 1
    assert game.get_piece(Position(2, 4)) == Piece(PieceKind.SIMPLE, F)
    assert game.get_piece(Position(3, 4)).owner is F
    assert not game.is_first_player_turn
    assert game.last_move.flipped == (Position(3, 4),)


def test_place_unflippable_disc(game):
    assert game.locate_disc(Position(2, 4), PieceKind.UNFLIPPABLE)
    assert game.first_player.unflippables == INITIAL_UNFLIPPABLES - 1
    assert game.first_player.bombs == INITIAL_BOMBS


def test_place_bomb_disc(game):
    assert game.locate_disc(Position(4, 2), PieceKind.BOMB)
    assert game.get_piece(Position(4, 3)).owner is F
    assert game.first_player.bombs == INITIAL_BOMBS - 1


def test_exhausted_special_counter(game):
    game.first_player.bombs = 0
    game.first_player.unflippables = 0
    before = game.snapshot()

    assert not game.locate_disc(Position(2, 4), PieceKind.BOMB)
    assert not game.locate_disc(Position(2, 4), PieceKind.UNFLIPPABLE)
    assert game.snapshot() == before

    # Simple pieces are unlimited
    assert game.locate_disc(Position(2, 4), PieceKind.SIMPLE)


def test_special_counters_are_per_side(game):
    assert game.locate_disc(Position(2, 4), PieceKind.BOMB)
    assert game.locate_disc(Position(2, 3), PieceKind.BOMB)

    assert game.first_player.bombs == INITIAL_BOMBS - 1
    assert game.second_player.bombs == INITIAL_BOMBS - 1


def test_bomb_flips_three_neighbours(empty_game):
    """A bomb placed next to three bracketed opponents flips all of them."""
    game = empty_game
    for col in (2, 4, 6):
        game.set_piece(Position(2, col), Piece(PieceKind.SIMPLE, F))
    for col in (3, 4, 5):
        game.set_piece(Position(3, col), Piece(PieceKind.SIMPLE, S))

    assert game.locate_disc(Position(4, 4), PieceKind.BOMB)

    assert set(game.last_move.flipped) == {Position(3, 3), Position(3, 4), Position(3, 5)}
    for col in (3, 4, 5):
        assert game.get_piece(Position(3, col)).owner is F


def test_captured_bomb_blast_in_one_placement(empty_game):
    game = empty_game
    game.set_piece(Position(2, 4), Piece(PieceKind.SIMPLE, F))
    game.set_piece(Position(3, 4), Piece(PieceKind.BOMB, S))
    game.set_piece(Position(2, 3), Piece(PieceKind.SIMPLE, S))
    game.set_piece(Position(2, 5), Piece(PieceKind.BOMB, S))
    game.set_piece(Position(1, 6), Piece(PieceKind.SIMPLE, S))
    game.set_piece(Position(3, 3), Piece(PieceKind.UNFLIPPABLE, S))

    assert game.locate_disc(Position(4, 4))

    flipped = set(game.last_move.flipped)
    assert flipped == {Position(3, 4), Position(2, 3), Position(2, 5), Position(1, 6)}
    assert game.get_piece(Position(3, 4)) == Piece(PieceKind.BOMB, F)
    assert game.get_piece(Position(3, 3)) == Piece(PieceKind.UNFLIPPABLE, S)


def test_unflippable_survives_capture_attempts(empty_game):
    game = empty_game
    game.set_piece(Position(1, 0), Piece(PieceKind.SIMPLE, S))
    game.set_piece(Position(1, 1), Piece(PieceKind.SIMPLE, F))
    game.set_piece(Position(2, 2), Piece(PieceKind.SIMPLE, S))
    game.set_piece(Position(3, 2), Piece(PieceKind.SIMPLE, F))

    assert game.locate_disc(Position(1, 2), PieceKind.UNFLIPPABLE)
    assert game.last_move.flipped == (Position(2, 2),)

    # Second seat would bracket (1,1)-(1,2) against (1,0) without the unflippable
    assert game.count_flips(Position(1, 3)) == 0
    assert not game.locate_disc(Position(1, 3))
    assert not game.locate_disc(Position(0, 2))
    assert game.get_piece(Position(1, 2)) == Piece(PieceKind.UNFLIPPABLE, F)


# --- Undo ---


def test_undo_last_move(game):
    before = game.snapshot()
    move = Position(4, 2)
    assert game.locate_disc(move)

    undone = game.undo_last_move()

    assert undone.position == move
    assert game.get_piece(move) is None
    assert game.is_first_player_turn
    assert game.snapshot() == before


def test_undo_multiple_moves(game):
    move1 = Position(4, 2)
    move2 = Position(5, 2)
    assert game.locate_disc(move1)
    assert game.locate_disc(move2)

    game.undo_last_move()
    assert game.get_piece(move2) is None
    assert game.get_piece(move1) is not None
    assert not game.is_first_player_turn

    game.undo_last_move()
    assert game.get_piece(move1) is None
    assert game.is_first_player_turn


def test_special_counter_restored_after_undo(game):
    assert game.locate_disc(Position(4, 2), PieceKind.BOMB)
    assert game.locate_disc(Position(5, 2), PieceKind.UNFLIPPABLE)

    game.undo_last_move()
    assert game.second_player.unflippables == INITIAL_UNFLIPPABLES
    assert game.first_player.bombs == INITIAL_BOMBS - 1

    game.undo_last_move()
    assert game.first_player.bombs == INITIAL_BOMBS


def test_undo_empty_history_is_noop(game):
    before = game.snapshot()

    assert game.undo_last_move() is None
    assert game.undo_last_move() is None
    assert game.snapshot() == before


def test_undo_restores_bomb_blast(empty_game):
    game = empty_game
    game.set_piece(Position(2, 4), Piece(PieceKind.SIMPLE, F))
    game.set_piece(Position(3, 4), Piece(PieceKind.BOMB, S))
    game.set_piece(Position(2, 3), Piece(PieceKind.BOMB, S))
    game.set_piece(Position(1, 2), Piece(PieceKind.SIMPLE, S))
    before = game.snapshot()

    assert game.locate_disc(Position(4, 4), PieceKind.BOMB)
    assert game.last_move.flip_count == 3

    game.undo_last_move()
    assert game.snapshot() == before


def test_undo_disabled_with_automated_seat():
    game = GameLogic(Player(F), GreedyAI(S))
    assert game.locate_disc(Position(2, 4))
    after = game.snapshot()

    assert game.undo_last_move() is None
    assert game.snapshot() == after
    assert len(game.history) == 1


def test_undo_stops_at_start(game):
    start = game.snapshot()
    assert game.locate_disc(Position(2, 4))

    assert game.undo_last_move() is not None
    assert game.undo_last_move() is None
    assert game.snapshot() == start


@pytest.mark.parametrize("seed", range(8))
def test_place_undo_round_trip(seed):
    """Random play with interleaved undos always restores exact snapshots."""
    rng = random.Random(seed)
    game = GameLogic()
    snapshots = [game.snapshot()]

    for _ in range(80):
        moves = game.valid_moves()
        if snapshots[1:] and (not moves or rng.random() < 0.25):
            game.undo_last_move()
            snapshots.pop()
            assert game.snapshot() == snapshots[-1]
            continue
        if not moves:
            break

        position = rng.choice(moves)
        kind = rng.choice(list(PieceKind))
        if not game.current_player.has_special(kind):
            kind = PieceKind.SIMPLE

        before = snapshots[-1]
        flips = game.count_flips(position)
        assert game.locate_disc(position, kind)

        after = game.snapshot()
        assert after.occupied == before.occupied + 1
        assert after.player is before.player.opponent
        assert game.last_move.flip_count == flips
        for pos in game.last_move.flipped:
            assert not before.piece_at(pos).is_unflippable
        snapshots.append(after)

    while game.undo_last_move() is not None:
        snapshots.pop()
        assert game.snapshot() == snapshots[-1]

    assert len(snapshots) == 1


# --- End of game ---


def test_game_not_finished_at_start(game):
    assert not game.is_game_finished()
    assert game.conclude() is None
    assert game.first_player.wins == 0


def test_game_finished_on_full_board(game):
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            game.set_piece(Position(row, col), Piece(PieceKind.SIMPLE, F))

    assert game.valid_moves() == []
    assert game.is_game_finished()

    outcome = game.score()
    assert outcome.first_count == 64
    assert outcome.second_count == 0
    assert outcome.winner is F
    assert game.first_player.wins == 0  # score() is read-only


def test_conclude_counts_win_once(game):
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            owner = S if row < 5 else F
            game.set_piece(Position(row, col), Piece(PieceKind.SIMPLE, owner))

    outcome = game.conclude()
    assert outcome.winner is S
    assert (outcome.first_count, outcome.second_count) == (24, 40)
    assert game.second_player.wins == 1

    assert game.conclude() == outcome
    assert game.second_player.wins == 1


def test_tie_awards_no_win(game):
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            owner = F if row < 4 else S
            game.set_piece(Position(row, col), Piece(PieceKind.SIMPLE, owner))

    outcome = game.conclude()
    assert outcome.is_tie
    assert game.first_player.wins == 0
    assert game.second_player.wins == 0


def test_finished_when_side_to_move_is_stuck(empty_game):
    game = empty_game
    game.set_piece(Position(0, 0), Piece(PieceKind.SIMPLE, F))
    game.set_piece(Position(0, 1), Piece(PieceKind.SIMPLE, S))

    # First seat can capture (0,1) from (0,2)
    assert not game.is_game_finished()
    assert game.locate_disc(Position(0, 2))

    # Second seat has nothing left to capture
    assert game.is_game_finished()
    assert game.conclude().winner is F


def test_wins_persist_across_reset():
    game = GameLogic(RandomAI(F, seed=3), RandomAI(S, seed=4))
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            game.set_piece(Position(row, col), Piece(PieceKind.SIMPLE, F))
    game.conclude()

    game.reset()
    assert game.first_player.wins == 1
    assert game.first_player.bombs == INITIAL_BOMBS


def test_undo_after_conclude_takes_the_win_back(empty_game):
    game = empty_game
    game.set_piece(Position(0, 0), Piece(PieceKind.SIMPLE, F))
    game.set_piece(Position(0, 1), Piece(PieceKind.SIMPLE, S))
    assert game.locate_disc(Position(0, 2))

    assert game.conclude().winner is F
    assert game.conclude().winner is F
    assert game.first_player.wins == 1

    game.undo_last_move()
    assert game.first_player.wins == 0
    assert game.conclude() is None

    # Replaying the same final move counts one win, not two
    assert game.locate_disc(Position(0, 2))
    game.conclude()
    assert game.first_player.wins == 1


def test_remaining_special_pieces():
    player = Player(F)
    assert player.remaining(PieceKind.BOMB) == INITIAL_BOMBS
    assert player.remaining(PieceKind.UNFLIPPABLE) == INITIAL_UNFLIPPABLES
    assert player.remaining(PieceKind.SIMPLE) is None
    assert player.has_special(PieceKind.SIMPLE)

    player.bombs = 0
    assert not player.has_special(PieceKind.BOMB)
    with pytest.raises(ValueError):
        player.consume_special(PieceKind.BOMB)
