"""
Main CLI for bomb reversi.
"""

import argparse
import logging
import sys
from typing import Dict, Optional

from tqdm import tqdm

from ..ai import AI_TYPES, AIPlayer, create_ai
from ..core import GameLogic, GameOutcome, Seat
from ..utils.rich_display import GameDisplay, setup_rich_logging

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def play_game(game: GameLogic, display: Optional[GameDisplay] = None) -> GameOutcome:
    """
    Play the current game to the end with its automated players.

    Args:
        game: Game whose seats are both AIPlayer instances
        display: Optional display for move-by-move narration

    Returns:
        Final outcome (the winner's win counter is incremented)
    """
    while not game.is_game_finished():
        player = game.current_player
        if not isinstance(player, AIPlayer):
            raise RuntimeError(f"Player {player.seat.number} is not an automated player")

        proposal = player.make_move(game)
        if proposal is None:
            break

        if not game.locate_disc(proposal.position, proposal.piece.kind):
            raise RuntimeError(
                f"Player {player.seat.number} proposed an illegal move: "
                f"{proposal.piece.kind.value} at {proposal.position}"
            )

        if display is not None:
            display.log_placement(game.last_move)

    outcome = game.conclude()
    if outcome is None:
        # Only reachable if a policy declined while moves remained
        raise RuntimeError("Game stopped before it was finished")
    return outcome


def play_command(args):
    """Play and narrate one automated game."""
    setup_rich_logging(args.log_level)
    display = GameDisplay()

    game = GameLogic(
        create_ai(args.first, Seat.FIRST, seed=args.seed),
        create_ai(args.second, Seat.SECOND, seed=None if args.seed is None else args.seed + 1),
    )

    display.show_header("Bomb Reversi", args.first, args.second)
    if not args.quiet:
        display.show_board(game.snapshot())

    outcome = play_game(game, None if args.quiet else display)

    display.show_board(game.snapshot())
    display.show_outcome(outcome)


def tournament_command(args):
    """Play many automated games and report the tally."""
    setup_logging(args.log_level)
    display = GameDisplay()

    game = GameLogic(
        create_ai(args.first, Seat.FIRST, seed=args.seed),
        create_ai(args.second, Seat.SECOND, seed=None if args.seed is None else args.seed + 1),
    )

    logger.info(f"Playing {args.games:,} games: {args.first} vs {args.second}")

    ties = 0
    with tqdm(total=args.games, desc="Games", unit=" game") as pbar:
        for _ in range(args.games):
            game.reset()
            outcome = play_game(game)
            if outcome.is_tie:
                ties += 1
            pbar.update(1)

    wins: Dict[Seat, int] = {
        Seat.FIRST: game.first_player.wins,
        Seat.SECOND: game.second_player.wins,
    }
    display.show_tally(wins, ties, args.games)


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Bomb Reversi")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play one automated game")
    play_parser.add_argument("--first", choices=AI_TYPES, default="greedy")
    play_parser.add_argument("--second", choices=AI_TYPES, default="random")
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed (second seat uses seed + 1)"
    )
    play_parser.add_argument(
        "--quiet", action="store_true", help="Only show the final board and result"
    )
    play_parser.set_defaults(func=play_command)

    # Tournament command
    tournament_parser = subparsers.add_parser("tournament", help="Play many automated games")
    tournament_parser.add_argument("--first", choices=AI_TYPES, default="greedy")
    tournament_parser.add_argument("--second", choices=AI_TYPES, default="random")
    tournament_parser.add_argument(
        "--games", type=positive_int, default=100, help="Number of games to play"
    )
    tournament_parser.add_argument("--seed", type=int, default=None)
    tournament_parser.set_defaults(func=tournament_command)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
