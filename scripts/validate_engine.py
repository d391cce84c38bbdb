#!/usr/bin/env python3
"""
Validate the engine over many random games.

For every game:
1. Play random moves (random piece kinds) between two human seats
2. Check each placement adds exactly one piece and passes the turn
3. Undo the whole game and check every intermediate snapshot is restored,
   including the win counters after the result was recorded
"""

import random
import sys
import time
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tqdm import tqdm

from bombreversi.core import GameLogic, PieceKind

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    force=True,  # Force reconfiguration
)

logger = logging.getLogger(__name__)


def check_game(game: GameLogic, rng: random.Random) -> int:
    """Play one game to the end and unwind it. Returns number of failures."""
    failures = 0
    snapshots = [game.snapshot()]

    while True:
        moves = game.valid_moves()
        if not moves:
            break

        position = rng.choice(moves)
        kind = rng.choice(list(PieceKind))
        if not game.current_player.has_special(kind):
            kind = PieceKind.SIMPLE

        before = snapshots[-1]
        if not game.locate_disc(position, kind):
            logger.error(f"Legal move rejected: {kind.value} at {position}")
            return failures + 1

        after = game.snapshot()
        if after.occupied != before.occupied + 1 or after.player is before.player:
            logger.error(f"Bad placement bookkeeping at {position}")
            failures += 1
        snapshots.append(after)

    wins_before = (game.first_player.wins, game.second_player.wins)
    game.conclude()

    while game.undo_last_move() is not None:
        snapshots.pop()
        if game.snapshot() != snapshots[-1]:
            logger.error(f"Undo mismatch at history depth {len(snapshots) - 1}")
            failures += 1

    if len(snapshots) != 1:
        logger.error(f"Undo stopped early with {len(snapshots) - 1} moves left")
        failures += 1
    if (game.first_player.wins, game.second_player.wins) != wins_before:
        logger.error("Win counters not restored after unwinding a finished game")
        failures += 1

    return failures


def main():
    # Configuration
    NUM_GAMES = 500
    SEED = 2024

    logger.info("=" * 70)
    logger.info("ENGINE VALIDATION - random play with full undo")
    logger.info("=" * 70)
    logger.info(f"Games: {NUM_GAMES}")
    logger.info(f"Seed:  {SEED}")
    logger.info("")

    rng = random.Random(SEED)
    game = GameLogic()
    failures = 0
    start_time = time.time()

    for _ in tqdm(range(NUM_GAMES), desc="Games", unit=" game"):
        game.reset()
        failures += check_game(game, rng)

    elapsed = time.time() - start_time

    logger.info("")
    logger.info(f"Games checked: {NUM_GAMES}")
    logger.info(f"Time:          {elapsed:.1f}s")
    logger.info("")

    if failures == 0:
        logger.info("VALIDATION PASSED")
        return 0
    else:
        logger.error(f"VALIDATION FAILED - {failures} failures")
        return 1


if __name__ == "__main__":
    sys.exit(main())
