"""
Rich-based console presentation for games.

Provides:
- Board rendering
- Placement, flip and undo narration
- Result and tally output
"""

import logging
from typing import Dict, Optional

from rich.console import Console
from rich.table import Table

from ..core import GameOutcome, GameState, MoveRecord, Seat

console = Console()

SEAT_STYLES = {Seat.FIRST: "bold blue", Seat.SECOND: "bold red"}


class GameDisplay:
    """Rich-based display for a game in progress."""

    def __init__(self, output: Optional[Console] = None):
        """
        Initialize game display.

        Args:
            output: Console to print to (defaults to the module console)
        """
        self.console = output if output is not None else console

    def show_header(self, title: str, first: str, second: str):
        """Show game header."""
        self.console.rule(f"[bold blue]{title}[/bold blue]")
        self.console.print(f"Player 1: [{SEAT_STYLES[Seat.FIRST]}]{first}[/]")
        self.console.print(f"Player 2: [{SEAT_STYLES[Seat.SECOND]}]{second}[/]")
        self.console.print()

    def board_table(self, state: GameState) -> Table:
        """Create a board grid table."""
        table = Table(show_header=True, box=None, padding=(0, 1))
        table.add_column("", style="dim")
        for col in range(state.board_size):
            table.add_column(str(col), justify="center")

        for r, row in enumerate(state.board):
            cells = [str(r)]
            for piece in row:
                if piece is None:
                    cells.append("[dim]·[/dim]")
                else:
                    style = SEAT_STYLES[piece.owner]
                    cells.append(f"[{style}]{piece.kind.symbol}[/{style}]")
            table.add_row(*cells)

        return table

    def show_board(self, state: GameState):
        self.console.print(self.board_table(state))
        style = SEAT_STYLES[state.player]
        self.console.print(f"[{style}]Player {state.player.number}[/{style}] to move")
        self.console.print()

    def log_placement(self, move: MoveRecord):
        """Narrate a placement and the pieces it flipped."""
        seat = move.piece.owner
        style = SEAT_STYLES[seat]
        self.console.print(
            f"[{style}]Player {seat.number}[/{style}] placed a "
            f"{move.piece.kind.symbol} in {move.position}"
        )
        for position in move.flipped:
            self.console.print(f"  [{style}]Player {seat.number}[/{style}] flipped {position}")

    def log_undo(self, move: MoveRecord):
        """Narrate an undo step."""
        self.console.print("Undoing last move:")
        self.console.print(f"  Undo: removing {move.piece.kind.symbol} from {move.position}")
        for position in move.flipped:
            self.console.print(f"  Undo: flipping back {position}")

    def log_no_undo(self):
        self.console.print("Undoing last move:")
        self.console.print("  [yellow]⚠[/yellow]  No previous move available to undo.")

    def show_outcome(self, outcome: GameOutcome):
        """Show the result of a finished game."""
        if outcome.winner is None:
            self.console.print(
                f"[yellow]Tie game[/yellow] ({outcome.first_count}-{outcome.second_count})"
            )
            return

        counts = {Seat.FIRST: outcome.first_count, Seat.SECOND: outcome.second_count}
        winner, loser = outcome.winner, outcome.winner.opponent
        style = SEAT_STYLES[winner]
        self.console.print(
            f"[green]✓[/green] [{style}]Player {winner.number}[/{style}] wins with "
            f"{counts[winner]} discs! Player {loser.number} had {counts[loser]} discs."
        )

    def show_tally(self, wins: Dict[Seat, int], ties: int, games: int):
        """Show a multi-game win table."""
        table = Table(title=f"Results over {games:,} games")
        table.add_column("Result", style="cyan")
        table.add_column("Games", justify="right")
        table.add_column("Share", justify="right")

        for label, count in (
            ("Player 1 wins", wins[Seat.FIRST]),
            ("Player 2 wins", wins[Seat.SECOND]),
            ("Ties", ties),
        ):
            share = count / games * 100 if games > 0 else 0
            table.add_row(label, f"{count:,}", f"{share:.1f}%")

        self.console.print(table)


def setup_rich_logging(level: str = "INFO"):
    """Configure logging to work nicely with rich console."""
    from rich.logging import RichHandler

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )
