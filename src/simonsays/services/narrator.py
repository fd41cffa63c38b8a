"""Terminal narration for interactive Simon Says games."""

from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from ..core.fsm import Status
from ..core.schemas import CheckAnswer

console = Console()


class GameNarrator:
    """Provides human-friendly game progress updates."""

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console
        self.round_num = 0
        self._announced = 0

    def divider(self, title: str = "") -> None:
        """Print a clear visual divider."""
        if title:
            self.console.print(f"\n{'='*40}")
            self.console.print(f"{title.center(40)}")
            self.console.print('='*40)
        else:
            self.console.print('-'*40)

    def round_change(self, new_round: int, old_round: int) -> None:
        self.round_num = new_round
        self._announced = 0
        if new_round > 0:
            self.divider(f"ROUND {new_round}")

    def status_change(self, new_status: Status, old_status: Status) -> None:
        if new_status is Status.SPEAKING:
            self.console.print("[bold blue]Listen carefully...[/bold blue]")
        elif new_status is Status.LISTENING:
            self.console.print()
            self.console.print("[bold green]Your turn! Repeat the sequence.[/bold green]")
        elif new_status is Status.INITIAL and old_status is not Status.INITIAL:
            self.console.print("[dim]Game reset.[/dim]")

    def announce(self, number: int) -> None:
        """Show one announced secret."""
        self._announced += 1
        self.console.print(f"[bold magenta]{self._announced}.[/bold magenta] Simon says [bold]{number}[/bold]")

    def guess(self, guess: int, answer: CheckAnswer) -> None:
        mark = "[green]✓[/green]" if answer.is_right else "[red]✗[/red]"
        self.console.print(f"  {guess} {mark}")

    def victory(self, round_num: int) -> None:
        self.console.print(f"\n[green]Round {round_num} cleared![/green]")

    def defeat(self, round_num: int, sequence: Sequence[int]) -> None:
        self.divider("GAME OVER")
        self.console.print(f"Result: [red]DEFEAT[/red] in round {round_num}")
        self.console.print(f"The sequence was: {' '.join(str(n) for n in sequence)}")
        self.console.print()

    def summary(self, rows: Sequence[dict]) -> None:
        """Show a per-round table of a finished game."""
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Round", style="dim", width=8)
        table.add_column("Sequence")
        table.add_column("Result", width=10)

        for row in rows:
            result = row.get("status", "")
            color = "green" if result == Status.VICTORY.value else "red"
            table.add_row(
                str(row.get("round")),
                " ".join(str(n) for n in row.get("sequence", [])),
                f"[{color}]{result.upper()}[/{color}]",
            )

        self.console.print(table)
