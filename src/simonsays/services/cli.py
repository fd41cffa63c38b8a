"""Typer CLI entry point for playing and simulating Simon Says games."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import orjson
import structlog
import typer
from dotenv import load_dotenv
from rich.table import Table

from ..config.settings import DEFAULT_CONFIG_PATH, load_settings
from ..core.constants import DEFAULT_NUMBER_RANGE
from ..core.fsm import GameSession, Handlers, Status
from ..core.ranges import ConfigurationError, IntegerRange
from ..core.schemas import GameSettings
from .autoplayer import AutoPlayer
from .narrator import GameNarrator, console

LOGGER = structlog.get_logger(__name__)

app = typer.Typer(help="Play the Simon Says memory game.", invoke_without_command=False)
_configured_logging = False


def configure_logging() -> None:
    global _configured_logging
    if _configured_logging:
        return
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        cache_logger_on_first_use=True,
    )
    _configured_logging = True


def configure_play_logging() -> None:
    """Configure minimal logging so log lines do not interleave with the game."""
    global _configured_logging
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.ERROR),
        cache_logger_on_first_use=True,
    )
    _configured_logging = True


def _load_or_exit(
    config: Path,
    *,
    min_value: Optional[int],
    max_value: Optional[int],
    pace: Optional[int],
    seed: Optional[int],
) -> GameSettings:
    try:
        return load_settings(config, min=min_value, max=max_value, pacing_interval=pace, seed=seed)
    except ConfigurationError as exc:
        LOGGER.error("config.invalid", error=str(exc), path=str(config))
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc


def _prompt_guess(domain: IntegerRange) -> int:
    while True:
        value = typer.prompt(f"Guess ({domain.min}-{domain.max})", type=int)
        if domain.includes(value):
            return value
        typer.echo(f"Please enter a number between {domain.min} and {domain.max}.")


async def play_game_async(settings: GameSettings, narrator: GameNarrator) -> int:
    """Play interactively until the player stops; return the best round cleared."""

    session = GameSession(
        settings,
        handlers=Handlers(
            on_announce_number=narrator.announce,
            on_round_change=narrator.round_change,
            on_status_change=narrator.status_change,
        ),
    )
    best = 0

    while True:
        session.run()
        await session.wait_until_listening()

        while session.is_status(Status.LISTENING):
            guess = await asyncio.to_thread(_prompt_guess, session.domain)
            answer = session.check(guess)
            if answer is not None:
                narrator.guess(guess, answer)

        if session.is_status(Status.VICTORY):
            best = max(best, session.round)
            narrator.victory(session.round)
            if not await asyncio.to_thread(typer.confirm, "Next round?", default=True):
                break
        else:
            narrator.defeat(session.round, session.sequence)
            if not await asyncio.to_thread(typer.confirm, "Play again?", default=False):
                break

    session.reset()
    return best


@app.command("play")
def play(
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to settings JSON"),
    min_value: Optional[int] = typer.Option(None, "--min", help="Smallest secret number"),
    max_value: Optional[int] = typer.Option(None, "--max", help="Largest secret number"),
    pace: Optional[int] = typer.Option(None, "--pace", help="Milliseconds between announcements"),
    seed: Optional[int] = typer.Option(None, help="Seed for a deterministic sequence"),
) -> None:
    """Play Simon Says in the terminal."""

    load_dotenv()
    configure_play_logging()
    settings = _load_or_exit(config, min_value=min_value, max_value=max_value, pace=pace, seed=seed)

    narrator = GameNarrator()
    narrator.divider("SIMON SAYS")
    best = asyncio.run(play_game_async(settings, narrator))
    typer.echo(f"\nBest round cleared: {best}")


@app.command("simulate")
def simulate(
    rounds: int = typer.Option(5, min=1, help="Maximum number of rounds to play"),
    mistake_at: Optional[int] = typer.Option(
        None,
        "--mistake-at",
        help="Round in which the player fumbles the last key",
    ),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to settings JSON"),
    min_value: Optional[int] = typer.Option(None, "--min", help="Smallest secret number"),
    max_value: Optional[int] = typer.Option(None, "--max", help="Largest secret number"),
    pace: Optional[int] = typer.Option(None, "--pace", help="Milliseconds between announcements"),
    seed: Optional[int] = typer.Option(None, help="Seed for a deterministic sequence"),
    output: Optional[Path] = typer.Option(None, help="Write the result as JSON to this path"),
) -> None:
    """Let an automated player replay the sequence round after round."""

    load_dotenv()
    configure_logging()
    settings = _load_or_exit(config, min_value=min_value, max_value=max_value, pace=pace, seed=seed)

    LOGGER.info(
        "simulation.start",
        rounds=rounds,
        mistake_at=mistake_at,
        pacing_interval=settings.pacing_interval,
        seed=settings.seed,
    )

    player = AutoPlayer(settings, mistake_at=mistake_at)
    result = asyncio.run(player.play(rounds))

    LOGGER.info("simulation.complete", final_status=result.final_status.value, rounds_won=result.rounds_won)
    summary = result.to_dict()
    GameNarrator().summary(summary["rounds"])
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(orjson.dumps(summary, option=orjson.OPT_INDENT_2))
        LOGGER.info("simulation.saved", path=str(output))
    typer.echo(f"Simulation complete: status={result.final_status.value}, rounds won={result.rounds_won}.")


@app.command("keys")
def keys(
    min_value: int = typer.Option(DEFAULT_NUMBER_RANGE["min"], "--min", help="Smallest secret number"),
    max_value: int = typer.Option(DEFAULT_NUMBER_RANGE["max"], "--max", help="Largest secret number"),
) -> None:
    """List the numbers a game with the given range can announce."""

    try:
        domain = IntegerRange(min_value, max_value)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Key", style="dim", width=6)
    table.add_column("Number", width=8)
    for value, index in domain.enumerate_values():
        table.add_row(str(index), str(value))
    console.print(table)


if __name__ == "__main__":  # pragma: no cover
    app()
