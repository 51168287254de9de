"""Typer entry-point wiring for the Crazy Eights CLI."""

from __future__ import annotations

import random

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .. import benchmark
from ..logging_utils import setup_logging
from ..state import Turn
from .textual import run_textual_app

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


@app.command()
def play(
    seed: int | None = typer.Option(None, help="Random seed for reproducible deals (omit for randomness)."),
    ai_delay: float = typer.Option(1.5, min=0.0, help="Seconds the computer 'thinks' before moving."),
    reveal: bool = typer.Option(False, "--reveal", help="Show the computer's hand."),
    log_level: str | None = typer.Option(None, help="Logging level (defaults to $CRAZY_EIGHTS_LOG_LEVEL or WARNING)."),
) -> None:
    """Play against the computer in a Textual UI."""

    setup_logging(log_level, textual=True)
    run_textual_app(seed=seed, ai_delay=ai_delay, reveal_ai=reveal)


@app.command()
def simulate(
    rounds: int = typer.Option(100, min=1, help="Number of computer-vs-computer rounds."),
    seed: int = typer.Option(123, help="Random seed for the simulation."),
    turn_limit: int = typer.Option(400, min=1, help="Actions after which a stalled round is abandoned."),
    random_player: bool = typer.Option(
        False,
        "--random-player/--greedy-player",
        help="Seat a uniformly random policy in the player's chair instead of the greedy AI.",
    ),
    check: bool = typer.Option(False, "--check", help="Verify card conservation after every action."),
    log_level: str | None = typer.Option(None, help="Logging level (defaults to $CRAZY_EIGHTS_LOG_LEVEL or WARNING)."),
) -> None:
    """Run headless rounds and print the win tally."""

    setup_logging(log_level)
    player_policy = None
    if random_player:
        player_policy = benchmark.RandomPolicy(seat=Turn.PLAYER, rng=random.Random(seed + 1))

    report = benchmark.run_head_to_head(
        rounds=rounds,
        seed=seed,
        turn_limit=turn_limit,
        player_policy=player_policy,
        check_invariants=check,
    )

    table = Table(title="Crazy Eights Simulation", box=box.SIMPLE_HEAVY)
    table.add_column("Seat", justify="center")
    table.add_column("Policy", justify="center")
    table.add_column("Wins", justify="right")
    table.add_column("Cards left", justify="right")
    table.add_row("Player", "random" if random_player else "greedy", str(report.player.wins), str(report.player.cards_left))
    table.add_row("AI", "greedy", str(report.ai.wins), str(report.ai.cards_left))
    console.print(table)

    unfinished = report.history.totals().unfinished
    console.print(f"[cyan]{len(report.history.rounds)} round(s) simulated.[/cyan]")
    if unfinished:
        console.print(f"[yellow]{unfinished} round(s) stalled at the turn limit.[/yellow]")


def main() -> None:
    """Entry-point for ``python -m crazy_eights.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
