"""Composable view primitives for the Crazy Eights CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card, Suit
from ..engine import Snapshot
from ..state import GameStatus, Turn


@dataclass(slots=True)
class StateSummaryView:
    """Renderable summarising the current table state."""

    snapshot: Snapshot
    reveal_ai: bool
    card_formatter: Callable[[Card], str]
    suit_formatter: Callable[[Suit], str]

    def _hand_markup(self, cards: Sequence[Card], visible: bool) -> str:
        if not visible:
            return f"{len(cards)} cards"
        if not cards:
            return "—"
        return " ".join(self.card_formatter(card) for card in cards)

    def _metadata_panel(self) -> Panel:
        snap = self.snapshot
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Deck[/cyan]: {len(snap.deck)} card(s)")
        top = snap.top_card
        if top is not None:
            grid.add_row(f"[cyan]Discard[/cyan]: {self.card_formatter(top)} ({len(snap.discard_pile)} card(s))")
        else:
            grid.add_row("[cyan]Discard[/cyan]: —")
        if snap.suit_override is not None:
            grid.add_row(f"[cyan]Suit to match[/cyan]: {self.suit_formatter(snap.suit_override)}")
        grid.add_row(f"[cyan]Status[/cyan]: {snap.status.value.replace('_', ' ')}")
        return Panel(grid, title="Table State", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        snap = self.snapshot
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Seat", justify="left", style="bold")
        table.add_column("Hand", justify="left")
        table.add_column("Status", justify="left")

        seats = ((Turn.PLAYER, "You", snap.player_hand, True), (Turn.AI, "AI", snap.ai_hand, self.reveal_ai))
        for seat, label, hand, visible in seats:
            status_text = ""
            if snap.winner is seat:
                status_text = "[bold green]Winner[/bold green]"
            elif snap.current_turn is seat and snap.status is not GameStatus.GAME_OVER:
                status_text = "[yellow]To act[/yellow]"
            name = f"[bold yellow]{label}[/bold yellow]" if snap.current_turn is seat else label
            table.add_row(name, self._hand_markup(hand, visible), status_text)

        return Group(table, self._metadata_panel())
