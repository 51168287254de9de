"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Suit
from ..engine import Snapshot
from .views import StateSummaryView

_SUIT_SYMBOLS = {
    Suit.HEARTS: ("♥", "red"),
    Suit.DIAMONDS: ("♦", "magenta"),
    Suit.CLUBS: ("♣", "green"),
    Suit.SPADES: ("♠", "cyan"),
}


def format_suit(suit: Suit) -> str:
    symbol, color = _SUIT_SYMBOLS[suit]
    return f"[{color}]{symbol} {suit.value}[/{color}]"


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    symbol, color = _SUIT_SYMBOLS[card.suit]
    style = f"bold {color}" if card.is_wild else color
    return f"[{style}]{card.rank.value}{symbol}[/{style}]"


def render_state(snapshot: Snapshot, *, reveal_ai: bool = False, title: str = "Crazy Eights") -> RenderableType:
    """Return a Rich panel describing the current table state."""

    view = StateSummaryView(snapshot=snapshot, reveal_ai=reveal_ai, card_formatter=format_card, suit_formatter=format_suit)
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
