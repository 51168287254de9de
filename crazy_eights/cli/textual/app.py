"""Textual-powered interactive Crazy Eights interface."""

from __future__ import annotations

from contextlib import suppress
from typing import Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual import events, on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Footer, Header, OptionList, Static
from textual.widgets.option_list import Option

from ... import rules, scoreboard
from ...cards import Card, Suit
from ...engine import GameEngine, Snapshot
from ...state import GameConfig, GameStatus, Turn
from ..render import format_card, format_suit, render_state

MAX_EVENT_LINES = 18


class EventLog(Static):
    """Simple rolling log rendered inside a panel."""

    lines: reactive[tuple[str, ...]] = reactive((), init=False)

    def on_mount(self) -> None:  # pragma: no cover - widget lifecycle glue
        self._refresh()

    def add(self, message: str) -> None:
        log = list(self.lines)
        log.append(message)
        self.lines = tuple(log[-MAX_EVENT_LINES:])

    def watch_lines(self, value: tuple[str, ...]) -> None:
        self._refresh(value)

    def _refresh(self, lines: tuple[str, ...] | None = None) -> None:
        content = Table.grid(padding=(0, 1))
        content.expand = True
        content.add_column(justify="left")
        rows = lines if lines is not None else self.lines
        if rows:
            for line in rows:
                content.add_row(Text.from_markup(line))
        else:
            content.add_row(Text.from_markup("[dim]Event log will appear here[/dim]"))
        self.update(Panel(content, title="Events", border_style="magenta"))


class InfoPanel(Static):
    """Reusable wrapper that expects ``update_panel`` calls with Rich renderables."""

    def update_panel(self, title: str, body) -> None:
        self.update(Panel(body, title=title, border_style="cyan"))


class ScorePanel(Static):
    """Displays the running win/lose tally."""

    def update_scores(self, history: scoreboard.MatchHistory) -> None:
        totals = history.totals()
        table = Table(box=box.SIMPLE_HEAVY, expand=True)
        table.add_column("Seat", justify="left")
        table.add_column("Wins", justify="right")
        table.add_row("You", str(totals.player_wins))
        table.add_row("AI", str(totals.ai_wins))
        if totals.unfinished:
            table.add_row("[dim]Abandoned[/dim]", str(totals.unfinished))
        self.update(Panel(table, title="Match Totals", border_style="bright_blue"))


class StatusStrip(Static):
    """Single line status helper."""

    message: reactive[str] = reactive("", init=False)

    def watch_message(self, value: str) -> None:
        self.update(Panel(Text.from_markup(value or "[dim]Ready[/dim]"), border_style="green"))


class ActionPalette(OptionList):
    """Interactive list used for card / suit selection."""

    class Choice(Message):
        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    def __init__(self, entries: Sequence[str]) -> None:
        options = [
            Option(f"[bold]{idx + 1}[/bold] {entry}", id=str(idx))
            for idx, entry in enumerate(entries)
        ]
        super().__init__(*options)
        if options:
            self.highlighted = 0

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:  # pragma: no cover - Textual glue
        event.stop()
        option_id = event.option.id
        if option_id is None:
            return
        self.post_message(self.Choice(int(option_id)))

    def on_key(self, event: events.Key) -> None:  # pragma: no cover - driven by UI interaction
        if event.key.isdigit() and event.key != "0":
            index = int(event.key) - 1
            if 0 <= index < self.option_count:
                self.highlighted = index
                self.post_message(self.Choice(index))
                event.stop()


class CrazyEightsApp(App):
    """Textual Crazy Eights table: you against the computer."""

    CSS = """
    Screen {
        layout: vertical;
        height: 100%;
    }

    #main {
        layout: horizontal;
        height: 1fr;
        width: 1fr;
    }

    #left, #right {
        layout: vertical;
        width: 1fr;
        height: 1fr;
        padding: 0 1;
        overflow-y: auto;
    }

    #actions {
        layout: vertical;
        min-height: 6;
    }

    ActionPalette {
        border: heavy $accent;
        padding: 1 1;
        width: 100%;
        height: auto;
        max-height: 16;
    }

    StatusStrip {
        width: 100%;
    }

    InfoPanel, EventLog, ScorePanel {
        width: 100%;
        min-height: 6;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit"),
        Binding("r", "new_game", "New game"),
        Binding("h", "toggle_reveal", "Reveal AI hand"),
    ]

    def __init__(self, *, seed: int | None, ai_delay: float, reveal_ai: bool = False) -> None:
        super().__init__()
        self.config = GameConfig(seed=seed, ai_delay=ai_delay)
        self.reveal_enabled = reveal_ai
        self.match_history = scoreboard.MatchHistory()
        self.engine: GameEngine | None = None
        self._last_snapshot: Snapshot | None = None
        self._recorded_generation: int | None = None
        self._active_palette: ActionPalette | None = None
        self._pending_kind: str | None = None
        self._pending_choices: list[Card | Suit | None] = []

        self.status_strip: StatusStrip | None = None
        self.table_panel: InfoPanel | None = None
        self.event_log: EventLog | None = None
        self.score_panel: ScorePanel | None = None
        self.actions_container: Vertical | None = None
        self.action_prompt: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        self.status_strip = StatusStrip(id="status")
        yield self.status_strip

        self.table_panel = InfoPanel(id="table")
        self.table_panel.update_panel("Table", Text.from_markup("[dim]Shuffling…[/dim]"))
        self.action_prompt = Static(Text.from_markup("[dim]Waiting for turn…[/dim]"), id="actions-prompt")
        self.actions_container = Vertical(self.action_prompt, id="actions")
        left = Vertical(self.table_panel, self.actions_container, id="left")

        self.event_log = EventLog(id="events")
        self.score_panel = ScorePanel(id="scores")
        self.score_panel.update_scores(self.match_history)
        right = Vertical(self.event_log, self.score_panel, id="right")

        yield Horizontal(left, right, id="main")
        yield Footer()

    async def on_mount(self) -> None:
        # The engine schedules AI turns on the running asyncio loop, so it is
        # created once the app is mounted.
        self.engine = GameEngine(self.config)
        self.engine.subscribe(self._on_snapshot)
        self._on_snapshot(self.engine.snapshot())

    async def on_unmount(self) -> None:
        if self.engine is not None:
            self.engine.close()

    async def action_new_game(self) -> None:
        if self.engine is None:
            return
        snap = self.engine.snapshot()
        if snap.status is not GameStatus.GAME_OVER:
            self._record_round(snap)
        if self.event_log:
            self.event_log.add("[bold cyan]New game[/bold cyan]")
        self.engine.reset_game()

    async def action_toggle_reveal(self) -> None:
        self.reveal_enabled = not self.reveal_enabled
        if self._last_snapshot is not None:
            self._render_table(self._last_snapshot)

    def _on_snapshot(self, snap: Snapshot) -> None:
        previous = self._last_snapshot
        self._last_snapshot = snap
        if self.event_log and (previous is None or previous.message != snap.message or previous.generation != snap.generation):
            self.event_log.add(snap.message)
        if self.status_strip:
            self.status_strip.message = snap.message
        self._render_table(snap)
        self.title = f"Crazy Eights • {len(snap.deck)} in deck • {snap.current_turn.value} to act"
        if snap.status is GameStatus.GAME_OVER:
            self._record_round(snap)
        self.run_worker(self._update_actions(snap), group="actions", exclusive=True)

    async def _update_actions(self, snap: Snapshot) -> None:
        if snap.status is GameStatus.GAME_OVER:
            await self._dismiss_palette(self._active_palette)
            self._set_prompt("[green]Game over.[/green] Press [bold]R[/bold] for a new game or [bold]Q[/bold] to quit.")
            return
        if not snap.awaiting_human:
            await self._dismiss_palette(self._active_palette)
            self._set_prompt("[dim]AI is thinking…[/dim]" if snap.current_turn is Turn.AI else "[dim]Please wait…[/dim]")
            return
        if snap.status is GameStatus.SUIT_SELECTION:
            await self._prompt_suit()
        else:
            await self._prompt_play(snap)

    def _render_table(self, snap: Snapshot) -> None:
        if self.table_panel:
            self.table_panel.update_panel("Table", render_state(snap, reveal_ai=self.reveal_enabled))

    def _record_round(self, snap: Snapshot) -> None:
        if self._recorded_generation == snap.generation:
            return
        self._recorded_generation = snap.generation
        self.match_history.record(
            scoreboard.RoundSummary(round_number=self.match_history.next_round_number(), winner=snap.winner)
        )
        if self.score_panel:
            self.score_panel.update_scores(self.match_history)

    async def _prompt_play(self, snap: Snapshot) -> None:
        top = snap.top_card
        choices: list[Card | Suit | None] = []
        entries: list[str] = []
        for card in snap.player_hand:
            if rules.is_valid_move(card, top, snap.suit_override):
                choices.append(card)
                entries.append(f"Play {format_card(card)}")
        choices.append(None)
        entries.append("Draw a card" if snap.deck else "Skip turn (deck is empty)")
        await self._mount_palette(ActionPalette(entries), "Your move")
        self._pending_kind = "play"
        self._pending_choices = choices

    async def _prompt_suit(self) -> None:
        suits = list(Suit)
        entries = [format_suit(suit) for suit in suits]
        await self._mount_palette(ActionPalette(entries), "Choose a suit")
        self._pending_kind = "suit"
        self._pending_choices = list(suits)

    async def _mount_palette(self, palette: ActionPalette, prompt: str) -> None:
        await self._dismiss_palette(self._active_palette)
        self._active_palette = palette
        if self.actions_container is not None:
            self._set_prompt(f"[bold]{prompt}[/bold] — use arrows or number keys")
            await self.actions_container.mount(palette)
            palette.focus()

    async def _dismiss_palette(self, palette: ActionPalette | None) -> None:
        self._pending_kind = None
        self._pending_choices = []
        if palette is None:
            return
        with suppress(Exception):  # pragma: no cover - palette may already be gone
            await palette.remove()
        if self._active_palette is palette:
            self._active_palette = None

    def _set_prompt(self, markup: str) -> None:
        if self.action_prompt:
            self.action_prompt.update(Text.from_markup(markup))

    @on(ActionPalette.Choice)
    def _on_palette_choice(self, message: ActionPalette.Choice) -> None:
        message.stop()
        if self.engine is None or self._pending_kind is None:
            return
        if not 0 <= message.index < len(self._pending_choices):
            return
        choice = self._pending_choices[message.index]
        kind = self._pending_kind
        self._pending_kind = None
        if kind == "suit" and isinstance(choice, Suit):
            self.engine.select_suit(choice)
        elif kind == "play" and isinstance(choice, Card):
            self.engine.play_card(choice.id)
        elif kind == "play" and choice is None:
            self.engine.draw_card()


def run_textual_app(*, seed: int | None, ai_delay: float, reveal_ai: bool = False) -> None:
    CrazyEightsApp(seed=seed, ai_delay=ai_delay, reveal_ai=reveal_ai).run()
