from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

import pytest

from crazy_eights.cards import Card, Suit
from crazy_eights.state import GameState, GameStatus, Turn


@dataclass(eq=False)
class _Entry:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualClock:
    """Drop-in for ``loop.call_later`` that only advances when told to."""

    now: float = 0.0
    entries: list[_Entry] = field(default_factory=list)

    def __call__(self, delay: float, callback: Callable[[], None]) -> _Entry:
        entry = _Entry(due=self.now + delay, callback=callback)
        self.entries.append(entry)
        return entry

    @property
    def waiting(self) -> int:
        return sum(1 for entry in self.entries if not entry.cancelled)

    def advance(self, seconds: float) -> None:
        self.now += seconds
        while True:
            due = [entry for entry in self.entries if not entry.cancelled and entry.due <= self.now]
            if not due:
                return
            entry = min(due, key=lambda item: item.due)
            entry.cancelled = True
            entry.callback()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


def cards(codes: Sequence[str]) -> list[Card]:
    return [Card.from_code(code) for code in codes]


def make_state(
    *,
    player: Sequence[str] = (),
    ai: Sequence[str] = (),
    discard: Sequence[str] = ("7C",),
    deck: Sequence[str] = (),
    turn: Turn = Turn.PLAYER,
    status: GameStatus = GameStatus.PLAYING,
    override: Suit | None = None,
) -> GameState:
    return GameState(
        deck=cards(deck),
        player_hand=cards(player),
        ai_hand=cards(ai),
        discard_pile=cards(discard),
        current_turn=turn,
        status=status,
        suit_override=override,
    )
