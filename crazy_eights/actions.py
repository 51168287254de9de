"""Action value objects and the pure transition function."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from . import rules
from .cards import Card, Suit
from .state import GameState, GameStatus


@dataclass(frozen=True)
class PlayAction:
    """Discard ``card``; ``suit`` declares the new suit in the same step when ``card`` is an eight."""

    card: Card
    suit: Suit | None = None


@dataclass(frozen=True)
class DrawAction:
    """Draw from the deck, or forfeit the turn when it is empty."""


@dataclass(frozen=True)
class SuitAction:
    """Declare the required suit after an eight."""

    suit: Suit


Action = Union[PlayAction, DrawAction, SuitAction]


def legal_actions(state: GameState) -> list[Action]:
    """Return every action available to the side whose turn it is."""

    actor = state.current_turn
    if state.status is GameStatus.SUIT_SELECTION:
        return [SuitAction(suit) for suit in Suit]
    if state.status is not GameStatus.PLAYING:
        return []
    options: list[Action] = [PlayAction(card) for card in rules.playable_cards(state, actor)]
    options.append(DrawAction())
    return options


def apply_in_place(state: GameState, action: Action) -> None:
    """Apply ``action`` for the side to act, mutating ``state``."""

    actor = state.current_turn
    if isinstance(action, PlayAction):
        if action.suit is not None and not action.card.is_wild:
            raise rules.IllegalPlay("only an eight can declare a suit")
        rules.play_card(state, actor, action.card)
        if action.suit is not None and state.status is GameStatus.SUIT_SELECTION:
            rules.select_suit(state, actor, action.suit)
    elif isinstance(action, DrawAction):
        rules.draw_card(state, actor)
    elif isinstance(action, SuitAction):
        rules.select_suit(state, actor, action.suit)
    else:  # pragma: no cover
        raise TypeError(f"unknown action {action!r}")


def apply_action(state: GameState, action: Action) -> GameState:
    """Return the state reached by applying ``action``; ``state`` is left untouched."""

    successor = state.clone()
    apply_in_place(successor, action)
    return successor


def replay(state: GameState, history: Iterable[Action]) -> GameState:
    """Fold ``history`` over ``state`` and return the final state."""

    current = state
    for action in history:
        current = apply_action(current, action)
    return current
