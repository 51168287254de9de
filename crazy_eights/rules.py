"""Rule utilities and in-place transitions for Crazy Eights."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .cards import Card, Suit
from .state import GameStatus, Turn

if TYPE_CHECKING:
    from .state import GameState

__all__ = [
    "IllegalAction",
    "IllegalPlay",
    "IllegalDraw",
    "IllegalSuitSelection",
    "is_valid_move",
    "playable_cards",
    "play_card",
    "draw_card",
    "select_suit",
]


class IllegalAction(RuntimeError):
    """Base class for rejected transitions."""


class IllegalPlay(IllegalAction):
    """Raised when a player attempts to discard illegally."""


class IllegalDraw(IllegalAction):
    """Raised when a player attempts to draw illegally."""


class IllegalSuitSelection(IllegalAction):
    """Raised when a suit is declared outside of suit selection."""


def is_valid_move(card: Card, top_card: Card | None, suit_override: Suit | None) -> bool:
    """Return ``True`` if ``card`` may be discarded onto ``top_card``.

    Eights are always playable. An active override replaces suit/rank
    matching against the top card with a plain suit check.
    """

    if card.is_wild:
        return True
    if suit_override is not None:
        return card.suit is suit_override
    if top_card is None:
        return False
    return card.suit is top_card.suit or card.rank is top_card.rank


def playable_cards(state: "GameState", actor: Turn) -> list[Card]:
    """Return the cards in ``actor``'s hand that are legal right now, in hand order."""

    top = state.top_card
    return [card for card in state.hand_for(actor) if is_valid_move(card, top, state.suit_override)]


def _require_turn(state: "GameState", actor: Turn, error: type[IllegalAction]) -> None:
    if state.status is GameStatus.GAME_OVER:
        raise error("game already finished")
    if state.current_turn is not actor:
        raise error("not this player's turn")
    if state.status is not GameStatus.PLAYING:
        raise error(f"cannot act while status is {state.status.value}")


def play_card(state: "GameState", actor: Turn, card: Card) -> None:
    """Move ``card`` from ``actor``'s hand to the discard pile."""

    _require_turn(state, actor, IllegalPlay)
    hand = state.hand_for(actor)
    if card not in hand:
        raise IllegalPlay("card not present in hand")
    if not is_valid_move(card, state.top_card, state.suit_override):
        raise IllegalPlay(f"{card.code} does not match the discard pile")

    hand.remove(card)
    state.discard_pile.append(card)

    if not hand:
        state.status = GameStatus.GAME_OVER
        state.winner = actor
        return
    if card.is_wild:
        state.status = GameStatus.SUIT_SELECTION
        return
    state.suit_override = None
    state.current_turn = actor.other


def draw_card(state: "GameState", actor: Turn) -> Card | None:
    """Draw the front deck card for ``actor``; return ``None`` on a forfeit.

    With an empty deck the turn passes without a card changing hands. The
    suit override is never touched by a draw.
    """

    _require_turn(state, actor, IllegalDraw)
    if not state.deck:
        state.current_turn = actor.other
        return None
    card = state.deck.pop(0)
    state.hand_for(actor).append(card)
    state.current_turn = actor.other
    return card


def select_suit(state: "GameState", actor: Turn, suit: Suit) -> None:
    """Declare the suit required after ``actor`` played an eight."""

    if state.status is not GameStatus.SUIT_SELECTION:
        raise IllegalSuitSelection("no suit selection pending")
    if state.current_turn is not actor:
        raise IllegalSuitSelection("not this player's suit to choose")
    state.suit_override = Suit.parse(suit)
    state.status = GameStatus.PLAYING
    state.current_turn = actor.other
