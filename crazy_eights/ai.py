"""Greedy computer opponent for Crazy Eights."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Final, Sequence

from . import rules
from .actions import Action, DrawAction, PlayAction
from .cards import Card, Suit
from .state import GameState, GameStatus, Turn

logger = logging.getLogger(__name__)

# Tie-break order when several suits are equally common in the hand.
SUIT_PRIORITY: Final[tuple[Suit, ...]] = (Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES)
DEFAULT_SUIT: Final[Suit] = Suit.HEARTS


def choose_suit(hand: Sequence[Card], priority: Sequence[Suit] = SUIT_PRIORITY) -> Suit:
    """Return the most frequent suit in ``hand``, ties broken by ``priority``."""

    if not hand:
        return DEFAULT_SUIT
    counts = Counter(card.suit for card in hand)
    return max(priority, key=lambda suit: (counts[suit], -priority.index(suit)))


@dataclass(slots=True)
class AIPlayer:
    """Non-lookahead policy: shed a matching card, keep eights for last.

    The policy only looks at its own hand, the top card and the active suit
    override. It never inspects the human's hand or the deck order.
    """

    seat: Turn = Turn.AI
    suit_priority: tuple[Suit, ...] = field(default=SUIT_PRIORITY)

    def choose_card(self, state: GameState) -> Card | None:
        """Return the card to play, or ``None`` when nothing is legal."""

        candidates = rules.playable_cards(state, self.seat)
        if not candidates:
            return None
        for card in candidates:
            if not card.is_wild:
                return card
        return candidates[0]

    def choose_action(self, state: GameState) -> Action:
        """Return the complete action for the AI's turn."""

        if state.status is not GameStatus.PLAYING or state.current_turn is not self.seat:
            raise rules.IllegalAction("AI asked to act out of turn")

        card = self.choose_card(state)
        if card is None:
            logger.debug("AI has no legal card (deck=%d), drawing", len(state.deck))
            return DrawAction()
        if not card.is_wild:
            return PlayAction(card)

        remaining = [other for other in state.hand_for(self.seat) if other != card]
        suit = choose_suit(remaining, self.suit_priority)
        logger.debug("AI plays %s and declares %s", card.code, suit.value)
        return PlayAction(card, suit=suit)
