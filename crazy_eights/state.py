"""Core game state data structures for Crazy Eights."""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from . import encoding
from .cards import Card, Suit, create_deck, shuffle

logger = logging.getLogger(__name__)


class Turn(str, Enum):
    """The two seats at the table."""

    PLAYER = "player"
    AI = "ai"

    @property
    def other(self) -> "Turn":
        return Turn.AI if self is Turn.PLAYER else Turn.PLAYER


class GameStatus(str, Enum):
    """High-level status tracked by the state machine."""

    DEALING = "dealing"
    PLAYING = "playing"
    SUIT_SELECTION = "suit_selection"
    GAME_OVER = "game_over"


class DealError(RuntimeError):
    """Raised when the shuffled remainder holds no card able to open the discard pile."""


@dataclass(slots=True)
class GameConfig:
    """Runtime configuration for a single Crazy Eights session."""

    hand_size: int = 8
    ai_delay: float = 1.5
    forfeit_delay: float = 1.0
    first_turn: Turn = Turn.PLAYER
    max_redeals: int = 16
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.hand_size < 1:
            raise ValueError("hand_size must be positive")
        if 2 * self.hand_size >= encoding.DECK_CARD_COUNT:
            raise ValueError("hand_size leaves no card to open the discard pile")
        if self.ai_delay < 0 or self.forfeit_delay < 0:
            raise ValueError("delays must not be negative")
        if self.max_redeals < 0:
            raise ValueError("max_redeals must not be negative")


@dataclass(slots=True)
class GameState:
    """Mutable aggregate describing one dealt session."""

    deck: List[Card] = field(default_factory=list)
    player_hand: List[Card] = field(default_factory=list)
    ai_hand: List[Card] = field(default_factory=list)
    discard_pile: List[Card] = field(default_factory=list)
    current_turn: Turn = Turn.PLAYER
    status: GameStatus = GameStatus.DEALING
    winner: Turn | None = None
    suit_override: Suit | None = None

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    def hand_for(self, turn: Turn) -> List[Card]:
        """Return the hand list owned by ``turn``."""

        return self.player_hand if turn is Turn.PLAYER else self.ai_hand

    def clone(self) -> "GameState":
        """Return a copy whose lists can be mutated independently."""

        return GameState(
            deck=list(self.deck),
            player_hand=list(self.player_hand),
            ai_hand=list(self.ai_hand),
            discard_pile=list(self.discard_pile),
            current_turn=self.current_turn,
            status=self.status,
            winner=self.winner,
            suit_override=self.suit_override,
        )

    def all_cards(self) -> List[Card]:
        return [*self.deck, *self.player_hand, *self.ai_hand, *self.discard_pile]

    def check_conservation(self) -> bool:
        """Return ``True`` when every card of the deck appears exactly once."""

        counts = Counter(card.id for card in self.all_cards())
        if len(counts) != encoding.DECK_CARD_COUNT:
            return False
        return all(count == 1 for count in counts.values())


def deal_new_game(config: GameConfig, deck_cards: Sequence[Card]) -> GameState:
    """Deal a fresh session from an already shuffled deck.

    The first ``hand_size`` cards go to the player, the next ``hand_size`` to
    the AI. The first non-eight card of the remainder opens the discard pile.
    """

    if len(deck_cards) != encoding.DECK_CARD_COUNT:
        raise ValueError("a full deck is required to deal")

    game_state = GameState(current_turn=config.first_turn, status=GameStatus.DEALING)
    size = config.hand_size
    game_state.player_hand = list(deck_cards[:size])
    game_state.ai_hand = list(deck_cards[size : 2 * size])
    remainder = list(deck_cards[2 * size :])

    seed_index = next((idx for idx, card in enumerate(remainder) if not card.is_wild), None)
    if seed_index is None:
        raise DealError("no non-eight card left to open the discard pile")
    game_state.discard_pile = [remainder.pop(seed_index)]
    game_state.deck = remainder
    game_state.status = GameStatus.PLAYING
    return game_state


def deal_shuffled(config: GameConfig, rng: random.Random) -> GameState:
    """Shuffle a fresh deck and deal it, reshuffling while only eights are left to open the pile."""

    attempts = config.max_redeals + 1
    for attempt in range(attempts):
        deck = shuffle(create_deck(), rng)
        try:
            return deal_new_game(config, deck)
        except DealError:
            logger.warning("deal %d/%d left only eights to open the pile, reshuffling", attempt + 1, attempts)
    raise DealError(f"could not seed the discard pile after {attempts} deals")
