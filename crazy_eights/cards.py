"""Card abstractions and deck helpers for Crazy Eights."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence

from . import encoding


class Suit(str, Enum):
    """Enumeration of the four suits in a standard deck."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def code(self) -> str:
        return encoding.SUIT_CODES[encoding.SUIT_TO_IDX[self.value]]

    @classmethod
    def parse(cls, value: "str | Suit") -> "Suit":
        """Accept a suit name (``"hearts"``) or a one-letter code (``"H"``)."""

        if isinstance(value, Suit):
            return value
        text = value.strip().lower()
        for suit in cls:
            if text in (suit.value, suit.code.lower()):
                return suit
        raise ValueError(f"unknown suit '{value}'")


class Rank(str, Enum):
    """Enumeration of ranks in deck order."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical card."""

    rank: Rank
    suit: Suit

    @classmethod
    def from_id(cls, card_identifier: int) -> "Card":
        decoded = encoding.decode_id(card_identifier)
        return cls(
            rank=Rank(encoding.RANKS[decoded.rank_idx]),
            suit=Suit(encoding.SUITS[decoded.suit_idx]),
        )

    @classmethod
    def from_code(cls, code: str) -> "Card":
        return cls.from_id(encoding.id_from_code(code))

    @property
    def id(self) -> int:
        return encoding.card_id(encoding.RANK_TO_IDX[self.rank.value], encoding.SUIT_TO_IDX[self.suit.value])

    @property
    def code(self) -> str:
        return encoding.code_for(self.id)

    @property
    def is_wild(self) -> bool:
        """Return ``True`` for eights."""

        return encoding.is_wild(self.id)

    def label(self) -> str:
        """Create a display label such as ``"7 of clubs"``."""

        return f"{self.rank.value} of {self.suit.value}"


def iter_full_deck() -> Iterator[Card]:
    """Yield all 52 cards, suit-major."""

    for suit in Suit:
        for rank in Rank:
            yield Card(rank=rank, suit=suit)


def create_deck() -> list[Card]:
    """Return a deterministic ordering of all cards."""

    return list(iter_full_deck())


def shuffle(deck: Sequence[Card], rng: random.Random | None = None) -> list[Card]:
    """Return a uniformly shuffled copy of ``deck`` (Fisher-Yates).

    The input is left untouched. Without an explicit ``rng`` a fresh
    ``random.Random`` seeded from the OS is used, so the module-level
    generator is never consumed.
    """

    generator = rng if rng is not None else random.Random()
    cards = list(deck)
    for idx in range(len(cards) - 1, 0, -1):
        swap = generator.randint(0, idx)
        cards[idx], cards[swap] = cards[swap], cards[idx]
    return cards


def resolve_card(value: "Card | int | str") -> Card:
    """Coerce an identifier, text code or ``Card`` into a ``Card``."""

    if isinstance(value, Card):
        return value
    if isinstance(value, bool):
        raise TypeError("card identifier must not be a bool")
    if isinstance(value, int):
        return Card.from_id(value)
    if isinstance(value, str):
        return Card.from_code(value)
    raise TypeError(f"cannot interpret {value!r} as a card")