"""Card identifier encoding utilities for Crazy Eights."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

RANKS: Final[list[str]] = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
SUITS: Final[list[str]] = ["hearts", "diamonds", "clubs", "spades"]
SUIT_CODES: Final[list[str]] = ["H", "D", "C", "S"]
RANK_TO_IDX: Final[dict[str, int]] = {rank: idx for idx, rank in enumerate(RANKS)}
SUIT_TO_IDX: Final[dict[str, int]] = {suit: idx for idx, suit in enumerate(SUITS)}
CODE_TO_SUIT_IDX: Final[dict[str, int]] = {code: idx for idx, code in enumerate(SUIT_CODES)}
WILD_RANK_IDX: Final[int] = RANK_TO_IDX["8"]
DECK_CARD_COUNT: Final[int] = 52


@dataclass(frozen=True, slots=True)
class CardDecoding:
    """Typed container describing a decoded card identifier."""

    rank_idx: int
    suit_idx: int


def card_id(rank_idx: int, suit_idx: int) -> int:
    """Encode a rank and suit index into a card identifier."""

    if not 0 <= rank_idx < len(RANKS):
        raise ValueError(f"rank index out of range: {rank_idx}")
    if not 0 <= suit_idx < len(SUITS):
        raise ValueError(f"suit index out of range: {suit_idx}")
    return suit_idx * len(RANKS) + rank_idx


def decode_id(card_identifier: int) -> CardDecoding:
    """Decode a card identifier into its properties."""

    if not 0 <= card_identifier < DECK_CARD_COUNT:
        raise ValueError(f"card identifier out of range: {card_identifier}")
    suit_idx, rank_idx = divmod(card_identifier, len(RANKS))
    return CardDecoding(rank_idx=rank_idx, suit_idx=suit_idx)


def is_wild(card_identifier: int) -> bool:
    """Return ``True`` when the identifier denotes an eight."""

    return decode_id(card_identifier).rank_idx == WILD_RANK_IDX


def code_for(card_identifier: int) -> str:
    """Return the short text code (``"8H"``, ``"10S"``) for an identifier."""

    decoded = decode_id(card_identifier)
    return f"{RANKS[decoded.rank_idx]}{SUIT_CODES[decoded.suit_idx]}"


def id_from_code(code: str) -> int:
    """Parse a short text code such as ``"QD"`` back into an identifier."""

    text = code.strip().upper()
    if len(text) < 2:
        raise ValueError(f"invalid card code '{code}'")
    rank, suit_code = text[:-1], text[-1]
    if rank not in RANK_TO_IDX or suit_code not in CODE_TO_SUIT_IDX:
        raise ValueError(f"invalid card code '{code}'")
    return card_id(RANK_TO_IDX[rank], CODE_TO_SUIT_IDX[suit_code])
