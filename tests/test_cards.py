from __future__ import annotations

import random
from collections import Counter
from itertools import permutations

import pytest

from crazy_eights import cards, encoding
from crazy_eights.cards import Card, Rank, Suit


def test_create_deck_has_every_combination_once() -> None:
    deck = cards.create_deck()

    assert len(deck) == 52
    assert len({card.id for card in deck}) == 52
    assert {(card.suit, card.rank) for card in deck} == {(suit, rank) for suit in Suit for rank in Rank}


def test_create_deck_is_deterministic() -> None:
    assert cards.create_deck() == cards.create_deck()


def test_shuffle_returns_permutation_without_mutating_input() -> None:
    deck = cards.create_deck()
    original = list(deck)

    shuffled = cards.shuffle(deck, random.Random(7))

    assert deck == original
    assert sorted(card.id for card in shuffled) == sorted(card.id for card in deck)
    assert shuffled != deck


def test_shuffle_is_reproducible_with_seeded_rng() -> None:
    deck = cards.create_deck()

    assert cards.shuffle(deck, random.Random(99)) == cards.shuffle(deck, random.Random(99))


def test_shuffle_does_not_consume_global_random_state() -> None:
    random.seed(1234)
    expected = random.random()

    random.seed(1234)
    cards.shuffle(cards.create_deck())
    assert random.random() == expected


def test_shuffle_is_uniform_over_small_permutations() -> None:
    rng = random.Random(2024)
    items = cards.create_deck()[:4]
    trials = 24_000

    counts = Counter(tuple(card.id for card in cards.shuffle(items, rng)) for _ in range(trials))

    expected = trials / 24
    assert set(counts) == {tuple(card.id for card in perm) for perm in permutations(items)}
    for count in counts.values():
        assert abs(count - expected) < expected * 0.15


def test_shuffle_spreads_each_card_over_positions() -> None:
    rng = random.Random(11)
    deck = cards.create_deck()
    trials = 5_200
    ace_positions = Counter()
    front_cards = Counter()

    for _ in range(trials):
        shuffled = cards.shuffle(deck, rng)
        ace_positions[shuffled.index(deck[0])] += 1
        front_cards[shuffled[0].id] += 1

    assert len(ace_positions) == 52
    assert len(front_cards) == 52
    for histogram in (ace_positions, front_cards):
        assert max(histogram.values()) < 170
        assert min(histogram.values()) > 40


@pytest.mark.parametrize(
    ("code", "label"),
    [
        ("7C", "7 of clubs"),
        ("10H", "10 of hearts"),
        ("QS", "Q of spades"),
    ],
)
def test_card_label_and_code(code: str, label: str) -> None:
    card = Card.from_code(code)

    assert card.label() == label
    assert card.code == code
    assert Card.from_id(card.id) == card


def test_only_eights_are_wild() -> None:
    wild = [card for card in cards.create_deck() if card.is_wild]

    assert {card.rank for card in wild} == {Rank.EIGHT}
    assert len(wild) == 4


@pytest.mark.parametrize("value", ["h", "H", "hearts", "Hearts", Suit.HEARTS])
def test_suit_parse_accepts_names_and_codes(value: object) -> None:
    assert Suit.parse(value) is Suit.HEARTS


def test_suit_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        Suit.parse("stars")


def test_resolve_card_accepts_id_code_and_card() -> None:
    card = Card(rank=Rank.NINE, suit=Suit.DIAMONDS)

    assert cards.resolve_card(card) is card
    assert cards.resolve_card(card.id) == card
    assert cards.resolve_card("9D") == card
    with pytest.raises(TypeError):
        cards.resolve_card(True)


def test_card_code_and_wildness_follow_its_identifier() -> None:
    for card in cards.create_deck():
        assert card.code == encoding.code_for(card.id)
        assert card.is_wild == encoding.is_wild(card.id)
