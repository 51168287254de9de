from __future__ import annotations

import random

import pytest

from conftest import cards as card_list

from crazy_eights import cards, state
from crazy_eights.cards import Card, Rank, Suit
from crazy_eights.state import GameConfig, GameStatus, Turn


def _deck_with_prefix(prefix: list[str]) -> list[Card]:
    head = card_list(prefix)
    rest = [card for card in cards.create_deck() if card not in head]
    return head + rest


@pytest.mark.parametrize("seed", range(20))
def test_fresh_deal_shape(seed: int) -> None:
    deck = cards.shuffle(cards.create_deck(), random.Random(seed))

    game_state = state.deal_new_game(GameConfig(), deck)

    assert len(game_state.player_hand) == 8
    assert len(game_state.ai_hand) == 8
    assert len(game_state.discard_pile) == 1
    assert not game_state.top_card.is_wild
    assert len(game_state.deck) == 35
    assert game_state.status is GameStatus.PLAYING
    assert game_state.current_turn is Turn.PLAYER
    assert game_state.winner is None
    assert game_state.suit_override is None
    assert game_state.check_conservation()


def test_deal_follows_shuffled_order() -> None:
    deck = cards.shuffle(cards.create_deck(), random.Random(5))

    game_state = state.deal_new_game(GameConfig(), deck)

    assert game_state.player_hand == deck[:8]
    assert game_state.ai_hand == deck[8:16]


def test_deal_skips_leading_eights_for_discard_seed() -> None:
    prefix = [
        "AH", "2H", "3H", "4H", "5H", "6H", "7H", "9H",
        "AD", "2D", "3D", "4D", "5D", "6D", "7D", "9D",
        "8H", "8D", "KC",
    ]
    deck = _deck_with_prefix(prefix)

    game_state = state.deal_new_game(GameConfig(), deck)

    assert game_state.top_card == Card.from_code("KC")
    assert [card.code for card in game_state.deck[:2]] == ["8H", "8D"]
    assert len(game_state.deck) == 35


def test_deal_raises_when_only_eights_remain() -> None:
    config = GameConfig(hand_size=24)
    eights = [f"8{suit.code}" for suit in Suit]
    others = [card for card in cards.create_deck() if card.rank is not Rank.EIGHT]
    deck = others + card_list(eights)

    with pytest.raises(state.DealError):
        state.deal_new_game(config, deck)


def test_deal_shuffled_redeals_after_deal_error(monkeypatch: pytest.MonkeyPatch) -> None:
    config = GameConfig(hand_size=24)
    eights_last = [card for card in cards.create_deck() if not card.is_wild] + [
        card for card in cards.create_deck() if card.is_wild
    ]
    outcomes = iter([eights_last, cards.create_deck()])
    monkeypatch.setattr(state, "shuffle", lambda deck, rng: next(outcomes))

    game_state = state.deal_shuffled(config, random.Random(0))

    assert not game_state.top_card.is_wild
    assert game_state.check_conservation()


def test_deal_shuffled_gives_up_after_max_redeals(monkeypatch: pytest.MonkeyPatch) -> None:
    config = GameConfig(hand_size=24, max_redeals=2)
    eights_last = [card for card in cards.create_deck() if not card.is_wild] + [
        card for card in cards.create_deck() if card.is_wild
    ]
    calls: list[int] = []

    def fake_shuffle(deck, rng):
        calls.append(1)
        return list(eights_last)

    monkeypatch.setattr(state, "shuffle", fake_shuffle)

    with pytest.raises(state.DealError):
        state.deal_shuffled(config, random.Random(0))
    assert len(calls) == 3


def test_deal_requires_full_deck() -> None:
    with pytest.raises(ValueError):
        state.deal_new_game(GameConfig(), cards.create_deck()[:40])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"hand_size": 0},
        {"hand_size": 26},
        {"ai_delay": -1.0},
        {"forfeit_delay": -0.5},
        {"max_redeals": -1},
    ],
)
def test_config_validation(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_config_first_turn_is_respected() -> None:
    deck = cards.create_deck()

    game_state = state.deal_new_game(GameConfig(first_turn=Turn.AI), deck)

    assert game_state.current_turn is Turn.AI


def test_clone_is_independent() -> None:
    game_state = state.deal_new_game(GameConfig(), cards.create_deck())
    copy = game_state.clone()

    copy.deck.pop()
    copy.player_hand.clear()

    assert len(game_state.deck) == 35
    assert len(game_state.player_hand) == 8
    assert copy != game_state


def test_check_conservation_detects_duplicates() -> None:
    game_state = state.deal_new_game(GameConfig(), cards.create_deck())
    game_state.ai_hand.append(game_state.player_hand[0])

    assert not game_state.check_conservation()
