from __future__ import annotations

import pytest

from crazy_eights import scoreboard
from crazy_eights.state import Turn


def test_match_history_accumulates_totals() -> None:
    history = scoreboard.MatchHistory()
    history.record(scoreboard.RoundSummary(round_number=1, winner=Turn.PLAYER, turns=31))
    history.record(scoreboard.RoundSummary(round_number=2, winner=Turn.AI, turns=18))
    history.record(scoreboard.RoundSummary(round_number=3, winner=Turn.AI))
    history.record(scoreboard.RoundSummary(round_number=4, winner=None))

    totals = history.totals()
    assert totals.player_wins == 1
    assert totals.ai_wins == 2
    assert totals.unfinished == 1
    assert totals.rounds == 4
    assert history.next_round_number() == 5


def test_empty_history_starts_at_round_one() -> None:
    history = scoreboard.MatchHistory()

    assert history.next_round_number() == 1
    assert history.totals() == scoreboard.MatchTotals(player_wins=0, ai_wins=0, unfinished=0)


def test_match_history_rejects_out_of_order_rounds() -> None:
    history = scoreboard.MatchHistory()
    history.record(scoreboard.RoundSummary(round_number=2, winner=Turn.PLAYER))

    with pytest.raises(ValueError):
        history.record(scoreboard.RoundSummary(round_number=2, winner=Turn.AI))
    with pytest.raises(ValueError):
        history.record(scoreboard.RoundSummary(round_number=1, winner=Turn.AI))
    assert len(history.rounds) == 1
