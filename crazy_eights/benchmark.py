"""Headless harness that plays computer-vs-computer rounds."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Protocol

from . import actions
from .actions import Action, PlayAction, SuitAction
from .ai import AIPlayer
from .cards import Suit
from .scoreboard import MatchHistory, RoundSummary
from .state import GameConfig, GameState, GameStatus, Turn, deal_shuffled

__all__ = ["Policy", "RandomPolicy", "SeatBreakdown", "HeadToHeadReport", "play_round", "run_head_to_head"]

logger = logging.getLogger(__name__)


class Policy(Protocol):
    def choose_action(self, state: GameState) -> Action: ...


@dataclass(slots=True)
class RandomPolicy:
    """Picks uniformly among legal actions; declares a random suit after an eight."""

    seat: Turn
    rng: random.Random = field(default_factory=random.Random)

    def choose_action(self, state: GameState) -> Action:
        options = actions.legal_actions(state)
        choice = self.rng.choice(options)
        if isinstance(choice, PlayAction) and choice.card.is_wild:
            return PlayAction(choice.card, suit=self.rng.choice(list(Suit)))
        return choice


@dataclass(frozen=True, slots=True)
class SeatBreakdown:
    """Aggregate statistics for one seat across a benchmark."""

    wins: int
    cards_left: int


@dataclass(frozen=True, slots=True)
class HeadToHeadReport:
    """Summary of a run between the two seats."""

    history: MatchHistory
    player: SeatBreakdown
    ai: SeatBreakdown


def play_round(
    config: GameConfig,
    policies: dict[Turn, Policy],
    rng: random.Random,
    *,
    turn_limit: int = 400,
    check_invariants: bool = False,
) -> tuple[GameState, int]:
    """Play one round and return the final state with the number of actions taken.

    A round in which neither side can play from an exhausted deck keeps
    forfeiting; it stops at ``turn_limit`` with no winner.
    """

    game_state = deal_shuffled(config, rng)
    taken = 0
    while game_state.status is not GameStatus.GAME_OVER and taken < turn_limit:
        actor = game_state.current_turn
        if game_state.status is GameStatus.SUIT_SELECTION:
            action: Action = SuitAction(rng.choice(list(Suit)))
        else:
            action = policies[actor].choose_action(game_state)
        game_state = actions.apply_action(game_state, action)
        taken += 1
        if check_invariants and not game_state.check_conservation():
            raise RuntimeError(f"card conservation violated after {action!r}")
    return game_state, taken


def run_head_to_head(
    rounds: int,
    *,
    seed: int = 123,
    turn_limit: int = 400,
    player_policy: Policy | None = None,
    ai_policy: Policy | None = None,
    check_invariants: bool = False,
) -> HeadToHeadReport:
    """Play ``rounds`` rounds, alternating who leads, and tally the results."""

    if rounds <= 0:
        raise ValueError("rounds must be positive")
    rng = random.Random(seed)
    policies: dict[Turn, Policy] = {
        Turn.PLAYER: player_policy or AIPlayer(seat=Turn.PLAYER),
        Turn.AI: ai_policy or AIPlayer(seat=Turn.AI),
    }
    history = MatchHistory()
    cards_left = {Turn.PLAYER: 0, Turn.AI: 0}

    for round_number in range(1, rounds + 1):
        leader = Turn.PLAYER if round_number % 2 else Turn.AI
        config = GameConfig(first_turn=leader, ai_delay=0.0, forfeit_delay=0.0)
        final, taken = play_round(
            config,
            policies,
            rng,
            turn_limit=turn_limit,
            check_invariants=check_invariants,
        )
        for seat in Turn:
            cards_left[seat] += len(final.hand_for(seat))
        history.record(RoundSummary(round_number=round_number, winner=final.winner, turns=taken))
        logger.debug("round %d finished after %d actions, winner=%s", round_number, taken, final.winner)

    totals = history.totals()
    return HeadToHeadReport(
        history=history,
        player=SeatBreakdown(wins=totals.player_wins, cards_left=cards_left[Turn.PLAYER]),
        ai=SeatBreakdown(wins=totals.ai_wins, cards_left=cards_left[Turn.AI]),
    )
