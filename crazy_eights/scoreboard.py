"""Helpers for tracking win/lose results across resets."""

from __future__ import annotations

from dataclasses import dataclass, field

from .state import Turn

__all__ = ["RoundSummary", "MatchTotals", "MatchHistory"]


@dataclass(frozen=True, slots=True)
class RoundSummary:
    """Outcome of a single finished (or abandoned) round."""

    round_number: int
    winner: Turn | None
    turns: int = 0


@dataclass(frozen=True, slots=True)
class MatchTotals:
    """Aggregate counts accumulated across all recorded rounds."""

    player_wins: int
    ai_wins: int
    unfinished: int

    @property
    def rounds(self) -> int:
        return self.player_wins + self.ai_wins + self.unfinished


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates round summaries."""

    rounds: list[RoundSummary] = field(default_factory=list)

    def record(self, summary: RoundSummary) -> None:
        """Record ``summary``; round numbers must increase."""

        if self.rounds and summary.round_number <= self.rounds[-1].round_number:
            raise ValueError("round numbers must be strictly increasing")
        self.rounds.append(summary)

    def next_round_number(self) -> int:
        return self.rounds[-1].round_number + 1 if self.rounds else 1

    def totals(self) -> MatchTotals:
        return MatchTotals(
            player_wins=sum(1 for entry in self.rounds if entry.winner is Turn.PLAYER),
            ai_wins=sum(1 for entry in self.rounds if entry.winner is Turn.AI),
            unfinished=sum(1 for entry in self.rounds if entry.winner is None),
        )
