"""Session owner exposing the action API consumed by the user interface."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, List

from . import actions, cards, rules
from .actions import Action, DrawAction, PlayAction, SuitAction
from .ai import AIPlayer
from .cards import Card, Suit
from .scheduler import ClockFn, TurnScheduler, running_loop_clock
from .state import GameConfig, GameState, GameStatus, Turn, deal_shuffled

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Your turn! Match the suit or rank."


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the session handed to observers."""

    deck: tuple[Card, ...]
    player_hand: tuple[Card, ...]
    ai_hand: tuple[Card, ...]
    discard_pile: tuple[Card, ...]
    current_turn: Turn
    status: GameStatus
    winner: Turn | None
    suit_override: Suit | None
    message: str
    generation: int
    pending: bool

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def awaiting_human(self) -> bool:
        """``True`` when the human may act (play, draw, or choose a suit)."""

        return (
            self.current_turn is Turn.PLAYER
            and not self.pending
            and self.status in (GameStatus.PLAYING, GameStatus.SUIT_SELECTION)
        )


Listener = Callable[[Snapshot], None]


class GameEngine:
    """Authoritative state machine for one human-vs-AI table.

    Every public action is a no-op when illegal. The AI and the empty-deck
    forfeit run as delayed tasks on ``scheduler``; ``reset_game`` bumps the
    scheduler generation so a task captured under an older session never
    mutates the new one. Without an explicit ``clock`` the engine binds to the
    running event loop and must be created inside it.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        clock: ClockFn | None = None,
        rng: random.Random | None = None,
        ai: AIPlayer | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.ai = ai or AIPlayer()
        self.scheduler = TurnScheduler(clock=clock if clock is not None else running_loop_clock())
        self.state = GameState()
        self.initial_state = self.state
        self.history: List[Action] = []
        self.message = ""
        self._listeners: list[Listener] = []
        self.reset_game()

    # -- observation -------------------------------------------------------

    @property
    def generation(self) -> int:
        return self.scheduler.generation

    @property
    def top_card(self) -> Card | None:
        return self.state.top_card

    def snapshot(self) -> Snapshot:
        current = self.state
        return Snapshot(
            deck=tuple(current.deck),
            player_hand=tuple(current.player_hand),
            ai_hand=tuple(current.ai_hand),
            discard_pile=tuple(current.discard_pile),
            current_turn=current.current_turn,
            status=current.status,
            winner=current.winner,
            suit_override=current.suit_override,
            message=self.message,
            generation=self.scheduler.generation,
            pending=self.scheduler.pending,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for snapshots; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    # -- action API --------------------------------------------------------

    def reset_game(self) -> None:
        """Discard the current session and deal a fresh one."""

        generation = self.scheduler.invalidate()
        self.state = deal_shuffled(self.config, self.rng)
        self.initial_state = self.state.clone()
        self.history = []
        if self.state.current_turn is Turn.PLAYER:
            self.message = WELCOME_MESSAGE
        else:
            self.message = "AI goes first. AI is thinking..."
        logger.info("dealt session generation %d (top %s)", generation, self.state.top_card)
        self._notify()
        self._schedule_ai_if_due()

    def play_card(self, card_id: "Card | int | str") -> None:
        if not self._human_may_act(GameStatus.PLAYING):
            logger.debug("rejecting play of %r: not the player's move", card_id)
            return
        try:
            card = cards.resolve_card(card_id)
        except (TypeError, ValueError) as exc:
            logger.debug("rejecting play: %s", exc)
            return
        if not self._commit(PlayAction(card)):
            return

        if self.state.status is GameStatus.GAME_OVER:
            self.message = "You played your last card. You win!"
        elif self.state.status is GameStatus.SUIT_SELECTION:
            self.message = "Crazy 8! Choose a new suit."
        else:
            self.message = f"You played {card.label()}. AI is thinking..."
        self._notify()
        self._schedule_ai_if_due()

    def draw_card(self) -> None:
        if not self._human_may_act(GameStatus.PLAYING):
            logger.debug("rejecting draw: not the player's move")
            return
        if not self.state.deck:
            self.message = "Deck is empty! Skipping turn."
            self.scheduler.schedule("forfeit", self.config.forfeit_delay, self._run_forfeit)
            self._notify()
            return

        drawn = self.state.deck[0]
        if not self._commit(DrawAction()):
            return
        self.message = f"You drew {drawn.label()}. AI's turn."
        self._notify()
        self._schedule_ai_if_due()

    def select_suit(self, suit: "Suit | str") -> None:
        if not self._human_may_act(GameStatus.SUIT_SELECTION):
            logger.debug("rejecting suit selection %r: none pending", suit)
            return
        try:
            chosen = Suit.parse(suit)
        except ValueError as exc:
            logger.debug("rejecting suit selection: %s", exc)
            return
        if not self._commit(SuitAction(chosen)):
            return
        self.message = f"Suit changed to {chosen.value}. AI's turn."
        self._notify()
        self._schedule_ai_if_due()

    def close(self) -> None:
        """Cancel pending work and drop observers."""

        self.scheduler.cancel_all()
        self._listeners.clear()

    # -- internals ---------------------------------------------------------

    def _human_may_act(self, status: GameStatus) -> bool:
        current = self.state
        return current.current_turn is Turn.PLAYER and current.status is status and not self.scheduler.pending

    def _commit(self, action: Action) -> bool:
        try:
            successor = actions.apply_action(self.state, action)
        except rules.IllegalAction as exc:
            logger.debug("rejected %s: %s", action, exc)
            return False
        self.state = successor
        self.history.append(action)
        logger.debug("applied %s -> turn=%s status=%s", action, successor.current_turn.value, successor.status.value)
        if successor.status is GameStatus.GAME_OVER and successor.winner is not None:
            logger.info("game over, winner: %s", successor.winner.value)
        return True

    def _schedule_ai_if_due(self) -> None:
        current = self.state
        if current.status is not GameStatus.PLAYING or current.current_turn is not Turn.AI:
            return
        if self.scheduler.pending:
            return
        self.scheduler.schedule("ai-turn", self.config.ai_delay, self._run_ai_turn)

    def _run_forfeit(self) -> None:
        current = self.state
        if current.current_turn is not Turn.PLAYER or current.status is not GameStatus.PLAYING:
            return
        if not self._commit(DrawAction()):
            return
        self.message = "You skipped your turn. AI is thinking..."
        self._notify()
        self._schedule_ai_if_due()

    def _run_ai_turn(self) -> None:
        current = self.state
        if current.current_turn is not Turn.AI or current.status is not GameStatus.PLAYING:
            return
        action = self.ai.choose_action(current)
        deck_before = len(current.deck)
        if not self._commit(action):
            return

        if self.state.status is GameStatus.GAME_OVER:
            self.message = "AI played its last card. AI wins!"
        elif isinstance(action, PlayAction) and action.suit is not None:
            self.message = f"AI played an 8 and changed suit to {action.suit.value}! Your turn."
        elif isinstance(action, PlayAction):
            self.message = f"AI played {action.card.label()}. Your turn."
        elif deck_before:
            self.message = "AI had no moves and drew a card. Your turn."
        else:
            self.message = "AI had no moves and deck is empty. Your turn."
        self._notify()
        self._schedule_ai_if_due()
