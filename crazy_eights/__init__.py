"""Top-level package for the Crazy Eights game engine."""

from . import actions, ai, cards, encoding, engine, rules, scheduler, state

__all__ = [
    "actions",
    "ai",
    "cards",
    "encoding",
    "engine",
    "rules",
    "scheduler",
    "state",
]
