"""Logging setup shared by the CLI commands."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# CRAZY_EIGHTS_LOG_LEVEL=DEBUG / INFO / WARNING / ERROR
LOG_LEVEL = os.getenv("CRAZY_EIGHTS_LOG_LEVEL", "WARNING").upper()


def resolve_level(level: str | None = None) -> int:
    """Translate a level name into a ``logging`` constant (unknown names fall back to WARNING)."""

    name = (level or LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None, *, textual: bool = False) -> None:
    """Call once at program start.

    While the Textual UI owns the terminal, records are routed to the Textual
    devtools console instead of stderr.
    """

    handler: logging.Handler
    if textual:
        from textual.logging import TextualHandler

        handler = TextualHandler()
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)

    logging.basicConfig(
        level=resolve_level(level),
        format="%(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[handler],
        force=True,
    )
