"""Cancellable delayed tasks keyed to a session generation."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> object: ...


ClockFn = Callable[[float, Callable[[], None]], Cancellable]


def running_loop_clock() -> ClockFn:
    """Return ``call_later`` of the running event loop (the loop Textual drives).

    Raises ``RuntimeError`` when called outside a running loop.
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError as exc:
        raise RuntimeError("delayed turns need a running event loop or an explicit clock") from exc
    return loop.call_later


@dataclass(slots=True, eq=False)
class ScheduledTask:
    """Handle for one pending callback."""

    name: str
    generation: int
    callback: Callable[[], None]
    handle: Cancellable | None = None
    done: bool = False


@dataclass(slots=True)
class TurnScheduler:
    """Runs delayed callbacks that are discarded once their generation goes stale.

    ``generation`` is bumped by ``invalidate``; every task records the value
    at scheduling time and turns into a no-op if it fires afterwards.
    """

    clock: ClockFn
    generation: int = 0
    _pending: list[ScheduledTask] = field(default_factory=list)

    @property
    def pending(self) -> bool:
        return any(not task.done for task in self._pending)

    @property
    def tasks(self) -> tuple[ScheduledTask, ...]:
        return tuple(task for task in self._pending if not task.done)

    def schedule(self, name: str, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(name=name, generation=self.generation, callback=callback)
        task.handle = self.clock(delay, lambda: self._fire(task))
        self._pending.append(task)
        logger.debug("scheduled %s in %.2fs (generation %d)", name, delay, task.generation)
        return task

    def invalidate(self) -> int:
        """Cancel every pending task and start a new generation."""

        self.cancel_all()
        self.generation += 1
        return self.generation

    def cancel_all(self) -> None:
        for task in self._pending:
            if not task.done and task.handle is not None:
                task.handle.cancel()
            task.done = True
        self._pending.clear()

    def _fire(self, task: ScheduledTask) -> None:
        if task.done:
            return
        task.done = True
        if task in self._pending:
            self._pending.remove(task)
        if task.generation != self.generation:
            logger.debug("dropping stale %s (generation %d != %d)", task.name, task.generation, self.generation)
            return
        task.callback()
