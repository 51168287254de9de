from __future__ import annotations

import asyncio

import pytest

from conftest import ManualClock

from crazy_eights.scheduler import TurnScheduler, running_loop_clock


def test_task_fires_after_delay(clock: ManualClock) -> None:
    scheduler = TurnScheduler(clock=clock)
    fired: list[str] = []

    scheduler.schedule("ai-turn", 1.5, lambda: fired.append("ai"))
    assert scheduler.pending

    clock.advance(1.0)
    assert fired == []
    clock.advance(0.5)
    assert fired == ["ai"]
    assert not scheduler.pending


def test_invalidate_cancels_pending_tasks(clock: ManualClock) -> None:
    scheduler = TurnScheduler(clock=clock)
    fired: list[str] = []
    scheduler.schedule("ai-turn", 1.0, lambda: fired.append("ai"))

    generation = scheduler.invalidate()

    assert generation == 1
    assert not scheduler.pending
    assert clock.waiting == 0
    clock.advance(5.0)
    assert fired == []


def test_stale_task_is_a_no_op_even_if_its_timer_fires() -> None:
    captured = []

    def leaky_clock(delay, callback):
        captured.append(callback)

        class _Handle:
            def cancel(self) -> None:
                pass

        return _Handle()

    scheduler = TurnScheduler(clock=leaky_clock)
    fired: list[str] = []
    scheduler.schedule("ai-turn", 1.0, lambda: fired.append("stale"))
    scheduler.invalidate()
    scheduler.schedule("ai-turn", 1.0, lambda: fired.append("fresh"))

    for callback in captured:
        callback()

    assert fired == ["fresh"]


def test_generation_mismatch_alone_drops_the_callback() -> None:
    captured = []
    scheduler = TurnScheduler(clock=lambda delay, callback: captured.append(callback) or _NullHandle())
    fired: list[str] = []
    scheduler.schedule("ai-turn", 0.0, lambda: fired.append("x"))

    scheduler.generation += 1
    captured[0]()

    assert fired == []
    assert not scheduler.pending


def test_cancel_all_keeps_generation(clock: ManualClock) -> None:
    scheduler = TurnScheduler(clock=clock)
    scheduler.schedule("forfeit", 1.0, lambda: None)

    scheduler.cancel_all()

    assert scheduler.generation == 0
    assert not scheduler.pending


class _NullHandle:
    def cancel(self) -> None:
        pass


def test_running_loop_clock_outside_a_loop_raises() -> None:
    with pytest.raises(RuntimeError, match="running event loop"):
        running_loop_clock()


def test_running_loop_clock_fires_on_the_event_loop() -> None:
    fired: list[str] = []

    async def scenario() -> None:
        scheduler = TurnScheduler(clock=running_loop_clock())
        scheduler.schedule("ai-turn", 0.01, lambda: fired.append("ai"))
        assert scheduler.pending
        await asyncio.sleep(0.1)
        assert not scheduler.pending

    asyncio.run(scenario())

    assert fired == ["ai"]
