"""Tests for TickScheduler, AsyncioScheduler and DebounceSlot."""

from __future__ import annotations

import asyncio

from docsync.protocols import Scheduler, TimerHandle
from docsync.scheduling import AsyncioScheduler, DebounceSlot, TickScheduler


class TestTickScheduler:
    """Manually driven virtual-clock scheduler."""

    def test_satisfies_protocol(self) -> None:
        ticks = TickScheduler()
        assert isinstance(ticks, Scheduler)
        assert isinstance(ticks.call_later(0.0, lambda: None), TimerHandle)

    def test_zero_delay_runs_on_next_tick_not_synchronously(self) -> None:
        ran: list[str] = []
        ticks = TickScheduler()
        ticks.call_later(0.0, lambda: ran.append("x"))
        assert ran == []
        assert ticks.run_pending() == 1
        assert ran == ["x"]

    def test_advance_runs_only_due_callbacks(self) -> None:
        ran: list[int] = []
        ticks = TickScheduler()
        ticks.call_later(0.1, lambda: ran.append(1))
        ticks.call_later(0.5, lambda: ran.append(5))
        assert ticks.advance(0.2) == 1
        assert ran == [1]
        assert ticks.pending == 1
        assert ticks.now == 0.2

    def test_callbacks_run_in_due_then_fifo_order(self) -> None:
        ran: list[str] = []
        ticks = TickScheduler()
        ticks.call_later(0.2, lambda: ran.append("late"))
        ticks.call_later(0.0, lambda: ran.append("first"))
        ticks.call_later(0.0, lambda: ran.append("second"))
        ticks.run_pending()
        assert ran == ["first", "second", "late"]

    def test_cancelled_callback_never_runs(self) -> None:
        ran: list[str] = []
        ticks = TickScheduler()
        handle = ticks.call_later(0.0, lambda: ran.append("x"))
        handle.cancel()
        assert ticks.pending == 0
        assert ticks.run_pending() == 0
        assert ran == []

    def test_callbacks_scheduled_while_running_also_run(self) -> None:
        ran: list[str] = []
        ticks = TickScheduler()
        ticks.call_later(0.0, lambda: ticks.call_later(0.0, lambda: ran.append("nested")))
        ticks.run_pending()
        assert ran == ["nested"]


class TestAsyncioScheduler:
    """Scheduler backed by an asyncio loop."""

    def test_runs_callback_on_running_loop(self) -> None:
        ran: list[str] = []

        async def main() -> None:
            AsyncioScheduler().call_later(0.0, lambda: ran.append("x"))
            await asyncio.sleep(0.01)

        asyncio.run(main())
        assert ran == ["x"]

    def test_handle_can_cancel(self) -> None:
        ran: list[str] = []

        async def main() -> None:
            handle = AsyncioScheduler().call_later(0.0, lambda: ran.append("x"))
            handle.cancel()
            await asyncio.sleep(0.01)

        asyncio.run(main())
        assert ran == []


class TestDebounceSlot:
    """Single-slot "last write wins" timer."""

    def test_new_schedule_replaces_pending(self) -> None:
        ran: list[int] = []
        ticks = TickScheduler()
        slot = DebounceSlot(ticks)
        slot.schedule(0.0, lambda: ran.append(1))
        slot.schedule(0.0, lambda: ran.append(2))
        ticks.run_pending()
        assert ran == [2]

    def test_pending_flag(self) -> None:
        ticks = TickScheduler()
        slot = DebounceSlot(ticks)
        assert not slot.pending
        slot.schedule(0.0, lambda: None)
        assert slot.pending
        ticks.run_pending()
        assert not slot.pending

    def test_flush_runs_now(self) -> None:
        ran: list[int] = []
        ticks = TickScheduler()
        slot = DebounceSlot(ticks)
        slot.schedule(10.0, lambda: ran.append(1))
        assert slot.flush() is True
        assert ran == [1]
        assert ticks.run_pending() == 0

    def test_flush_without_pending(self) -> None:
        assert DebounceSlot(TickScheduler()).flush() is False

    def test_cancel(self) -> None:
        ran: list[int] = []
        ticks = TickScheduler()
        slot = DebounceSlot(ticks)
        slot.schedule(0.0, lambda: ran.append(1))
        slot.cancel()
        ticks.run_pending()
        assert ran == []
