"""Deferred execution for debounced conversions.

The manager never spawns threads.  Non-immediate conversions are handed to
a ``Scheduler`` through a single-slot ``DebounceSlot``: scheduling a new
conversion cancels the pending one, so only the last call inside the
debounce window takes effect.

Two schedulers are provided:

- ``TickScheduler``: a deterministic, manually driven queue with a virtual
  clock.  Callbacks run when the owner calls ``run_pending()`` or
  ``advance()``.  This is the default, and what headless hosts and tests use.
- ``AsyncioScheduler``: delegates to ``loop.call_later`` for hosts that run
  an asyncio event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from docsync.protocols import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

__all__ = ["AsyncioScheduler", "DebounceSlot", "TickScheduler"]


@dataclass(order=True)
class _TickEntry:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class TickScheduler:
    """Manually driven scheduler with a virtual clock.

    ``call_later(0, cb)`` means "on the next tick": ``cb`` runs during the
    next ``run_pending()`` or ``advance()`` call, never synchronously.

    Example::

        ticks = TickScheduler()
        ticks.call_later(0.0, lambda: print("later"))
        ticks.run_pending()   # prints "later"
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[_TickEntry] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        """Current virtual time in seconds."""
        return self._now

    @property
    def pending(self) -> int:
        """Number of scheduled, uncancelled callbacks."""
        return sum(1 for entry in self._queue if not entry.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        entry = _TickEntry(self._now + max(delay, 0.0), next(self._seq), callback)
        heapq.heappush(self._queue, entry)
        return entry

    def advance(self, seconds: float = 0.0) -> int:
        """Move the clock forward and run every callback now due.

        Callbacks scheduled by running callbacks also run if they fall due
        inside the window.

        Returns:
            Number of callbacks executed.
        """
        deadline = self._now + max(seconds, 0.0)
        ran = 0
        while self._queue and self._queue[0].due <= deadline:
            entry = heapq.heappop(self._queue)
            if entry.cancelled:
                continue
            self._now = max(self._now, entry.due)
            entry.callback()
            ran += 1
        self._now = deadline
        return ran

    def run_pending(self) -> int:
        """Run every scheduled callback regardless of its delay."""
        ran = 0
        while self._queue:
            latest = max(entry.due for entry in self._queue)
            ran += self.advance(latest - self._now)
        return ran


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    Args:
        loop: Loop to schedule on.  Defaults to the loop running at the time
            of each ``call_later`` call.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class DebounceSlot:
    """Single-slot timer: at most one pending callback at any time.

    Every ``schedule`` call cancels the callback already waiting, so rapid
    successive calls collapse into the last one ("last write wins").

    Args:
        scheduler: Where callbacks are deferred to.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._handle: TimerHandle | None = None
        self._callback: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        """True while a scheduled callback has neither run nor been cancelled."""
        return self._callback is not None

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """Replace any pending callback with ``callback`` after ``delay`` seconds."""
        self.cancel()
        self._callback = callback
        self._handle = self._scheduler.call_later(delay, self._fire)
        logger.debug("Debounced callback scheduled in %.3fs", delay)

    def cancel(self) -> None:
        """Drop the pending callback, if any, without running it."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    def flush(self) -> bool:
        """Run the pending callback now.

        Returns:
            True if a callback was pending and ran.
        """
        callback = self._callback
        self.cancel()
        if callback is None:
            return False
        callback()
        return True

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        self._callback = None
        if callback is not None:
            callback()
