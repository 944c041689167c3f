"""Timers that fire the end of a slide transition.

The navigation state machine is driven by an :class:`AnimationTimer` kept
outside of it.  :class:`AsyncioTimer` schedules callbacks on the running
event loop; :class:`ManualTimer` keeps a virtual clock advanced explicitly,
which lets callers and tests complete transitions without real delays.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, Protocol, runtime_checkable

__all__ = ["AnimationTimer", "AsyncioTimer", "ManualTimer", "TimerHandle"]

Callback = Callable[[], None]


@runtime_checkable
class TimerHandle(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None: ...


@runtime_checkable
class AnimationTimer(Protocol):
    """Protocol for one-shot timers."""

    def schedule(self, delay_ms: float, callback: Callback) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms`` milliseconds."""

        ...


class AsyncioTimer:
    """Timer backed by :meth:`asyncio.AbstractEventLoop.call_later`."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule(self, delay_ms: float, callback: Callback) -> asyncio.TimerHandle:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)


class _ManualHandle:
    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimer:
    """Timer driven by a virtual clock.

    Callbacks fire from :meth:`advance` in due-time order; callbacks due at the
    same time fire in scheduling order.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, _ManualHandle]] = []
        self._seq = itertools.count()

    def schedule(self, delay_ms: float, callback: Callback) -> _ManualHandle:
        handle = _ManualHandle(self.now + max(delay_ms, 0.0), callback)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def advance(self, ms: float) -> int:
        """Move the clock forward by ``ms`` and return how many callbacks fired."""

        target = self.now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            self.now = due
            if handle.cancelled:
                continue
            handle.callback()
            fired += 1
        self.now = target
        return fired
