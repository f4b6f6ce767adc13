"""
clock.py — Cooperative Timer
============================
The stepper's auto-play needs exactly one thing from the outside world:

    handle = scheduler.call_later(delay_seconds, callback)
    handle.cancel()

`asyncio` event loops already provide that surface, so a stepper living
inside an event loop can use the loop directly.  ManualClock provides the
same surface without a loop: time only moves when the owner calls
advance() / advance_to(), and due callbacks run one at a time, in
deadline order, on the caller's thread.  Tests drive it by hand; the
Flask host drives it from time.monotonic() on every request.
"""

import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class TimerHandle:
    """A pending ManualClock callback."""

    __slots__ = ("when", "callback", "cancelled")

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when:      float               = when
        self.callback:  Callable[[], None]  = callback
        self.cancelled: bool                = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "pending"
        return f"TimerHandle(when={self.when:.3f}, {state})"


class ManualClock:
    """
    Attributes:
        now : Current clock time in seconds.
    """

    def __init__(self, start: float = 0.0):
        self.now: float = start
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    def advance(self, seconds: float) -> int:
        """Move time forward by `seconds`, firing everything that falls due. Returns the count fired."""
        return self.advance_to(self.now + seconds)

    def advance_to(self, when: float) -> int:
        fired = 0
        while self._queue and self._queue[0][0] <= when:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = max(self.now, due)
            handle.callback()
            fired += 1
        self.now = max(self.now, when)
        return fired

    def pending(self) -> int:
        """Number of armed, not-cancelled callbacks."""
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def next_deadline(self) -> Optional[float]:
        live = [h.when for _, _, h in self._queue if not h.cancelled]
        return min(live) if live else None
