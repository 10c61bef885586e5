"""
Deferred tasks on the garden's own clock.
NO UI DEPENDENCIES.

Time only moves when advance() is called, so a test can step through
a rain shower exactly instead of sleeping.
"""
import heapq
import itertools
from typing import Callable, List, Tuple


class TimerHandle:
    """A scheduled callback. cancel() stops it from ever running."""

    def __init__(self, due_at: float, callback: Callable[[], None]):
        self.due_at = due_at
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "fired" if self.fired else "pending"
        return f"TimerHandle(due_at={self.due_at}, {state})"


class TimerQueue:
    """
    Runs callbacks once a delay in milliseconds has elapsed.
    Callbacks due at the same moment run in scheduling order.
    """

    def __init__(self):
        self.elapsed: float = 0.0
        self._heap: List[Tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule `callback` to run `delay_ms` from now."""
        handle = TimerHandle(self.elapsed + max(0.0, delay_ms), callback)
        heapq.heappush(self._heap, (handle.due_at, next(self._sequence), handle))
        return handle

    def advance(self, delta_ms: float) -> int:
        """
        Move time forward and run everything that came due.
        Returns the number of callbacks run.
        """
        self.elapsed += max(0.0, delta_ms)
        ran = 0
        while self._heap and self._heap[0][0] <= self.elapsed:
            _, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            ran += 1
        return ran

    def pending_count(self) -> int:
        return sum(1 for _, _, handle in self._heap if handle.pending)

    def clear(self) -> None:
        """Cancel and drop everything scheduled."""
        for _, _, handle in self._heap:
            handle.cancel()
        self._heap.clear()
