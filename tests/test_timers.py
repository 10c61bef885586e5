"""
Tests for the deferred task queue.
"""
from tree_garden.gameplay.timers import TimerQueue


class TestTimerQueue:
    """Tests for TimerQueue."""

    def test_fires_when_due(self):
        queue = TimerQueue()
        fired = []
        queue.call_later(2000, lambda: fired.append("rain"))

        queue.advance(1999)
        assert fired == []

        queue.advance(1)
        assert fired == ["rain"]

    def test_fires_once(self):
        queue = TimerQueue()
        fired = []
        queue.call_later(100, lambda: fired.append(1))
        queue.advance(500)
        queue.advance(500)
        assert fired == [1]

    def test_cancelled_never_fires(self):
        queue = TimerQueue()
        fired = []
        handle = queue.call_later(100, lambda: fired.append(1))
        handle.cancel()

        assert queue.advance(200) == 0
        assert fired == []
        assert not handle.pending

    def test_order(self):
        """Earlier deadlines first; ties run in scheduling order."""
        queue = TimerQueue()
        fired = []
        queue.call_later(300, lambda: fired.append("c"))
        queue.call_later(100, lambda: fired.append("a"))
        queue.call_later(100, lambda: fired.append("b"))

        queue.advance(1000)
        assert fired == ["a", "b", "c"]

    def test_pending_count_and_clear(self):
        queue = TimerQueue()
        first = queue.call_later(100, lambda: None)
        queue.call_later(200, lambda: None)
        assert queue.pending_count() == 2

        queue.clear()
        assert queue.pending_count() == 0
        assert first.cancelled

    def test_handle_state(self):
        queue = TimerQueue()
        handle = queue.call_later(50, lambda: None)
        assert handle.pending
        queue.advance(50)
        assert handle.fired
        assert not handle.pending
