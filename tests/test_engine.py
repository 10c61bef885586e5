"""
Tests for the real-time game loop.
"""
import asyncio

import pytest

from tree_garden.gameplay.garden import Garden, RainStoppedEvent
from tree_garden.persistence.store import MemoryStore
from tree_garden.tick_engine import GameLoop


class SecondsClock:
    """perf_counter stand-in, in seconds."""

    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestRunFrame:
    """Tests for a single frame."""

    def test_first_frame_has_no_delta(self, garden: Garden):
        clock = SecondsClock()
        game_loop = GameLoop(garden, clock=clock)

        game_loop.run_frame()

        assert game_loop.frame_number == 1
        assert garden.timers.elapsed == 0.0

    def test_delta_is_in_milliseconds(self, garden: Garden):
        clock = SecondsClock()
        game_loop = GameLoop(garden, clock=clock)
        game_loop.run_frame()

        clock.now += 0.5
        game_loop.run_frame()

        assert garden.timers.elapsed == pytest.approx(500.0)
        assert game_loop.frame_number == 2

    def test_clock_going_backwards(self, garden: Garden):
        """A backwards step counts as zero elapsed time."""
        clock = SecondsClock()
        game_loop = GameLoop(garden, clock=clock)
        game_loop.run_frame()

        clock.now -= 1.0
        game_loop.run_frame()
        assert garden.timers.elapsed == 0.0

    def test_events_reach_callback(self, garden: Garden):
        received = []
        clock = SecondsClock()
        game_loop = GameLoop(garden, clock=clock, on_events=received.extend)
        game_loop.run_frame()

        garden.water_by_cloud("cloud-3")
        clock.now += 2.5
        events = game_loop.run_frame()

        assert events == [RainStoppedEvent("cloud-3")]
        assert received == events

    def test_no_callback_without_events(self, garden: Garden):
        calls = []
        game_loop = GameLoop(garden, clock=SecondsClock(), on_events=calls.append)
        game_loop.run_frame()
        assert calls == []


class TestStartStop:
    """Tests for the asyncio tasks."""

    @pytest.mark.asyncio
    async def test_frames_advance_while_running(self, garden: Garden):
        game_loop = GameLoop(garden, frame_interval_s=0.005, autosave_interval_s=60.0)

        await game_loop.start()
        assert game_loop.is_running
        await asyncio.sleep(0.1)
        await game_loop.stop()

        assert not game_loop.is_running
        assert game_loop.frame_number > 1
        assert garden.timers.elapsed > 0

    @pytest.mark.asyncio
    async def test_start_twice_is_noop(self, garden: Garden):
        game_loop = GameLoop(garden, frame_interval_s=0.01, autosave_interval_s=60.0)
        await game_loop.start()
        await game_loop.start()
        await game_loop.stop()
        assert not game_loop.is_running

    @pytest.mark.asyncio
    async def test_stop_without_start(self, garden: Garden):
        game_loop = GameLoop(garden)
        await game_loop.stop(save=True)
        assert game_loop.frame_number == 0

    @pytest.mark.asyncio
    async def test_autosave(self, garden: Garden, store: MemoryStore):
        """Autosave runs on its own interval."""
        game_loop = GameLoop(garden, frame_interval_s=0.01, autosave_interval_s=0.02)

        await game_loop.start()
        await asyncio.sleep(0.15)
        await game_loop.stop()

        assert game_loop.saves_attempted >= 1
        assert "treeGameState" in store

    @pytest.mark.asyncio
    async def test_stop_can_save(self, garden: Garden, store: MemoryStore):
        game_loop = GameLoop(garden, frame_interval_s=0.01, autosave_interval_s=60.0)

        await game_loop.start()
        await game_loop.stop(save=True)

        assert game_loop.saves_attempted == 0
        assert "treeGameState" in store

    @pytest.mark.asyncio
    async def test_wait_stopped(self, garden: Garden):
        game_loop = GameLoop(garden, frame_interval_s=0.01, autosave_interval_s=60.0)
        await game_loop.start()

        waiter = asyncio.create_task(game_loop.wait_stopped())
        await asyncio.sleep(0.02)
        assert not waiter.done()

        await game_loop.stop()
        await asyncio.wait_for(waiter, timeout=1.0)
        assert waiter.done()


class TestFrameFailure:
    """A failing frame stops the loop instead of hanging it."""

    @pytest.fixture
    def broken_garden(self, garden: Garden, monkeypatch) -> Garden:
        def update(delta_ms):
            raise RuntimeError("bad frame")
        monkeypatch.setattr(garden, "update", update)
        return garden

    @pytest.mark.asyncio
    async def test_wait_stopped_raises(self, broken_garden: Garden):
        game_loop = GameLoop(broken_garden, frame_interval_s=0.01, autosave_interval_s=60.0)
        await game_loop.start()

        with pytest.raises(RuntimeError, match="bad frame"):
            await asyncio.wait_for(game_loop.wait_stopped(), timeout=1.0)

        assert not game_loop.is_running
        assert isinstance(game_loop.error, RuntimeError)
        await game_loop.stop()

    @pytest.mark.asyncio
    async def test_stop_still_saves(self, broken_garden: Garden, store: MemoryStore):
        game_loop = GameLoop(broken_garden, frame_interval_s=0.01, autosave_interval_s=60.0)
        await game_loop.start()
        await asyncio.sleep(0.05)

        await game_loop.stop(save=True)

        assert "treeGameState" in store
        assert game_loop.error is not None
