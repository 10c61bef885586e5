"""
Game loop implementation for Tree Garden.
Drives frame updates and autosaves on two independent cadences.
"""

import asyncio
import logging
import time
from typing import Callable

from tree_garden.gameplay.garden import Garden, GameEvent

logger = logging.getLogger(__name__)


class GameLoop:
    """
    Runs a garden in real time.

    Two asyncio tasks share one event loop:
    - the frame loop measures elapsed real time and calls garden.update()
    - the autosave loop calls garden.save() on a fixed wall-clock interval
    """

    def __init__(
        self,
        garden: Garden,
        frame_interval_s: float = 1 / 60,
        autosave_interval_s: float = 30.0,
        on_events: Callable[[list[GameEvent]], None] | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.garden = garden
        self._frame_interval_s = frame_interval_s
        self._autosave_interval_s = autosave_interval_s
        self._on_events = on_events
        self._clock = clock

        self._frame_number = 0
        self._saves_attempted = 0
        self._last_frame_at: float | None = None
        self._is_running = False
        self._stop_event = asyncio.Event()
        self._tasks: list[asyncio.Task] = []
        self._error: BaseException | None = None

    @property
    def frame_number(self) -> int:
        """Frames processed so far."""
        return self._frame_number

    @property
    def saves_attempted(self) -> int:
        """Autosaves attempted so far, successful or not."""
        return self._saves_attempted

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def error(self) -> BaseException | None:
        """The exception that stopped the frame loop, if any."""
        return self._error

    async def start(self) -> None:
        """Start the frame and autosave loops."""
        if self._tasks:
            return

        self._is_running = True
        self._error = None
        self._stop_event.clear()
        self._last_frame_at = self._clock()
        self._tasks = [
            asyncio.create_task(self._frame_loop()),
            asyncio.create_task(self._autosave_loop()),
        ]
        logger.info(
            f"Game loop started ({1 / self._frame_interval_s:.0f} fps, "
            f"autosave every {self._autosave_interval_s:g}s)"
        )

    async def stop(self, save: bool = False) -> None:
        """Stop both loops, optionally saving one last time."""
        if not self._tasks:
            return

        self._is_running = False
        self._stop_event.set()

        try:
            await asyncio.wait_for(asyncio.gather(*self._tasks), timeout=5.0)
        except asyncio.TimeoutError:
            for task in self._tasks:
                task.cancel()
            await asyncio.gather(*self._tasks, return_exceptions=True)
        except Exception:
            # Frame loop failure, already recorded in self._error
            await asyncio.gather(*self._tasks, return_exceptions=True)

        self._tasks = []
        if save:
            self.garden.save()
        logger.info(f"Game loop stopped after {self._frame_number} frames")

    async def wait_stopped(self) -> None:
        """
        Block until stop() is called or the frame loop fails.
        Re-raises the frame loop's exception in the latter case.
        """
        await self._stop_event.wait()
        if self._error is not None:
            raise self._error

    def run_frame(self) -> list[GameEvent]:
        """
        Process one frame using the real time elapsed since the previous one.
        Returns the events raised by the garden.
        """
        now = self._clock()
        if self._last_frame_at is None:
            self._last_frame_at = now
        delta_ms = max(0.0, (now - self._last_frame_at) * 1000)
        self._last_frame_at = now

        self._frame_number += 1
        events = self.garden.update(delta_ms)
        if events and self._on_events is not None:
            self._on_events(events)
        return events

    async def _frame_loop(self) -> None:
        """
        Frame loop.
        Fail-fast: gameplay errors propagate out of the task.
        """
        while self._is_running:
            frame_start = time.perf_counter()
            try:
                self.run_frame()
            except Exception as e:
                logger.exception(f"Frame {self._frame_number} failed, stopping game loop")
                self._error = e
                self._is_running = False
                self._stop_event.set()
                raise

            frame_duration = time.perf_counter() - frame_start
            sleep_time = max(0.0, self._frame_interval_s - frame_duration)
            if await self._wait_or_stop(sleep_time):
                break

    async def _autosave_loop(self) -> None:
        """Autosave loop. Saving is fail-soft, so a bad store never stops it."""
        while self._is_running:
            if await self._wait_or_stop(self._autosave_interval_s):
                break
            self._saves_attempted += 1
            if self.garden.save():
                logger.debug("Autosaved")

    async def _wait_or_stop(self, timeout: float) -> bool:
        """Sleep up to `timeout` seconds. Returns True if stop was requested."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return False
