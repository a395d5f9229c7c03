"""
Recurring timers for property polling.

Polling managers only see the Scheduler interface: schedule a callback
every N milliseconds and get back a token that cancels it. Production uses
AsyncioScheduler; tests can swap in a virtual clock.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol, Set

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None]]


class CancelToken:
    """Cancels one scheduled recurring callback."""

    def __init__(self, on_cancel: Optional[Callable[[], Any]] = None):
        self._on_cancel = on_cancel
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Cancel the schedule; calling again has no effect."""
        if self._cancelled:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()


class Scheduler(Protocol):
    """Schedules recurring asynchronous callbacks."""

    def schedule_every(
        self,
        interval_ms: int,
        callback: TickCallback,
        name: Optional[str] = None,
    ) -> CancelToken:
        ...


class AsyncioScheduler:
    """
    Recurring timers on the running asyncio loop.

    Features:
    - First tick after one full interval
    - Each tick runs as its own task, so a slow tick does not delay the next
    - Exceptions escaping a tick are logged, never propagated
    """

    def __init__(self):
        """Initialize the scheduler."""
        self._timers: Set[asyncio.Task] = set()
        self._ticks: Set[asyncio.Task] = set()

    def schedule_every(
        self,
        interval_ms: int,
        callback: TickCallback,
        name: Optional[str] = None,
    ) -> CancelToken:
        """
        Run a callback every interval.

        Must be called while an event loop is running.

        Args:
            interval_ms: Interval in milliseconds.
            callback: Coroutine function run on every tick.
            name: Task name for debugging.

        Returns:
            Token cancelling the timer. Ticks already running are allowed
            to finish.
        """
        task = asyncio.get_running_loop().create_task(
            self._timer_loop(interval_ms / 1000.0, callback, name),
            name=name,
        )
        self._timers.add(task)
        task.add_done_callback(self._timers.discard)
        return CancelToken(task.cancel)

    async def _timer_loop(
        self,
        interval: float,
        callback: TickCallback,
        name: Optional[str],
    ) -> None:
        while True:
            await asyncio.sleep(interval)
            tick = asyncio.create_task(self._run_tick(callback, name))
            self._ticks.add(tick)
            tick.add_done_callback(self._ticks.discard)

    async def _run_tick(self, callback: TickCallback, name: Optional[str]) -> None:
        try:
            await callback()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in timer {name or callback}: {e}")

    @property
    def active_timers(self) -> int:
        return sum(1 for task in self._timers if not task.done())

    async def shutdown(self) -> None:
        """Cancel all timers and wait for in-flight ticks."""
        for task in list(self._timers):
            task.cancel()
        if self._timers:
            await asyncio.gather(*self._timers, return_exceptions=True)
        if self._ticks:
            await asyncio.gather(*self._ticks, return_exceptions=True)
        logger.debug("Scheduler shut down")
