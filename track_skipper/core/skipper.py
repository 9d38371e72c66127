"""Runs the playback observer and the skip scheduler as two asyncio tasks."""

import asyncio
import time
from collections.abc import Callable

from track_skipper.core.observer import PlaybackObserver
from track_skipper.core.scheduler import SkipScheduler
from track_skipper.logging_config import get_logger, log_with_context
from track_skipper.models import PlaybackEvent, SkipperStatus
from track_skipper.protocols import PlaybackSource
from track_skipper.state_managers import StateManager

logger = get_logger(__name__)


class PlaybackSkipper(StateManager):
    """Owns the observer -> scheduler pipeline and its lifecycle.

    Events flow one way through a bounded FIFO queue. ``cleanup()`` cancels
    both tasks and disarms the timer.
    """

    def __init__(
        self,
        source: PlaybackSource,
        skip_interval: float,
        poll_interval: float = 1.0,
        queue_size: int = 1,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._events: asyncio.Queue[PlaybackEvent] = asyncio.Queue(maxsize=queue_size)
        self.observer = PlaybackObserver(source, self._events, poll_interval)
        self.scheduler = SkipScheduler(source, self._events, skip_interval, clock)
        self._tasks: list[asyncio.Task] = []

    @property
    def is_running(self) -> bool:
        return bool(self._tasks) and not any(task.done() for task in self._tasks)

    async def initialize(self) -> None:
        """Start the observer and scheduler tasks."""
        if self._tasks:
            raise RuntimeError("Playback skipper already started")

        self._tasks = [
            asyncio.create_task(self.scheduler.run(), name="skip-scheduler"),
            asyncio.create_task(self.observer.run(), name="playback-observer"),
        ]
        for task in self._tasks:
            task.add_done_callback(self._on_task_done)

        log_with_context(
            logger,
            "info",
            "Playback skipper started",
            skip_interval=self.scheduler.skip_interval,
            poll_interval=self.observer.poll_interval,
            event_type="skipper_started",
        )

    async def cleanup(self) -> None:
        """Cancel both tasks, wait for them, and release the timer."""
        for task in self._tasks:
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        self.scheduler.timer.disarm()

        log_with_context(
            logger,
            "info",
            "Playback skipper stopped",
            skips=self.scheduler.skips,
            event_type="skipper_stopped",
        )

    def status(self) -> SkipperStatus:
        return SkipperStatus(
            timer_state=self.scheduler.state,
            seconds_until_skip=self.scheduler.timer.remaining(),
            skip_interval_seconds=self.scheduler.skip_interval,
            poll_interval_seconds=self.observer.poll_interval,
            skips=self.scheduler.skips,
            skip_failures=self.scheduler.skip_failures,
            polls=self.observer.polls,
            poll_failures=self.observer.poll_failures,
            last_event=self.scheduler.last_event,
        )

    @staticmethod
    def _on_task_done(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log_with_context(
                logger,
                "error",
                "Skipper task crashed",
                task=task.get_name(),
                error=str(exc),
                error_type=type(exc).__name__,
                event_type="skipper_task_crashed",
            )
