"""Skip scheduler: owns the countdown timer and fires the skip action."""

import asyncio
import time
from collections.abc import Callable

from track_skipper.logging_config import get_logger, log_with_context
from track_skipper.models import PlaybackEvent, TimerState
from track_skipper.protocols import PlaybackSource

logger = get_logger(__name__)


class CountdownTimer:
    """Single-shot deadline on a monotonic clock.

    Either stopped with no deadline or running with exactly one.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.deadline: float | None = None

    @property
    def running(self) -> bool:
        return self.deadline is not None

    def arm(self, interval: float) -> None:
        """(Re)arm for interval seconds from now, replacing any pending deadline."""
        self.deadline = self._clock() + interval

    def disarm(self) -> None:
        self.deadline = None

    def remaining(self) -> float | None:
        """Seconds until expiry (never negative), or None when stopped."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - self._clock())

    def expired(self) -> bool:
        return self.deadline is not None and self._clock() >= self.deadline


class SkipScheduler:
    """Consumes playback events and skips after each full interval of playback.

    - TRACK_CHANGED and RESUMED arm the timer for the full interval.
    - PAUSED disarms it; elapsed time is discarded.
    - Expiry skips and re-arms, so skipping repeats while a track keeps playing.

    The timer is only touched from this object; everything else reaches it
    through the event queue.
    """

    def __init__(
        self,
        source: PlaybackSource,
        events: asyncio.Queue[PlaybackEvent],
        skip_interval: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if skip_interval <= 0:
            raise ValueError("skip_interval must be positive")

        self._source = source
        self._events = events
        self.skip_interval = skip_interval
        self.timer = CountdownTimer(clock)

        self.skips = 0
        self.skip_failures = 0
        self.last_event: PlaybackEvent | None = None

    @property
    def state(self) -> TimerState:
        return TimerState.RUNNING if self.timer.running else TimerState.STOPPED

    def handle_event(self, event: PlaybackEvent) -> None:
        """Apply one playback event to the timer."""
        self.last_event = event
        if event is PlaybackEvent.PAUSED:
            self.timer.disarm()
        else:
            self.timer.arm(self.skip_interval)

        log_with_context(
            logger,
            "debug",
            "Timer updated",
            playback_event=event.value,
            timer_state=self.state.value,
            seconds_until_skip=self.timer.remaining(),
            event_type="timer_updated",
        )

    def is_due(self) -> bool:
        return self.timer.expired()

    async def fire(self) -> None:
        """Skip to the next item, then re-arm whether or not the skip succeeded.

        The interval is measured from the end of the skip request, so a slow
        request cannot leave an already expired deadline behind.
        """
        try:
            await self._source.skip_to_next()
        except Exception as e:
            self.skip_failures += 1
            log_with_context(
                logger,
                "warning",
                "Failed to skip to next track",
                error=str(e),
                error_type=type(e).__name__,
                skip_failures=self.skip_failures,
                event_type="skip_failed",
            )
        else:
            self.skips += 1
            log_with_context(
                logger,
                "info",
                "Skipped to next track",
                skips=self.skips,
                skip_interval=self.skip_interval,
                event_type="skip_fired",
            )
        finally:
            self.timer.arm(self.skip_interval)

    async def run(self) -> None:
        """Handle one event or one expiry at a time until cancelled.

        An already expired deadline is handled before the next queued event.
        """
        log_with_context(
            logger,
            "info",
            "Skip scheduler started",
            skip_interval=self.skip_interval,
            event_type="scheduler_started",
        )
        while True:
            timeout = self.timer.remaining()
            if timeout == 0:
                await self.fire()
                continue

            try:
                if timeout is None:
                    event = await self._events.get()
                else:
                    event = await asyncio.wait_for(self._events.get(), timeout=timeout)
            except TimeoutError:
                await self.fire()
                continue

            self.handle_event(event)
            self._events.task_done()
