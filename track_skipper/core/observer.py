"""Playback observer: turns polled snapshots into playback events."""

import asyncio

from track_skipper.logging_config import get_logger, log_with_context
from track_skipper.models import PlaybackEvent, PlaybackSnapshot
from track_skipper.protocols import PlaybackSource

logger = get_logger(__name__)


class PlaybackObserver:
    """Polls a PlaybackSource and emits at most one event per poll.

    The last seen item id and play flag are private to the observer and only
    used for diffing. A snapshot with no item leaves them untouched, so idle
    periods are not reported as a pause.
    """

    def __init__(
        self,
        source: PlaybackSource,
        events: asyncio.Queue[PlaybackEvent],
        poll_interval: float = 1.0,
    ):
        self._source = source
        self._events = events
        self.poll_interval = poll_interval

        self._item_id: str | None = None
        self._is_playing: bool = False

        self.polls = 0
        self.poll_failures = 0

    def observe(self, snapshot: PlaybackSnapshot) -> PlaybackEvent | None:
        """Diff a snapshot against the stored state and update it.

        Track change wins over play/pause changes seen in the same snapshot.
        """
        if not snapshot.has_item:
            return None

        if snapshot.item_id != self._item_id:
            self._item_id = snapshot.item_id
            self._is_playing = snapshot.is_playing
            return PlaybackEvent.TRACK_CHANGED

        if snapshot.is_playing == self._is_playing:
            return None

        self._is_playing = snapshot.is_playing
        return PlaybackEvent.RESUMED if snapshot.is_playing else PlaybackEvent.PAUSED

    async def poll(self) -> PlaybackEvent | None:
        """Fetch one snapshot and emit the derived event, if any.

        Fetch failures are logged and swallowed; the next poll retries.

        Returns:
            The emitted event, or None
        """
        self.polls += 1
        try:
            snapshot = await self._source.fetch_current_playback()
        except Exception as e:
            self.poll_failures += 1
            log_with_context(
                logger,
                "warning",
                "Failed to fetch playback state",
                error=str(e),
                error_type=type(e).__name__,
                poll_failures=self.poll_failures,
                event_type="playback_fetch_failed",
            )
            return None

        if not snapshot.has_item:
            logger.debug("No track currently playing.")
            return None

        event = self.observe(snapshot)
        if event is None:
            return None

        log_with_context(
            logger,
            "info",
            "Playback event",
            playback_event=event.value,
            item_id=snapshot.item_id,
            is_playing=snapshot.is_playing,
            progress_ms=snapshot.progress_ms,
            event_type="playback_event",
        )
        # Blocks while the scheduler is busy with the previous event or a skip
        await self._events.put(event)
        return event

    async def run(self) -> None:
        """Poll forever at the configured cadence until cancelled."""
        log_with_context(
            logger,
            "info",
            "Playback observer started",
            poll_interval=self.poll_interval,
            event_type="observer_started",
        )
        while True:
            await self.poll()
            await asyncio.sleep(self.poll_interval)
