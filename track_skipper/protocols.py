"""Protocol definitions for dependency injection."""

from typing import Protocol

from track_skipper.models import PlaybackSnapshot


class PlaybackSource(Protocol):
    """Media-control service the skip loop polls and drives.

    Implementations may raise on transient failures; callers log and carry on.
    """

    async def fetch_current_playback(self) -> PlaybackSnapshot:
        """Return the current player state."""
        ...

    async def skip_to_next(self) -> None:
        """Advance playback to the next item."""
        ...
