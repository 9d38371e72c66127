"""Pydantic models for the skipper status endpoint."""

from enum import Enum

from pydantic import BaseModel, Field

from track_skipper.models.playback import PlaybackEvent


class TimerState(str, Enum):
    """Countdown timer state."""

    STOPPED = "stopped"
    RUNNING = "running"


class SkipperStatus(BaseModel):
    """Snapshot of the skip loop for monitoring."""

    timer_state: TimerState
    seconds_until_skip: float | None = Field(None, description="Seconds until the next skip, None when stopped")
    skip_interval_seconds: float
    poll_interval_seconds: float
    skips: int = Field(0, description="Successful skip actions")
    skip_failures: int = 0
    polls: int = 0
    poll_failures: int = 0
    last_event: PlaybackEvent | None = None
