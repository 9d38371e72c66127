"""Playback state as seen by the observer."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PlaybackEvent(str, Enum):
    """Semantic change derived from two consecutive snapshots."""

    TRACK_CHANGED = "track_changed"
    PAUSED = "paused"
    RESUMED = "resumed"


class PlaybackSnapshot(BaseModel):
    """One polled reading of the player."""

    model_config = ConfigDict(frozen=True)

    item_id: str | None = Field(default=None, description="Opaque track/episode identifier, None when idle")
    is_playing: bool = False
    progress_ms: int = Field(default=0, ge=0, description="Position in the current item")

    @property
    def has_item(self) -> bool:
        return self.item_id is not None
