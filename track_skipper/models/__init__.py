"""Track Skipper models"""

from track_skipper.models.base_models import DetailedHealthResponse, HealthResponse
from track_skipper.models.playback import PlaybackEvent, PlaybackSnapshot
from track_skipper.models.status import SkipperStatus, TimerState

__all__ = [
    "DetailedHealthResponse",
    "HealthResponse",
    "PlaybackEvent",
    "PlaybackSnapshot",
    "SkipperStatus",
    "TimerState",
]
