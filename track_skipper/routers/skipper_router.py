"""Skip loop status routes."""

from fastapi import APIRouter, Depends

from track_skipper.core.skipper import PlaybackSkipper
from track_skipper.dependencies import get_skipper
from track_skipper.models import SkipperStatus

router = APIRouter()


@router.get(
    "/status",
    response_model=SkipperStatus,
    summary="Get skip loop status",
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "timer_state": "running",
                        "seconds_until_skip": 12.5,
                        "skip_interval_seconds": 30,
                        "poll_interval_seconds": 1.0,
                        "skips": 4,
                        "skip_failures": 0,
                        "polls": 240,
                        "poll_failures": 1,
                        "last_event": "track_changed",
                    }
                }
            },
        },
        503: {"description": "Skipper not running"},
    },
)
async def get_status(skipper: PlaybackSkipper = Depends(get_skipper)) -> SkipperStatus:
    """Return the countdown timer state and loop counters."""
    return skipper.status()
