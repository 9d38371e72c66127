"""FastAPI dependencies for dependency injection."""

from fastapi import Request

from track_skipper.core.skipper import PlaybackSkipper
from track_skipper.exceptions import ErrorCode, SkipperException


async def get_skipper(request: Request) -> PlaybackSkipper:
    """
    Get the playback skipper from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The running PlaybackSkipper instance.

    Raises:
        SkipperException: If the skipper has not been started.
    """
    skipper: PlaybackSkipper | None = getattr(request.app.state, "skipper", None)

    if skipper is None:
        raise SkipperException("Playback skipper not initialized", code=ErrorCode.INTERNAL_ERROR, status_code=503)

    return skipper
