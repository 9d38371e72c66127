"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from track_skipper import __version__
from track_skipper.config import Settings
from track_skipper.core.lifespan import lifespan
from track_skipper.middleware.error_handlers import register_error_handlers
from track_skipper.protocols import PlaybackSource
from track_skipper.routers import health_router, skipper_router


def create_app(settings: Settings | None = None, source: PlaybackSource | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Settings are loaded lazily in the lifespan when not given, so importing
    the app does not require a complete environment.

    Args:
        settings: Settings to use instead of the environment
        source: Playback source to use instead of the Spotify Web API

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Track Skipper",
        description="""
        Skips the current Spotify track after a fixed interval of playback.

        ## Endpoints
        - `/health` - Basic health check
        - `/health/ready` - Readiness probe (are the skip loop tasks alive?)
        - `/api/skipper/status` - Countdown timer and counters
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={
            "name": "MIT",
        },
    )
    app.state.settings = settings
    app.state.playback_source = source
    app.state.skipper = None

    register_error_handlers(app)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(skipper_router.router, prefix="/api/skipper", tags=["skipper"])

    return app
