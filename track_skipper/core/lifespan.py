"""Application lifespan management."""

import os
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from track_skipper import __version__
from track_skipper.config import get_settings
from track_skipper.core.skipper import PlaybackSkipper
from track_skipper.logging_config import get_logger, log_with_context
from track_skipper.services.playback_source import SpotifyPlaybackSource
from track_skipper.state_managers import SpotifyAuthManager
from track_skipper.utils.redaction import redact_sensitive_data

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook to log requests with redacted sensitive data."""
    log_with_context(
        logger,
        "debug",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook to log responses with redacted sensitive data."""
    log_with_context(
        logger,
        "debug",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client() -> httpx.AsyncClient:
    """Create the shared HTTP client, honouring HTTP_PROXY/HTTPS_PROXY."""
    proxy = os.getenv("HTTP_PROXY") or os.getenv("HTTPS_PROXY")

    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }

    if proxy:
        log_with_context(
            logger,
            "info",
            "Using HTTP proxy",
            proxy=redact_sensitive_data(proxy),
            event_type="proxy_config",
        )

    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=5.0,
            read=30.0 if proxy else 10.0,
            write=5.0,
            pool=5.0,
        ),
        limits=httpx.Limits(
            max_keepalive_connections=2,
            max_connections=4,
            keepalive_expiry=30.0,
        ),
        follow_redirects=True,
        proxy=proxy,
        event_hooks=event_hooks,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start the playback skipper on startup and stop it on shutdown.

    Configuration errors propagate before any task starts, which aborts
    server startup. A playback source injected through ``create_app`` is used
    as-is; otherwise a Spotify source is built on a fresh HTTP client.
    """
    app.state.startup_time = time.time()

    settings = app.state.settings
    if settings is None:
        settings = get_settings()
        app.state.settings = settings

    log_with_context(
        logger,
        "info",
        "Starting Track Skipper",
        version=__version__,
        skip_interval=settings.skip_interval_seconds,
        event_type="app_startup",
    )

    client: httpx.AsyncClient | None = None
    auth_manager: SpotifyAuthManager | None = None
    source = app.state.playback_source
    if source is None:
        client = create_http_client()
        auth_manager = SpotifyAuthManager(settings.spotify_refresh_token)
        await auth_manager.initialize()
        source = SpotifyPlaybackSource(client, auth_manager, settings)

    skipper = PlaybackSkipper(
        source,
        skip_interval=settings.skip_interval_seconds,
        poll_interval=settings.poll_interval_seconds,
        queue_size=settings.event_queue_size,
    )
    app.state.skipper = skipper
    await skipper.initialize()

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(logger, "info", "Shutting down Track Skipper", event_type="app_shutdown")

        await skipper.cleanup()
        if auth_manager is not None:
            await auth_manager.cleanup()
        if client is not None:
            await client.aclose()
            log_with_context(logger, "info", "HTTP client closed", event_type="http_client_cleanup")
