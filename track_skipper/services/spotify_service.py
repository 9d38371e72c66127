"""Spotify Web API service."""

import httpx

from track_skipper.config import Settings, get_settings
from track_skipper.exceptions import (
    SpotifyAPIException,
    SpotifyAuthException,
    SpotifyNotAuthenticatedException,
    SpotifyRateLimitException,
)
from track_skipper.logging_config import get_logger, log_with_context
from track_skipper.models import PlaybackSnapshot
from track_skipper.state_managers import SpotifyAuthManager

logger = get_logger(__name__)


def _check_response(response: httpx.Response) -> None:
    """Raise for error statuses, mapping 429 to SpotifyRateLimitException."""
    if response.status_code == 429:
        retry_after = response.headers.get("Retry-After")
        raise SpotifyRateLimitException(retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None)
    response.raise_for_status()


async def _get_access_token(
    client: httpx.AsyncClient,
    auth_manager: SpotifyAuthManager,
    settings: Settings | None = None,
) -> str:
    """
    Get Spotify access token using the refresh token flow.

    Returns the cached token while it is valid and refreshes it otherwise.

    Args:
        client: Shared HTTP client.
        auth_manager: Spotify authentication state manager
        settings: Settings instance (defaults to singleton)

    Returns:
        Access token string.

    Raises:
        SpotifyNotAuthenticatedException: No refresh token configured.
        SpotifyAuthException: Spotify rejected the refresh or answered garbage.
        SpotifyAPIException: The token endpoint could not be reached.
    """
    if settings is None:
        settings = get_settings()

    cached_token = await auth_manager.get_token()
    if cached_token:
        return cached_token

    refresh_token = await auth_manager.get_refresh_token() or settings.spotify_refresh_token
    if not refresh_token:
        raise SpotifyNotAuthenticatedException("No refresh token available. Please authenticate first.")

    try:
        response = await client.post(
            settings.spotify_token_url,
            auth=(settings.spotify_client_id, settings.spotify_client_secret),
            data={"grant_type": "refresh_token", "refresh_token": refresh_token},
            timeout=10.0,
        )
        response.raise_for_status()
        data = response.json()

        access_token = data["access_token"]
        expires_in = data.get("expires_in", 3600)
        await auth_manager.set_token(access_token, expires_in)

        # Spotify may rotate the refresh token
        if data.get("refresh_token"):
            await auth_manager.set_refresh_token(data["refresh_token"])
            log_with_context(logger, "info", "Spotify refresh token rotated", event_type="spotify_token_rotated")

        return access_token
    except httpx.HTTPStatusError as e:
        raise SpotifyAuthException(
            f"Spotify token refresh failed: {e}",
            details={"status_code": e.response.status_code},
        ) from e
    except httpx.HTTPError as e:
        raise SpotifyAPIException(f"Spotify token endpoint unreachable: {e}") from e
    except (KeyError, ValueError) as e:
        raise SpotifyAuthException(f"Invalid Spotify auth response: {e}") from e


async def get_current_playback(
    client: httpx.AsyncClient,
    auth_manager: SpotifyAuthManager,
    settings: Settings | None = None,
) -> PlaybackSnapshot:
    """
    Get current playback state on Spotify.

    A 204 response means no active device and maps to a snapshot with no item.

    Args:
        client: Shared HTTP client.
        auth_manager: Spotify authentication state manager
        settings: Settings instance (defaults to singleton)

    Returns:
        PlaybackSnapshot of the player.

    Raises:
        SpotifyException subclass if the token or the API call fails.
    """
    if settings is None:
        settings = get_settings()

    token = await _get_access_token(client, auth_manager, settings)
    try:
        response = await client.get(
            f"{settings.spotify_api_base_url}/me/player",
            headers={"Authorization": f"Bearer {token}"},
            timeout=10.0,
        )
        _check_response(response)
        data = response.json() if response.status_code != 204 else {}
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 401:
            await auth_manager.invalidate_token()
        raise SpotifyAPIException(
            f"Failed to get playback state: {e}",
            details={"status_code": e.response.status_code},
        ) from e
    except httpx.HTTPError as e:
        raise SpotifyAPIException(f"Failed to get playback state: {e}") from e
    except ValueError as e:
        raise SpotifyAPIException(f"Invalid playback state response: {e}") from e

    item = data.get("item") or {}
    return PlaybackSnapshot(
        item_id=item.get("id") or item.get("uri"),
        is_playing=bool(data.get("is_playing", False)),
        progress_ms=data.get("progress_ms") or 0,
    )


async def next_track(
    client: httpx.AsyncClient,
    auth_manager: SpotifyAuthManager,
    settings: Settings | None = None,
) -> None:
    """Skip to next track.

    Args:
        client: Shared HTTP client.
        auth_manager: Spotify authentication state manager
        settings: Settings instance (defaults to singleton)

    Raises:
        SpotifyException subclass if the token or the API call fails.
    """
    if settings is None:
        settings = get_settings()

    token = await _get_access_token(client, auth_manager, settings)
    try:
        response = await client.post(
            f"{settings.spotify_api_base_url}/me/player/next",
            headers={"Authorization": f"Bearer {token}"},
            timeout=10.0,
        )
        _check_response(response)
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 401:
            await auth_manager.invalidate_token()
        raise SpotifyAPIException(
            f"Failed to skip to next track: {e}",
            details={"status_code": e.response.status_code},
        ) from e
    except httpx.HTTPError as e:
        raise SpotifyAPIException(f"Failed to skip to next track: {e}") from e
