"""PlaybackSource backed by the Spotify Web API."""

import httpx

from track_skipper.config import Settings
from track_skipper.models import PlaybackSnapshot
from track_skipper.services import spotify_service
from track_skipper.state_managers import SpotifyAuthManager


class SpotifyPlaybackSource:
    """Binds the shared HTTP client, auth manager and settings to the service calls."""

    def __init__(self, client: httpx.AsyncClient, auth_manager: SpotifyAuthManager, settings: Settings):
        self._client = client
        self._auth_manager = auth_manager
        self._settings = settings

    async def fetch_current_playback(self) -> PlaybackSnapshot:
        return await spotify_service.get_current_playback(self._client, self._auth_manager, self._settings)

    async def skip_to_next(self) -> None:
        await spotify_service.next_track(self._client, self._auth_manager, self._settings)
