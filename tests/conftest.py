"""Pytest configuration and shared fixtures."""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from track_skipper.config import Settings
from track_skipper.models import PlaybackSnapshot


class FakeClock:
    """Manually advanced clock for driving timers in tests."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakePlaybackSource:
    """Scripted PlaybackSource.

    Each fetch consumes the next script entry; the last entry repeats.
    Exceptions in the script are raised instead of returned.
    """

    def __init__(self, script=None, skip_errors=None):
        self.script = list(script or [PlaybackSnapshot()])
        self.skip_errors = list(skip_errors or [])
        self.fetch_calls = 0
        self.skip_calls = 0

    async def fetch_current_playback(self) -> PlaybackSnapshot:
        self.fetch_calls += 1
        entry = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(entry, Exception):
            raise entry
        return entry

    async def skip_to_next(self) -> None:
        self.skip_calls += 1
        if self.skip_errors:
            raise self.skip_errors.pop(0)


async def wait_until(predicate, timeout: float = 2.0) -> None:
    """Yield to the event loop until predicate() is true."""

    async def _poll():
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_poll(), timeout=timeout)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def playing_track():
    return PlaybackSnapshot(item_id="track-a", is_playing=True, progress_ms=1000)


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.post = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def mock_settings():
    """Settings instance with test values, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        skip_interval_seconds=30,
        poll_interval_seconds=1.0,
        spotify_client_id="test-spotify-client-id",
        spotify_client_secret="test-spotify-client-secret",
        spotify_refresh_token="test-refresh-token",
    )


@pytest.fixture
def mock_spotify_auth_manager():
    """Mock SpotifyAuthManager for testing."""
    manager = AsyncMock()
    manager.initialize = AsyncMock()
    manager.cleanup = AsyncMock()
    manager.get_token = AsyncMock(return_value=None)
    manager.set_token = AsyncMock()
    manager.invalidate_token = AsyncMock()
    manager.get_refresh_token = AsyncMock(return_value=None)
    manager.set_refresh_token = AsyncMock()
    return manager


@pytest.fixture
def mock_spotify_playback_response():
    """Mock Spotify playback state response."""
    return {
        "device": {"id": "test-device-id", "is_active": True, "name": "Kitchen", "type": "Speaker"},
        "is_playing": True,
        "item": {
            "id": "4uLU6hMCjMI75M1A2tKUQC",
            "name": "Test Song",
            "artists": [{"name": "Test Artist"}],
            "duration_ms": 240000,
            "uri": "spotify:track:4uLU6hMCjMI75M1A2tKUQC",
        },
        "progress_ms": 60000,
        "currently_playing_type": "track",
    }


@pytest.fixture
def make_source():
    """Factory for scripted playback sources."""
    return FakePlaybackSource


@pytest.fixture
def wait_for():
    return wait_until
