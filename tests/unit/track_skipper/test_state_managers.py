"""Unit tests for state managers."""

import asyncio

import pytest

from track_skipper.state_managers import SpotifyAuthManager


@pytest.mark.asyncio
async def test_spotify_auth_manager_initialize():
    """Test Spotify auth manager initialization."""
    manager = SpotifyAuthManager()
    await manager.initialize()

    assert await manager.get_token() is None
    assert await manager.get_refresh_token() is None


@pytest.mark.asyncio
async def test_spotify_auth_manager_set_and_get_token():
    """Test setting and getting access token."""
    manager = SpotifyAuthManager()
    await manager.set_token("test-access-token", expires_in=3600)

    assert await manager.get_token() == "test-access-token"


@pytest.mark.asyncio
async def test_spotify_auth_manager_token_expiration():
    """Test token expiration logic."""
    manager = SpotifyAuthManager()
    await manager.set_token("expiring-token", expires_in=0)

    await asyncio.sleep(0.01)
    assert await manager.get_token() is None


@pytest.mark.asyncio
async def test_spotify_auth_manager_cleanup_clears_token():
    """Test cleanup drops the cached access token."""
    manager = SpotifyAuthManager()
    await manager.set_token("valid-token", expires_in=3600)

    await manager.cleanup()

    assert await manager.get_token() is None


@pytest.mark.asyncio
async def test_spotify_auth_manager_invalidate_token():
    """Test a revoked token can be dropped while the refresh token is kept."""
    manager = SpotifyAuthManager(refresh_token="refresh")
    await manager.set_token("revoked-token", expires_in=3600)

    await manager.invalidate_token()

    assert await manager.get_token() is None
    assert await manager.get_refresh_token() == "refresh"


@pytest.mark.asyncio
async def test_spotify_auth_manager_refresh_token_rotation():
    """Test the refresh token can be replaced."""
    manager = SpotifyAuthManager(refresh_token="initial")

    assert await manager.get_refresh_token() == "initial"
    await manager.set_refresh_token("rotated")
    assert await manager.get_refresh_token() == "rotated"
