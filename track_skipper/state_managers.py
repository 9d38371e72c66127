"""State managers for handling application-wide mutable state.

State shared between coroutines is guarded with asyncio.Lock. All state
managers inherit from the StateManager ABC.
"""

import asyncio
import time
from abc import ABC, abstractmethod


class StateManager(ABC):
    """Base class for all state managers.

    Subclasses implement the lifecycle methods called by the app lifespan.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass


class SpotifyAuthManager(StateManager):
    """Caches the Spotify access token and tracks refresh token rotation.

    Spotify may return a new refresh token with a token refresh; it is kept
    in memory and preferred over the configured one for the process lifetime.
    """

    def __init__(self, refresh_token: str | None = None):
        self._access_token: str | None = None
        self._token_expires_at: float = 0
        self._refresh_token = refresh_token
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Nothing to prepare; tokens are fetched lazily."""
        pass

    async def cleanup(self) -> None:
        """Drop the cached access token."""
        await self.invalidate_token()

    async def get_token(self) -> str | None:
        """Get the current access token if available and not expired.

        Returns:
            Access token string or None if expired/not set
        """
        async with self._lock:
            if self._access_token and self._token_expires_at > time.time():
                return self._access_token
            return None

    async def set_token(self, token: str, expires_in: int) -> None:
        """Set a new access token with expiration.

        Args:
            token: The access token string
            expires_in: Expiration time in seconds
        """
        async with self._lock:
            self._access_token = token
            self._token_expires_at = time.time() + expires_in

    async def invalidate_token(self) -> None:
        """Forget the access token so the next call refreshes it."""
        async with self._lock:
            self._access_token = None
            self._token_expires_at = 0

    async def get_refresh_token(self) -> str | None:
        async with self._lock:
            return self._refresh_token

    async def set_refresh_token(self, refresh_token: str) -> None:
        async with self._lock:
            self._refresh_token = refresh_token
