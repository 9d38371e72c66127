"""Unit tests for configuration."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from track_skipper import config
from track_skipper.config import Settings, get_settings, load_settings
from track_skipper.exceptions import ConfigurationException, ErrorCode

REQUIRED = {
    "spotify_client_id": "test-client-id",
    "spotify_client_secret": "test-secret",
    "spotify_refresh_token": "test-refresh",
}


def make_settings(**overrides):
    return Settings(_env_file=None, **{**REQUIRED, **overrides})


def test_settings_defaults():
    """Test Settings model has correct defaults."""
    settings = make_settings(skip_interval_seconds=30)

    assert settings.skip_interval_seconds == 30
    assert settings.poll_interval_seconds == 1.0
    assert settings.event_queue_size == 1
    assert settings.api_host == "127.0.0.1"
    assert settings.api_port == 8000
    assert settings.spotify_api_base_url == "https://api.spotify.com/v1"


def test_skip_interval_accepts_padded_string():
    """Test whitespace around the interval is tolerated."""
    settings = make_settings(skip_interval_seconds=" 45\n")

    assert settings.skip_interval_seconds == 45


@pytest.mark.parametrize("value", [0, -5, "0", "-5", "abc", "", "1.5", 2.5, True])
def test_skip_interval_rejects_invalid(value):
    """Test the interval must be a positive whole number of seconds."""
    with pytest.raises(ValidationError):
        make_settings(skip_interval_seconds=value)


def test_skip_interval_required():
    """Test the interval has no default."""
    with pytest.raises(ValidationError):
        make_settings()


def test_poll_interval_must_be_positive():
    with pytest.raises(ValidationError):
        make_settings(skip_interval_seconds=30, poll_interval_seconds=0)


def test_api_base_url_trailing_slash_stripped():
    settings = make_settings(skip_interval_seconds=30, spotify_api_base_url="http://localhost:9000/v1/")

    assert settings.spotify_api_base_url == "http://localhost:9000/v1"


def test_settings_env_loading():
    """Test settings can load from environment."""
    with patch.dict(
        "os.environ",
        {
            "SKIP_INTERVAL_SECONDS": "20",
            "POLL_INTERVAL_SECONDS": "0.5",
            "API_PORT": "9000",
            "SPOTIFY_CLIENT_ID": "env-client",
            "SPOTIFY_CLIENT_SECRET": "env-secret",
            "SPOTIFY_REFRESH_TOKEN": "env-token",
        },
    ):
        settings = Settings(_env_file=None)

        assert settings.skip_interval_seconds == 20
        assert settings.poll_interval_seconds == 0.5
        assert settings.api_port == 9000
        assert settings.spotify_client_id == "env-client"


def test_load_settings_wraps_validation_errors():
    """Test invalid configuration becomes a ConfigurationException listing fields."""
    with patch.dict("os.environ", {}, clear=True):
        with pytest.raises(ConfigurationException) as exc_info:
            load_settings(_env_file=None, skip_interval_seconds="soon")

    exc = exc_info.value
    assert exc.code == ErrorCode.CONFIG_INVALID
    fields = {err["field"] for err in exc.details["errors"]}
    assert {"skip_interval_seconds", "spotify_client_id", "spotify_client_secret"} <= fields
    assert "skip_interval_seconds" in exc.message


def test_get_settings_singleton(monkeypatch):
    """Test get_settings returns singleton instance."""
    monkeypatch.setattr(config, "_settings_instance", None)
    monkeypatch.setattr(config, "load_settings", lambda: make_settings(skip_interval_seconds=30))

    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
