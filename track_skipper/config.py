from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from track_skipper.exceptions import ConfigurationException, ErrorCode
from track_skipper.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent  # track-skipper/

# Scopes the refresh token must have been granted with
SPOTIFY_SCOPES = [
    "user-read-playback-state",
    "user-modify-playback-state",
]


class Settings(BaseSettings):
    """Application settings with validation.

    Required fields raise validation errors if missing. Secrets must be
    provided via environment variables or the .env file.
    """

    # Skip loop
    skip_interval_seconds: int = Field(gt=0, description="Seconds of playback before a track is skipped")
    poll_interval_seconds: float = Field(gt=0, default=1.0, description="Seconds between playback polls")
    event_queue_size: int = Field(ge=1, default=1, description="Bound of the observer -> scheduler event queue")

    # Spotify API
    spotify_client_id: str = Field(min_length=1, description="Spotify OAuth client ID")
    spotify_client_secret: str = Field(min_length=1, description="Spotify OAuth client secret")
    spotify_refresh_token: str = Field(min_length=1, description="Spotify refresh token")
    spotify_api_base_url: str = Field(
        default="https://api.spotify.com/v1", pattern=r"^https?://", description="Spotify Web API base URL"
    )
    spotify_token_url: str = Field(
        default="https://accounts.spotify.com/api/token",
        pattern=r"^https?://",
        description="Spotify token endpoint",
    )

    # Status API server
    api_host: str = Field(min_length=1, default="127.0.0.1", description="Status API host")
    api_port: int = Field(ge=1, le=65535, default=8000, description="Status API port")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("skip_interval_seconds", mode="before")
    @classmethod
    def validate_skip_interval(cls, v: Any) -> Any:
        """Accept padded input such as ' 30 ' and reject booleans."""
        if isinstance(v, bool):
            raise ValueError("skip_interval_seconds must be a whole number of seconds")
        if isinstance(v, str):
            v = v.strip()
            if not v.isdigit():
                raise ValueError("skip_interval_seconds must be a positive whole number of seconds")
        return v

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @field_validator("spotify_api_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


# Singleton settings instance
_settings_instance: Settings | None = None


def load_settings(**overrides: Any) -> Settings:
    """Build a Settings instance, converting validation failures to ConfigurationException.

    Args:
        **overrides: Explicit field values taking precedence over the environment

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationException: If any field is missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]} for err in e.errors()
        ]
        log_with_context(
            logger,
            "error",
            "Invalid configuration",
            errors=errors,
            event_type="config_invalid",
        )
        fields = ", ".join(err["field"] for err in errors)
        raise ConfigurationException(
            f"Invalid configuration: {fields}",
            code=ErrorCode.CONFIG_INVALID,
            details={"errors": errors},
        ) from e


def get_settings() -> Settings:
    """Get the singleton Settings instance.

    The .env file is read once per process.

    Raises:
        ConfigurationException: If the configuration is invalid
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = load_settings()
    return _settings_instance
