"""Main FastAPI application entry point."""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from track_skipper.core.app_factory import create_app
from track_skipper.logging_config import get_logger, setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

# Configure structured logging (JSON to file + console)
log_level = os.getenv("LOG_LEVEL", "INFO")
setup_logging(log_level)

logger = get_logger(__name__)

# Create application
app = create_app()


def run() -> None:
    """Validate configuration and serve the app with uvicorn."""
    import uvicorn

    from track_skipper.config import get_settings
    from track_skipper.exceptions import ConfigurationException

    try:
        settings = get_settings()
    except ConfigurationException as e:
        logger.critical(f"Cannot start: {e.message}")
        sys.exit(1)

    uvicorn.run(
        "track_skipper.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    run()
