"""Redaction of secrets from URLs before they reach the logs."""

import re

SENSITIVE_PARAMS = [
    "token",
    "secret",
    "code",
    "refresh_token",
    "access_token",
    "client_secret",
    "authorization",
    "bearer",
]


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from URL."""
    redacted = url
    for param in SENSITIVE_PARAMS:
        pattern = rf"\b{param}=([^&\s\"]+)"
        redacted = re.sub(pattern, f"{param}=***REDACTED***", redacted)
    return redacted
