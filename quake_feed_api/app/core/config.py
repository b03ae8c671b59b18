"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields, so the
service starts against the public USGS feed without any setup.  In a
production deployment you should override these via environment
variables.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Quake Feed API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # FDSN event query endpoint.  The client appends ``format``,
    # ``starttime`` and ``orderby`` query parameters.
    usgs_feed_url: str = os.getenv(
        "USGS_FEED_URL", "https://earthquake.usgs.gov/fdsnws/event/1/query"
    )

    # Upper bound in seconds for a single upstream request (connect,
    # read, write and pool acquisition each).
    usgs_timeout_seconds: float = float(os.getenv("USGS_TIMEOUT_SECONDS", "10"))

    # IANA timezone name (e.g. ``Europe/London``) used both for the
    # ``starttime`` date and for rendering event timestamps.  When
    # unset, the process local timezone is used.
    timezone: Optional[str] = os.getenv("QUAKE_TIMEZONE") or None

    # When enabled, finished spans are written to the log at DEBUG level.
    trace_spans: bool = _env_flag("TRACE_SPANS")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
