"""Utility modules for groupie-tracker.

- **errors** -- exception hierarchy rooted at GroupieTrackerError; fatal
  startup failures and recoverable per-place geocoding failures are
  separate subclasses so callers can tell them apart.
- **logging** -- structlog setup with coloured console output in
  development and JSON in production.
- **rate_limiter** -- async pacing shared by every call to a rate-sensitive
  upstream service.
"""

from src.utils.errors import (
    CollectionFetchError,
    ConfigurationError,
    GeocodingError,
    GroupieTrackerError,
)
from src.utils.logging import configure_logging, get_logger
from src.utils.rate_limiter import IntervalRateLimiter

__all__ = [
    "CollectionFetchError",
    "ConfigurationError",
    "GeocodingError",
    "GroupieTrackerError",
    "IntervalRateLimiter",
    "configure_logging",
    "get_logger",
]
