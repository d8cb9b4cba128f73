"""Exception hierarchy for groupie-tracker.

Every application error inherits from :class:`GroupieTrackerError`, which
carries an optional ``provider_name`` naming the upstream service (e.g.
"groupietrackers", "nominatim") involved in the failure.

    GroupieTrackerError      (base)
    +-- CollectionFetchError (startup: fetching/decoding an upstream collection)
    +-- GeocodingError       (per-request: one place failed to geocode)
    +-- ConfigurationError   (startup: invalid settings)

The two tiers matter to callers: ``CollectionFetchError`` is fatal and aborts
startup, ``GeocodingError`` is recoverable and only drops a single place from
an artist's coordinate list.
"""


class GroupieTrackerError(Exception):
    """Base exception for all groupie-tracker errors.

    ``__str__`` prefixes the provider name in brackets, e.g.
    ``[nominatim] Request timed out``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class CollectionFetchError(GroupieTrackerError):
    """Raised when an upstream collection cannot be fetched or decoded."""

    def __init__(
        self,
        message: str = "Upstream collection fetch failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class GeocodingError(GroupieTrackerError):
    """Raised when a single geocoding lookup fails in transport or decoding.

    The geocode cache catches this per place and continues with the rest
    of the batch.
    """

    def __init__(
        self,
        message: str = "Geocoding lookup failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(GroupieTrackerError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
