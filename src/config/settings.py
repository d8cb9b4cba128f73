"""Application settings loaded from environment variables via pydantic-settings.

Values come from, in priority order:

    1. Environment variables, e.g. ``GEOCODER_CONTACT=ops@example.com``
    2. A ``.env`` file in the working directory
    3. The defaults below

Field ``geocoder_pacing_seconds`` maps to env var ``GEOCODER_PACING_SECONDS``
and so on (pydantic-settings matches case-insensitively).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """groupie-tracker application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Upstream collections ===
    collections_base_url: str = "https://groupietrackers.herokuapp.com/api"
    collections_timeout: float = 30.0

    # === Geocoder (Nominatim) ===
    geocoder_url: str = "https://nominatim.openstreetmap.org/search"
    geocoder_app_name: str = "groupie-tracker"
    geocoder_app_version: str = "0.1.0"
    geocoder_contact: str = ""
    geocoder_timeout: float = 10.0  # Per lookup
    geocoder_pacing_seconds: float = 0.3  # Gap between consecutive lookups, process-wide
    # Upper bound on one artist's whole batch; 0 = unbounded.  A batch cut
    # short by this deadline is returned but not cached.
    geocode_batch_timeout: float = 0.0

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def geocoder_user_agent(self) -> str:
        """Return the identifying User-Agent sent with every geocoding request.

        Nominatim's usage policy rejects requests without a descriptive
        agent, e.g. ``groupie-tracker/0.1.0 (ops@example.com)``.
        """
        agent = f"{self.geocoder_app_name}/{self.geocoder_app_version}".strip("/")
        if self.geocoder_contact:
            agent = f"{agent} ({self.geocoder_contact})"
        return agent
