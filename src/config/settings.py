"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read from (highest priority first):
#
#   1. Environment variables, e.g. BANDSINTOWN_APP_ID=my_app
#   2. The .env file in the project root (local development only)
#   3. The defaults below
#
# Field ``tour_cache_ttl_hours`` maps to env var ``TOUR_CACHE_TTL_HOURS``.
# List fields (``admin_emails``, ``cors_origins``) take JSON arrays:
#   ADMIN_EMAILS='["ops@example.com"]'
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Festival Match application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Storage ===
    db_path: str = "data/festival_match.db"
    festivals_path: str = "data/festivals.json"

    # === Bandsintown ===
    bandsintown_base_url: str = "https://rest.bandsintown.com"
    bandsintown_app_id: str = "festival_match_app"
    tour_api_timeout: float = 5.0

    # === Caches & sweeps ===
    tour_cache_ttl_hours: float = 24.0
    tour_cache_max_entries: int = 5000
    tour_cache_sweep_hours: float = 6.0
    session_ttl_days: int = 7
    session_sweep_hours: float = 1.0

    # === Current year lookup ===
    current_year_url: str = "http://worldtimeapi.org/api/ip"

    # === Access control ===
    # Users with these emails get the "admin,dev" role at startup.
    admin_emails: list[str] = []
    cors_origins: list[str] = []

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 3002
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def tour_cache_ttl_seconds(self) -> float:
        return self.tour_cache_ttl_hours * 3600

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"
