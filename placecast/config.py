"""Service configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the placecast service."""
    model_config = SettingsConfigDict(env_prefix="PLACECAST_", extra="ignore")

    data_source: str = "open_meteo"  # options: open_meteo
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    observation_url: str = "https://api.open-meteo.com/v1/forecast"
    google_geocode_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    google_maps_api_key: str | None = None
    language: str = "es"
    candidate_limit: int = 10
    http_timeout_seconds: float = 10.0
    geocode_cache_ttl_seconds: int = 600
    geocode_cache_redis_url: str | None = None
    geocode_cache_prefix: str = "geocode:"
    user_agent: str = "placecast/1.0"
    log_level: str = "INFO"

    @field_validator(
        "geocoding_url", "forecast_url", "observation_url", "google_geocode_url", mode="after"
    )
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize upstream URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("candidate_limit", mode="after")
    @classmethod
    def clamp_candidate_limit(cls, v: int) -> int:
        """Open-Meteo accepts between 1 and 100 results per search."""
        return min(max(1, int(v)), 100)


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
