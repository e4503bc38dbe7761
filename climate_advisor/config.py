"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class WeatherSourceKind(StrEnum):
    simulated = "simulated"
    open_meteo = "open_meteo"


class WeatherScenarioName(StrEnum):
    default = "default"
    drought = "drought"
    flood = "flood"


class Settings(BaseSettings):
    """Central configuration, all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Weather ─────────────────────────────────────────────────────────────
    weather_source: WeatherSourceKind = WeatherSourceKind.simulated
    weather_scenario: WeatherScenarioName | None = None
    weather_seed: int | None = None
    open_meteo_base_url: str = "https://api.open-meteo.com/v1/forecast"
    weather_timeout_seconds: float = 5.0
    weather_max_retries: int = 2
    weather_retry_wait_min_seconds: float = 0.5
    weather_retry_wait_max_seconds: float = 4.0

    # ── Sessions ────────────────────────────────────────────────────────────
    redis_url: str = ""
    session_ttl_seconds: int = 60 * 60 * 24
    session_lock_timeout_seconds: float = 30.0

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
