"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration — all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Historical dataset ──────────────────────────────────────────────────
    dataset_path: str = "data/data_core.csv"

    # ── Push cache ──────────────────────────────────────────────────────────
    sensor_cache_ttl_seconds: float = 60.0
    sensor_cache_sweep_interval_seconds: float = 30.0

    # ── Device cloud (Blynk) ────────────────────────────────────────────────
    blynk_server: str = "blynk.cloud"
    blynk_timeout_seconds: float = 10.0

    # ── Kaggle model ────────────────────────────────────────────────────────
    kaggle_api_url: str = ""
    kaggle_username: str = ""
    kaggle_api_key: str = ""
    kaggle_probe_url: str = "https://www.kaggle.com/api/v1/datasets/list?pageSize=1"
    kaggle_timeout_seconds: float = 10.0

    # ── Redis (optional, webhook rate limiting) ─────────────────────────────
    redis_url: str = ""
    rate_limit_webhook_per_minute: int = 600

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
