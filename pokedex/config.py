from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from environment variables (or a .env file)."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Upstream APIs
    pokeapi_base_url: str = "https://pokeapi.co/api/v2/pokemon-species"
    translation_base_url: str = "https://api.funtranslations.com/translate"
    http_timeout_seconds: float = 5.0

    # Cache
    cache_backend: Literal["redis", "memory"] = "redis"
    redis_url: str = "redis://localhost:6379"

    # Retry (same schedule for both upstreams)
    retry_max_attempts: int = 3
    retry_base_delay_ms: int = 1000
    retry_max_delay_ms: int = 10_000

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
