"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openfoodfacts_base_url: str = "https://world.openfoodfacts.org"
    openfoodfacts_user_agent: str = "SnackCheck/1.0 (https://snackcheck.app)"
    external_timeout_seconds: float = 8.0
    external_retry_attempts: int = 3
    retry_base_delay_seconds: float = 1.0
    retry_backoff_multiplier: float = 2.0
    cache_ttl_seconds: int = 24 * 60 * 60
    cache_max_entries: int = 1000
    cache_namespace: str = "snackcheck_ingredient_cache"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    ai_timeout_seconds: float = 10.0
    ai_retry_attempts: int = 2
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def ai_enabled(self) -> bool:
        """Return True when an OpenAI key is configured."""
        return bool(self.openai_api_key and self.openai_api_key.strip())

    @property
    def cache_mirror_enabled(self) -> bool:
        """Return True when Supabase credentials are configured."""
        return bool(self.supabase_url and self.supabase_service_key)
