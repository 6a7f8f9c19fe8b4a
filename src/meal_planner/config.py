"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    A missing provider key disables that provider instead of failing startup.
    """

    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    openai_store: bool = False
    nebius_api_key: str | None = None
    nebius_endpoint: str = "https://api.nebius.cloud/v1"
    provider_timeout_seconds: float = 20.0
    log_level: str = "INFO"
    default_user_id: int = 1
    api_prefix: str = "/api"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def primary_available(self) -> bool:
        """Return True when the primary provider has credentials."""
        return _has_value(self.openai_api_key)

    @property
    def secondary_available(self) -> bool:
        """Return True when the secondary provider has credentials."""
        return _has_value(self.nebius_api_key)


def _has_value(raw: str | None) -> bool:
    return raw is not None and raw.strip() != ""
