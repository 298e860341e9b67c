"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Upstream completion API (server side only, never sent to the browser)
    perplexity_api_key: str = ""
    perplexity_api_url: str = "https://api.perplexity.ai/chat/completions"
    perplexity_model: str = "sonar"
    upstream_timeout_seconds: float = 60.0

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_prefix: str = "/api"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    project_name: str = "MindFlow"
    version: str = "1.0.0"

    @property
    def ai_configured(self) -> bool:
        """True when a real-looking upstream key is present."""
        key = (self.perplexity_api_key or "").strip()
        return bool(key and not key.startswith("pplx-your-"))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
