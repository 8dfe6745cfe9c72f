"""
Application Settings

Centralized configuration using Pydantic Settings for type safety and validation.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .web.page_fetcher import DEFAULT_USER_AGENT


class Settings(BaseSettings):
    """Application settings with validation and type safety."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Required settings
    brave_api_key: str

    # Search provider
    search_timeout: float = 30.0

    # Page fetching
    user_agent: str = DEFAULT_USER_AGENT
    respect_robots_txt: bool = True
    fetch_timeout: float | None = None  # No timeout unless configured
    max_concurrency: int | None = Field(default=None, ge=1)  # Unbounded fan-out

    # Output
    output_dir: str = "fetched_pages"
    log_dir: str = "logs"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore
