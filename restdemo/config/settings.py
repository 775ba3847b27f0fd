"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database configuration (unset -> in-memory store)
    database_url: str | None = None
    pool_min_size: int = 2  # Minimum connections in pool
    pool_max_size: int = 10  # Maximum connections in pool

    # Validation settings
    validation_error_detail: Literal["detailed", "plain"] = "detailed"

    # Pagination settings
    default_page_size: int = 10  # Used when size is absent or invalid on lenient endpoints
    max_page_size: int = 2000

    # Demo data
    seed_demo_data: bool = False
    initial_todo_count: int = 12  # Clamped to 1..12

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
