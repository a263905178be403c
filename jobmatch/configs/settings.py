"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from jobmatch.configs.base import BaseSettings
from jobmatch.configs.provider import ProviderSettings
from jobmatch.configs.rag import RagSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    rag: RagSettings = Field(default_factory=RagSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once, on first call.

    Returns:
        Settings: Application settings instance

    Usage:
        from jobmatch.configs import get_settings
        settings = get_settings()
    """
    return Settings()
