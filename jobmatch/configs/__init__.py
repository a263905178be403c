"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from jobmatch.configs.provider import ProviderSettings
from jobmatch.configs.rag import RagSettings
from jobmatch.configs.settings import Settings, get_settings

__all__ = ["Settings", "ProviderSettings", "RagSettings", "get_settings"]
