"""
Model provider configuration settings.

Ordered Gemini model preference list, fallback model, embedding model and
call limits used by the model gateway.

Dependencies: pydantic, pydantic_settings
System role: Generation/embedding provider configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseSettings):
    """Generation and embedding provider configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PROVIDER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("PROVIDER_API_KEY", "GOOGLE_API_KEY"),
        description="Google Generative AI API key",
    )
    # Higher-quota lite models first to stay clear of rate limits
    preferred_models: list[str] = Field(
        default=[
            "models/gemini-2.5-flash-lite",
            "models/gemini-2.0-flash-lite",
            "models/gemini-2.0-flash",
            "models/gemini-2.5-flash",
            "models/gemini-2.5-pro",
        ],
        description="Candidate generation models, most preferred first",
    )
    fallback_model: str = Field(
        default="models/gemini-pro-latest",
        description="Model tried once after every preferred model failed",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google embedding model ID",
    )
    embedding_dimension: int = Field(
        default=768,
        ge=8,
        description="Fixed embedding vector dimension for real and fallback vectors",
    )
    temperature: float = Field(default=0.2, ge=0.0, le=2.0, description="Generation temperature")
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="Upper bound for a single provider call",
    )
    probe_prompt: str = Field(default="Hello", description="Trivial prompt used to probe a model")
    max_consecutive_failures: int = Field(
        default=3,
        ge=1,
        description="Failed generation calls on the cached model before it is dropped and re-probed",
    )
