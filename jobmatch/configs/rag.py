"""
RAG pipeline configuration settings.

Chunking, retrieval, throttling and fallback-context limits.

Dependencies: pydantic, pydantic_settings
System role: Retrieval pipeline configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RagSettings(BaseSettings):
    """Chunking, retrieval and answer fallback configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RAG_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=800, ge=1, description="Maximum chunk size in characters")
    top_k: int = Field(default=5, ge=1, le=100, description="Number of chunks returned by retrieval")
    embedding_delay_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="Pause between successive embedding calls to avoid rate limiting",
    )
    match_excerpt_chars: int = Field(
        default=2000,
        ge=100,
        description="Prefix length of each document sent to the match prompt",
    )
    answer_snippet_chars: int = Field(
        default=50,
        ge=10,
        description="Snippet length used by the extractive answer fallback",
    )

    # Context fallbacks used when retrieval finds nothing
    fallback_paragraph_limit: int = Field(default=10, ge=1)
    fallback_paragraph_min_chars: int = Field(default=50, ge=0)
    fallback_line_limit: int = Field(default=5, ge=1)
    fallback_line_min_chars: int = Field(default=20, ge=0)
