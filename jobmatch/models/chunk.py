"""
Chunk domain models.

Represents a document chunk with its position, text and embedding, plus
the retrieval view of a chunk paired with its similarity score.

Dependencies: pydantic
System role: Document chunk data structures
"""

import enum

from pydantic import BaseModel, ConfigDict, Field


class DocumentType(str, enum.Enum):
    """Kind of document a chunk was cut from."""

    RESUME = "resume"
    JOB_DESCRIPTION = "job_description"


class EmbeddingSource(str, enum.Enum):
    """
    Origin of a chunk embedding.

    PROVIDER: Vector returned by the embedding model
    FALLBACK: Deterministic hashed vector used when the provider failed
    """

    PROVIDER = "provider"
    FALLBACK = "fallback"


class Chunk(BaseModel):
    """Embedded document chunk. Immutable once stored."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Zero-based position in document order")
    content: str = Field(min_length=1, description="Chunk text content")
    embedding: list[float] = Field(description="Embedding vector")
    document_type: DocumentType = Field(description="Source document type")
    embedding_source: EmbeddingSource = Field(default=EmbeddingSource.PROVIDER)


class RetrievedChunk(BaseModel):
    """Chunk returned by similarity search."""

    chunk: Chunk
    similarity: float = Field(ge=-1.0, le=1.0, description="Cosine similarity to the query")
