"""
Chat domain models.

Question/answer records and the per-question response.

Dependencies: pydantic
System role: Chat data contracts
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class SourceChunk(BaseModel):
    """Context text used to answer a question."""

    text: str
    similarity: float = 0.0


class ChatResponse(BaseModel):
    """Answer to one question with the ranked sources behind it."""

    answer: str
    sources: list[SourceChunk] = Field(default_factory=list)


class ChatEntry(BaseModel):
    """One question/answer exchange in an analysis' history."""

    question: str
    answer: str
    sources: list[SourceChunk] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
