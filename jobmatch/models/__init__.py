"""
Domain models.

Pydantic models shared by the core, boundary and application layers.
"""

from jobmatch.models.analysis import (
    Analysis,
    AnalysisResults,
    AnalysisStatus,
    SourceDocument,
)
from jobmatch.models.chat import ChatEntry, ChatResponse, SourceChunk
from jobmatch.models.chunk import Chunk, DocumentType, EmbeddingSource, RetrievedChunk
from jobmatch.models.match import MatchResult, MatchSource, NarrativeSections

__all__ = [
    "Analysis",
    "AnalysisResults",
    "AnalysisStatus",
    "SourceDocument",
    "ChatEntry",
    "ChatResponse",
    "SourceChunk",
    "Chunk",
    "DocumentType",
    "EmbeddingSource",
    "RetrievedChunk",
    "MatchResult",
    "MatchSource",
    "NarrativeSections",
]
