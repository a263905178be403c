"""
Similarity retrieval over an analysis' stored chunks.

Embeds the query, scores every stored resume and job description chunk by
cosine similarity and returns the top k, highest first.

Dependencies: jobmatch.boundary.vdb, jobmatch.core.embedder
System role: RAG retrieval business logic
"""

import logging
from collections.abc import Sequence

import numpy as np

from jobmatch.boundary.vdb.memory_store import InMemoryVectorStore
from jobmatch.core.embedder import EmbeddingProvider
from jobmatch.core.exceptions import InvalidInput
from jobmatch.models.chunk import RetrievedChunk

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine of the angle between two vectors.

    Returns 0.0 when the lengths differ or either vector has zero magnitude.
    The result is clamped to [-1, 1] against rounding drift.
    """
    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    if vec_a.shape != vec_b.shape or vec_a.size == 0:
        return 0.0

    magnitude = np.linalg.norm(vec_a) * np.linalg.norm(vec_b)
    if magnitude == 0:
        return 0.0
    return float(np.clip(np.dot(vec_a, vec_b) / magnitude, -1.0, 1.0))


class Retriever:
    """Query-time chunk ranking for one analysis."""

    def __init__(self, store: InMemoryVectorStore, embedder: EmbeddingProvider) -> None:
        """
        Initialize retriever.

        Args:
            store: Vector store holding embedded chunks
            embedder: Embedder used for the query
        """
        self._store = store
        self._embedder = embedder

    async def search(self, query: str, analysis_id: str, k: int = 5) -> list[RetrievedChunk]:
        """
        Rank stored chunks against a query.

        Args:
            query: Question text
            analysis_id: Analysis whose chunks are searched
            k: Maximum number of results

        Returns:
            list[RetrievedChunk]: At most k chunks, by descending similarity;
                ties keep resume-then-job document order. Empty when the
                analysis has no chunks.

        Raises:
            InvalidInput: When k is smaller than 1
        """
        if k < 1:
            raise InvalidInput("k must be at least 1", field="k")

        chunks = self._store.get_all(analysis_id)
        if not chunks:
            logger.info(f"{__name__}:search - No chunks stored for analysis {analysis_id}")
            return []

        query_embedding = await self._embedder.embed_one(query)
        scored = [
            RetrievedChunk(chunk=chunk, similarity=cosine_similarity(query_embedding, chunk.embedding))
            for chunk in chunks
        ]
        # sorted() is stable, so equal scores stay in stored order
        ranked = sorted(scored, key=lambda result: result.similarity, reverse=True)[:k]

        logger.info(
            f"{__name__}:search - Ranked {len(chunks)} chunks for analysis {analysis_id}, "
            f"returning {len(ranked)}"
        )
        return ranked
