"""
Test suite for Retriever and cosine_similarity.

System role: Verification of query-time chunk ranking
"""

import math
import random

import pytest

from jobmatch.core.exceptions import InvalidInput
from jobmatch.core.retriever import Retriever, cosine_similarity
from jobmatch.models import DocumentType


def _random_vector(seed: int, size: int = 64) -> list[float]:
    rng = random.Random(seed)
    return [rng.uniform(-1.0, 1.0) for _ in range(size)]


class TestCosineSimilarity:
    """Test suite for cosine_similarity."""

    def test_identical_vectors_should_score_one(self) -> None:
        assert math.isclose(cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]), 1.0)

    def test_opposite_vectors_should_score_minus_one(self) -> None:
        assert math.isclose(cosine_similarity([1.0, 0.0], [-1.0, 0.0]), -1.0)

    def test_orthogonal_vectors_should_score_zero(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0

    @pytest.mark.parametrize(
        "a, b",
        [([1.0, 2.0], [1.0]), ([], []), ([0.0, 0.0], [1.0, 1.0])],
    )
    def test_degenerate_inputs_should_score_zero(self, a, b) -> None:
        """Test mismatched, empty and zero vectors give 0.0."""
        assert cosine_similarity(a, b) == 0.0

    @pytest.mark.parametrize(
        "a, b",
        [
            ([0.3, -1.7, 2.2], [4.1, 0.05, -0.9]),
            ([1e-8, 3.0, -2.5, 7.0], [-6.0, 0.0, 1e6, 0.25]),
            ([1.0, 1.0, 1.0, 1.0], [1.0, 1.0, 1.0, 1.0000001]),
            ([-2.0, -4.0], [1.0, 2.0]),
            (_random_vector(7), _random_vector(11)),
        ],
    )
    def test_similarity_should_be_symmetric_and_bounded(self, a, b) -> None:
        """Test sim(a, b) == sim(b, a) and stays within [-1, 1]."""
        forward = cosine_similarity(a, b)
        backward = cosine_similarity(b, a)

        assert math.isclose(forward, backward, abs_tol=1e-12)
        assert -1.0 <= forward <= 1.0
        assert isinstance(forward, float)


class TestRetrieverSearch:
    """Test suite for Retriever.search."""

    @pytest.mark.asyncio
    async def test_search_should_rank_by_similarity(self, embedder, vector_store) -> None:
        """Test the chunk sharing the query's words ranks first."""
        # Arrange
        resume = await embedder.embed_chunks(
            ["gardening and cooking", "python kubernetes aws"], DocumentType.RESUME
        )
        job = await embedder.embed_chunks(["accounting ledger audit"], DocumentType.JOB_DESCRIPTION)
        vector_store.put("analysis-1", DocumentType.RESUME, resume)
        vector_store.put("analysis-1", DocumentType.JOB_DESCRIPTION, job)
        retriever = Retriever(vector_store, embedder)

        # Act
        results = await retriever.search("python kubernetes aws", "analysis-1", k=3)

        # Assert
        assert len(results) == 3
        assert results[0].chunk.content == "python kubernetes aws"
        assert math.isclose(results[0].similarity, 1.0)
        similarities = [result.similarity for result in results]
        assert similarities == sorted(similarities, reverse=True)

    @pytest.mark.asyncio
    async def test_search_should_limit_to_k(self, embedder, vector_store) -> None:
        """Test at most k results are returned."""
        chunks = await embedder.embed_chunks([f"chunk {i}" for i in range(6)], DocumentType.RESUME)
        vector_store.put("analysis-1", DocumentType.RESUME, chunks)

        results = await Retriever(vector_store, embedder).search("chunk", "analysis-1", k=2)

        assert len(results) == 2

    @pytest.mark.asyncio
    async def test_search_should_return_empty_without_embedding_when_no_chunks(
        self, embedder, vector_store, fake_provider
    ) -> None:
        """Test an analysis with nothing stored skips the query embedding."""
        results = await Retriever(vector_store, embedder).search("anything", "missing-id")

        assert results == []
        assert fake_provider.embedded == []

    @pytest.mark.asyncio
    async def test_search_should_scope_to_analysis(self, embedder, vector_store) -> None:
        """Test chunks of other analyses are never returned."""
        # Arrange
        mine = await embedder.embed_chunks(["mine"], DocumentType.RESUME)
        theirs = await embedder.embed_chunks(["theirs"], DocumentType.RESUME)
        vector_store.put("analysis-1", DocumentType.RESUME, mine)
        vector_store.put("analysis-2", DocumentType.RESUME, theirs)

        # Act
        results = await Retriever(vector_store, embedder).search("theirs", "analysis-1", k=5)

        # Assert
        assert [result.chunk.content for result in results] == ["mine"]

    @pytest.mark.asyncio
    async def test_search_should_keep_stored_order_on_ties(self, embedder, vector_store) -> None:
        """Test equal scores keep resume chunks ahead of job chunks."""
        # Arrange
        resume = await embedder.embed_chunks(["same text"], DocumentType.RESUME)
        job = await embedder.embed_chunks(["same text"], DocumentType.JOB_DESCRIPTION)
        vector_store.put("analysis-1", DocumentType.JOB_DESCRIPTION, job)
        vector_store.put("analysis-1", DocumentType.RESUME, resume)

        # Act
        results = await Retriever(vector_store, embedder).search("same text", "analysis-1")

        # Assert
        assert [result.chunk.document_type for result in results] == [
            DocumentType.RESUME,
            DocumentType.JOB_DESCRIPTION,
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("k", [0, -1])
    async def test_search_should_reject_non_positive_k(self, embedder, vector_store, k: int) -> None:
        """Test k below one raises InvalidInput."""
        with pytest.raises(InvalidInput):
            await Retriever(vector_store, embedder).search("query", "analysis-1", k=k)
