"""
Test suite for AnalysisService.

Tests analysis creation, the processing lifecycle (completed, error, retry
after reset), rejection of concurrent runs and the health snapshot. Uses the
fake model provider from conftest.

System role: Verification of analysis orchestration layer
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from jobmatch.application.services import AnalysisService
from jobmatch.core.chunker import DocumentChunker
from jobmatch.core.embedder import EmbeddingProvider
from jobmatch.core.exceptions import (
    AnalysisFailed,
    AnalysisInProgress,
    AnalysisNotFound,
    InvalidInput,
)
from jobmatch.core.matching import MatchScorer
from jobmatch.models import AnalysisStatus, DocumentType, MatchSource


@pytest.fixture
def analysis_service(analysis_store, vector_store, embedder, gateway) -> AnalysisService:
    """Provide AnalysisService over in-memory stores and the fake provider."""
    return AnalysisService(
        store=analysis_store,
        vector_store=vector_store,
        chunker=DocumentChunker(chunk_size=200),
        embedder=embedder,
        scorer=MatchScorer(gateway),
    )


class TestCreateAnalysis:
    """Test suite for AnalysisService.create_analysis."""

    def test_create_should_store_uploaded_analysis(self, analysis_service, analysis_store) -> None:
        """Test a new analysis starts in the uploaded state."""
        # Act
        analysis = analysis_service.create_analysis(
            "resume text", "job text", resume_filename="cv.pdf", job_description_filename="jd.txt"
        )

        # Assert
        assert analysis.status is AnalysisStatus.UPLOADED
        assert analysis.resume.filename == "cv.pdf"
        assert analysis.job_description.text == "job text"
        assert analysis_store.get(analysis.id) == analysis

    def test_create_should_assign_unique_ids(self, analysis_service) -> None:
        first = analysis_service.create_analysis("a", "b")
        second = analysis_service.create_analysis("a", "b")

        assert first.id != second.id

    def test_create_should_reject_missing_text(self, analysis_service) -> None:
        with pytest.raises(InvalidInput):
            analysis_service.create_analysis(None, "job text")


class TestGetAnalysis:
    """Test suite for AnalysisService.get_analysis."""

    def test_get_should_raise_not_found(self, analysis_service) -> None:
        with pytest.raises(AnalysisNotFound, match="Analysis not found: abcdef"):
            analysis_service.get_analysis("abcdef")

    @pytest.mark.parametrize("analysis_id", ["", "abc", "has spaces here", "../etc/passwd"])
    def test_get_should_reject_malformed_id(self, analysis_service, analysis_id: str) -> None:
        with pytest.raises(InvalidInput):
            analysis_service.get_analysis(analysis_id)


class TestProcess:
    """Test suite for AnalysisService.process."""

    @pytest.mark.asyncio
    async def test_process_should_complete_and_index_documents(
        self, analysis_service, vector_store, sample_resume, sample_job_description
    ) -> None:
        """Test processing stores chunks and a match result."""
        # Arrange
        analysis = analysis_service.create_analysis(sample_resume, sample_job_description)

        # Act
        completed = await analysis_service.process(analysis.id)

        # Assert
        assert completed.status is AnalysisStatus.COMPLETED
        results = completed.results
        assert results.resume_chunk_count == len(vector_store.get(analysis.id, DocumentType.RESUME))
        assert results.job_description_chunk_count == len(
            vector_store.get(analysis.id, DocumentType.JOB_DESCRIPTION)
        )
        assert results.resume_chunk_count > 0
        assert results.resume_text == sample_resume
        assert results.processing_time_ms >= 0

    @pytest.mark.asyncio
    async def test_process_should_use_heuristic_when_provider_down(
        self, analysis_store, vector_store, down_gateway
    ) -> None:
        """Test an unavailable provider still completes with a heuristic score."""
        # Arrange
        service = AnalysisService(
            store=analysis_store,
            vector_store=vector_store,
            chunker=DocumentChunker(),
            embedder=EmbeddingProvider(down_gateway, dimension=64, delay_seconds=0.0),
            scorer=MatchScorer(down_gateway),
        )
        analysis = service.create_analysis("5 years Python and AWS", "Requires Kubernetes, AWS, Python")

        # Act
        completed = await service.process(analysis.id)

        # Assert
        assert completed.status is AnalysisStatus.COMPLETED
        assert completed.results.match.source is MatchSource.HEURISTIC
        assert completed.results.match.score == 67

    @pytest.mark.asyncio
    async def test_process_should_allow_empty_resume(self, analysis_service) -> None:
        """Test an empty resume completes with no resume chunks."""
        analysis = analysis_service.create_analysis("", "Requires Kubernetes, AWS, Python")

        completed = await analysis_service.process(analysis.id)

        assert completed.status is AnalysisStatus.COMPLETED
        assert completed.results.resume_chunk_count == 0
        assert completed.results.match.strengths == []

    @pytest.mark.asyncio
    async def test_process_should_return_completed_analysis_unchanged(
        self, analysis_service, fake_provider
    ) -> None:
        """Test reprocessing a completed analysis does no new work."""
        # Arrange
        analysis = analysis_service.create_analysis("Python developer", "Python role")
        first = await analysis_service.process(analysis.id)
        prompts_before = len(fake_provider.prompts)

        # Act
        second = await analysis_service.process(analysis.id)

        # Assert
        assert second == first
        assert len(fake_provider.prompts) == prompts_before

    @pytest.mark.asyncio
    async def test_process_should_record_error_and_raise(self, analysis_service, analysis_store) -> None:
        """Test an internal failure marks the analysis as error."""
        # Arrange
        analysis = analysis_service.create_analysis("resume", "job")
        analysis_service.scorer.score = AsyncMock(side_effect=ValueError("scorer exploded"))

        # Act
        with pytest.raises(AnalysisFailed, match="scorer exploded"):
            await analysis_service.process(analysis.id)

        # Assert
        stored = analysis_store.get(analysis.id)
        assert stored.status is AnalysisStatus.ERROR
        assert stored.error == "scorer exploded"
        assert analysis_store.in_progress() == []

    @pytest.mark.asyncio
    async def test_process_should_not_retry_failed_analysis(self, analysis_service) -> None:
        """Test a failed analysis re-raises its stored error."""
        # Arrange
        analysis = analysis_service.create_analysis("resume", "job")
        failing = AsyncMock(side_effect=ValueError("first failure"))
        analysis_service.scorer.score = failing
        with pytest.raises(AnalysisFailed):
            await analysis_service.process(analysis.id)

        # Act
        with pytest.raises(AnalysisFailed) as exc_info:
            await analysis_service.process(analysis.id)

        # Assert
        assert exc_info.value.error == "first failure"
        assert failing.await_count == 1

    @pytest.mark.asyncio
    async def test_process_should_reject_concurrent_run(
        self, analysis_service, analysis_store, fake_provider, sample_resume, sample_job_description
    ) -> None:
        """Test a second request while processing is rejected and the first completes."""
        # Arrange
        fake_provider.embed_delay = 0.01
        analysis = analysis_service.create_analysis(sample_resume, sample_job_description)

        # Act
        first, second = await asyncio.gather(
            analysis_service.process(analysis.id),
            analysis_service.process(analysis.id),
            return_exceptions=True,
        )

        # Assert
        assert first.status is AnalysisStatus.COMPLETED
        assert isinstance(second, AnalysisInProgress)
        assert analysis_store.get(analysis.id).status is AnalysisStatus.COMPLETED
        assert analysis_store.in_progress() == []

    @pytest.mark.asyncio
    async def test_process_should_raise_not_found(self, analysis_service) -> None:
        with pytest.raises(AnalysisNotFound):
            await analysis_service.process("unknown-id")


class TestResetFailed:
    """Test suite for AnalysisService.reset_failed."""

    @pytest.mark.asyncio
    async def test_reset_should_allow_retry(self, analysis_service, fake_provider) -> None:
        """Test a reset failed analysis can be processed again."""
        # Arrange
        analysis = analysis_service.create_analysis("Python developer", "Python role")
        real_score = analysis_service.scorer.score
        analysis_service.scorer.score = AsyncMock(side_effect=RuntimeError("transient"))
        with pytest.raises(AnalysisFailed):
            await analysis_service.process(analysis.id)
        analysis_service.scorer.score = real_score

        # Act
        reset = analysis_service.reset_failed(analysis.id)
        completed = await analysis_service.process(analysis.id)

        # Assert
        assert reset.status is AnalysisStatus.UPLOADED
        assert reset.error is None
        assert completed.status is AnalysisStatus.COMPLETED

    def test_reset_should_reject_non_failed_analysis(self, analysis_service) -> None:
        analysis = analysis_service.create_analysis("resume", "job")

        with pytest.raises(InvalidInput):
            analysis_service.reset_failed(analysis.id)


class TestHealth:
    """Test suite for AnalysisService.health."""

    def test_health_should_report_counts(self, analysis_service, analysis_store) -> None:
        """Test the snapshot lists stored and in-flight analyses."""
        # Arrange
        analysis = analysis_service.create_analysis("resume", "job")
        analysis_store.try_claim(analysis.id)

        # Act
        health = analysis_service.health()

        # Assert
        assert health["status"] == "OK"
        assert health["active_analyses"] == 1
        assert health["processing"] == [analysis.id]
        assert "timestamp" in health
