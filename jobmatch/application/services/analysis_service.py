"""
Analysis service orchestrator.

Owns the analysis lifecycle: uploaded -> processing -> completed | error.
Processing chunks and embeds both documents into the vector store and
scores the match. A second processing request for an analysis already
being processed is rejected; a failed analysis stays failed until the
caller resets it.

Dependencies: jobmatch.core, jobmatch.boundary.db, jobmatch.boundary.vdb
System role: Analysis processing orchestration layer
"""

import logging
import time
from datetime import datetime, timezone

from jobmatch.application.validators import validate_analysis_id
from jobmatch.boundary.db.analysis_store import AnalysisStore
from jobmatch.boundary.vdb.memory_store import InMemoryVectorStore
from jobmatch.core.chunker import DocumentChunker
from jobmatch.core.embedder import EmbeddingProvider
from jobmatch.core.exceptions import (
    AnalysisFailed,
    AnalysisInProgress,
    AnalysisNotFound,
    InvalidInput,
)
from jobmatch.core.matching.match_scorer import MatchScorer
from jobmatch.models.analysis import Analysis, AnalysisResults, AnalysisStatus, SourceDocument
from jobmatch.models.chunk import DocumentType
from jobmatch.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class AnalysisService:
    """
    Analysis lifecycle orchestrator.

    Coordinates chunking, embedding, vector storage and match scoring for
    one resume / job description pair per analysis.
    """

    def __init__(
        self,
        store: AnalysisStore,
        vector_store: InMemoryVectorStore,
        chunker: DocumentChunker,
        embedder: EmbeddingProvider,
        scorer: MatchScorer,
    ) -> None:
        """
        Initialize analysis service.

        Args:
            store: Analysis records and processing claims
            vector_store: Store receiving embedded chunks
            chunker: Document chunker
            embedder: Chunk embedder
            scorer: Match scorer
        """
        self.store = store
        self.vector_store = vector_store
        self.chunker = chunker
        self.embedder = embedder
        self.scorer = scorer

    def create_analysis(
        self,
        resume_text: str,
        job_description_text: str,
        resume_filename: str | None = None,
        job_description_filename: str | None = None,
    ) -> Analysis:
        """
        Register extracted document texts as a new analysis.

        Args:
            resume_text: Extracted resume text
            job_description_text: Extracted job description text
            resume_filename: Original resume file name
            job_description_filename: Original job description file name

        Returns:
            Analysis: New record in the uploaded state

        Raises:
            InvalidInput: When either text is missing
        """
        if resume_text is None or job_description_text is None:
            raise InvalidInput("Both resume and job description texts are required")

        analysis = Analysis(
            resume=SourceDocument(filename=resume_filename, text=resume_text),
            job_description=SourceDocument(
                filename=job_description_filename,
                text=job_description_text,
            ),
        )
        self.store.save(analysis)
        logger.info(
            f"{__name__}:create_analysis - Created analysis {analysis.id} "
            f"(resume={analysis.resume.size} chars, job={analysis.job_description.size} chars)"
        )
        return analysis

    def get_analysis(self, analysis_id: str) -> Analysis:
        """
        Fetch an analysis.

        Raises:
            InvalidInput: When the identifier is malformed
            AnalysisNotFound: When no analysis has this identifier
        """
        validate_analysis_id(analysis_id)
        analysis = self.store.get(analysis_id)
        if analysis is None:
            raise AnalysisNotFound(analysis_id)
        return analysis

    async def process(self, analysis_id: str) -> Analysis:
        """
        Run chunking, embedding, storage and scoring for an analysis.

        Flow:
        1. Claim the analysis (reject if another run holds it)
        2. Completed analyses are returned as they are
        3. Failed analyses raise their stored error without retrying
        4. Otherwise process and record completed or error

        Args:
            analysis_id: Analysis identifier

        Returns:
            Analysis: The completed analysis

        Raises:
            InvalidInput: When the identifier is malformed
            AnalysisNotFound: When no analysis has this identifier
            AnalysisInProgress: When a processing run is already in flight
            AnalysisFailed: When processing failed now or previously
        """
        self.get_analysis(analysis_id)
        if not self.store.try_claim(analysis_id):
            logger.info(f"{__name__}:process - Analysis already in progress: {analysis_id}")
            raise AnalysisInProgress(analysis_id)

        try:
            analysis = self.get_analysis(analysis_id)
            if analysis.status == AnalysisStatus.COMPLETED:
                logger.info(f"{__name__}:process - Analysis already completed: {analysis_id}")
                return analysis
            if analysis.status == AnalysisStatus.ERROR:
                logger.info(f"{__name__}:process - Previous attempt failed: {analysis_id}")
                raise AnalysisFailed(analysis_id, analysis.error or "Unknown error")

            analysis = self.store.save(
                analysis.model_copy(update={"status": AnalysisStatus.PROCESSING})
            )
            logger.info(f"{__name__}:process - START analysis_id={analysis_id}")

            try:
                results = await self._run(analysis)
            except Exception as e:
                detail = str(e) or type(e).__name__
                log_exception_with_context(
                    logger,
                    f"{__name__}:process - Processing failed",
                    e,
                    analysis_id=analysis_id,
                )
                self.store.save(
                    analysis.model_copy(update={"status": AnalysisStatus.ERROR, "error": detail})
                )
                raise AnalysisFailed(analysis_id, detail) from e

            completed = self.store.save(
                analysis.model_copy(
                    update={"status": AnalysisStatus.COMPLETED, "results": results, "error": None}
                )
            )
            logger.info(
                f"{__name__}:process - END analysis_id={analysis_id}, "
                f"score={results.match.score}%, time={results.processing_time_ms}ms"
            )
            return completed
        finally:
            self.store.release(analysis_id)

    def reset_failed(self, analysis_id: str) -> Analysis:
        """
        Return a failed analysis to the uploaded state so it can be retried.

        Raises:
            InvalidInput: When the analysis is not in the error state
        """
        analysis = self.get_analysis(analysis_id)
        if analysis.status != AnalysisStatus.ERROR:
            raise InvalidInput(
                f"Only failed analyses can be reset (status: {analysis.status.value})",
                field="status",
            )
        self.vector_store.delete(analysis_id)
        logger.info(f"{__name__}:reset_failed - Analysis {analysis_id} reset for retry")
        return self.store.save(
            analysis.model_copy(update={"status": AnalysisStatus.UPLOADED, "error": None})
        )

    def health(self) -> dict:
        """Snapshot of service state."""
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "active_analyses": len(self.store),
            "processing": self.store.in_progress(),
        }

    async def _run(self, analysis: Analysis) -> AnalysisResults:
        started = time.perf_counter()
        resume_text = analysis.resume.text
        job_text = analysis.job_description.text

        resume_chunks = self.chunker.chunk(resume_text)
        job_chunks = self.chunker.chunk(job_text)
        logger.info(
            f"{__name__}:_run - Chunked resume={len(resume_chunks)}, job={len(job_chunks)}"
        )

        resume_embedded = await self.embedder.embed_chunks(resume_chunks, DocumentType.RESUME)
        job_embedded = await self.embedder.embed_chunks(job_chunks, DocumentType.JOB_DESCRIPTION)

        self.vector_store.put(analysis.id, DocumentType.RESUME, resume_embedded)
        self.vector_store.put(analysis.id, DocumentType.JOB_DESCRIPTION, job_embedded)

        match = await self.scorer.score(resume_text, job_text)

        return AnalysisResults(
            match=match,
            resume_text=resume_text,
            job_description_text=job_text,
            resume_chunk_count=len(resume_embedded),
            job_description_chunk_count=len(job_embedded),
            processing_time_ms=int((time.perf_counter() - started) * 1000),
        )
