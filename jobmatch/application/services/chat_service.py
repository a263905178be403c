"""
Chat service for question answering over an analysis.

Orchestrates the question flow: validation, retrieval, context fallbacks
from the raw resume text, answer synthesis and history recording. When
retrieval and every fallback find nothing, the caller gets
NoContextAvailable instead of a guessed answer.

Dependencies: jobmatch.core, jobmatch.boundary.db, jobmatch.application
System role: Chat service orchestration layer
"""

import logging
import re

from jobmatch.application.validators import validate_analysis_id, validate_question
from jobmatch.boundary.db.analysis_store import AnalysisStore
from jobmatch.boundary.db.chat_history_store import ChatHistoryStore
from jobmatch.configs.rag import RagSettings
from jobmatch.core.answering.answer_synthesizer import AnswerSynthesizer
from jobmatch.core.exceptions import AnalysisNotFound, AnalysisNotReady, NoContextAvailable
from jobmatch.core.retriever import Retriever
from jobmatch.models.analysis import Analysis, AnalysisStatus
from jobmatch.models.chat import ChatEntry, ChatResponse, SourceChunk
from jobmatch.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

PARAGRAPH_SIMILARITY = 0.5
KEYWORD_LINE_SIMILARITY = 0.7
CONTEXT_KEYWORDS = ("project", "achievement", "experience", "work", "role", "responsibility")


class ChatService:
    """
    Chat service for follow-up questions.

    Answers strictly from the analysis' documents and keeps an append-only
    history per analysis.
    """

    def __init__(
        self,
        analyses: AnalysisStore,
        history: ChatHistoryStore,
        retriever: Retriever,
        synthesizer: AnswerSynthesizer,
        settings: RagSettings | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            analyses: Analysis records
            history: Chat history store
            retriever: Chunk retriever
            synthesizer: Answer synthesizer
            settings: Retrieval and fallback limits
        """
        self.analyses = analyses
        self.history = history
        self.retriever = retriever
        self.synthesizer = synthesizer
        self.settings = settings or RagSettings()

    async def ask(self, analysis_id: str, question: str) -> ChatResponse:
        """
        Answer a question about an analysis.

        Flow:
        1. Validate inputs and that the analysis is completed
        2. Retrieve the most similar chunks
        3. Fall back to resume paragraphs, then to keyword lines
        4. Synthesize the answer and record it

        Args:
            analysis_id: Analysis identifier
            question: User question

        Returns:
            ChatResponse: Answer with the sources used

        Raises:
            InvalidInput: When the identifier or question is invalid
            AnalysisNotFound: When no analysis has this identifier
            AnalysisNotReady: When processing has not completed
            NoContextAvailable: When no context could be found
        """
        validate_analysis_id(analysis_id)
        question = validate_question(question)

        analysis = self.analyses.get(analysis_id)
        if analysis is None:
            raise AnalysisNotFound(analysis_id)
        if analysis.status != AnalysisStatus.COMPLETED:
            raise AnalysisNotReady(analysis_id, analysis.status.value)

        retrieved = await self.retriever.search(question, analysis_id, k=self.settings.top_k)
        sources = [
            SourceChunk(text=result.chunk.content, similarity=result.similarity)
            for result in retrieved
        ]
        logger.info(f"{__name__}:ask - Retrieved {len(sources)} chunks for analysis {analysis_id}")

        if not sources:
            sources = self._fallback_context(analysis)
        if not sources:
            logger.warning(f"{__name__}:ask - No context available for analysis {analysis_id}")
            raise NoContextAvailable(analysis_id=analysis_id)

        answer = await self.synthesizer.answer(question, [source.text for source in sources])

        self.history.append(
            analysis_id,
            ChatEntry(question=question, answer=answer, sources=sources),
        )
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:ask - Answered question",
            analysis_id=analysis_id,
            question=question,
            source_count=len(sources),
        )
        return ChatResponse(answer=answer, sources=sources)

    def get_history(self, analysis_id: str, limit: int | None = None) -> list[ChatEntry]:
        """
        Question/answer history of an analysis, oldest first.

        Raises:
            InvalidInput: When the identifier is malformed
        """
        validate_analysis_id(analysis_id)
        return self.history.get_entries(analysis_id, limit=limit)

    def _fallback_context(self, analysis: Analysis) -> list[SourceChunk]:
        """Context taken straight from the resume text when retrieval found nothing."""
        resume_text = analysis.results.resume_text if analysis.results else analysis.resume.text
        if not resume_text:
            return []

        paragraphs = [
            paragraph.strip()
            for paragraph in re.split(r"\n\s*\n", resume_text)
            if len(paragraph.strip()) > self.settings.fallback_paragraph_min_chars
        ]
        if paragraphs:
            logger.info(f"{__name__}:_fallback_context - Using {len(paragraphs)} resume paragraphs")
            return [
                SourceChunk(text=paragraph, similarity=PARAGRAPH_SIMILARITY)
                for paragraph in paragraphs[: self.settings.fallback_paragraph_limit]
            ]

        lines = [
            line.strip()
            for line in resume_text.splitlines()
            if len(line.strip()) > self.settings.fallback_line_min_chars
            and any(keyword in line.lower() for keyword in CONTEXT_KEYWORDS)
        ]
        if lines:
            logger.info(f"{__name__}:_fallback_context - Using {len(lines)} resume keyword lines")
        return [
            SourceChunk(text=line, similarity=KEYWORD_LINE_SIMILARITY)
            for line in lines[: self.settings.fallback_line_limit]
        ]
