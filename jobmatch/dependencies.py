"""
Dependency injection container.

Builds the shared process-wide state (model cache, vector store, analysis
and chat stores) once and passes it explicitly into each component.

Dependencies: jobmatch.configs, jobmatch.core, jobmatch.boundary, jobmatch.application
System role: DI container for service wiring
"""

from functools import lru_cache

from jobmatch.application.services import AnalysisService, ChatService
from jobmatch.boundary.db import AnalysisStore, ChatHistoryStore
from jobmatch.boundary.llm import HandleFactory, get_gemini_handle_factory
from jobmatch.boundary.vdb import InMemoryVectorStore
from jobmatch.configs import Settings, get_settings
from jobmatch.core.answering import AnswerSynthesizer
from jobmatch.core.chunker import DocumentChunker
from jobmatch.core.embedder import EmbeddingProvider
from jobmatch.core.matching import MatchScorer
from jobmatch.core.model_gateway import ModelCache, ModelGateway
from jobmatch.core.retriever import Retriever
from jobmatch.observability.logger import configure_logging


class ServiceContainer:
    """Container for shared state and lazily built services."""

    def __init__(
        self,
        settings: Settings | None = None,
        handle_factory: HandleFactory | None = None,
    ) -> None:
        """
        Initialize container.

        Args:
            settings: Application settings (loaded from the environment if None)
            handle_factory: Model handle factory (Gemini if None)
        """
        self.settings = settings or get_settings()
        self._handle_factory = handle_factory

        self.model_cache = ModelCache()
        self.vector_store = InMemoryVectorStore()
        self.analysis_store = AnalysisStore()
        self.chat_history = ChatHistoryStore()

        self._gateway: ModelGateway | None = None
        self._embedder: EmbeddingProvider | None = None
        self._analysis_service: AnalysisService | None = None
        self._chat_service: ChatService | None = None

    @property
    def gateway(self) -> ModelGateway:
        """Get cached model gateway."""
        if self._gateway is None:
            factory = self._handle_factory
            if factory is None:
                factory = get_gemini_handle_factory()(self.settings.provider)
            self._gateway = ModelGateway.from_settings(
                self.settings.provider,
                handle_factory=factory,
                cache=self.model_cache,
            )
        return self._gateway

    @property
    def embedder(self) -> EmbeddingProvider:
        """Get cached embedder."""
        if self._embedder is None:
            self._embedder = EmbeddingProvider(
                self.gateway,
                dimension=self.settings.provider.embedding_dimension,
                delay_seconds=self.settings.rag.embedding_delay_seconds,
            )
        return self._embedder

    @property
    def analysis_service(self) -> AnalysisService:
        """Get cached analysis service."""
        if self._analysis_service is None:
            self._analysis_service = AnalysisService(
                store=self.analysis_store,
                vector_store=self.vector_store,
                chunker=DocumentChunker(self.settings.rag.chunk_size),
                embedder=self.embedder,
                scorer=MatchScorer(self.gateway, self.settings.rag.match_excerpt_chars),
            )
        return self._analysis_service

    @property
    def chat_service(self) -> ChatService:
        """Get cached chat service."""
        if self._chat_service is None:
            self._chat_service = ChatService(
                analyses=self.analysis_store,
                history=self.chat_history,
                retriever=Retriever(self.vector_store, self.embedder),
                synthesizer=AnswerSynthesizer(self.gateway, self.settings.rag.answer_snippet_chars),
                settings=self.settings.rag,
            )
        return self._chat_service


@lru_cache
def get_container() -> ServiceContainer:
    """
    Get the process-wide service container.

    Configures logging from settings on first call.

    Returns:
        ServiceContainer: Singleton built from environment settings
    """
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)
    return ServiceContainer(settings)
