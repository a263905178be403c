"""
Google Gemini model handle.

Adapts LangChain's Gemini chat and embedding clients to the ModelHandle
protocol. Embeddings are pinned to a fixed output dimensionality so real
and fallback vectors share one length.

Dependencies: langchain_google_genai, langchain_core, python-dotenv
System role: Concrete provider integration
"""

import logging

from dotenv import load_dotenv
from langchain_core.messages import AIMessage
from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings

from jobmatch.configs.provider import ProviderSettings

load_dotenv()

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings wrapper with fixed output dimensionality.

    The base class ignores output_dimensionality in the constructor, so
    every embed call passes the configured dimension explicitly.
    """

    _output_dimensionality: int = 768

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 768,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Fixed dimension for all embeddings
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    async def aembed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> list[float]:
        """
        Embed query with fixed output dimensionality.

        Args:
            text: Text to embed
            task_type: Optional task type for embedding
            title: Optional title
            output_dimensionality: Override dimension (uses configured if None)

        Returns:
            Embedding vector
        """
        dim = output_dimensionality or self._output_dimensionality
        return await super().aembed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=dim,
        )


def _message_text(message: AIMessage) -> str:
    """Flatten an AIMessage's content (plain string or content blocks) to text."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class GeminiModelHandle:
    """ModelHandle backed by a Gemini chat model and a Gemini embedding model."""

    def __init__(self, model_id: str, settings: ProviderSettings) -> None:
        """
        Initialize Gemini clients for one generation model.

        Args:
            model_id: Gemini generation model identifier
            settings: Provider settings (API key, embedding model, timeout)
        """
        self.model_id = model_id
        api_key = settings.api_key or None
        self._chat = ChatGoogleGenerativeAI(
            model=model_id,
            temperature=settings.temperature,
            google_api_key=api_key,
            timeout=settings.request_timeout_seconds,
            max_retries=0,
        )
        self._embeddings = FixedDimensionEmbeddings(
            model=settings.embedding_model,
            output_dimensionality=settings.embedding_dimension,
            google_api_key=api_key,
        )

    async def generate(self, prompt: str) -> str:
        """Generate a completion for a single-turn prompt."""
        message = await self._chat.ainvoke(prompt)
        return _message_text(message)

    async def embed(self, text: str) -> list[float]:
        """Embed a text with the configured embedding model."""
        return await self._embeddings.aembed_query(text)


def gemini_handle_factory(settings: ProviderSettings):
    """
    Build a handle factory bound to provider settings.

    Args:
        settings: Provider settings

    Returns:
        Callable mapping a model identifier to a GeminiModelHandle
    """

    def factory(model_id: str) -> GeminiModelHandle:
        return GeminiModelHandle(model_id, settings)

    return factory
