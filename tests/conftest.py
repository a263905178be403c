"""
Shared test fixtures and configuration for entire test suite.

Provides: fake model provider and handles, settings, gateway and pipeline
component fixtures, sample documents
Dependencies: pytest, jobmatch
System role: Test infrastructure and fixture management
"""

import asyncio
from collections.abc import Callable

import pytest

from jobmatch.boundary.db import AnalysisStore, ChatHistoryStore
from jobmatch.boundary.vdb import InMemoryVectorStore
from jobmatch.configs import ProviderSettings, RagSettings, Settings
from jobmatch.core.embedder import EmbeddingProvider, fallback_embedding
from jobmatch.core.model_gateway import ModelGateway

TEST_DIMENSION = 64


class FakeModelHandle:
    """In-process ModelHandle driven by a FakeProvider."""

    def __init__(self, model_id: str, provider: "FakeProvider") -> None:
        self.model_id = model_id
        self._provider = provider

    async def generate(self, prompt: str) -> str:
        provider = self._provider
        if self.model_id not in provider.available:
            raise RuntimeError(f"model {self.model_id} not found")
        if prompt == provider.probe_prompt:
            provider.probes.append(self.model_id)
            return "Hi there"
        provider.prompts.append(prompt)
        if provider.generate_error is not None:
            raise provider.generate_error
        reply = provider.reply
        return reply(prompt) if callable(reply) else reply

    async def embed(self, text: str) -> list[float]:
        provider = self._provider
        if self.model_id not in provider.available:
            raise RuntimeError(f"model {self.model_id} not found")
        provider.embedded.append(text)
        if provider.embed_delay:
            await asyncio.sleep(provider.embed_delay)
        if text in provider.failing_texts or provider.embed_error is not None:
            raise provider.embed_error or RuntimeError("embedding failed")
        return fallback_embedding(text, provider.dimension)


class FakeProvider:
    """Configurable fake of the Gemini provider."""

    def __init__(
        self,
        available: set[str] | None = None,
        reply: str | Callable[[str], str] = "A grounded answer.",
        dimension: int = TEST_DIMENSION,
    ) -> None:
        self.available = available if available is not None else {"model-a", "model-b", "fallback"}
        self.reply = reply
        self.dimension = dimension
        self.probe_prompt = "Hello"
        self.generate_error: Exception | None = None
        self.embed_error: Exception | None = None
        self.failing_texts: set[str] = set()
        self.embed_delay = 0.0
        self.probes: list[str] = []
        self.prompts: list[str] = []
        self.embedded: list[str] = []
        self.created: list[str] = []

    def factory(self, model_id: str) -> FakeModelHandle:
        self.created.append(model_id)
        return FakeModelHandle(model_id, self)


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provide a fake provider where every model responds."""
    return FakeProvider()


@pytest.fixture
def down_provider() -> FakeProvider:
    """Provide a fake provider where no model responds."""
    return FakeProvider(available=set())


def _build_gateway(provider: FakeProvider, **kwargs) -> ModelGateway:
    """Gateway over the fake provider with short timeouts."""
    options = {
        "preferred_models": ["model-a", "model-b"],
        "fallback_model": "fallback",
        "timeout_seconds": 1.0,
        "max_consecutive_failures": 3,
    }
    options.update(kwargs)
    return ModelGateway(handle_factory=provider.factory, **options)


@pytest.fixture
def gateway(fake_provider: FakeProvider) -> ModelGateway:
    """Provide gateway over the healthy fake provider."""
    return _build_gateway(fake_provider)


@pytest.fixture
def down_gateway(down_provider: FakeProvider) -> ModelGateway:
    """Provide gateway over the unavailable fake provider."""
    return _build_gateway(down_provider)


@pytest.fixture
def embedder(gateway: ModelGateway) -> EmbeddingProvider:
    """Provide embedder without throttling."""
    return EmbeddingProvider(gateway, dimension=TEST_DIMENSION, delay_seconds=0.0)


@pytest.fixture
def vector_store() -> InMemoryVectorStore:
    """Provide empty vector store."""
    return InMemoryVectorStore()


@pytest.fixture
def analysis_store() -> AnalysisStore:
    """Provide empty analysis store."""
    return AnalysisStore()


@pytest.fixture
def chat_history() -> ChatHistoryStore:
    """Provide empty chat history store."""
    return ChatHistoryStore()


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings sized for tests (no throttling, small vectors)."""
    return Settings(
        provider=ProviderSettings(
            api_key="test-key",
            preferred_models=["model-a", "model-b"],
            fallback_model="fallback",
            embedding_dimension=TEST_DIMENSION,
            request_timeout_seconds=1.0,
        ),
        rag=RagSettings(embedding_delay_seconds=0.0, chunk_size=200),
    )


@pytest.fixture
def sample_resume() -> str:
    """Provide a short resume."""
    return (
        "Jane Doe\n"
        "Backend engineer\n"
        "\n"
        "Skills: Python, AWS, Docker and PostgreSQL\n"
        "\n"
        "Experience: Five years building data pipelines on AWS with Python. "
        "Led the migration of batch jobs to Docker containers.\n"
        "\n"
        "Education: BSc Computer Science, University of Leeds"
    )


@pytest.fixture
def sample_job_description() -> str:
    """Provide a short job description."""
    return (
        "Platform Engineer\n"
        "\n"
        "Requires Kubernetes, AWS, Python.\n"
        "\n"
        "You will run Terraform-managed infrastructure and on-call rotations."
    )


@pytest.fixture
def provider_factory() -> type[FakeProvider]:
    """Provide the FakeProvider class for tests that configure their own."""
    return FakeProvider


@pytest.fixture
def gateway_factory() -> Callable[..., ModelGateway]:
    """Provide a builder for gateways over a given fake provider."""
    return _build_gateway
