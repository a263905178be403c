"""
Test suite for the service container.

Verifies shared state is created once and wired into every service.

System role: Verification of dependency wiring
"""

from unittest.mock import patch

import pytest

from jobmatch.dependencies import ServiceContainer, get_container


@pytest.fixture
def container(test_settings, fake_provider) -> ServiceContainer:
    """Provide container over the fake provider."""
    return ServiceContainer(settings=test_settings, handle_factory=fake_provider.factory)


class TestServiceContainer:
    """Test suite for ServiceContainer."""

    def test_services_should_be_cached(self, container) -> None:
        """Test lazy properties return the same instance on each access."""
        assert container.gateway is container.gateway
        assert container.embedder is container.embedder
        assert container.analysis_service is container.analysis_service
        assert container.chat_service is container.chat_service

    def test_services_should_share_stores(self, container) -> None:
        """Test both services see the same analysis store."""
        assert container.analysis_service.store is container.analysis_store
        assert container.chat_service.analyses is container.analysis_store
        assert container.chat_service.history is container.chat_history
        assert container.analysis_service.vector_store is container.vector_store

    def test_settings_should_reach_components(self, container, test_settings) -> None:
        assert container.analysis_service.chunker.chunk_size == test_settings.rag.chunk_size
        assert container.embedder.dimension == test_settings.provider.embedding_dimension
        assert container.chat_service.settings is test_settings.rag

    @pytest.mark.asyncio
    async def test_gateway_should_use_shared_model_cache(self, container) -> None:
        """Test the resolved model lands in the container's cache."""
        _, model_id = await container.gateway.resolve()

        assert model_id == "model-a"
        assert container.model_cache.get()[1] == "model-a"

    @pytest.mark.asyncio
    async def test_end_to_end_process_then_ask(
        self, container, fake_provider, sample_resume, sample_job_description
    ) -> None:
        """Test an analysis can be processed and questioned through the container."""
        # Arrange
        fake_provider.reply = "The candidate has Python and AWS."
        analysis = container.analysis_service.create_analysis(sample_resume, sample_job_description)

        # Act
        completed = await container.analysis_service.process(analysis.id)
        response = await container.chat_service.ask(analysis.id, "Does the candidate know AWS?")

        # Assert
        assert completed.results.resume_chunk_count > 0
        assert response.answer == "The candidate has Python and AWS."
        assert len(response.sources) <= container.settings.rag.top_k
        assert len(container.chat_service.get_history(analysis.id)) == 1

class TestGetContainer:
    """Test suite for the process-wide container accessor."""

    def test_should_return_singleton_and_configure_logging_once(self, test_settings) -> None:
        get_container.cache_clear()
        try:
            with patch("jobmatch.dependencies.get_settings", return_value=test_settings), patch(
                "jobmatch.dependencies.configure_logging"
            ) as mock_configure:
                first = get_container()
                second = get_container()

            assert first is second
            assert first.settings is test_settings
            mock_configure.assert_called_once()
        finally:
            get_container.cache_clear()
