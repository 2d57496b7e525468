"""Tests for the Generation Client."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from src.config import Settings
from src.services.generation_client import GenerationClient
from src.utils.llm_client import (
    ExtractionError,
    NonRetryableBackendError,
    RetryableBackendError,
)


@pytest.fixture
def live_client():
    """Client with a credential and a stand-in agent."""
    client = GenerationClient(settings=Settings(anthropic_api_key="sk-test", max_retries=2))
    client._agent = MagicMock()
    return client


class TestGenerationClient:

    def test_mock_mode_without_credential(self):
        assert GenerationClient(settings=Settings(anthropic_api_key=None)).is_mock is True

    def test_model_override(self):
        client = GenerationClient(
            settings=Settings(anthropic_api_key="sk-test"),
            model_override="anthropic:claude-haiku-4-5",
        )
        assert client.model_name == "anthropic:claude-haiku-4-5"
        assert client.is_mock is False

    async def test_submit_refused_in_mock_mode(self):
        client = GenerationClient(settings=Settings(anthropic_api_key=None))

        with pytest.raises(NonRetryableBackendError, match="No generation credential"):
            await client.submit("Write a prompt")

    async def test_submit_returns_stripped_text(self, live_client):
        with patch(
            "src.services.generation_client.run_agent_with_retry",
            new=AsyncMock(return_value="  # Personality\nYou are Maya.\n"),
        ) as run:
            text = await live_client.submit("Write a prompt")

        assert text == "# Personality\nYou are Maya."
        run.assert_awaited_once()
        assert run.await_args.kwargs["max_retries"] == 2
        assert run.await_args.kwargs["model_settings"] == {"max_tokens": 4096}

    async def test_submit_max_tokens_override(self, live_client):
        with patch(
            "src.services.generation_client.run_agent_with_retry",
            new=AsyncMock(return_value="text"),
        ) as run:
            await live_client.submit("Write a prompt", max_output_tokens=1000)

        assert run.await_args.kwargs["model_settings"] == {"max_tokens": 1000}

    @pytest.mark.parametrize("output", ["", "   \n", None])
    async def test_empty_output_raises_extraction_error(self, live_client, output):
        with patch(
            "src.services.generation_client.run_agent_with_retry",
            new=AsyncMock(return_value=output),
        ):
            with pytest.raises(ExtractionError):
                await live_client.submit("Write a prompt")

    async def test_backend_errors_propagate(self, live_client):
        with patch(
            "src.services.generation_client.run_agent_with_retry",
            new=AsyncMock(side_effect=RetryableBackendError("Failed after 2 attempts")),
        ):
            with pytest.raises(RetryableBackendError, match="Failed after 2 attempts"):
                await live_client.submit("Write a prompt")
