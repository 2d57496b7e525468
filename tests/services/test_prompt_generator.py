"""Tests for the prompt generation pipeline."""

import pytest
from unittest.mock import patch

from src.config import Settings
from src.models.business import AIPersonaConfig
from src.models.enhancement import EnhancementConfig, EnhancementsApplied, SentimentDetectionLevel
from src.services.generation_client import GenerationClient
from src.services.prompt_generator import generate_prompts
from src.utils.llm_client import NonRetryableBackendError, RetryableBackendError
from src.utils.mock_prompts import generate_mock_prompt


class FakeClient:
    """Records submitted meta-prompts and answers from a script."""

    is_mock = False

    def __init__(self, responses=None, error=None, fail_on_call=1):
        self.responses = list(responses or [])
        self.error = error
        self.fail_on_call = fail_on_call
        self.instructions = []

    async def submit(self, instruction, max_output_tokens=None):
        self.instructions.append(instruction)
        if self.error and len(self.instructions) == self.fail_on_call:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture
def mock_client():
    return GenerationClient(settings=Settings(anthropic_api_key=None))


class TestMockMode:

    async def test_returns_mock_prompts(self, minimal_input, mock_client):
        result = await generate_prompts(minimal_input, client=mock_client)

        assert result.success is True
        assert result.mock is True
        assert result.prompts.english_prompt == generate_mock_prompt(minimal_input, "en")
        assert result.prompts.spanish_prompt is None
        assert result.enhancements_applied == EnhancementsApplied()

    async def test_mock_spanish(self, dental_input, mock_client):
        result = await generate_prompts(dental_input, client=mock_client, version=3)

        assert result.success is True
        assert result.prompts.spanish_prompt.startswith("# Personalidad")
        assert "# Language Selection" in result.prompts.english_prompt
        assert result.prompts.version == 3

    async def test_never_builds_backend_agent(self, dental_input, mock_client):
        with patch("src.services.generation_client.Agent") as agent_cls:
            result = await generate_prompts(dental_input, client=mock_client)

        assert result.mock is True
        agent_cls.assert_not_called()
        assert mock_client._agent is None


class TestGeneration:

    async def test_english_only(self, minimal_input):
        client = FakeClient(responses=["# Personality\nYou are Koya."])

        result = await generate_prompts(minimal_input, client=client)

        assert result.success is True
        assert result.mock is False
        assert result.prompts.english_prompt == "# Personality\nYou are Koya."
        assert len(client.instructions) == 1
        assert "Business Name: Quick Lube" in client.instructions[0]

    async def test_english_and_spanish(self, dental_input):
        client = FakeClient(responses=["English script", "Guion en español"])

        result = await generate_prompts(dental_input, client=client)

        assert result.success is True
        assert "Language: English" in client.instructions[0]
        assert "Language: Spanish (US Hispanic market)" in client.instructions[1]
        assert result.prompts.english_prompt.startswith("English script\n")
        assert "# Language Selection" in result.prompts.english_prompt
        assert result.prompts.spanish_prompt == "Guion en español"

    async def test_enhancements_applied_reflect_config(self, minimal_input):
        config = EnhancementConfig(
            few_shot_examples_enabled=False,
            sentiment_detection_level=SentimentDetectionLevel.NONE,
        )

        result = await generate_prompts(minimal_input, config=config, client=FakeClient(responses=["text"]))

        assert result.enhancements_applied == EnhancementsApplied(
            industry=True,
            few_shot=False,
            sentiment=False,
            caller_context=True,
            error_templates=True,
        )

    async def test_backend_failure_is_reported(self, minimal_input):
        client = FakeClient(error=RetryableBackendError("Failed after 3 attempts: timeout"))

        result = await generate_prompts(minimal_input, client=client)

        assert result.success is False
        assert "Failed after 3 attempts" in result.error
        assert result.prompts is None

    async def test_spanish_failure_fails_whole_run(self, dental_input):
        client = FakeClient(
            responses=["English script"],
            error=NonRetryableBackendError("Invalid request"),
            fail_on_call=2,
        )

        result = await generate_prompts(dental_input, client=client)

        assert result.success is False
        assert result.prompts is None


class TestValidation:

    async def test_invalid_personality_rejected_before_mock(self, dental_input, mock_client):
        bad_input = dental_input.model_copy(update={
            "ai_config": AIPersonaConfig(name="Maya", personality="sassy"),
        })

        result = await generate_prompts(bad_input, client=mock_client)

        assert result.success is False
        assert "unrecognized personality 'sassy'" in result.error

    async def test_invalid_input_never_reaches_backend(self, dental_input):
        bad_input = dental_input.model_copy(update={
            "ai_config": AIPersonaConfig(name="  "),
        })
        client = FakeClient(responses=["unused"])

        result = await generate_prompts(bad_input, client=client)

        assert result.success is False
        assert "AI name is missing" in result.error
        assert client.instructions == []
