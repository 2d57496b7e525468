"""
Generation Client
Submits a composed meta-prompt to the generative backend and returns the text.
"""
import time
from typing import Optional

from loguru import logger
from pydantic_ai import Agent
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.providers.anthropic import AnthropicProvider

from src.config import Settings, get_settings
from src.utils.llm_client import (
    BackendError,
    ExtractionError,
    NonRetryableBackendError,
    run_agent_with_retry,
)
from src.utils.observability import log_llm_call

INSTRUCTIONS = (
    "You write system prompts for voice AI receptionists. "
    "Follow the requested section structure exactly and return only the prompt text."
)


class GenerationClient:
    """
    Thin wrapper around a text-output PydanticAI agent.

    The agent is built on first use, so a client created without a
    credential (mock mode) never touches the backend.

    Usage:
        >>> client = GenerationClient()
        >>> if not client.is_mock:
        ...     text = await client.submit(meta_prompt)
    """

    def __init__(self, settings: Optional[Settings] = None, model_override: str | None = None):
        self.settings = settings or get_settings()
        self.model_name = model_override or self.settings.generation_model
        self._agent: Agent[None, str] | None = None

    @property
    def is_mock(self) -> bool:
        return self.settings.is_mock_mode

    def _build_agent(self) -> Agent[None, str]:
        provider_name, _, model_id = self.model_name.partition(":")
        if provider_name == "anthropic" and model_id:
            model = AnthropicModel(
                model_id,
                provider=AnthropicProvider(api_key=self.settings.anthropic_api_key),
            )
        else:
            model = self.model_name

        logger.info(f"GenerationClient agent initialized with model: {self.model_name}")
        return Agent(model, output_type=str, instructions=INSTRUCTIONS)

    @property
    def agent(self) -> Agent[None, str]:
        if self._agent is None:
            self._agent = self._build_agent()
        return self._agent

    async def submit(self, instruction: str, max_output_tokens: int | None = None) -> str:
        """
        Send one instruction and return the generated text.

        Raises:
            NonRetryableBackendError: no credential, auth or invalid request
            RetryableBackendError: transient failures outlasted every attempt
            ExtractionError: the backend returned no text
        """
        if self.is_mock:
            raise NonRetryableBackendError("No generation credential configured")

        max_tokens = max_output_tokens or self.settings.max_output_tokens
        start = time.perf_counter()

        try:
            output = await run_agent_with_retry(
                self.agent,
                instruction,
                max_retries=self.settings.max_retries,
                model_settings={"max_tokens": max_tokens},
            )
        except BackendError as e:
            log_llm_call(
                model=self.model_name,
                prompt_chars=len(instruction),
                output_chars=0,
                duration_ms=(time.perf_counter() - start) * 1000,
                success=False,
                error=str(e),
            )
            raise

        text = (output or "").strip()
        if not text:
            raise ExtractionError("Backend returned no text content")

        log_llm_call(
            model=self.model_name,
            prompt_chars=len(instruction),
            output_chars=len(text),
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return text
