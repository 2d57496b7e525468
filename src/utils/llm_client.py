"""
LLM Client with Retry Logic & Error Handling
Provides resilient agent execution with exponential backoff.
"""
import asyncio
import random
from typing import TypeVar, Any
from loguru import logger
from anthropic import APIConnectionError
from pydantic_ai import Agent
from pydantic_ai.exceptions import ModelHTTPError
from src.config import get_settings

# Type variable for generic agent output
T = TypeVar('T')


class BackendError(Exception):
    """Base class for generative backend failures."""
    pass


class RetryableBackendError(BackendError):
    """Transient failures (rate limit, timeout, 5xx) that should trigger retries."""
    pass


class NonRetryableBackendError(BackendError):
    """Non-recoverable errors (auth failure, invalid request, etc.)."""
    pass


class ExtractionError(BackendError):
    """The backend answered but no usable text could be extracted."""
    pass


def classify_error(error: Exception) -> str:
    """
    Bucket an exception from the backend by type and HTTP status.

    Returns one of: rate_limit, timeout, server_error, authentication,
    invalid_request, unknown. Only the first three are retried; any other
    4xx is the request's fault.
    """
    if isinstance(error, ModelHTTPError):
        status = error.status_code
        if status == 429:
            return "rate_limit"
        if status >= 500:
            return "server_error"
        if status == 408:
            return "timeout"
        if status in (401, 403):
            return "authentication"
        return "invalid_request"

    # APITimeoutError is an APIConnectionError
    if isinstance(error, (APIConnectionError, TimeoutError, ConnectionError)):
        return "timeout"
    return "unknown"


async def run_agent_with_retry(
    agent: Agent,
    prompt: str,
    deps: Any = None,
    max_retries: int | None = None,
    **run_kwargs: Any
) -> T:
    """
    Executes an agent with exponential backoff retry logic.

    Args:
        agent: The PydanticAI agent to run
        prompt: The prompt to send to the agent
        deps: Optional dependencies for the agent
        max_retries: Override default attempt count from settings
        **run_kwargs: Forwarded to agent.run (e.g. model_settings)

    Returns:
        The agent's output (typed based on agent's output_type)

    Raises:
        NonRetryableBackendError: For non-recoverable failures
        RetryableBackendError: After max attempts exhausted

    Example:
        >>> agent = Agent('anthropic:claude-sonnet-4-5-20250929', output_type=str)
        >>> text = await run_agent_with_retry(agent, meta_prompt)
    """
    settings = get_settings()
    max_attempts = max_retries or settings.max_retries
    min_wait = settings.retry_min_wait_seconds
    max_wait = settings.retry_max_wait_seconds

    last_error = None

    for attempt in range(1, max_attempts + 1):
        try:
            logger.debug(f"LLM attempt {attempt}/{max_attempts}")

            # Execute the agent
            if deps is not None:
                result = await agent.run(prompt, deps=deps, **run_kwargs)
            else:
                result = await agent.run(prompt, **run_kwargs)

            return result.output

        except Exception as e:
            last_error = e
            error_type = classify_error(e)

            if error_type == "rate_limit":
                logger.warning(f"⏱️ Rate limit hit (attempt {attempt}/{max_attempts})")

            elif error_type == "timeout":
                logger.warning(f"⏱️ Timeout (attempt {attempt}/{max_attempts})")

            elif error_type == "server_error":
                logger.warning(f"🔧 Server error (attempt {attempt}/{max_attempts})")

            elif error_type == "authentication":
                logger.error(f"🚨 Authentication failure: {e}")
                raise NonRetryableBackendError(f"Authentication failed: {e}") from e

            elif error_type == "invalid_request":
                logger.error(f"🚨 Invalid request: {e}")
                raise NonRetryableBackendError(f"Invalid request: {e}") from e

            else:
                logger.error(f"🚨 Unexpected backend error: {e!r}")
                raise NonRetryableBackendError(f"Unexpected backend error: {e}") from e

            # If this was the last attempt, raise
            if attempt == max_attempts:
                logger.error(f"❌ Max retries ({max_attempts}) exhausted. Last error: {e}")
                raise RetryableBackendError(f"Failed after {max_attempts} attempts: {e}") from e

            # Calculate exponential backoff with jitter
            wait_time = min(min_wait * (2 ** (attempt - 1)), max_wait)
            # Add 20% jitter to prevent thundering herd
            wait_time = wait_time * (0.8 + 0.4 * random.random())

            logger.info(f"⏳ Retrying in {wait_time:.1f}s... (error: {error_type})")
            await asyncio.sleep(wait_time)

    # Only reachable with max_attempts < 1
    raise RetryableBackendError(f"Unexpected retry loop exit. Last error: {last_error}")
