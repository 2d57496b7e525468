"""
Structured Logging & Observability
Production-grade logging that's both human-readable and machine-parseable.
"""
import sys
from loguru import logger
from typing import Any, Dict
from src.config import get_settings


def configure_logging():
    """
    Configure loguru for production observability.

    In development: Human-readable colorized output
    In production: Structured JSON logs for ingestion (ELK, Datadog, etc.)
    """
    settings = get_settings()

    # Remove default handler
    logger.remove()

    if not settings.enable_structured_logging:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "{message}"
            ),
            level=settings.log_level,
            colorize=True,
        )
    else:
        logger.add(
            sys.stderr,
            format="{message}",
            level=settings.log_level,
            serialize=True,  # Output as JSON
        )

    logger.info(f"Logging configured: level={settings.log_level}, structured={settings.enable_structured_logging}")


def log_generation_event(
    business_id: str | None,
    stage: str,
    duration_ms: float | None = None,
    **context
):
    """
    Structured logging for one pipeline stage of a prompt generation run.

    Args:
        business_id: The business whose prompts are being generated (None for ad-hoc runs)
        stage: Pipeline stage (e.g., "compose", "generate", "package")
        duration_ms: Execution time in milliseconds
        **context: Additional context (language, version, mock, etc.)

    Example:
        >>> log_generation_event(
        ...     business_id="665f1c...",
        ...     stage="compose",
        ...     duration_ms=3.1,
        ...     language="en",
        ...     industry="dental"
        ... )
    """
    log_data = {
        "event_type": "prompt_generation",
        "business_id": business_id,
        "stage": stage,
    }

    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 2)

    log_data.update(context)

    logger.bind(**log_data).info(f"PromptPipeline | {stage}")


def log_llm_call(
    model: str,
    prompt_chars: int,
    output_chars: int,
    duration_ms: float,
    attempts: int = 1,
    success: bool = True,
    error: str | None = None
):
    """
    Structured logging for generation backend calls.

    Args:
        model: Model used (e.g., "anthropic:claude-sonnet-4-5-20250929")
        prompt_chars: Size of the submitted instruction
        output_chars: Size of the extracted text (0 on failure)
        duration_ms: Total latency including retries
        attempts: Number of attempts made
        success: Whether the call succeeded
        error: Error message if failed
    """
    log_data = {
        "event_type": "llm_call",
        "model": model,
        "chars": {
            "prompt": prompt_chars,
            "output": output_chars,
        },
        "attempts": attempts,
        "duration_ms": round(duration_ms, 2),
        "success": success
    }

    if error:
        log_data["error"] = error

    level = "info" if success else "error"
    logger.bind(**log_data).log(
        level.upper(),
        f"LLM Call: {model} | {prompt_chars} -> {output_chars} chars | {attempts} attempt(s)"
    )


def log_business_event(
    event_type: str,
    business_id: str,
    **details: Dict[str, Any]
):
    """
    Log business-critical events for analytics.

    Examples:
        - Regeneration queued
        - New prompt version activated
        - Regeneration job failed

    Args:
        event_type: Type of event (e.g., "regeneration_queued", "artifact_activated")
        business_id: The business involved
        **details: Event-specific data
    """
    log_data = {
        "event_type": event_type,
        "business_id": business_id,
        **details
    }

    logger.bind(**log_data).success(f"Business Event: {event_type}")
