"""
Prompt Generation Pipeline

validate -> compose (per language) -> generate -> package.

This is the boundary other code calls. Backend trouble never escapes as an
exception; it comes back as GenerationResult(success=False, error=...).
"""
import time
from typing import Optional

from loguru import logger

from src.core.composer import build_meta_prompt
from src.core.context_assembler import validate_prompt_input
from src.core.exceptions import ValidationError
from src.enhancements import FragmentRegistry
from src.models.artifact import GenerationResult
from src.models.business import Language, PromptGenerationInput
from src.models.enhancement import EnhancementConfig, EnhancementsApplied
from src.services.generation_client import GenerationClient
from src.services.result_packager import package_prompts
from src.utils.llm_client import BackendError
from src.utils.mock_prompts import generate_mock_prompt
from src.utils.observability import log_generation_event


async def generate_prompts(
    prompt_input: PromptGenerationInput,
    config: Optional[EnhancementConfig] = None,
    client: Optional[GenerationClient] = None,
    registry: Optional[FragmentRegistry] = None,
    version: int = 1,
    business_id: str | None = None,
) -> GenerationResult:
    """
    Generate the English (and, when enabled, Spanish) operating scripts.

    Args:
        prompt_input: Assembled business input
        config: Enhancement switches (defaults apply when omitted)
        client: Generation client; a default one is created when omitted
        registry: Enhancement registry override
        version: Version stamp for the packaged result
        business_id: Only used for log correlation

    Returns:
        GenerationResult. `mock=True` when no credential is configured.
    """
    config = config or EnhancementConfig()
    client = client or GenerationClient()
    start = time.perf_counter()

    try:
        validate_prompt_input(prompt_input)
    except ValidationError as e:
        logger.error(f"❌ Prompt input rejected: {e}")
        return GenerationResult(success=False, error=str(e))

    languages = [Language.ENGLISH]
    if prompt_input.language_settings.spanish_enabled:
        languages.append(Language.SPANISH)

    if client.is_mock:
        logger.warning("⚠️ No generation credential configured, returning mock prompts")
        texts = [generate_mock_prompt(prompt_input, language) for language in languages]
        prompts = _package(prompt_input, texts, version)
        log_generation_event(
            business_id,
            stage="generate",
            duration_ms=(time.perf_counter() - start) * 1000,
            mock=True,
            languages=[str(language) for language in languages],
        )
        return GenerationResult(
            success=True,
            prompts=prompts,
            mock=True,
            enhancements_applied=EnhancementsApplied(),
        )

    meta_prompts = [
        build_meta_prompt(prompt_input, config, language, registry=registry)
        for language in languages
    ]
    log_generation_event(
        business_id,
        stage="compose",
        duration_ms=(time.perf_counter() - start) * 1000,
        industry=prompt_input.business.type,
        chars=[len(text) for text in meta_prompts],
    )

    texts = []
    try:
        for meta_prompt in meta_prompts:
            texts.append(await client.submit(meta_prompt))
    except BackendError as e:
        logger.error(f"❌ Prompt generation failed: {e}")
        return GenerationResult(
            success=False,
            error=str(e),
            enhancements_applied=EnhancementsApplied(),
        )

    prompts = _package(prompt_input, texts, version)
    log_generation_event(
        business_id,
        stage="generate",
        duration_ms=(time.perf_counter() - start) * 1000,
        mock=False,
        version=version,
        tokens=prompts.token_count.model_dump(),
    )
    return GenerationResult(
        success=True,
        prompts=prompts,
        mock=False,
        enhancements_applied=EnhancementsApplied.from_config(config),
    )


def _package(prompt_input: PromptGenerationInput, texts: list[str], version: int):
    english = texts[0]
    spanish = texts[1] if len(texts) > 1 else None
    return package_prompts(english, spanish, prompt_input.language_settings, version=version)
