"""
Result Packager
Bundles generated texts into a versioned GeneratedPrompts record.
"""
import datetime as dt
import math
from typing import Optional

from src.core.composer import build_language_switching_instructions
from src.models.artifact import GeneratedPrompts, TokenCounts
from src.models.base import utc_now
from src.models.business import LanguageSettings


def estimate_token_count(text: str) -> int:
    """Rough size estimate at four characters per token. Not a tokenizer."""
    return math.ceil(len(text) / 4)


def package_prompts(
    english: str,
    spanish: Optional[str],
    language: LanguageSettings,
    version: int = 1,
    generated_at: Optional[dt.datetime] = None,
) -> GeneratedPrompts:
    """
    Package one run's output.

    When Spanish is enabled and a Spanish text exists, the English script
    gets the language-switching fragment appended. Spanish text is stored
    as generated.
    """
    if language.spanish_enabled and spanish is not None:
        english = english + "\n" + build_language_switching_instructions(language.language_mode)
    else:
        spanish = None

    return GeneratedPrompts(
        english_prompt=english,
        spanish_prompt=spanish,
        version=version,
        generated_at=generated_at or utc_now(),
        token_count=TokenCounts(
            english=estimate_token_count(english),
            spanish=estimate_token_count(spanish) if spanish is not None else None,
        ),
    )
