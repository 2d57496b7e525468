"""
Generated prompt models.
GeneratedPrompts is the packaged output of one pipeline run; GeneratedPromptArtifact
is its persisted, versioned and immutable form.
"""
import datetime as dt
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from src.models.base import MongoBaseModel, utc_now
from src.models.enhancement import EnhancementsApplied


class TokenCounts(BaseModel):
    english: int
    spanish: Optional[int] = None


class GeneratedPrompts(BaseModel):
    model_config = ConfigDict(frozen=True)

    english_prompt: str
    spanish_prompt: Optional[str] = None
    version: int = Field(..., ge=1)
    generated_at: dt.datetime = Field(default_factory=utc_now)
    token_count: TokenCounts


class GenerationResult(BaseModel):
    """
    Outcome of a generation run.
    Backend failures are reported here instead of being raised.
    """
    success: bool
    prompts: Optional[GeneratedPrompts] = None
    error: Optional[str] = None
    mock: bool = False
    enhancements_applied: Optional[EnhancementsApplied] = None


class GeneratedPromptArtifact(MongoBaseModel):
    """
    Stored operating script for one business.

    Only the `active` flag ever changes after insert; a newer version
    supersedes this one by flipping it off at the storage layer.
    """
    model_config = ConfigDict(frozen=True)

    business_id: str
    english_text: str
    spanish_text: Optional[str] = None
    version: int = Field(..., ge=1)
    generated_at: dt.datetime = Field(default_factory=utc_now)
    token_counts: TokenCounts
    active: bool = True
    mock: bool = False
    enhancements_applied: EnhancementsApplied = Field(default_factory=EnhancementsApplied)

    @field_serializer("generated_at")
    def serialize_generated_at(self, value: dt.datetime):
        return value.isoformat()

    @classmethod
    def from_prompts(
        cls,
        business_id: str,
        prompts: GeneratedPrompts,
        mock: bool = False,
        enhancements_applied: Optional[EnhancementsApplied] = None,
    ) -> "GeneratedPromptArtifact":
        return cls(
            business_id=business_id,
            english_text=prompts.english_prompt,
            spanish_text=prompts.spanish_prompt,
            version=prompts.version,
            generated_at=prompts.generated_at,
            token_counts=prompts.token_count,
            mock=mock,
            enhancements_applied=enhancements_applied or EnhancementsApplied(),
        )
