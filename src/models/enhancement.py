from enum import StrEnum
from pydantic import BaseModel, Field


class SentimentDetectionLevel(StrEnum):
    NONE = "none"
    BASIC = "basic"
    ADVANCED = "advanced"


class EnhancementConfig(BaseModel):
    """Switches for the optional knowledge modules merged into the meta-prompt."""
    industry_enhancements: bool = True
    few_shot_examples_enabled: bool = True
    sentiment_detection_level: SentimentDetectionLevel = SentimentDetectionLevel.BASIC
    caller_context_enabled: bool = True
    tone_intensity: int = Field(3, ge=1, le=5)
    personality_aware_errors: bool = True
    max_few_shot_examples: int = Field(3, ge=0)


class EnhancementsApplied(BaseModel):
    industry: bool = False
    few_shot: bool = False
    sentiment: bool = False
    caller_context: bool = False
    error_templates: bool = False

    @classmethod
    def from_config(cls, config: EnhancementConfig) -> "EnhancementsApplied":
        return cls(
            industry=config.industry_enhancements,
            few_shot=config.few_shot_examples_enabled,
            sentiment=config.sentiment_detection_level != SentimentDetectionLevel.NONE,
            caller_context=config.caller_context_enabled,
            error_templates=config.personality_aware_errors,
        )
