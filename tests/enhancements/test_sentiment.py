"""
Tests for caller sentiment detection and the sentiment prompt block.
"""
import pytest

from src.enhancements.sentiment import (
    SentimentCategory,
    SentimentEnhancement,
    SentimentLevel,
    detect_sentiment,
    get_acknowledgment,
    get_sentiment_profile,
    get_negative_sentiment_levels,
    render_sentiment_instructions,
    should_consider_escalation,
)
from src.models.business import Language, Personality
from src.models.enhancement import EnhancementConfig, SentimentDetectionLevel


class TestDetectSentiment:

    @pytest.mark.parametrize("text,expected", [
        ("Thank you so much, that works perfectly!", SentimentLevel.PLEASED),
        ("I'm going to sue, I want my money back", SentimentLevel.ANGRY),
        ("Can you explain? I don't follow", SentimentLevel.CONFUSED),
        ("This is unacceptable, I want to file a complaint", SentimentLevel.UPSET),
    ])
    def test_detects_level(self, text, expected):
        assert detect_sentiment(text) == expected

    def test_no_indicators_is_neutral(self):
        assert detect_sentiment("My appointment is on the 4th") == SentimentLevel.NEUTRAL

    def test_case_insensitive(self):
        assert detect_sentiment("I'M GOING TO SUE") == SentimentLevel.ANGRY

    @pytest.mark.parametrize("text,category,escalate", [
        ("this is unacceptable", SentimentCategory.NEGATIVE, True),
        ("thank you so much", SentimentCategory.POSITIVE, False),
    ])
    def test_category_and_escalation(self, text, category, escalate):
        level = detect_sentiment(text)

        assert get_sentiment_profile(level).category == category
        assert should_consider_escalation(level) is escalate


class TestSentimentLookups:

    def test_negative_levels(self):
        assert get_negative_sentiment_levels() == [
            SentimentLevel.IMPATIENT,
            SentimentLevel.FRUSTRATED,
            SentimentLevel.UPSET,
            SentimentLevel.ANGRY,
        ]

    def test_escalation_threshold(self):
        assert should_consider_escalation(SentimentLevel.FRUSTRATED)
        assert should_consider_escalation(SentimentLevel.ANGRY)
        assert not should_consider_escalation(SentimentLevel.IMPATIENT)
        assert not should_consider_escalation(SentimentLevel.PLEASED)

    def test_acknowledgment_varies_by_personality(self):
        casual = get_acknowledgment(SentimentLevel.CONFUSED, Personality.CASUAL)
        professional = get_acknowledgment(SentimentLevel.CONFUSED, Personality.PROFESSIONAL)
        assert casual == "My bad, let me be clearer."
        assert casual != professional


class TestRenderSentimentInstructions:

    def test_none_renders_nothing(self):
        assert render_sentiment_instructions(
            Personality.FRIENDLY, Language.ENGLISH, SentimentDetectionLevel.NONE
        ) == ""

    def test_basic_block(self):
        text = render_sentiment_instructions(Personality.FRIENDLY)

        assert text.startswith("## Caller Sentiment Detection")
        assert "### Frustrated" in text
        assert "### Escalation Triggers" in text
        assert "### De-escalation Tips" in text
        assert "**Vocal cues**" not in text

    def test_advanced_adds_vocal_cues(self):
        text = render_sentiment_instructions(
            Personality.PROFESSIONAL, Language.ENGLISH, SentimentDetectionLevel.ADVANCED
        )
        assert "**Vocal cues**" in text
        assert "**Spanish cues**" not in text

    def test_advanced_spanish_adds_spanish_cues(self):
        text = render_sentiment_instructions(
            Personality.PROFESSIONAL, Language.SPANISH, SentimentDetectionLevel.ADVANCED
        )
        assert text.startswith("## Deteccion de Sentimiento del Llamante")
        assert "### Frustrado" in text
        assert "**Señales en español**" in text

    def test_module_enabled_unless_none(self):
        module = SentimentEnhancement()
        assert module.is_enabled(EnhancementConfig())
        assert not module.is_enabled(
            EnhancementConfig(sentiment_detection_level=SentimentDetectionLevel.NONE)
        )
