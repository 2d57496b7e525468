"""
Tests for the enhancement fragment registry.
"""
import pytest

from src.enhancements import FragmentRegistry, FragmentRequest, default_registry
from src.enhancements.industry import IndustryEnhancement
from src.models.business import Language, Personality
from src.models.enhancement import EnhancementConfig, SentimentDetectionLevel


@pytest.fixture
def request_all_enabled() -> FragmentRequest:
    return FragmentRequest("dental", Personality.PROFESSIONAL, Language.ENGLISH, EnhancementConfig())


class TestFragmentRegistry:

    def test_default_registry_order(self):
        assert default_registry().keys == (
            "INDUSTRY_CONTEXT",
            "SENTIMENT_INSTRUCTIONS",
            "FEW_SHOT_EXAMPLES",
            "ERROR_HANDLING",
            "CALLER_CONTEXT",
        )

    def test_duplicate_registration_rejected(self):
        registry = FragmentRegistry([IndustryEnhancement()])
        with pytest.raises(ValueError, match="already registered"):
            registry.register(IndustryEnhancement())

    def test_render_all_enabled(self, request_all_enabled):
        fragments = default_registry().render_all(request_all_enabled)
        assert set(fragments) == set(default_registry().keys)
        assert all(fragments.values())

    def test_disabled_modules_render_empty(self):
        config = EnhancementConfig(
            industry_enhancements=False,
            few_shot_examples_enabled=False,
            sentiment_detection_level=SentimentDetectionLevel.NONE,
            caller_context_enabled=False,
            personality_aware_errors=False,
        )
        request = FragmentRequest("dental", Personality.PROFESSIONAL, Language.ENGLISH, config)

        fragments = default_registry().render_all(request)

        assert set(fragments) == set(default_registry().keys)
        assert all(value == "" for value in fragments.values())

    def test_rendering_is_pure(self, request_all_enabled):
        registry = default_registry()
        assert registry.render_all(request_all_enabled) == registry.render_all(request_all_enabled)
