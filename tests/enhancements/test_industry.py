"""
Tests for industry profile lookup and rendering.
"""
import pytest

from src.enhancements.industry import (
    FALLBACK_INDUSTRY,
    INDUSTRY_PROFILES,
    IndustryEnhancement,
    contains_urgency_keyword,
    get_industry_options,
    get_industry_profile,
    get_personality_modifier,
    normalize_industry_type,
    render_industry_context,
)
from src.enhancements.registry import FragmentRequest
from src.models.business import Language, Personality
from src.models.enhancement import EnhancementConfig


class TestNormalizeIndustryType:
    """Free-text business types map onto profile keys."""

    @pytest.mark.parametrize("business_type,expected", [
        ("dental", "dental"),
        ("Dental Clinic", "dental"),
        ("  HAIR-SALON ", "salon"),
        ("Real Estate", "real_estate"),
        ("Family Dentistry", "dental"),
        ("Car Repair", "auto"),
        ("pet-care", "pet_care"),
    ])
    def test_known_types(self, business_type, expected):
        assert normalize_industry_type(business_type) == expected

    @pytest.mark.parametrize("business_type", ["bakery", "", "   ", "quantum consulting"])
    def test_unknown_types_fall_back(self, business_type):
        assert normalize_industry_type(business_type) == FALLBACK_INDUSTRY

    def test_never_raises_on_none(self):
        assert normalize_industry_type(None) == FALLBACK_INDUSTRY


class TestIndustryProfiles:

    def test_fourteen_profiles(self):
        assert len(INDUSTRY_PROFILES) == 14
        assert "other" in INDUSTRY_PROFILES

    def test_every_profile_covers_every_personality(self):
        for profile in INDUSTRY_PROFILES.values():
            for personality in Personality:
                assert profile.tone_guidance(personality)

    def test_get_profile_uses_fallback(self):
        assert get_industry_profile("bakery").key == "other"

    def test_personality_modifier(self):
        modifier = get_personality_modifier("dental", Personality.FRIENDLY)
        assert "warm and calming" in modifier

    def test_urgency_keywords(self):
        assert contains_urgency_keyword("My tooth is THROBBING", "dental")
        assert not contains_urgency_keyword("I'd like a cleaning", "dental")

    def test_options_for_pickers(self):
        options = get_industry_options()
        assert {"value": "hvac", "label": "HVAC / Heating & Cooling"} in options
        assert len(options) == len(INDUSTRY_PROFILES)


class TestRenderIndustryContext:

    def test_english_block(self):
        text = render_industry_context("Dental Clinic", Personality.PROFESSIONAL)

        assert text.startswith("## Industry Context: Dental Practice")
        assert "### Key Terminology" in text
        assert "- **pain or emergency**:" in text
        assert "- Never provide medical advice or diagnosis" in text
        assert "Treat calls mentioning these as priority:" in text

    def test_terminology_limited_to_ten_terms(self):
        text = render_industry_context("dental", Personality.PROFESSIONAL)
        line = next(l for l in text.splitlines() if l.startswith("Use these terms naturally:"))
        terms = line.split(": ", 1)[1].split(", ")
        assert len(terms) == 10

    def test_spanish_block_uses_spanish_terms(self):
        text = render_industry_context("dental", Personality.CASUAL, Language.SPANISH)

        assert text.startswith("## Contexto de la Industria: Dental Practice")
        assert "limpieza" in text

    def test_module_disabled_by_config(self):
        module = IndustryEnhancement()
        assert module.is_enabled(EnhancementConfig())
        assert not module.is_enabled(EnhancementConfig(industry_enhancements=False))

    def test_module_renders_request(self):
        request = FragmentRequest("spa", Personality.FRIENDLY, Language.ENGLISH, EnhancementConfig())
        assert "Spa / Wellness Center" in IndustryEnhancement().render(request)
