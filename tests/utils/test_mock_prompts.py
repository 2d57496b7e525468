"""
Tests for the deterministic prompts used without a generation credential.
"""
import re

from src.models.business import Language
from src.utils.mock_prompts import SECTION_HEADINGS, generate_mock_prompt


class TestMockPrompts:

    def test_english_sections_in_order(self, dental_input):
        text = generate_mock_prompt(dental_input, Language.ENGLISH)

        positions = [text.index(heading + "\n") for heading in SECTION_HEADINGS[Language.ENGLISH]]
        assert positions == sorted(positions)

    def test_spanish_sections_in_order(self, dental_input):
        text = generate_mock_prompt(dental_input, Language.SPANISH)

        positions = [text.index(heading + "\n") for heading in SECTION_HEADINGS[Language.SPANISH]]
        assert positions == sorted(positions)

    def test_business_details_filled_in(self, dental_input):
        text = generate_mock_prompt(dental_input, Language.ENGLISH)

        assert "You are Maya, the AI receptionist for Bright Smile Dental." in text
        assert "a Dental Clinic business serving Austin metro" in text
        assert "- Never mention: Competitor names" in text

    def test_runtime_markers_use_double_braces(self, dental_input):
        text = generate_mock_prompt(dental_input, Language.ENGLISH)

        assert "{{business_name}}" in text
        assert "{{services_list}}" in text
        assert re.search(r"(?<!\{)\{[a-z_]+\}(?!\})", text) is None

    def test_deterministic(self, dental_input):
        assert generate_mock_prompt(dental_input, Language.SPANISH) == (
            generate_mock_prompt(dental_input, Language.SPANISH)
        )

    def test_personality_changes_tone(self, dental_input, minimal_input):
        friendly = generate_mock_prompt(dental_input, Language.ENGLISH)
        professional = generate_mock_prompt(minimal_input, Language.ENGLISH)

        assert "warm, approachable, and conversational" in friendly
        assert "formal, courteous, and business-appropriate" in professional
