"""
Tests for few-shot example selection and formatting.
"""
from src.enhancements.few_shot import (
    FewShotEnhancement,
    ScenarioCategory,
    format_examples,
    get_essential_examples,
    get_examples_by_category,
    get_relevant_examples,
    get_scenario_categories,
)
from src.enhancements.registry import FragmentRequest
from src.models.business import Language, Personality
from src.models.enhancement import EnhancementConfig


class TestExampleSelection:

    def test_industry_examples_come_first(self):
        examples = get_relevant_examples(Personality.PROFESSIONAL, "Dental Clinic")

        assert examples[0].industry == "dental"
        assert examples[0].category == ScenarioCategory.SPECIAL_URGENT
        assert all(ex.industry in (None, "dental") for ex in examples)

    def test_other_industries_excluded(self):
        examples = get_relevant_examples(Personality.PROFESSIONAL, "auto", limit=50)

        assert examples
        assert all(ex.industry is None for ex in examples)
        assert all(ex.personality == Personality.PROFESSIONAL for ex in examples)

    def test_limit_respected(self):
        assert len(get_relevant_examples(Personality.PROFESSIONAL, limit=2)) == 2
        assert get_relevant_examples(Personality.PROFESSIONAL, limit=0) == []

    def test_selection_is_deterministic(self):
        first = get_relevant_examples(Personality.FRIENDLY, "salon")
        second = get_relevant_examples(Personality.FRIENDLY, "salon")
        assert first == second

    def test_spanish_library(self):
        examples = get_relevant_examples(Personality.PROFESSIONAL, language=Language.SPANISH)
        assert examples
        assert all(ex.personality == Personality.PROFESSIONAL for ex in examples)

    def test_essential_examples(self):
        essentials = get_essential_examples(Personality.PROFESSIONAL)
        assert [ex.category for ex in essentials] == [
            ScenarioCategory.BOOKING_SUCCESS,
            ScenarioCategory.ERROR_FRUSTRATED_CALLER,
            ScenarioCategory.SPECIAL_URGENT,
        ]

    def test_examples_by_category(self):
        examples = get_examples_by_category(ScenarioCategory.BOOKING_SUCCESS)
        assert {ex.personality for ex in examples} == set(Personality)

    def test_thirteen_categories(self):
        assert len(get_scenario_categories()) == 13


class TestFormatExamples:

    def test_empty_renders_nothing(self):
        assert format_examples([]) == ""

    def test_english_format(self):
        examples = get_examples_by_category(ScenarioCategory.BOOKING_SUCCESS)[:1]
        text = format_examples(examples)

        assert text.startswith("## Conversation Examples")
        assert "### Successful Booking" in text
        assert "```\nAI: " in text
        assert "Caller: " in text

    def test_spanish_format(self):
        examples = get_examples_by_category(ScenarioCategory.BOOKING_SUCCESS, Language.SPANISH)[:1]
        text = format_examples(examples, Language.SPANISH)

        assert text.startswith("## Ejemplos de Conversacion")
        assert "### Reserva Exitosa" in text
        assert "Llamante: " in text

    def test_module_disabled_with_zero_examples(self):
        module = FewShotEnhancement()
        assert module.is_enabled(EnhancementConfig())
        assert not module.is_enabled(EnhancementConfig(max_few_shot_examples=0))
        assert not module.is_enabled(EnhancementConfig(few_shot_examples_enabled=False))

    def test_module_renders_configured_count(self):
        request = FragmentRequest(
            "dental", Personality.PROFESSIONAL, Language.ENGLISH,
            EnhancementConfig(max_few_shot_examples=1),
        )
        text = FewShotEnhancement().render(request)
        assert text.count("```") == 2
