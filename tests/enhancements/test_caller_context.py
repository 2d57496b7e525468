"""
Tests for caller context rendering and per-call helpers.
"""
import datetime as dt

import pytest

from src.enhancements.caller_context import (
    CallerContextEnhancement,
    build_caller_dynamic_vars,
    get_personalized_greeting,
    get_suggested_follow_up,
    is_vip_caller,
    render_caller_context,
    render_caller_context_handling,
    should_ask_for_name,
    summarize_preferences,
)
from src.enhancements.registry import FragmentRequest
from src.models.business import Language, Personality
from src.models.caller import (
    AppointmentHistory,
    CallerContext,
    CallerPreferences,
    CallerSentiment,
)
from src.models.enhancement import EnhancementConfig

NOW = dt.datetime(2026, 3, 10, 15, 0, tzinfo=dt.UTC)


@pytest.fixture
def repeat_caller() -> CallerContext:
    return CallerContext(
        is_repeat_caller=True,
        known_name="Sarah",
        previous_call_count=3,
        last_call_outcome="booked",
        known_preferences=CallerPreferences(preferred_service="Cleaning", preferred_time="morning"),
        appointment_history=AppointmentHistory(
            count=2,
            last_service_booked="Cleaning",
            last_appointment_date=NOW - dt.timedelta(days=3),
        ),
    )


class TestRenderCallerContext:

    def test_new_caller(self):
        text = render_caller_context(CallerContext.new_caller())
        assert "This is a NEW CALLER" in text

    def test_repeat_caller(self, repeat_caller):
        text = render_caller_context(repeat_caller)

        assert "This is a REPEAT CALLER (3 previous calls)." in text
        assert "- Their name is Sarah" in text
        assert "- Last service booked: Cleaning" in text
        assert "- Usually prefers: morning appointments" in text
        assert "NOTE" not in text

    def test_negative_experience_flagged(self, repeat_caller):
        context = repeat_caller.model_copy(update={
            "sentiment": CallerSentiment(previous_sentiment="angry", had_negative_experience=True),
        })
        assert "negative experience previously" in render_caller_context(context)

    def test_spanish(self, repeat_caller):
        text = render_caller_context(repeat_caller, Language.SPANISH)
        assert "LLAMANTE RECURRENTE (3 llamadas anteriores)" in text
        assert "- Su nombre es Sarah" in text


class TestDynamicVars:

    def test_new_caller_vars(self):
        assert build_caller_dynamic_vars(CallerContext.new_caller()) == {
            "is_repeat_caller": "false",
            "caller_name": "",
            "previous_call_count": "0",
            "caller_preferences": "No known preferences",
            "last_service": "",
            "caller_context_summary": "New caller - first time calling",
        }

    def test_repeat_caller_vars(self, repeat_caller):
        values = build_caller_dynamic_vars(repeat_caller)

        assert values["is_repeat_caller"] == "true"
        assert values["caller_name"] == "Sarah"
        assert values["caller_preferences"] == "prefers Cleaning, at morning"
        assert values["caller_context_summary"] == (
            "Called 3 times before. Name: Sarah. Last booked: Cleaning"
        )
        assert all(isinstance(v, str) for v in values.values())

    def test_summarize_preferences_day(self):
        assert summarize_preferences(CallerPreferences(preferred_day="Friday")) == "on Fridays"


class TestCallerHelpers:

    def test_vip_by_calls_or_appointments(self):
        assert is_vip_caller(CallerContext(is_repeat_caller=True, previous_call_count=5))
        assert is_vip_caller(CallerContext(
            is_repeat_caller=True, appointment_history=AppointmentHistory(count=3)
        ))
        assert not is_vip_caller(CallerContext(is_repeat_caller=True, previous_call_count=4))

    def test_greetings(self, repeat_caller):
        assert get_personalized_greeting(CallerContext.new_caller(), "Acme", "Koya") == (
            "Thank you for calling Acme. This is Koya, how may I help you?"
        )
        assert get_personalized_greeting(repeat_caller, "Acme", "Koya").startswith("Hi Sarah!")
        anonymous = repeat_caller.model_copy(update={"known_name": None})
        assert get_personalized_greeting(anonymous, "Acme", "Koya", Language.SPANISH) == (
            "Gracias por llamar a Acme de nuevo. Soy Koya, en que puedo ayudarle hoy?"
        )

    def test_follow_up_recent_visit(self, repeat_caller):
        assert get_suggested_follow_up(repeat_caller, now=NOW) == (
            "They recently visited. May be calling with follow-up questions."
        )

    def test_follow_up_upcoming_appointment(self, repeat_caller):
        context = repeat_caller.model_copy(update={
            "appointment_history": AppointmentHistory(count=1, last_appointment_date=NOW + dt.timedelta(days=2)),
        })
        assert get_suggested_follow_up(context, now=NOW).startswith("They have an upcoming appointment")

    def test_follow_up_old_visit(self, repeat_caller):
        context = repeat_caller.model_copy(update={
            "appointment_history": AppointmentHistory(count=1, last_appointment_date=NOW - dt.timedelta(days=30)),
        })
        assert get_suggested_follow_up(context, now=NOW) is None

    def test_follow_up_negative_wins(self, repeat_caller):
        context = repeat_caller.model_copy(update={
            "last_call_outcome": "no_availability",
            "sentiment": CallerSentiment(had_negative_experience=True),
        })
        assert get_suggested_follow_up(context, now=NOW).startswith("Previous negative experience")

    def test_follow_up_failed_booking(self, repeat_caller):
        context = repeat_caller.model_copy(update={"last_call_outcome": "no_availability"})
        assert "couldn't book last time" in get_suggested_follow_up(context, now=NOW)

    def test_follow_up_naive_dates_treated_as_utc(self, repeat_caller):
        context = repeat_caller.model_copy(update={
            "appointment_history": AppointmentHistory(
                count=1, last_appointment_date=dt.datetime(2026, 3, 9, 12, 0),
            ),
        })
        assert get_suggested_follow_up(context, now=NOW).startswith("They recently visited")

    def test_no_follow_up_for_new_callers(self):
        assert get_suggested_follow_up(CallerContext.new_caller(), now=NOW) is None

    def test_should_ask_for_name(self, repeat_caller):
        assert not should_ask_for_name(repeat_caller)
        assert should_ask_for_name(repeat_caller.model_copy(update={"known_name": None}))
        assert not should_ask_for_name(CallerContext.new_caller())


class TestCallerContextHandling:

    def test_runtime_markers_survive(self):
        text = render_caller_context_handling()
        assert "{{is_repeat_caller}}" in text
        assert "{{caller_name}}" in text
        assert text.startswith("<caller_context_handling>")

    def test_module_renders_handling_block(self):
        request = FragmentRequest("dental", Personality.CASUAL, Language.SPANISH, EnhancementConfig())
        assert "## Manejo de Contexto del Llamante" in CallerContextEnhancement().render(request)
        assert not CallerContextEnhancement().is_enabled(EnhancementConfig(caller_context_enabled=False))
