import pytest
import datetime as dt
from src.core.context_assembler import build_prompt_input
from src.models.snapshot import BusinessSnapshot


@pytest.fixture
def dental_snapshot() -> BusinessSnapshot:
    """A fully configured dental practice as stored in the businesses collection."""
    return BusinessSnapshot.model_validate({
        "business_id": "665f1c2ab4d3e2a1c0ffee01",
        "name": "Bright Smile Dental",
        "business_type": "Dental Clinic",
        "address": "12 Main St, Austin, TX",
        "website": "https://brightsmile.example",
        "service_area": "Austin metro",
        "differentiator": "Same-day emergency visits",
        "timezone": "America/Chicago",
        "business_hours": [
            {"day_of_week": 0, "is_closed": True},
            {"day_of_week": 1, "open_time": "08:00", "close_time": "17:00"},
            {"day_of_week": 2, "open_time": "08:00", "close_time": "17:00"},
            {"day_of_week": 6, "open_time": "09:00", "close_time": "13:00"},
        ],
        "services": [
            {"name": "Cleaning", "duration_minutes": 60, "price_cents": 12000,
             "description": "Routine hygiene visit"},
            {"name": "Whitening", "duration_minutes": 90, "price_cents": 29999},
        ],
        "faqs": [
            {"question": "Do you take walk-ins?", "answer": "Only for emergencies.", "sort_order": 2},
            {"question": "Is parking free?", "answer": "Yes, behind the building.", "sort_order": 1},
        ],
        "knowledge": {"content": "Dr. Lee speaks Spanish.", "never_say": "Competitor names"},
        "ai_config": {
            "ai_name": "Maya",
            "personality": "friendly",
            "greeting": "Hi, thanks for calling Bright Smile! This is Maya.",
            "spanish_enabled": True,
            "language_mode": "ask",
        },
        "call_settings": {"transfer_number": "+15125550100", "transfer_on_upset": True},
        "upsells": [
            {"source_service_name": "Cleaning", "target_service_name": "Whitening",
             "discount_percent": 10, "trigger_timing": "after_booking"},
        ],
        "memberships": [
            {"name": "Smile Club", "price_cents": 9999, "billing_period": "annual",
             "benefits": "Two cleanings a year"},
        ],
        "usage": {"minutes_included": 200, "minutes_used_this_cycle": 50},
        "created_at": dt.datetime(2026, 1, 5, tzinfo=dt.UTC),
    })


@pytest.fixture
def minimal_snapshot() -> BusinessSnapshot:
    """Only the fields prompt generation cannot do without."""
    return BusinessSnapshot(business_id="biz-min", name="Quick Lube", business_type="auto")


@pytest.fixture
def dental_input(dental_snapshot):
    return build_prompt_input(dental_snapshot)


@pytest.fixture
def minimal_input(minimal_snapshot):
    return build_prompt_input(minimal_snapshot)
