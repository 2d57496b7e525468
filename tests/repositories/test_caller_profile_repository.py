"""
Caller Profile Repository Tests
"""
import datetime as dt
import pytest
from bson import ObjectId
from pymongo import ReturnDocument

from src.models.caller import CallerPreferences
from src.repositories.caller_profiles import CallerProfileRepository, RECENT_CALLS_LIMIT


pytestmark = pytest.mark.asyncio

BUSINESS_ID = "665f1c2ab4d3e2a1c0ffee01"
PHONE = "+15125550123"


@pytest.fixture
def repository(fake_db):
    return CallerProfileRepository(fake_db)


class TestRecordCall:

    async def test_upserts_and_counts(self, repository):
        repository.collection.find_one_and_update.return_value = {
            "_id": ObjectId(),
            "business_id": BUSINESS_ID,
            "phone_number": PHONE,
            "name": "Dana",
            "call_count": 1,
            "last_outcome": "booked",
            "created_at": "2026-10-01T12:00:00+00:00",
            "updated_at": "2026-10-01T12:00:00+00:00",
        }

        profile = await repository.record_call(
            BUSINESS_ID,
            PHONE,
            name="Dana",
            outcome="booked",
            preferences=CallerPreferences(preferred_day="Friday"),
        )

        assert profile.call_count == 1
        assert profile.name == "Dana"

        call = repository.collection.find_one_and_update.await_args
        query, update = call.args
        assert query == {"business_id": BUSINESS_ID, "phone_number": PHONE}
        assert update["$inc"] == {"call_count": 1}
        assert update["$set"]["name"] == "Dana"
        assert update["$set"]["preferences.preferred_day"] == "Friday"
        assert "email" not in update["$set"]
        assert isinstance(update["$set"]["last_call_at"], dt.datetime)
        assert call.kwargs["upsert"] is True
        assert call.kwargs["return_document"] == ReturnDocument.AFTER


class TestHistory:

    async def test_get_by_phone(self, repository):
        repository.collection.find_one.return_value = None

        assert await repository.get_by_phone(BUSINESS_ID, PHONE) is None
        repository.collection.find_one.assert_awaited_once_with(
            {"business_id": BUSINESS_ID, "phone_number": PHONE}
        )

    async def test_recent_calls_newest_first(self, repository, cursor):
        rows = [{"outcome": "booked", "created_at": dt.datetime(2026, 9, 1, tzinfo=dt.UTC)}]
        repository.calls.find.return_value = cursor(rows)

        assert await repository.recent_calls(BUSINESS_ID, PHONE) == rows

        query = repository.calls.find.call_args.args[0]
        assert query == {"business_id": BUSINESS_ID, "caller_number": PHONE}
        repository.calls.find.return_value.sort.assert_called_once_with("created_at", -1)
        repository.calls.find.return_value.limit.assert_called_once_with(RECENT_CALLS_LIMIT)

    async def test_recent_appointments(self, repository, cursor):
        repository.appointments.find.return_value = cursor([])

        assert await repository.recent_appointments(BUSINESS_ID, PHONE, limit=2) == []

        query = repository.appointments.find.call_args.args[0]
        assert query == {"business_id": BUSINESS_ID, "customer_phone": PHONE}
