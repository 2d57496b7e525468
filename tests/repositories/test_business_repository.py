"""
Business Repository Tests
"""
import pytest
from bson import ObjectId

from src.core.exceptions import ValidationError
from src.repositories.businesses import BusinessRepository


pytestmark = pytest.mark.asyncio


@pytest.fixture
def repository(fake_db):
    return BusinessRepository(fake_db)


async def test_get_snapshot(repository):
    object_id = ObjectId()
    repository.collection.find_one.return_value = {
        "_id": object_id,
        "name": "Bright Smile Dental",
        "business_type": "dental",
        "services": [{"name": "Cleaning", "duration_minutes": 60, "price_cents": 12000}],
        "owner_user_id": "u-1",  # dashboard bookkeeping, ignored
    }

    snapshot = await repository.get_snapshot(str(object_id))

    assert snapshot.business_id == str(object_id)
    assert snapshot.name == "Bright Smile Dental"
    assert snapshot.services[0].price_cents == 12000
    repository.collection.find_one.assert_awaited_once_with({"_id": object_id})


async def test_plain_string_id(repository):
    repository.collection.find_one.return_value = None

    assert await repository.get_snapshot("biz-min") is None
    repository.collection.find_one.assert_awaited_once_with({"_id": "biz-min"})


async def test_malformed_document_raises_pipeline_validation_error(repository):
    repository.collection.find_one.return_value = {
        "_id": ObjectId(),
        "name": "Bright Smile Dental",
        "business_hours": [{"day_of_week": 7, "open_time": "09:00", "close_time": "17:00"}],
    }

    with pytest.raises(ValidationError) as exc_info:
        await repository.get_snapshot("665f1c2ab4d3e2a1c0ffee01")

    assert len(exc_info.value.problems) == 1
    assert "business_hours.0.day_of_week" in exc_info.value.problems[0]
