"""
Regeneration Queue Repository Tests
Dedup, claiming and cancellation against a stand-in Motor collection.
"""
import datetime as dt
import pytest
from unittest.mock import Mock
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, NetworkTimeout

from src.models.regeneration import JobStatus, QueueMetrics, RegenerationTrigger
from src.repositories.regeneration_queue import RegenerationQueueRepository


pytestmark = pytest.mark.asyncio


@pytest.fixture
def repository(fake_db):
    return RegenerationQueueRepository(fake_db)


@pytest.fixture
def collection(repository):
    return repository.collection


def job_doc(business_id, status="pending"):
    return {
        "_id": ObjectId(),
        "business_id": business_id,
        "triggered_by": "faqs_update",
        "status": status,
        "created_at": "2026-10-01T12:00:00+00:00",
        "updated_at": "2026-10-01T12:00:00+00:00",
    }


class TestEnqueue:

    async def test_new_job(self, repository, collection):
        inserted_id = ObjectId()
        collection.insert_one.return_value = Mock(inserted_id=inserted_id)

        outcome = await repository.enqueue("biz-1", RegenerationTrigger.FAQS_UPDATE)

        assert outcome.success is True
        assert outcome.deduplicated is False
        assert outcome.job_id == str(inserted_id)

        doc = collection.insert_one.await_args.args[0]
        assert doc["business_id"] == "biz-1"
        assert doc["status"] == "pending"
        assert doc["triggered_by"] == "faqs_update"

    async def test_pending_job_exists(self, repository, collection):
        existing = job_doc("biz-1")
        collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")
        collection.find_one.return_value = existing

        outcome = await repository.enqueue("biz-1", RegenerationTrigger.SERVICES_UPDATE)

        assert outcome.success is True
        assert outcome.deduplicated is True
        assert outcome.job_id == str(existing["_id"])
        collection.find_one.assert_awaited_once_with({"business_id": "biz-1", "status": "pending"})

    async def test_storage_failure(self, repository, collection):
        collection.insert_one.side_effect = NetworkTimeout("timed out")

        outcome = await repository.enqueue("biz-1", RegenerationTrigger.FAQS_UPDATE)

        assert outcome.success is False
        assert "timed out" in outcome.error


class TestClaim:

    async def test_claims_until_empty(self, repository, collection):
        collection.find_one_and_update.side_effect = [
            job_doc("biz-1", "processing"),
            job_doc("biz-2", "processing"),
            None,
        ]

        jobs = await repository.claim_pending(limit=5)

        assert [job.business_id for job in jobs] == ["biz-1", "biz-2"]
        assert all(job.status == JobStatus.PROCESSING for job in jobs)

        call = collection.find_one_and_update.await_args_list[0]
        assert call.args[0] == {"status": "pending"}
        assert call.args[1]["$set"]["status"] == "processing"
        assert call.kwargs["sort"] == [("created_at", 1)]
        assert call.kwargs["return_document"] == ReturnDocument.AFTER

    async def test_respects_limit(self, repository, collection):
        collection.find_one_and_update.return_value = job_doc("biz-1", "processing")

        jobs = await repository.claim_pending(limit=2)

        assert len(jobs) == 2
        assert collection.find_one_and_update.await_count == 2


class TestFinish:

    async def test_complete(self, repository, collection):
        job_id = str(ObjectId())
        collection.update_one.return_value = Mock(matched_count=1)

        await repository.complete(job_id)

        query, update = collection.update_one.await_args.args
        assert query == {"_id": ObjectId(job_id)}
        assert update["$set"]["status"] == "completed"
        assert update["$set"]["error_message"] is None
        assert isinstance(update["$set"]["processed_at"], dt.datetime)

    async def test_fail(self, repository, collection):
        job_id = str(ObjectId())
        collection.update_one.return_value = Mock(matched_count=1)

        await repository.fail(job_id, "Business not found")

        update = collection.update_one.await_args.args[1]
        assert update["$set"]["status"] == "failed"
        assert update["$set"]["error_message"] == "Business not found"


class TestCancelAndMetrics:

    async def test_cancel_pending(self, repository, collection):
        collection.delete_many.return_value = Mock(deleted_count=1)

        assert await repository.cancel_pending("biz-1") == 1
        collection.delete_many.assert_awaited_once_with({"business_id": "biz-1", "status": "pending"})

    async def test_cancel_pending_created_before(self, repository, collection):
        collection.delete_many.return_value = Mock(deleted_count=0)
        cutoff = dt.datetime(2026, 10, 1, 12, 30, tzinfo=dt.UTC)

        assert await repository.cancel_pending("biz-1", created_before=cutoff) == 0

        query = collection.delete_many.await_args.args[0]
        assert query["created_at"] == {"$lt": "2026-10-01T12:30:00+00:00"}

    async def test_metrics(self, repository, collection, cursor):
        collection.aggregate.return_value = cursor([
            {"_id": "pending", "count": 3},
            {"_id": "failed", "count": 1},
        ])

        assert await repository.get_metrics() == QueueMetrics(pending=3, failed=1)
