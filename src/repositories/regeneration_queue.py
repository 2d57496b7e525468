"""
Regeneration Queue Repository
MongoDB-backed RegenerationQueue.

Dedup relies on the partial unique index created in connection.py
(`business_id` unique where `status == "pending"`), so concurrent
enqueues from separate processes still leave exactly one pending job.
"""
import datetime as dt
from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from .base import BaseRepository
from ..message_queue.base import RegenerationQueue
from ..models.base import utc_now
from ..models.regeneration import (
    EnqueueOutcome,
    JobStatus,
    QueueMetrics,
    RegenerationJob,
    RegenerationTrigger,
)
from ..utils.observability import logger


class RegenerationQueueRepository(BaseRepository[RegenerationJob], RegenerationQueue):
    """Repository for prompt regeneration jobs."""

    def __init__(self, database: AsyncIOMotorDatabase):
        super().__init__(database, "prompt_regeneration_queue", RegenerationJob)

    async def enqueue(self, business_id: str, trigger: RegenerationTrigger) -> EnqueueOutcome:
        try:
            job = await self.create(RegenerationJob(business_id=business_id, triggered_by=trigger))
            logger.info(f"📥 Regeneration queued for {business_id} ({trigger})")
            return EnqueueOutcome(success=True, job_id=job.id)

        except DuplicateKeyError:
            # Already queued; the pending job will pick up this change too
            existing = await self.find_one({"business_id": business_id, "status": JobStatus.PENDING.value})
            logger.debug(f"Regeneration already pending for {business_id}")
            return EnqueueOutcome(
                success=True,
                job_id=existing.id if existing else None,
                deduplicated=True,
            )

        except PyMongoError as e:
            logger.error(f"Failed to queue regeneration for {business_id}: {e}")
            return EnqueueOutcome(success=False, error=str(e))

    async def claim_pending(self, limit: int = 10) -> List[RegenerationJob]:
        claimed = []
        for _ in range(limit):
            doc = await self.collection.find_one_and_update(
                {"status": JobStatus.PENDING.value},
                {"$set": {
                    "status": JobStatus.PROCESSING.value,
                    "updated_at": utc_now().isoformat(),
                }},
                sort=[("created_at", 1)],
                return_document=ReturnDocument.AFTER,
            )
            if doc is None:
                break
            claimed.append(self._to_model(doc))

        if claimed:
            logger.debug(f"Claimed {len(claimed)} regeneration jobs")
        return claimed

    async def complete(self, job_id: str) -> None:
        await self.update_fields(job_id, {
            "status": JobStatus.COMPLETED.value,
            "error_message": None,
            "processed_at": utc_now(),
        })

    async def fail(self, job_id: str, error: str) -> None:
        await self.update_fields(job_id, {
            "status": JobStatus.FAILED.value,
            "error_message": error,
            "processed_at": utc_now(),
        })

    async def cancel_pending(
        self,
        business_id: str,
        created_before: Optional[dt.datetime] = None,
    ) -> int:
        query = {"business_id": business_id, "status": JobStatus.PENDING.value}
        if created_before is not None:
            # created_at is stored as an ISO-8601 UTC string
            query["created_at"] = {"$lt": created_before.isoformat()}

        result = await self.collection.delete_many(query)
        if result.deleted_count:
            logger.debug(f"Cancelled pending regeneration for {business_id}")
        return result.deleted_count

    async def get_metrics(self) -> QueueMetrics:
        counts = {}
        async for row in self.collection.aggregate([
            {"$group": {"_id": "$status", "count": {"$sum": 1}}}
        ]):
            counts[row["_id"]] = row["count"]

        return QueueMetrics(
            pending=counts.get(JobStatus.PENDING.value, 0),
            processing=counts.get(JobStatus.PROCESSING.value, 0),
            completed=counts.get(JobStatus.COMPLETED.value, 0),
            failed=counts.get(JobStatus.FAILED.value, 0),
        )

    async def get_job(self, job_id: str):
        return await self.find_by_id(job_id)
