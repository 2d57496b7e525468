"""
In-Memory Regeneration Queue

Queue implementation for tests and single-process deployments.
Uses an asyncio.Lock so the check-then-insert dedup is atomic within
one event loop. Data is lost on restart.
"""

import asyncio
import datetime as dt
import uuid
from typing import Optional

from src.message_queue.base import RegenerationQueue
from src.models.base import utc_now
from src.models.regeneration import (
    EnqueueOutcome,
    JobStatus,
    QueueMetrics,
    RegenerationJob,
    RegenerationTrigger,
)


class InMemoryRegenerationQueue(RegenerationQueue):
    """
    In-memory regeneration queue.

    Jobs are kept in insertion order, which is also claim order.

    Not suitable for:
    - Multi-instance deployments
    - Long-term job history
    """

    def __init__(self):
        self._jobs: dict[str, RegenerationJob] = {}
        self._pending_by_business: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def enqueue(self, business_id: str, trigger: RegenerationTrigger) -> EnqueueOutcome:
        async with self._lock:
            existing = self._pending_by_business.get(business_id)
            if existing:
                return EnqueueOutcome(success=True, job_id=existing, deduplicated=True)

            job = RegenerationJob(
                id=str(uuid.uuid4()),
                business_id=business_id,
                triggered_by=trigger,
            )
            self._jobs[job.id] = job
            self._pending_by_business[business_id] = job.id

            return EnqueueOutcome(success=True, job_id=job.id)

    async def claim_pending(self, limit: int = 10) -> list[RegenerationJob]:
        async with self._lock:
            claimed = []
            for job in self._jobs.values():
                if len(claimed) >= limit:
                    break
                if job.status != JobStatus.PENDING:
                    continue

                job.status = JobStatus.PROCESSING
                job.updated_at = utc_now()
                self._pending_by_business.pop(job.business_id, None)
                claimed.append(job.model_copy())

            return claimed

    async def complete(self, job_id: str) -> None:
        await self._finish(job_id, JobStatus.COMPLETED)

    async def fail(self, job_id: str, error: str) -> None:
        await self._finish(job_id, JobStatus.FAILED, error)

    async def _finish(self, job_id: str, status: JobStatus, error: Optional[str] = None) -> None:
        async with self._lock:
            job = self._jobs.get(job_id)
            if not job:
                return

            job.status = status
            job.error_message = error
            job.processed_at = utc_now()
            job.updated_at = job.processed_at

    async def cancel_pending(
        self,
        business_id: str,
        created_before: Optional[dt.datetime] = None,
    ) -> int:
        async with self._lock:
            job_id = self._pending_by_business.get(business_id)
            if job_id is None:
                return 0
            if created_before is not None and self._jobs[job_id].created_at >= created_before:
                return 0

            del self._pending_by_business[business_id]
            del self._jobs[job_id]
            return 1

    async def get_metrics(self) -> QueueMetrics:
        async with self._lock:
            counts = {status: 0 for status in JobStatus}
            for job in self._jobs.values():
                counts[job.status] += 1

            return QueueMetrics(
                pending=counts[JobStatus.PENDING],
                processing=counts[JobStatus.PROCESSING],
                completed=counts[JobStatus.COMPLETED],
                failed=counts[JobStatus.FAILED],
            )

    async def get_job(self, job_id: str) -> Optional[RegenerationJob]:
        async with self._lock:
            job = self._jobs.get(job_id)
            return job.model_copy() if job else None
