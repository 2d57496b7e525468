"""
Tests for InMemoryRegenerationQueue implementation.
"""

import pytest
import asyncio
from datetime import timedelta

from src.message_queue import InMemoryRegenerationQueue
from src.models.base import utc_now
from src.models.regeneration import JobStatus, QueueMetrics, RegenerationTrigger


class TestInMemoryRegenerationQueue:
    """Test suite for InMemoryRegenerationQueue."""

    @pytest.fixture
    async def queue(self):
        """Create a fresh queue for each test."""
        return InMemoryRegenerationQueue()

    @pytest.mark.asyncio
    async def test_enqueue_job(self, queue):
        outcome = await queue.enqueue("biz-1", RegenerationTrigger.FAQS_UPDATE)

        assert outcome.success is True
        assert outcome.job_id
        assert outcome.deduplicated is False

        job = await queue.get_job(outcome.job_id)
        assert job.business_id == "biz-1"
        assert job.triggered_by == RegenerationTrigger.FAQS_UPDATE
        assert job.status == JobStatus.PENDING

    @pytest.mark.asyncio
    async def test_second_enqueue_is_deduplicated(self, queue):
        first = await queue.enqueue("biz-1", RegenerationTrigger.FAQS_UPDATE)
        second = await queue.enqueue("biz-1", RegenerationTrigger.LANGUAGE_UPDATE)

        assert second.success is True
        assert second.deduplicated is True
        assert second.job_id == first.job_id
        assert (await queue.get_metrics()).pending == 1

    @pytest.mark.asyncio
    async def test_concurrent_enqueues_leave_one_pending(self, queue):
        outcomes = await asyncio.gather(*(
            queue.enqueue("biz-1", RegenerationTrigger.SERVICES_UPDATE) for _ in range(10)
        ))

        assert sum(not outcome.deduplicated for outcome in outcomes) == 1
        assert (await queue.get_metrics()).pending == 1

    @pytest.mark.asyncio
    async def test_claimed_business_can_queue_again(self, queue):
        """A job in progress must not swallow edits made while it runs."""
        first = await queue.enqueue("biz-1", RegenerationTrigger.FAQS_UPDATE)
        await queue.claim_pending()

        second = await queue.enqueue("biz-1", RegenerationTrigger.FAQS_UPDATE)

        assert second.deduplicated is False
        assert second.job_id != first.job_id

    @pytest.mark.asyncio
    async def test_claim_oldest_first(self, queue):
        for business_id in ("biz-1", "biz-2", "biz-3"):
            await queue.enqueue(business_id, RegenerationTrigger.SETTINGS_UPDATE)

        jobs = await queue.claim_pending(limit=2)

        assert [job.business_id for job in jobs] == ["biz-1", "biz-2"]
        assert all(job.status == JobStatus.PROCESSING for job in jobs)
        assert await queue.get_metrics() == QueueMetrics(pending=1, processing=2)

    @pytest.mark.asyncio
    async def test_claim_empty_queue(self, queue):
        assert await queue.claim_pending() == []

    @pytest.mark.asyncio
    async def test_jobs_claimed_only_once(self, queue):
        await queue.enqueue("biz-1", RegenerationTrigger.SETTINGS_UPDATE)

        first, second = await asyncio.gather(queue.claim_pending(), queue.claim_pending())

        assert len(first) + len(second) == 1

    @pytest.mark.asyncio
    async def test_complete(self, queue):
        outcome = await queue.enqueue("biz-1", RegenerationTrigger.SETTINGS_UPDATE)
        await queue.claim_pending()

        await queue.complete(outcome.job_id)

        job = await queue.get_job(outcome.job_id)
        assert job.status == JobStatus.COMPLETED
        assert job.processed_at is not None
        assert job.error_message is None

    @pytest.mark.asyncio
    async def test_fail_records_error(self, queue):
        outcome = await queue.enqueue("biz-1", RegenerationTrigger.SETTINGS_UPDATE)
        await queue.claim_pending()

        await queue.fail(outcome.job_id, "Business not found")

        job = await queue.get_job(outcome.job_id)
        assert job.status == JobStatus.FAILED
        assert job.error_message == "Business not found"
        assert (await queue.get_metrics()).failed == 1

    @pytest.mark.asyncio
    async def test_finish_unknown_job_is_noop(self, queue):
        await queue.complete("missing")
        assert await queue.get_metrics() == QueueMetrics()

    @pytest.mark.asyncio
    async def test_cancel_pending(self, queue):
        await queue.enqueue("biz-1", RegenerationTrigger.SETTINGS_UPDATE)

        assert await queue.cancel_pending("biz-1") == 1
        assert await queue.cancel_pending("biz-1") == 0
        assert (await queue.get_metrics()).pending == 0

    @pytest.mark.asyncio
    async def test_cancel_pending_keeps_newer_job(self, queue):
        cutoff = utc_now() - timedelta(seconds=1)
        await queue.enqueue("biz-1", RegenerationTrigger.SETTINGS_UPDATE)

        assert await queue.cancel_pending("biz-1", created_before=cutoff) == 0
        assert (await queue.get_metrics()).pending == 1

    @pytest.mark.asyncio
    async def test_cancel_pending_ignores_processing_job(self, queue):
        await queue.enqueue("biz-1", RegenerationTrigger.SETTINGS_UPDATE)
        await queue.claim_pending()

        assert await queue.cancel_pending("biz-1") == 0
        assert (await queue.get_metrics()).processing == 1
