"""
Base Queue Interface

Abstract interface for the prompt regeneration queue.
"""

import datetime as dt
from abc import ABC, abstractmethod
from typing import Optional

from src.models.regeneration import (
    EnqueueOutcome,
    JobStatus,
    QueueMetrics,
    RegenerationJob,
    RegenerationTrigger,
)


class RegenerationQueue(ABC):
    """
    Abstract regeneration queue.

    Implementations must guarantee that at most one job per business is
    PENDING at any time. A second enqueue for a business that already has
    a pending job is a successful no-op (reported as deduplicated).

    Lifecycle: pending -> processing -> completed | failed.
    """

    @abstractmethod
    async def enqueue(self, business_id: str, trigger: RegenerationTrigger) -> EnqueueOutcome:
        """
        Request a regeneration for a business.

        Returns:
            EnqueueOutcome with the new job id, or deduplicated=True when a
            pending job already existed
        """
        pass

    @abstractmethod
    async def claim_pending(self, limit: int = 10) -> list[RegenerationJob]:
        """
        Move up to `limit` of the oldest pending jobs to PROCESSING.

        Each job is claimed atomically, so two concurrent callers never
        receive the same job.
        """
        pass

    @abstractmethod
    async def complete(self, job_id: str) -> None:
        pass

    @abstractmethod
    async def fail(self, job_id: str, error: str) -> None:
        pass

    @abstractmethod
    async def cancel_pending(
        self,
        business_id: str,
        created_before: Optional[dt.datetime] = None,
    ) -> int:
        """
        Drop the pending job for a business, if any.

        Used after an immediate regeneration has already produced fresh
        prompts. With `created_before`, a job queued after that instant is
        kept, since the immediate run may not have seen its change.
        Returns the number of jobs removed.
        """
        pass

    @abstractmethod
    async def get_metrics(self) -> QueueMetrics:
        """Job counts by status."""
        pass


__all__ = [
    "RegenerationQueue",
    "RegenerationJob",
    "RegenerationTrigger",
    "JobStatus",
    "EnqueueOutcome",
    "QueueMetrics",
]
