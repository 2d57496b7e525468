"""
Regeneration Worker

Background loop that drains the regeneration queue in batches.
"""

import asyncio
from typing import Optional, Protocol

from loguru import logger
from pymongo.errors import PyMongoError

from src.config import get_settings
from src.models.regeneration import QueueProcessingResult


class BatchProcessor(Protocol):
    async def process_pending(self, batch_size: int = 10) -> QueueProcessingResult: ...


class RegenerationWorker:
    """
    Periodically calls `process_pending` on the regeneration service.

    A full batch is followed immediately by another poll; an empty or
    partial batch waits `poll_interval` seconds first.

    Attributes:
        processor: Anything exposing `process_pending(batch_size)`
        batch_size: Jobs claimed per poll
        poll_interval: Seconds to wait when the queue is drained
    """

    def __init__(
        self,
        processor: BatchProcessor,
        batch_size: Optional[int] = None,
        poll_interval: Optional[float] = None,
    ):
        settings = get_settings()
        self.processor = processor
        self.batch_size = batch_size or settings.regeneration_batch_size
        self.poll_interval = (
            poll_interval if poll_interval is not None
            else settings.regeneration_poll_interval_seconds
        )
        self._running = False
        self._stopped = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self._running

    async def run_once(self) -> QueueProcessingResult:
        result = await self.processor.process_pending(self.batch_size)
        if result.processed or result.failed:
            logger.info(
                f"🔁 Regeneration batch done: processed={result.processed}, failed={result.failed}"
            )
        return result

    async def start(self) -> None:
        """
        Start the worker.
        Runs until stop() is called.
        """
        if self._running:
            logger.warning("Worker already running")
            return

        self._running = True
        self._stopped.clear()
        logger.info(
            f"🚀 Regeneration worker started (batch_size={self.batch_size}, "
            f"poll_interval={self.poll_interval}s)"
        )

        try:
            while self._running:
                try:
                    result = await self.run_once()
                    drained = result.processed + result.failed < self.batch_size
                except PyMongoError as e:
                    logger.error(f"Queue storage unavailable: {e}")
                    drained = True

                if drained and self._running:
                    await self._sleep()

        finally:
            self._running = False
            logger.info("🛑 Regeneration worker stopped")

    async def _sleep(self) -> None:
        # Wakes early when stop() is called
        try:
            await asyncio.wait_for(self._stopped.wait(), timeout=self.poll_interval)
        except asyncio.TimeoutError:
            pass

    async def stop(self) -> None:
        """Stop after the batch in flight, if any, finishes."""
        if not self._running:
            return

        logger.info("Stopping regeneration worker...")
        self._running = False
        self._stopped.set()
