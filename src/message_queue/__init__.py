"""
Regeneration Queue System

Provides deduplicated prompt regeneration jobs with:
- Abstract queue interface supporting multiple backends
- In-memory queue for tests and single-process runs
- MongoDB queue (src/repositories/regeneration_queue.py) for production
- Background worker draining the queue in batches
"""

from src.message_queue.base import RegenerationQueue
from src.message_queue.memory import InMemoryRegenerationQueue
from src.message_queue.worker import RegenerationWorker

__all__ = [
    "RegenerationQueue",
    "InMemoryRegenerationQueue",
    "RegenerationWorker",
]
