"""
Repositories Layer
Data persistence and query operations for the prompt pipeline.
"""
from .connection import db_manager, get_database, create_indexes, DatabaseManager
from .artifacts import ArtifactRepository, VersionConflictError
from .base import BaseRepository
from .businesses import BusinessRepository
from .caller_profiles import CallerProfileRepository
from .regeneration_queue import RegenerationQueueRepository

__all__ = [
    "db_manager",
    "get_database",
    "create_indexes",
    "DatabaseManager",
    "ArtifactRepository",
    "VersionConflictError",
    "BaseRepository",
    "BusinessRepository",
    "CallerProfileRepository",
    "RegenerationQueueRepository",
]
