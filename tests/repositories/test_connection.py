"""
Database Connection Tests
Tests for MongoDB client lifecycle and index setup.
Motor connects lazily, so none of these need a running server.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from motor.motor_asyncio import AsyncIOMotorDatabase, AsyncIOMotorClient
from pymongo.errors import ServerSelectionTimeoutError

from src.repositories.connection import DatabaseManager, create_indexes, db_manager, get_database
from src.config import settings


pytestmark = pytest.mark.asyncio


class TestDatabaseManager:
    """Test suite for DatabaseManager singleton."""

    async def test_singleton_pattern(self):
        """DatabaseManager should return same instance."""
        manager1 = DatabaseManager()
        manager2 = DatabaseManager()

        assert manager1 is manager2
        assert manager1 is db_manager

    async def test_connect_initializes_client(self):
        """Connect should initialize Motor client and database."""
        manager = DatabaseManager()

        await manager.connect()

        assert isinstance(manager.client, AsyncIOMotorClient)
        assert isinstance(manager.database, AsyncIOMotorDatabase)
        assert manager.database.name == settings.mongodb_database

    async def test_connect_reuses_healthy_client(self):
        manager = DatabaseManager()
        healthy = MagicMock()
        healthy.admin.command = AsyncMock(return_value={"ok": 1.0})
        manager._client = healthy

        await manager.connect()

        assert manager._client is healthy
        healthy.admin.command.assert_awaited_once_with("ping")

    async def test_connect_rebuilds_dead_client(self):
        manager = DatabaseManager()
        dead = MagicMock()
        dead.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        manager._client = dead

        await manager.connect()

        assert manager._client is not dead
        assert isinstance(manager.client, AsyncIOMotorClient)

    async def test_disconnect_cleans_up(self):
        """Disconnect should close client and clear references."""
        manager = DatabaseManager()

        await manager.connect()
        await manager.disconnect()

        assert manager._client is None
        assert manager._database is None

    async def test_disconnect_is_idempotent(self):
        """Multiple disconnect calls should not raise errors."""
        manager = DatabaseManager()

        await manager.connect()
        await manager.disconnect()
        await manager.disconnect()  # Should not raise

        assert manager._client is None

    async def test_database_property_raises_when_not_connected(self):
        """Accessing database before connect should raise RuntimeError."""
        manager = DatabaseManager()
        await manager.disconnect()  # Ensure disconnected

        with pytest.raises(RuntimeError, match="Database not connected"):
            _ = manager.database

    async def test_client_property_raises_when_not_connected(self):
        """Accessing client before connect should raise RuntimeError."""
        manager = DatabaseManager()
        await manager.disconnect()  # Ensure disconnected

        with pytest.raises(RuntimeError, match="Database client not connected"):
            _ = manager.client

    async def test_get_database_helper(self):
        """get_database helper should return connected database."""
        await db_manager.connect()

        db = await get_database()

        assert isinstance(db, AsyncIOMotorDatabase)
        assert db.name == settings.mongodb_database


class TestCreateIndexes:

    async def test_creates_uniqueness_constraints(self):
        db = MagicMock()
        for name in ("prompt_regeneration_queue", "prompt_artifacts", "caller_profiles", "calls", "appointments"):
            getattr(db, name).create_index = AsyncMock()

        await create_indexes(db)

        queue_calls = db.prompt_regeneration_queue.create_index.await_args_list
        pending = next(c for c in queue_calls if c.kwargs["name"] == "idx_one_pending_per_business")
        assert pending.kwargs["unique"] is True
        assert pending.kwargs["partialFilterExpression"] == {"status": "pending"}

        artifact_calls = db.prompt_artifacts.create_index.await_args_list
        versions = next(c for c in artifact_calls if c.kwargs["name"] == "idx_business_version_unique")
        assert versions.kwargs["unique"] is True

        profile_call = db.caller_profiles.create_index.await_args
        assert profile_call.kwargs["unique"] is True
        db.calls.create_index.assert_awaited_once()
        db.appointments.create_index.assert_awaited_once()


@pytest.fixture(scope="function", autouse=True)
async def cleanup_db_manager():
    """Ensure db_manager is in clean state after each test."""
    yield
    if isinstance(db_manager._client, MagicMock):
        db_manager._client = None
        db_manager._database = None
    await db_manager.disconnect()
