"""
MongoDB Connection Management
Singleton Motor client with connection pooling and lifecycle management.
"""
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from typing import Optional
from ..config import settings
from ..utils.observability import logger


class DatabaseManager:
    """
    Singleton MongoDB client manager with async Motor.
    Handles connection lifecycle, pooling, and graceful shutdown.
    """

    _instance: Optional["DatabaseManager"] = None
    _client: Optional[AsyncIOMotorClient] = None
    _database: Optional[AsyncIOMotorDatabase] = None

    def __new__(cls) -> "DatabaseManager":
        """Enforce singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    async def connect(self) -> None:
        """
        Initialize MongoDB connection with configured pool settings.
        Idempotent - safe to call multiple times.
        """
        if self._client:
            try:
                await self._client.admin.command("ping")
                logger.debug("Reusing healthy MongoDB connection")
                return
            except (RuntimeError, PyMongoError):
                logger.warning("Event loop closed or connection lost. Rebuilding client...")
                self._client = None
                self._database = None

        logger.info(
            f"Connecting to MongoDB at {settings.mongodb_uri} "
            f"(database={settings.mongodb_database}, pool={settings.mongodb_max_pool_size})"
        )
        self._client = AsyncIOMotorClient(
            settings.mongodb_uri,
            maxPoolSize=settings.mongodb_max_pool_size,
            minPoolSize=settings.mongodb_min_pool_size,
            serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
            tz_aware=True,
        )

        self._database = self._client[settings.mongodb_database]

    async def disconnect(self) -> None:
        """
        Close MongoDB connection and cleanup resources.
        Idempotent - safe to call multiple times.
        """
        if self._client is None:
            logger.debug("MongoDB client already disconnected")
            return

        logger.info("Closing MongoDB connection")
        self._client.close()
        self._client = None
        self._database = None
        logger.info("MongoDB connection closed")

    @property
    def database(self) -> AsyncIOMotorDatabase:
        """
        Get the database instance.
        Raises RuntimeError if not connected.
        """
        if self._database is None:
            raise RuntimeError(
                "Database not connected. Call await db_manager.connect() first."
            )
        return self._database

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            raise RuntimeError(
                "Database client not connected. Call await db_manager.connect() first."
            )
        return self._client

    async def create_indexes(self) -> None:
        """
        Create all required indexes.
        The uniqueness constraints here carry the queue dedup and artifact
        versioning guarantees, so this must run before the service starts.
        """
        await create_indexes(self.database)


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    logger.info("Creating MongoDB indexes")

    # Regeneration queue: at most one pending job per business
    await db.prompt_regeneration_queue.create_index(
        "business_id",
        unique=True,
        partialFilterExpression={"status": "pending"},
        name="idx_one_pending_per_business"
    )
    await db.prompt_regeneration_queue.create_index(
        [("status", 1), ("created_at", 1)],
        name="idx_status_created"
    )

    # Artifacts: one document per (business, version)
    await db.prompt_artifacts.create_index(
        [("business_id", 1), ("version", -1)],
        unique=True,
        name="idx_business_version_unique"
    )
    await db.prompt_artifacts.create_index(
        [("business_id", 1), ("active", 1)],
        name="idx_business_active"
    )

    # Caller lookups
    await db.caller_profiles.create_index(
        [("business_id", 1), ("phone_number", 1)],
        unique=True,
        name="idx_business_phone_unique"
    )
    await db.calls.create_index(
        [("business_id", 1), ("caller_number", 1), ("created_at", -1)],
        name="idx_calls_by_caller"
    )
    await db.appointments.create_index(
        [("business_id", 1), ("customer_phone", 1), ("scheduled_at", -1)],
        name="idx_appointments_by_customer"
    )

    logger.info("MongoDB indexes created successfully")


# Singleton instance
db_manager = DatabaseManager()


async def get_database() -> AsyncIOMotorDatabase:
    """
    Dependency injection helper for repositories.
    Returns the connected database instance.
    """
    return db_manager.database
