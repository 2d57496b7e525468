"""
CLI Runner for the Prompt Pipeline
Command-line entry points: run the regeneration worker, or regenerate one business.

    python -m src.core.cli_runner worker
    python -m src.core.cli_runner regenerate <business_id>
"""
import asyncio
from loguru import logger
from motor.motor_asyncio import AsyncIOMotorDatabase

from src.message_queue import RegenerationWorker
from src.repositories import (
    ArtifactRepository,
    BusinessRepository,
    RegenerationQueueRepository,
    db_manager,
)
from src.services import RegenerationService
from src.utils.observability import configure_logging


def build_regeneration_service(database: AsyncIOMotorDatabase) -> RegenerationService:
    """Wire the MongoDB-backed queue and repositories into a RegenerationService."""
    return RegenerationService(
        queue=RegenerationQueueRepository(database),
        businesses=BusinessRepository(database),
        artifacts=ArtifactRepository(database),
    )


async def run_worker():
    """
    Drain the regeneration queue until interrupted.
    """
    configure_logging()

    await db_manager.connect()
    await db_manager.create_indexes()

    service = build_regeneration_service(db_manager.database)
    if service.client.is_mock:
        logger.warning("⚠️ ANTHROPIC_API_KEY not set, artifacts will hold mock prompts")

    worker = RegenerationWorker(service)
    try:
        await worker.start()
    finally:
        await worker.stop()
        logger.info("🔌 Disconnecting from MongoDB...")
        await db_manager.disconnect()
        logger.info("✅ Shutdown complete")


async def run_single_business(business_id: str):
    """
    Regenerate one business immediately and print the outcome.
    Quick check for debugging a business's configuration.
    """
    configure_logging()

    await db_manager.connect()
    try:
        service = build_regeneration_service(db_manager.database)
        outcome = await service.trigger_immediate_regeneration(business_id)

        if outcome.success:
            print(f"\n✅ Stored prompts v{outcome.version} (mock={outcome.mock})")
            artifact = await service.artifacts.get_active(business_id)
            if artifact:
                print(f"📏 Tokens: {artifact.token_counts.model_dump(exclude_none=True)}")
        else:
            print(f"\n❌ Regeneration failed: {outcome.error}")

        status = await service.get_queue_status()
        print(f"📥 Queue: {status.model_dump()}")

    finally:
        await db_manager.disconnect()


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 2 and sys.argv[1] == "regenerate":
        asyncio.run(run_single_business(sys.argv[2]))
    elif len(sys.argv) > 1 and sys.argv[1] == "worker":
        asyncio.run(run_worker())
    else:
        print("Usage: python -m src.core.cli_runner worker | regenerate <business_id>")
        sys.exit(2)
