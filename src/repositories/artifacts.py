"""
Prompt Artifact Repository
Versioned, append-only storage of generated prompts.
"""
from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from .base import BaseRepository
from ..models.artifact import GeneratedPromptArtifact
from ..utils.observability import logger


class VersionConflictError(RuntimeError):
    """Another run stored the same version first."""
    pass


class ArtifactRepository(BaseRepository[GeneratedPromptArtifact]):
    """
    Repository for generated prompt artifacts.

    Artifacts are never edited. Storing a new one flips every older
    artifact inactive. The unique (business_id, version) index turns a
    concurrent writer of the same version into a DuplicateKeyError.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        super().__init__(database, "prompt_artifacts", GeneratedPromptArtifact)

    async def latest_version(self, business_id: str) -> int:
        doc = await self.collection.find_one(
            {"business_id": business_id},
            sort=[("version", DESCENDING)],
            projection={"version": 1},
        )
        return doc["version"] if doc else 0

    async def next_version(self, business_id: str) -> int:
        return await self.latest_version(business_id) + 1

    async def store(self, artifact: GeneratedPromptArtifact) -> GeneratedPromptArtifact:
        """
        Persist an artifact as the new active version for its business.

        The artifact's version must be the one read (via next_version) before
        its business configuration was loaded. If another run has stored that
        version since, this run worked from configuration that may be stale,
        so it is rejected rather than renumbered.

        Raises:
            VersionConflictError: the version was already taken
        """
        try:
            stored = await self.create(artifact.model_copy(update={"active": True}))
        except DuplicateKeyError as e:
            logger.warning(
                f"Version conflict for {artifact.business_id}: "
                f"v{artifact.version} was stored by a newer run"
            )
            raise VersionConflictError(
                f"Prompts v{artifact.version} for {artifact.business_id} were already stored by a newer run"
            ) from e

        await self.collection.update_many(
            {
                "business_id": stored.business_id,
                "version": {"$lt": stored.version},
                "active": True,
            },
            {"$set": {"active": False}},
        )

        logger.info(f"📦 Stored prompts v{stored.version} for {stored.business_id}")
        return stored

    async def get_active(self, business_id: str) -> Optional[GeneratedPromptArtifact]:
        docs = await self.find_many(
            {"business_id": business_id, "active": True},
            limit=1,
            sort=[("version", DESCENDING)],
        )
        return docs[0] if docs else None

    async def get_version(self, business_id: str, version: int) -> Optional[GeneratedPromptArtifact]:
        return await self.find_one({"business_id": business_id, "version": version})

    async def list_versions(self, business_id: str, limit: int = 20) -> List[GeneratedPromptArtifact]:
        """Newest first."""
        return await self.find_many(
            {"business_id": business_id},
            limit=limit,
            sort=[("version", DESCENDING)],
        )
