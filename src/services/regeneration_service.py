"""
Regeneration Service

Keeps each business's stored prompts in step with its configuration.

Two paths lead to the same pipeline (assemble -> generate -> store):
- queued: configuration edits enqueue a deduplicated job that a worker
  drains later through process_pending()
- immediate: onboarding completion regenerates synchronously, then drops
  any pending job the fresh artifact already covers
"""
import asyncio
from typing import Optional

from loguru import logger

from src.config import get_settings
from src.core.context_assembler import build_prompt_input
from src.core.exceptions import BusinessNotFoundError, ValidationError
from src.enhancements import FragmentRegistry
from src.message_queue.base import RegenerationQueue
from src.models.artifact import GeneratedPromptArtifact
from src.models.base import utc_now
from src.models.enhancement import EnhancementConfig
from src.models.regeneration import (
    EnqueueOutcome,
    JobError,
    QueueMetrics,
    QueueProcessingResult,
    RegenerationOutcome,
    RegenerationTrigger,
)
from src.repositories.artifacts import ArtifactRepository, VersionConflictError
from src.repositories.businesses import BusinessRepository
from src.services.generation_client import GenerationClient
from src.services.prompt_generator import generate_prompts
from src.utils.observability import log_business_event

# Runs per regeneration when another run keeps storing first
MAX_REGENERATION_ATTEMPTS = 2

# Which configuration area an edit touched -> why the prompts are rebuilt
_TRIGGERS_BY_TABLE = {
    "services": RegenerationTrigger.SERVICES_UPDATE,
    "faqs": RegenerationTrigger.FAQS_UPDATE,
    "knowledge": RegenerationTrigger.KNOWLEDGE_UPDATE,
    "ai_config": RegenerationTrigger.SETTINGS_UPDATE,
    "call_settings": RegenerationTrigger.SETTINGS_UPDATE,
    "booking_settings": RegenerationTrigger.SETTINGS_UPDATE,
    "language": RegenerationTrigger.LANGUAGE_UPDATE,
    "upsells": RegenerationTrigger.OFFER_SETTINGS_UPDATE,
    "bundles": RegenerationTrigger.OFFER_SETTINGS_UPDATE,
    "packages": RegenerationTrigger.OFFER_SETTINGS_UPDATE,
    "memberships": RegenerationTrigger.OFFER_SETTINGS_UPDATE,
}


def get_trigger_type(updated_table: str) -> RegenerationTrigger:
    """Map an updated configuration table to its trigger. Unknown tables count as settings."""
    return _TRIGGERS_BY_TABLE.get(updated_table, RegenerationTrigger.SETTINGS_UPDATE)


class RegenerationService:
    """
    Usage:
        >>> service = RegenerationService(queue, businesses, artifacts)
        >>> await service.queue_regeneration(business_id, get_trigger_type("faqs"))
        >>> result = await service.process_pending()
        >>> result.processed, result.failed
    """

    def __init__(
        self,
        queue: RegenerationQueue,
        businesses: BusinessRepository,
        artifacts: ArtifactRepository,
        client: Optional[GenerationClient] = None,
        config: Optional[EnhancementConfig] = None,
        registry: Optional[FragmentRegistry] = None,
    ):
        self.queue = queue
        self.businesses = businesses
        self.artifacts = artifacts
        self.client = client or GenerationClient()
        self.config = config or EnhancementConfig()
        self.registry = registry

    # ============================================
    # QUEUED PATH
    # ============================================

    async def queue_regeneration(
        self,
        business_id: str,
        trigger: RegenerationTrigger,
    ) -> EnqueueOutcome:
        outcome = await self.queue.enqueue(business_id, trigger)
        if outcome.success and not outcome.deduplicated:
            log_business_event("regeneration_queued", business_id, trigger=str(trigger))
        return outcome

    async def process_pending(self, batch_size: Optional[int] = None) -> QueueProcessingResult:
        """
        Claim up to `batch_size` pending jobs and regenerate them concurrently.

        Every claimed job ends up completed or failed; one job failing never
        affects the others.
        """
        batch_size = batch_size or get_settings().regeneration_batch_size
        jobs = await self.queue.claim_pending(batch_size)
        if not jobs:
            return QueueProcessingResult(success=True)

        logger.info(f"🔁 Processing {len(jobs)} regeneration jobs")
        outcomes = await asyncio.gather(
            *(self.regenerate(job.business_id) for job in jobs),
            return_exceptions=True,
        )

        processed = 0
        errors = []
        for job, outcome in zip(jobs, outcomes):
            if isinstance(outcome, Exception):
                logger.error(f"❌ Regeneration crashed for {job.business_id}: {outcome}")
                outcome = RegenerationOutcome(success=False, error=str(outcome) or type(outcome).__name__)

            if outcome.success:
                await self.queue.complete(job.id)
                processed += 1
            else:
                await self.queue.fail(job.id, outcome.error or "Unknown error")
                errors.append(JobError(business_id=job.business_id, error=outcome.error or "Unknown error"))

        return QueueProcessingResult(
            success=not errors,
            processed=processed,
            failed=len(errors),
            errors=errors,
        )

    # ============================================
    # IMMEDIATE PATH
    # ============================================

    async def trigger_immediate_regeneration(self, business_id: str) -> RegenerationOutcome:
        started_at = utc_now()
        outcome = await self.regenerate(business_id)

        if outcome.success:
            cancelled = await self.queue.cancel_pending(business_id, created_before=started_at)
            if cancelled:
                logger.debug(f"Dropped {cancelled} pending job(s) superseded for {business_id}")

        return outcome

    # ============================================
    # SHARED PIPELINE
    # ============================================

    async def regenerate(self, business_id: str) -> RegenerationOutcome:
        """
        Assemble, generate and store prompts for one business.

        A version conflict means another run stored prompts while this one
        was generating, possibly from newer configuration. The run is then
        repeated from a fresh read instead of storing what it has.

        Expected failures (unknown business, invalid configuration, backend
        errors, repeated version conflicts) come back as an unsuccessful outcome.
        """
        for attempt in range(1, MAX_REGENERATION_ATTEMPTS + 1):
            try:
                outcome = await self._regenerate(business_id)
                break
            except VersionConflictError as e:
                if attempt == MAX_REGENERATION_ATTEMPTS:
                    logger.warning(f"Regeneration failed for {business_id}: {e}")
                    return RegenerationOutcome(success=False, error=str(e))
                logger.info(f"🔁 {e}; regenerating {business_id} from current configuration")
            except (BusinessNotFoundError, ValidationError) as e:
                logger.warning(f"Regeneration failed for {business_id}: {e}")
                return RegenerationOutcome(success=False, error=str(e))

        if outcome.success:
            log_business_event(
                "artifact_activated",
                business_id,
                version=outcome.version,
                mock=outcome.mock,
            )
        return outcome

    async def _regenerate(self, business_id: str) -> RegenerationOutcome:
        # Version first: any artifact stored after this read makes ours stale
        version = await self.artifacts.next_version(business_id)

        snapshot = await self.businesses.get_snapshot(business_id)
        if snapshot is None:
            raise BusinessNotFoundError(business_id)

        prompt_input = build_prompt_input(snapshot)

        result = await generate_prompts(
            prompt_input,
            config=self.config,
            client=self.client,
            registry=self.registry,
            version=version,
            business_id=business_id,
        )
        if not result.success:
            logger.warning(f"Generation failed for {business_id}: {result.error}")
            return RegenerationOutcome(success=False, error=result.error)

        artifact = GeneratedPromptArtifact.from_prompts(
            business_id,
            result.prompts,
            mock=result.mock,
            enhancements_applied=result.enhancements_applied,
        )
        stored = await self.artifacts.store(artifact)
        return RegenerationOutcome(success=True, version=stored.version, mock=stored.mock)

    async def get_queue_status(self) -> QueueMetrics:
        return await self.queue.get_metrics()
