import datetime as dt
from enum import StrEnum
from typing import List, Optional
from pydantic import BaseModel, Field
from src.models.base import MongoBaseModel


class RegenerationTrigger(StrEnum):
    """Why a regeneration job was created. Every trigger re-runs the full pipeline."""
    SERVICES_UPDATE = "services_update"
    FAQS_UPDATE = "faqs_update"
    KNOWLEDGE_UPDATE = "knowledge_update"
    SETTINGS_UPDATE = "settings_update"
    LANGUAGE_UPDATE = "language_update"
    OFFER_SETTINGS_UPDATE = "offer_settings_update"


class JobStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class RegenerationJob(MongoBaseModel):
    """
    Queued request to rebuild a business's prompts.
    At most one job per business may be PENDING at a time.
    """
    business_id: str
    triggered_by: RegenerationTrigger
    status: JobStatus = JobStatus.PENDING
    error_message: Optional[str] = None
    processed_at: Optional[dt.datetime] = None


class EnqueueOutcome(BaseModel):
    success: bool
    job_id: Optional[str] = None
    deduplicated: bool = False
    error: Optional[str] = None


class JobError(BaseModel):
    business_id: str
    error: str


class QueueProcessingResult(BaseModel):
    success: bool
    processed: int = 0
    failed: int = 0
    errors: List[JobError] = Field(default_factory=list)


class QueueMetrics(BaseModel):
    """Job counts by status."""
    pending: int = 0
    processing: int = 0
    completed: int = 0
    failed: int = 0


class RegenerationOutcome(BaseModel):
    """Result of regenerating one business's prompts."""
    success: bool
    error: Optional[str] = None
    version: Optional[int] = None
    mock: bool = False
