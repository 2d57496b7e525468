"""
Raw business document as stored in the `businesses` collection.

Rows keep the storage shape (integer cents, day-of-week indices, nullable
flags). The context assembler turns a snapshot into a PromptGenerationInput.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class SnapshotRow(BaseModel):
    # Stored documents carry bookkeeping fields we don't read
    model_config = ConfigDict(extra="ignore")


class HoursRow(SnapshotRow):
    day_of_week: int = Field(..., ge=0, le=6, description="0=Sunday ... 6=Saturday")
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    is_closed: bool = False


class ServiceRow(SnapshotRow):
    name: str
    description: Optional[str] = None
    duration_minutes: int = 0
    price_cents: Optional[int] = None


class FAQRow(SnapshotRow):
    question: str
    answer: str
    sort_order: int = 0


class KnowledgeRow(SnapshotRow):
    content: Optional[str] = None
    never_say: Optional[str] = None


class AIConfigRow(SnapshotRow):
    ai_name: Optional[str] = None
    personality: Optional[str] = "professional"
    greeting: Optional[str] = None
    greeting_spanish: Optional[str] = None
    spanish_enabled: bool = False
    language_mode: Optional[str] = "auto"


class CallSettingsRow(SnapshotRow):
    transfer_number: Optional[str] = None
    transfer_on_request: bool = True
    transfer_on_emergency: bool = True
    transfer_on_upset: bool = False
    after_hours_enabled: bool = True
    after_hours_can_book: bool = True


class BookingSettingsRow(SnapshotRow):
    enabled: bool = True
    require_confirmation: bool = False
    buffer_minutes: int = 15
    max_advance_days: int = 30


class UpsellRow(SnapshotRow):
    source_service_name: Optional[str] = None
    target_service_name: Optional[str] = None
    discount_percent: int = 0
    pitch_message: Optional[str] = None
    trigger_timing: Optional[str] = None
    suggest_when_unavailable: bool = False
    is_active: bool = True


class BundleRow(SnapshotRow):
    name: str
    service_names: List[str] = Field(default_factory=list)
    discount_percent: int = 0
    pitch_message: Optional[str] = None
    is_active: bool = True


class PackageRow(SnapshotRow):
    name: str
    service_name: Optional[str] = None
    session_count: int
    discount_percent: int = 0
    pitch_message: Optional[str] = None
    min_visits_to_pitch: int = 0
    is_active: bool = True


class MembershipRow(SnapshotRow):
    name: str
    price_cents: int
    billing_period: str = "monthly"
    benefits: str = ""
    pitch_message: Optional[str] = None
    pitch_after_booking_amount_cents: Optional[int] = None
    pitch_after_visit_count: Optional[int] = None
    is_active: bool = True


class UsageRow(SnapshotRow):
    minutes_included: Optional[int] = None
    minutes_used_this_cycle: Optional[int] = None


class BusinessSnapshot(SnapshotRow):
    """Everything stored about one business that prompt generation reads."""
    business_id: str
    name: Optional[str] = None
    business_type: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None
    service_area: Optional[str] = None
    differentiator: Optional[str] = None
    timezone: Optional[str] = None
    business_hours: List[HoursRow] = Field(default_factory=list)
    services: List[ServiceRow] = Field(default_factory=list)
    faqs: List[FAQRow] = Field(default_factory=list)
    knowledge: Optional[KnowledgeRow] = None
    ai_config: Optional[AIConfigRow] = None
    call_settings: Optional[CallSettingsRow] = None
    booking_settings: Optional[BookingSettingsRow] = None
    upsells: List[UpsellRow] = Field(default_factory=list)
    bundles: List[BundleRow] = Field(default_factory=list)
    packages: List[PackageRow] = Field(default_factory=list)
    memberships: List[MembershipRow] = Field(default_factory=list)
    usage: Optional[UsageRow] = None
