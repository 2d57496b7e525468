"""
Business configuration models.
The normalized structure the prompt pipeline consumes.
"""
from decimal import Decimal
from enum import StrEnum
from typing import Iterator, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class Personality(StrEnum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    CASUAL = "casual"


class LanguageMode(StrEnum):
    AUTO = "auto"
    ASK = "ask"
    SPANISH_DEFAULT = "spanish_default"


class Language(StrEnum):
    ENGLISH = "en"
    SPANISH = "es"


WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class DayHours(BaseModel):
    open: str = Field(..., description="Opening time, HH:MM")
    close: str = Field(..., description="Closing time, HH:MM")


class BusinessHours(BaseModel):
    """Opening hours by weekday. None means closed that day."""
    monday: Optional[DayHours] = None
    tuesday: Optional[DayHours] = None
    wednesday: Optional[DayHours] = None
    thursday: Optional[DayHours] = None
    friday: Optional[DayHours] = None
    saturday: Optional[DayHours] = None
    sunday: Optional[DayHours] = None

    def ordered(self) -> Iterator[tuple[str, Optional[DayHours]]]:
        for day in WEEKDAYS:
            yield day, getattr(self, day)


class ServiceItem(BaseModel):
    name: str
    description: Optional[str] = None
    duration_minutes: int = 0
    price: Optional[Decimal] = Field(None, description="Major currency units, 2 decimals")


class FAQItem(BaseModel):
    question: str
    answer: str


class BusinessProfile(BaseModel):
    name: str
    type: str
    address: Optional[str] = None
    website: Optional[str] = None
    service_area: Optional[str] = None
    differentiator: Optional[str] = None
    hours: BusinessHours = Field(default_factory=BusinessHours)
    timezone: str = "America/New_York"
    services: List[ServiceItem] = Field(default_factory=list)
    faqs: List[FAQItem] = Field(default_factory=list)
    additional_knowledge: Optional[str] = None
    never_say: Optional[str] = None


class AIPersonaConfig(BaseModel):
    # Personality is kept as a plain string so the assembler can report
    # an unrecognized value instead of failing inside pydantic.
    name: str
    personality: str = Personality.PROFESSIONAL.value
    greeting: Optional[str] = None
    greeting_spanish: Optional[str] = None

    @property
    def personality_enum(self) -> Personality:
        return Personality(self.personality)


class LanguageSettings(BaseModel):
    spanish_enabled: bool = False
    language_mode: LanguageMode = LanguageMode.AUTO


class CallHandlingPolicy(BaseModel):
    transfer_enabled: bool = False
    transfer_number: Optional[str] = None
    transfer_on_request: bool = True
    transfer_on_emergency: bool = True
    transfer_on_upset: bool = False
    after_hours_enabled: bool = True
    after_hours_can_book: bool = True


class BookingSettings(BaseModel):
    enabled: bool = True
    require_confirmation: bool = False
    buffer_minutes: int = 15
    max_advance_days: int = 30


class UpsellOffer(BaseModel):
    source_service_name: str
    target_service_name: str
    discount_percent: int = 0
    pitch_message: Optional[str] = None
    trigger_timing: Literal["before_booking", "after_booking"] = "before_booking"
    suggest_when_unavailable: bool = False


class BundleOffer(BaseModel):
    name: str
    service_names: List[str] = Field(default_factory=list)
    discount_percent: int = 0
    pitch_message: Optional[str] = None


class PackageOffer(BaseModel):
    name: str
    service_name: Optional[str] = None
    session_count: int
    discount_percent: int = 0
    pitch_message: Optional[str] = None
    min_visits_to_pitch: int = 0


class MembershipOffer(BaseModel):
    name: str
    price_per_month: Decimal
    billing_period: Literal["monthly", "quarterly", "annual"] = "monthly"
    benefits: str = ""
    pitch_message: Optional[str] = None
    pitch_after_booking_amount: Optional[Decimal] = None
    pitch_after_visit_count: Optional[int] = None


class CommercialOffers(BaseModel):
    upsells: List[UpsellOffer] = Field(default_factory=list)
    bundles: List[BundleOffer] = Field(default_factory=list)
    packages: List[PackageOffer] = Field(default_factory=list)
    memberships: List[MembershipOffer] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.upsells or self.bundles or self.packages or self.memberships)


class PromptGenerationInput(BaseModel):
    """Everything the composer needs to build a meta-prompt for one business."""
    model_config = ConfigDict(frozen=True)

    business: BusinessProfile
    ai_config: AIPersonaConfig
    language_settings: LanguageSettings = Field(default_factory=LanguageSettings)
    call_settings: CallHandlingPolicy = Field(default_factory=CallHandlingPolicy)
    booking_settings: BookingSettings = Field(default_factory=BookingSettings)
    offers: CommercialOffers = Field(default_factory=CommercialOffers)
    plan_minutes_remaining: Optional[int] = None
    is_minutes_exhausted: bool = False
