import datetime as dt
from typing import Optional
from pydantic import BaseModel, Field
from src.models.base import MongoBaseModel


class CallerPreferences(BaseModel):
    preferred_service: Optional[str] = None
    preferred_provider: Optional[str] = None
    preferred_time: Optional[str] = None
    preferred_day: Optional[str] = None
    communication_preference: Optional[str] = None  # call | text | email
    notes: Optional[str] = None


class CallerProfile(MongoBaseModel):
    """Per-business record of a caller, keyed by (business_id, phone_number)."""
    business_id: str
    phone_number: str = Field(..., description="E.164 formatted phone number")
    name: Optional[str] = None
    email: Optional[str] = None
    preferences: CallerPreferences = Field(default_factory=CallerPreferences)
    call_count: int = 0
    last_call_at: Optional[dt.datetime] = None
    last_outcome: Optional[str] = None


class AppointmentHistory(BaseModel):
    count: int = 0
    last_service_booked: Optional[str] = None
    last_appointment_date: Optional[dt.datetime] = None


class CallerSentiment(BaseModel):
    previous_sentiment: Optional[str] = None
    had_negative_experience: bool = False


class CallerContext(BaseModel):
    """What is known about the person on the line before the call starts."""
    is_repeat_caller: bool = False
    known_name: Optional[str] = None
    known_email: Optional[str] = None
    previous_call_count: int = 0
    last_call_outcome: Optional[str] = None
    last_call_date: Optional[dt.datetime] = None
    known_preferences: CallerPreferences = Field(default_factory=CallerPreferences)
    appointment_history: AppointmentHistory = Field(default_factory=AppointmentHistory)
    sentiment: Optional[CallerSentiment] = None

    @classmethod
    def new_caller(cls) -> "CallerContext":
        return cls()
