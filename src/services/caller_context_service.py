"""
Caller Context Lookup

Builds a CallerContext for an inbound call from the caller profile, or,
for callers without a profile yet, from raw call and appointment history.
Lookups are best-effort: a storage failure yields a new-caller context so
the call itself is never blocked.
"""
from typing import Any, Dict, List, Optional

from loguru import logger
from pymongo.errors import PyMongoError

from src.models.caller import (
    AppointmentHistory,
    CallerContext,
    CallerPreferences,
    CallerProfile,
    CallerSentiment,
)
from src.repositories.caller_profiles import CallerProfileRepository
from src.utils.phone_normalizer import PhoneNormalizationError, normalize_phone

# Stored call sentiments that count as a bad experience
NEGATIVE_SENTIMENTS = frozenset({"frustrated", "angry", "upset", "negative"})


def _appointment_history(rows: List[Dict[str, Any]]) -> AppointmentHistory:
    if not rows:
        return AppointmentHistory()
    latest = rows[0]
    return AppointmentHistory(
        count=len(rows),
        last_service_booked=latest.get("service_name"),
        last_appointment_date=latest.get("scheduled_at"),
    )


def _sentiment(calls: List[Dict[str, Any]]) -> CallerSentiment:
    sentiments = [call.get("sentiment") for call in calls if call.get("sentiment")]
    return CallerSentiment(
        previous_sentiment=sentiments[0] if sentiments else None,
        had_negative_experience=any(s in NEGATIVE_SENTIMENTS for s in sentiments),
    )


def context_from_profile(
    profile: CallerProfile,
    calls: List[Dict[str, Any]],
    appointments: List[Dict[str, Any]],
) -> CallerContext:
    return CallerContext(
        is_repeat_caller=True,
        known_name=profile.name,
        known_email=profile.email,
        previous_call_count=profile.call_count,
        last_call_outcome=profile.last_outcome,
        last_call_date=profile.last_call_at,
        known_preferences=profile.preferences,
        appointment_history=_appointment_history(appointments),
        sentiment=_sentiment(calls),
    )


def context_from_history(
    calls: List[Dict[str, Any]],
    appointments: List[Dict[str, Any]],
) -> CallerContext:
    if not calls:
        return CallerContext.new_caller()

    latest = calls[0]
    return CallerContext(
        is_repeat_caller=True,
        previous_call_count=len(calls),
        last_call_outcome=latest.get("outcome"),
        last_call_date=latest.get("created_at"),
        known_preferences=CallerPreferences(),
        appointment_history=_appointment_history(appointments),
        sentiment=_sentiment(calls),
    )


class CallerContextService:
    """
    Usage:
        >>> service = CallerContextService(CallerProfileRepository(db))
        >>> context = await service.fetch_caller_context(business_id, "+1 415 555 2671")
        >>> build_caller_dynamic_vars(context)
    """

    def __init__(self, repository: CallerProfileRepository):
        self.repository = repository

    async def fetch_caller_context(self, business_id: str, caller_number: str) -> CallerContext:
        try:
            phone = normalize_phone(caller_number)
        except PhoneNormalizationError as e:
            logger.warning(f"Unusable caller number, treating as new caller: {e}")
            return CallerContext.new_caller()

        try:
            profile = await self.repository.get_by_phone(business_id, phone)
            calls = await self.repository.recent_calls(business_id, phone)
            if profile is None and not calls:
                return CallerContext.new_caller()

            appointments = await self.repository.recent_appointments(business_id, phone)
        except PyMongoError as e:
            logger.error(f"Caller lookup failed for {business_id}: {e}")
            return CallerContext.new_caller()

        if profile is not None:
            return context_from_profile(profile, calls, appointments)
        return context_from_history(calls, appointments)

    async def record_call(
        self,
        business_id: str,
        caller_number: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        outcome: Optional[str] = None,
        preferences: Optional[CallerPreferences] = None,
    ) -> Optional[CallerProfile]:
        """Update the caller's profile after a call. Returns None for unusable numbers."""
        try:
            phone = normalize_phone(caller_number)
        except PhoneNormalizationError as e:
            logger.warning(f"Not recording call, unusable caller number: {e}")
            return None

        return await self.repository.record_call(
            business_id,
            phone,
            name=name,
            email=email,
            outcome=outcome,
            preferences=preferences,
        )
