"""
Context Assembler
Turns the raw business document into the normalized PromptGenerationInput.

Pure transform: no I/O, no logging side effects beyond debug traces.
Missing optional data falls back to defaults; only the fields the
generated script cannot do without are validated.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from loguru import logger

from src.config import get_settings
from src.core.exceptions import ValidationError
from src.models.business import (
    AIPersonaConfig,
    BookingSettings,
    BundleOffer,
    BusinessHours,
    BusinessProfile,
    CallHandlingPolicy,
    CommercialOffers,
    DayHours,
    FAQItem,
    LanguageMode,
    LanguageSettings,
    MembershipOffer,
    PackageOffer,
    Personality,
    PromptGenerationInput,
    ServiceItem,
    UpsellOffer,
)
from src.models.snapshot import (
    AIConfigRow,
    BookingSettingsRow,
    BusinessSnapshot,
    CallSettingsRow,
    HoursRow,
    MembershipRow,
    UpsellRow,
)

# Stored rows index days the JavaScript way: 0=Sunday
_DAY_INDEX = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

_CENT = Decimal("0.01")

_BILLING_MONTHS = {"monthly": 1, "quarterly": 3, "annual": 12}

DEFAULT_GREETING = "Thanks for calling {business_name}, this is {ai_name}, how can I help you?"


def cents_to_amount(cents: int) -> Decimal:
    """Integer cents -> major units, exactly two places."""
    return (Decimal(cents) / 100).quantize(_CENT, rounding=ROUND_HALF_UP)


def monthly_cents(price_cents: int, billing_period: str) -> int:
    """
    Normalize a membership price to a monthly amount in cents.

    Integer arithmetic with half-up rounding, so 9999 annual -> 833.
    """
    months = _BILLING_MONTHS.get(billing_period, 1)
    if months == 1:
        return price_cents
    quotient, remainder = divmod(price_cents, months)
    return quotient + (1 if remainder * 2 >= months else 0)


def _hours(rows: Iterable[HoursRow]) -> BusinessHours:
    days = {}
    for row in rows:
        if row.is_closed or not row.open_time or not row.close_time:
            days[_DAY_INDEX[row.day_of_week]] = None
        else:
            days[_DAY_INDEX[row.day_of_week]] = DayHours(open=row.open_time, close=row.close_time)
    return BusinessHours(**days)


def _upsells(rows: Iterable[UpsellRow]) -> List[UpsellOffer]:
    upsells = []
    for row in rows:
        if not row.is_active:
            continue
        if not row.source_service_name or not row.target_service_name:
            logger.debug("Dropping upsell without both service names")
            continue
        upsells.append(UpsellOffer(
            source_service_name=row.source_service_name,
            target_service_name=row.target_service_name,
            discount_percent=row.discount_percent,
            pitch_message=row.pitch_message,
            trigger_timing=row.trigger_timing if row.trigger_timing == "after_booking" else "before_booking",
            suggest_when_unavailable=row.suggest_when_unavailable,
        ))
    return upsells


def _membership(row: MembershipRow) -> MembershipOffer:
    period = row.billing_period if row.billing_period in _BILLING_MONTHS else "monthly"
    return MembershipOffer(
        name=row.name,
        price_per_month=cents_to_amount(monthly_cents(row.price_cents, period)),
        billing_period=period,
        benefits=row.benefits,
        pitch_message=row.pitch_message,
        pitch_after_booking_amount=(
            cents_to_amount(row.pitch_after_booking_amount_cents)
            if row.pitch_after_booking_amount_cents else None
        ),
        pitch_after_visit_count=row.pitch_after_visit_count,
    )


def _offers(snapshot: BusinessSnapshot) -> CommercialOffers:
    return CommercialOffers(
        upsells=_upsells(snapshot.upsells),
        bundles=[
            BundleOffer(
                name=row.name,
                service_names=[name for name in row.service_names if name],
                discount_percent=row.discount_percent,
                pitch_message=row.pitch_message,
            )
            for row in snapshot.bundles if row.is_active
        ],
        packages=[
            PackageOffer(
                name=row.name,
                service_name=row.service_name,
                session_count=row.session_count,
                discount_percent=row.discount_percent,
                pitch_message=row.pitch_message,
                min_visits_to_pitch=row.min_visits_to_pitch,
            )
            for row in snapshot.packages if row.is_active
        ],
        memberships=[_membership(row) for row in snapshot.memberships if row.is_active],
    )


def _language_mode(value: Optional[str]) -> LanguageMode:
    try:
        return LanguageMode(value or LanguageMode.AUTO)
    except ValueError:
        logger.warning(f"Unknown language mode '{value}', using auto")
        return LanguageMode.AUTO


def build_prompt_input(snapshot: BusinessSnapshot) -> PromptGenerationInput:
    """
    Assemble a PromptGenerationInput from one business document.

    Raises:
        ValidationError: the business lacks a name, a type or an AI name,
            or carries an unrecognized personality.
    """
    settings = get_settings()

    ai_row = snapshot.ai_config or AIConfigRow()
    call_row = snapshot.call_settings or CallSettingsRow()
    booking_row = snapshot.booking_settings or BookingSettingsRow()

    business_name = snapshot.name or ""
    ai_name = ai_row.ai_name or settings.default_ai_name

    knowledge = snapshot.knowledge
    faqs = sorted(snapshot.faqs, key=lambda faq: faq.sort_order)

    business = BusinessProfile(
        name=business_name,
        type=snapshot.business_type or "",
        address=snapshot.address,
        website=snapshot.website,
        service_area=snapshot.service_area,
        differentiator=snapshot.differentiator,
        hours=_hours(snapshot.business_hours),
        timezone=snapshot.timezone or settings.default_timezone,
        services=[
            ServiceItem(
                name=row.name,
                description=row.description,
                duration_minutes=row.duration_minutes,
                price=cents_to_amount(row.price_cents) if row.price_cents else None,
            )
            for row in snapshot.services
        ],
        faqs=[FAQItem(question=faq.question, answer=faq.answer) for faq in faqs],
        additional_knowledge=knowledge.content if knowledge else None,
        never_say=knowledge.never_say if knowledge else None,
    )

    ai_config = AIPersonaConfig(
        name=ai_name,
        personality=ai_row.personality or Personality.PROFESSIONAL.value,
        greeting=ai_row.greeting or DEFAULT_GREETING.format(
            business_name=business_name, ai_name=ai_name
        ),
        greeting_spanish=ai_row.greeting_spanish,
    )

    usage = snapshot.usage
    included = (usage.minutes_included if usage else None) or settings.default_minutes_included
    used = (usage.minutes_used_this_cycle if usage else None) or 0
    remaining = max(0, included - used)

    prompt_input = PromptGenerationInput(
        business=business,
        ai_config=ai_config,
        language_settings=LanguageSettings(
            spanish_enabled=ai_row.spanish_enabled,
            language_mode=_language_mode(ai_row.language_mode),
        ),
        call_settings=CallHandlingPolicy(
            transfer_enabled=bool(call_row.transfer_number),
            transfer_number=call_row.transfer_number,
            transfer_on_request=call_row.transfer_on_request,
            transfer_on_emergency=call_row.transfer_on_emergency,
            transfer_on_upset=call_row.transfer_on_upset,
            after_hours_enabled=call_row.after_hours_enabled,
            after_hours_can_book=call_row.after_hours_can_book,
        ),
        booking_settings=BookingSettings(
            enabled=booking_row.enabled,
            require_confirmation=booking_row.require_confirmation,
            buffer_minutes=booking_row.buffer_minutes,
            max_advance_days=booking_row.max_advance_days,
        ),
        offers=_offers(snapshot),
        plan_minutes_remaining=remaining,
        is_minutes_exhausted=remaining <= 0,
    )

    validate_prompt_input(prompt_input)
    return prompt_input


def validate_prompt_input(prompt_input: PromptGenerationInput) -> None:
    """Collect every blocking problem and raise them together."""
    problems = []

    if not prompt_input.business.name.strip():
        problems.append("business name is missing")
    if not prompt_input.business.type.strip():
        problems.append("business type is missing")
    if not prompt_input.ai_config.name.strip():
        problems.append("AI name is missing")
    if prompt_input.ai_config.personality not in {p.value for p in Personality}:
        problems.append(f"unrecognized personality '{prompt_input.ai_config.personality}'")

    if problems:
        raise ValidationError(problems)
