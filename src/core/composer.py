"""
Meta-Prompt Composer

Builds the instruction text sent to the generative backend: business facts
rendered as an additional-context block, enhancement fragments, and the
per-language fields, substituted into a master template in one pass.
"""
import re
from typing import Mapping, Optional

from src.core.exceptions import CompositionError
from src.core.templates import (
    DEFAULT_SERVICES_LABEL,
    ENHANCED_TEMPLATE,
    LANGUAGE_LABELS,
    LANGUAGE_SWITCHING,
    PERSONALITY_DESCRIPTIONS,
    SPANISH_GUIDELINES,
    STANDARD_TEMPLATE,
)
from src.enhancements import FragmentRegistry, FragmentRequest, default_registry
from src.models.business import (
    BusinessHours,
    CommercialOffers,
    FAQItem,
    Language,
    LanguageMode,
    PromptGenerationInput,
    ServiceItem,
)
from src.models.enhancement import EnhancementConfig

MAX_FAQS = 10

PLACEHOLDER = re.compile(r"\{([A-Z][A-Z_]*)\}")
_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


# ============================================
# ADDITIONAL CONTEXT
# ============================================

def _format_hours(hours: BusinessHours) -> str:
    lines = []
    for day, day_hours in hours.ordered():
        if day_hours:
            lines.append(f"{day.capitalize()}: {day_hours.open} - {day_hours.close}")
        else:
            lines.append(f"{day.capitalize()}: Closed")
    return "\n".join(lines)


def _format_services(services: list[ServiceItem]) -> str:
    if not services:
        return "No specific services listed"

    lines = []
    for service in services:
        line = f"- {service.name}"
        if service.duration_minutes:
            line += f" ({service.duration_minutes} min)"
        if service.price:
            line += f" - ${service.price}"
        if service.description:
            line += f": {service.description}"
        lines.append(line)
    return "\n".join(lines)


def _format_faqs(faqs: list[FAQItem]) -> str:
    return "\n\n".join(f"Q: {faq.question}\nA: {faq.answer}" for faq in faqs[:MAX_FAQS])


def _format_offers(offers: CommercialOffers) -> list[str]:
    sections = []

    regular = [u for u in offers.upsells if not u.suggest_when_unavailable]
    alternatives = [u for u in offers.upsells if u.suggest_when_unavailable]

    if regular:
        entries = []
        for upsell in regular:
            text = (
                f'- When customer wants "{upsell.source_service_name}", '
                f'suggest upgrading to "{upsell.target_service_name}"'
            )
            if upsell.discount_percent > 0:
                text += f" ({upsell.discount_percent}% off the upgrade)"
            if upsell.pitch_message:
                text += f'\n  Pitch: "{upsell.pitch_message}"'
            if upsell.trigger_timing == "before_booking":
                text += "\n  Timing: Suggest before confirming the booking"
            else:
                text += "\n  Timing: Mention after booking is confirmed"
            entries.append(text)
        sections.append(
            "\nUpsell Opportunities:\n" + "\n".join(entries) + "\n\nGuidelines for upselling:\n"
            "- Only suggest upsells when naturally relevant to the conversation\n"
            "- Don't be pushy - accept \"no\" gracefully and proceed with original booking\n"
            "- Frame upgrades as added value, not a sales pitch\n"
            "- If customer declines, do NOT mention the upsell again in the same call"
        )

    if alternatives:
        entries = []
        for upsell in alternatives:
            text = (
                f'- When "{upsell.source_service_name}" is unavailable, '
                f'suggest "{upsell.target_service_name}" instead'
            )
            if upsell.discount_percent > 0:
                text += f" ({upsell.discount_percent}% off)"
            if upsell.pitch_message:
                text += f'\n  Pitch: "{upsell.pitch_message}"'
            entries.append(text)
        sections.append(
            "\nAvailability-Based Alternatives:\n" + "\n".join(entries) +
            "\n\nWhen the requested time slot is unavailable, check if an alternative "
            "service might work for the customer."
        )

    if offers.bundles:
        entries = []
        for bundle in offers.bundles:
            text = f'- "{bundle.name}" bundle: {" + ".join(bundle.service_names)}'
            if bundle.discount_percent > 0:
                text += f" ({bundle.discount_percent}% off when booked together)"
            if bundle.pitch_message:
                text += f'\n  Pitch: "{bundle.pitch_message}"'
            entries.append(text)
        sections.append(
            "\nBundle Deals:\n" + "\n".join(entries) + "\n\nGuidelines for bundles:\n"
            "- When a customer books a service that's part of a bundle, mention the bundle deal\n"
            "- Calculate and state the savings clearly\n"
            "- Don't force bundles - accept if they only want one service"
        )

    if offers.packages:
        entries = []
        for package in offers.packages:
            text = f'- "{package.name}": {package.session_count} sessions'
            if package.service_name:
                text += f" of {package.service_name}"
            if package.discount_percent > 0:
                text += f" at {package.discount_percent}% off"
            if package.pitch_message:
                text += f'\n  Pitch: "{package.pitch_message}"'
            if package.min_visits_to_pitch > 0:
                text += f"\n  Only mention to callers with {package.min_visits_to_pitch}+ previous visits"
            entries.append(text)
        sections.append(
            "\nMulti-Visit Packages:\n" + "\n".join(entries) + "\n\nGuidelines for packages:\n"
            "- Pitch packages when appropriate based on visit count threshold\n"
            "- Emphasize long-term value and convenience\n"
            "- Calculate per-session savings when explaining"
        )

    if offers.memberships:
        entries = []
        for membership in offers.memberships:
            text = f'- "{membership.name}": ${membership.price_per_month}/month'
            if membership.billing_period != "monthly":
                text += f" (billed {membership.billing_period})"
            text += f"\n  Benefits: {membership.benefits}"
            if membership.pitch_message:
                text += f'\n  Pitch: "{membership.pitch_message}"'
            entries.append(text)
        sections.append(
            "\nMembership Plans:\n" + "\n".join(entries) + "\n\nGuidelines for memberships:\n"
            "- Mention membership benefits when relevant\n"
            "- Pitch after larger bookings or to repeat callers\n"
            "- Don't pressure - just inform about the option"
        )

    return sections


def _capabilities(prompt_input: PromptGenerationInput) -> list[str]:
    booking = prompt_input.booking_settings
    calls = prompt_input.call_settings
    capabilities = []

    if booking.enabled:
        capabilities.append("Can book appointments")
        if booking.require_confirmation:
            capabilities.append("Appointments require confirmation")
        capabilities.append(f"Can book up to {booking.max_advance_days} days in advance")
    else:
        capabilities.append("Appointment booking is NOT available - take messages instead")

    if calls.transfer_enabled and calls.transfer_number:
        capabilities.append("Can transfer calls to owner")
        if calls.transfer_on_request:
            capabilities.append("Transfer when caller requests")
        if calls.transfer_on_emergency:
            capabilities.append("Transfer for emergencies")
        if calls.transfer_on_upset:
            capabilities.append("Transfer if caller is upset")
    else:
        capabilities.append("Call transfer is NOT available - take messages for urgent matters")

    return capabilities


def build_additional_context(prompt_input: PromptGenerationInput) -> str:
    """Render the business facts block embedded in every meta-prompt."""
    business = prompt_input.business
    sections = []

    if business.service_area:
        sections.append(f"Service Area: {business.service_area}")
    if business.differentiator:
        sections.append(f"What makes this business special: {business.differentiator}")
    if business.website:
        sections.append(f"Website: {business.website}")

    sections.append(f"\nBusiness Hours:\n{_format_hours(business.hours)}")
    sections.append(f"Timezone: {business.timezone}")
    sections.append(f"\nServices Offered:\n{_format_services(business.services)}")

    if business.faqs:
        sections.append(f"\nFrequently Asked Questions:\n{_format_faqs(business.faqs)}")

    sections.extend(_format_offers(prompt_input.offers))

    if business.additional_knowledge:
        sections.append(f"\nAdditional Business Information:\n{business.additional_knowledge}")
    if business.never_say:
        sections.append(f"\nNever say or discuss:\n{business.never_say}")

    sections.append(f'\nCustom Greeting: "{prompt_input.ai_config.greeting}"')
    sections.append("\nCapabilities:\n" + "\n".join(f"- {c}" for c in _capabilities(prompt_input)))

    calls = prompt_input.call_settings
    if calls.after_hours_enabled:
        sections.append("\nAfter Hours: The AI handles after-hours calls.")
        if calls.after_hours_can_book:
            sections.append("Can still book appointments after hours.")
        else:
            sections.append("Cannot book appointments after hours - take messages only.")

    if prompt_input.is_minutes_exhausted:
        sections.append(
            "\n⚠️ IMPORTANT: The business has exhausted their monthly minutes.\n"
            "The AI should ONLY take messages. Do not attempt to book appointments "
            "or have extended conversations.\n"
            "Keep interactions brief and focus on capturing: caller name, phone number, "
            "and their message."
        )
    else:
        sections.append(f"\nMinutes remaining: {prompt_input.plan_minutes_remaining}")

    return "\n".join(sections)


# ============================================
# COMPOSITION
# ============================================

def build_language_switching_instructions(mode: LanguageMode) -> str:
    return LANGUAGE_SWITCHING[LanguageMode(mode)]


def _spanish_additions(prompt_input: PromptGenerationInput) -> str:
    greeting = prompt_input.ai_config.greeting_spanish
    if greeting:
        line = f'Custom Spanish greeting: "{greeting}"'
    else:
        line = "Translate the English greeting naturally"
    return SPANISH_GUIDELINES.format(greeting_line=line)


def fill_template(template: str, values: Mapping[str, str]) -> str:
    """
    Substitute every {PLACEHOLDER} in one pass.

    Substituted values are never re-scanned, so business text that happens
    to contain braces cannot inject further substitutions.
    """
    missing = set()

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in values:
            missing.add(key)
            return match.group(0)
        return values[key]

    result = PLACEHOLDER.sub(_replace, template)
    if missing:
        raise CompositionError(missing)
    return result


def compose_meta_prompt(
    prompt_input: PromptGenerationInput,
    fragments: Mapping[str, str],
    config: EnhancementConfig,
    language: Language = Language.ENGLISH,
    enhanced: bool = True,
) -> str:
    """
    Compose the complete meta-prompt for one language.

    Args:
        prompt_input: Validated business input
        fragments: Enhancement fragments keyed by placeholder name
        config: Enhancement switches (tone intensity is read from here)
        language: Target language of the generated script
        enhanced: Use the enhanced template; the standard one ignores fragments

    Raises:
        CompositionError: a template placeholder was left unresolved
    """
    language = Language(language)
    personality = prompt_input.ai_config.personality_enum
    service_names = ", ".join(s.name for s in prompt_input.business.services)

    additional_context = build_additional_context(prompt_input)
    if language == Language.SPANISH:
        additional_context += _spanish_additions(prompt_input)

    values = {
        "BUSINESS_NAME": prompt_input.business.name,
        "INDUSTRY": prompt_input.business.type,
        "SERVICES": service_names or DEFAULT_SERVICES_LABEL[language],
        "AI_NAME": prompt_input.ai_config.name,
        "PERSONALITY": PERSONALITY_DESCRIPTIONS[language][personality],
        "LANGUAGE": LANGUAGE_LABELS[language],
        "TONE_INTENSITY": str(config.tone_intensity),
        "ADDITIONAL_CONTEXT": additional_context,
    }
    values.update(fragments)

    template = ENHANCED_TEMPLATE if enhanced else STANDARD_TEMPLATE
    composed = fill_template(template, values)

    # Disabled modules leave empty gaps between sections
    return _EXCESS_BLANK_LINES.sub("\n\n", composed)


def build_meta_prompt(
    prompt_input: PromptGenerationInput,
    config: Optional[EnhancementConfig] = None,
    language: Language = Language.ENGLISH,
    registry: Optional[FragmentRegistry] = None,
) -> str:
    """Render all enhancement fragments for the input and compose the meta-prompt."""
    config = config or EnhancementConfig()
    registry = registry or default_registry()

    request = FragmentRequest(
        business_type=prompt_input.business.type,
        personality=prompt_input.ai_config.personality_enum,
        language=Language(language),
        config=config,
    )
    return compose_meta_prompt(prompt_input, registry.render_all(request), config, language)
