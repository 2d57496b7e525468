"""
Caller Context Rendering

Pure functions over a CallerContext: the new/repeat caller prompt
fragment, the runtime variables handed to the voice platform, VIP and
follow-up hints. Lookups live in services/caller_context_service.py.
"""
import datetime as dt
import math
from typing import Optional

from src.enhancements.registry import EnhancementModule, FragmentRequest
from src.models.base import utc_now
from src.models.business import Language
from src.models.caller import CallerContext, CallerPreferences
from src.models.enhancement import EnhancementConfig

VIP_CALL_THRESHOLD = 5
VIP_APPOINTMENT_THRESHOLD = 3
RECENT_VISIT_DAYS = 7


def render_caller_context(context: CallerContext, language: Language = Language.ENGLISH) -> str:
    """Prompt fragment describing the person on the line."""
    if not context.is_repeat_caller:
        return _new_caller_fragment(language)
    return _repeat_caller_fragment(context, language)


def _new_caller_fragment(language: Language) -> str:
    if language == Language.SPANISH:
        return (
            "## Contexto del Llamante\n"
            "Este es un NUEVO LLAMANTE. Haz una excelente primera impresion!\n"
            "- Se acogedor y servicial\n"
            "- Explica los servicios si preguntan\n"
            "- Captura su informacion de contacto para futuras referencias\n"
            "- Pregunta su nombre cuando sea apropiado\n"
        )
    return (
        "## Caller Context\n"
        "This is a NEW CALLER. Make a great first impression!\n"
        "- Be welcoming and helpful\n"
        "- Explain services if asked\n"
        "- Capture their contact information for future reference\n"
        "- Ask for their name when appropriate\n"
    )


def _repeat_caller_fragment(context: CallerContext, language: Language) -> str:
    prefs = context.known_preferences
    last_service = context.appointment_history.last_service_booked
    negative = bool(context.sentiment and context.sentiment.had_negative_experience)

    if language == Language.SPANISH:
        lines = [
            "## Contexto del Llamante",
            f"Este es un LLAMANTE RECURRENTE ({context.previous_call_count} llamadas anteriores).",
        ]
        if context.known_name:
            lines.append(f"- Su nombre es {context.known_name}")
        if context.last_call_outcome:
            lines.append(f"- Resultado de ultima llamada: {context.last_call_outcome}")
        if last_service:
            lines.append(f"- Ultimo servicio reservado: {last_service}")
        if prefs.preferred_service:
            lines.append(f"- Generalmente reserva: {prefs.preferred_service}")
        if negative:
            lines.append("- NOTA: Tuvo una experiencia negativa anteriormente. Se extra cuidadoso y empatico.")
        lines += [
            "",
            "Consejos de personalizacion:",
            '- Reconocelos: "Que gusto escucharle de nuevo!"',
            "- Referencia su historial si es relevante",
            "- Omite preguntas redundantes si ya tienes su informacion",
        ]
        return "\n".join(lines) + "\n"

    lines = [
        "## Caller Context",
        f"This is a REPEAT CALLER ({context.previous_call_count} previous calls).",
    ]
    if context.known_name:
        lines.append(f"- Their name is {context.known_name}")
    if context.last_call_outcome:
        lines.append(f"- Last call outcome: {context.last_call_outcome}")
    if last_service:
        lines.append(f"- Last service booked: {last_service}")
    if prefs.preferred_service:
        lines.append(f"- They typically book: {prefs.preferred_service}")
    if prefs.preferred_provider:
        lines.append(f"- Preferred provider: {prefs.preferred_provider}")
    if prefs.preferred_time:
        lines.append(f"- Usually prefers: {prefs.preferred_time} appointments")
    if negative:
        lines.append("- NOTE: They had a negative experience previously. Be extra careful and empathetic.")
    lines += [
        "",
        "Personalization tips:",
        '- Acknowledge them: "Good to hear from you again!"',
        "- Reference their history if relevant",
        "- Skip redundant questions if you have their info",
    ]
    return "\n".join(lines) + "\n"


def summarize_preferences(preferences: CallerPreferences) -> str:
    parts = []
    if preferences.preferred_service:
        parts.append(f"prefers {preferences.preferred_service}")
    if preferences.preferred_provider:
        parts.append(f"with {preferences.preferred_provider}")
    if preferences.preferred_time:
        parts.append(f"at {preferences.preferred_time}")
    if preferences.preferred_day:
        parts.append(f"on {preferences.preferred_day}s")
    return ", ".join(parts) if parts else "No known preferences"


def summarize_context(context: CallerContext) -> str:
    if not context.is_repeat_caller:
        return "New caller - first time calling"

    parts = [f"Called {context.previous_call_count} times before"]
    if context.known_name:
        parts.append(f"Name: {context.known_name}")
    if context.appointment_history.last_service_booked:
        parts.append(f"Last booked: {context.appointment_history.last_service_booked}")
    if context.sentiment and context.sentiment.had_negative_experience:
        parts.append("Had negative experience - be extra helpful")
    return ". ".join(parts)


def build_caller_dynamic_vars(context: CallerContext) -> dict[str, str]:
    """String-only variables injected into the voice runtime per call."""
    return {
        "is_repeat_caller": "true" if context.is_repeat_caller else "false",
        "caller_name": context.known_name or "",
        "previous_call_count": str(context.previous_call_count),
        "caller_preferences": summarize_preferences(context.known_preferences),
        "last_service": context.appointment_history.last_service_booked or "",
        "caller_context_summary": summarize_context(context),
    }


def is_vip_caller(context: CallerContext) -> bool:
    return (
        context.previous_call_count >= VIP_CALL_THRESHOLD
        or context.appointment_history.count >= VIP_APPOINTMENT_THRESHOLD
    )


def get_personalized_greeting(
    context: CallerContext,
    business_name: str,
    ai_name: str,
    language: Language = Language.ENGLISH,
) -> str:
    spanish = language == Language.SPANISH

    if not context.is_repeat_caller:
        if spanish:
            return f"Gracias por llamar a {business_name}. Soy {ai_name}, en que puedo ayudarle?"
        return f"Thank you for calling {business_name}. This is {ai_name}, how may I help you?"

    if context.known_name:
        if spanish:
            return (
                f"Hola {context.known_name}! Gracias por llamar a {business_name}. "
                f"Soy {ai_name}, que gusto escucharle de nuevo. En que puedo ayudarle hoy?"
            )
        return (
            f"Hi {context.known_name}! Thanks for calling {business_name}. "
            f"This is {ai_name}, great to hear from you again. How can I help you today?"
        )

    if spanish:
        return f"Gracias por llamar a {business_name} de nuevo. Soy {ai_name}, en que puedo ayudarle hoy?"
    return f"Thanks for calling {business_name} again. This is {ai_name}, how can I help you today?"


def _as_utc(value: dt.datetime) -> dt.datetime:
    # Stored dates without tzinfo are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.UTC)
    return value


def get_suggested_follow_up(
    context: CallerContext,
    now: Optional[dt.datetime] = None,
) -> Optional[str]:
    """
    Hint for the agent about why a repeat caller may be calling.

    A recorded negative experience always wins. After that: a failed
    booking attempt, then an upcoming appointment, then a visit within
    the last week. New callers get no hint.
    """
    if not context.is_repeat_caller:
        return None

    if context.sentiment and context.sentiment.had_negative_experience:
        return "Previous negative experience noted. Be especially attentive."

    if context.last_call_outcome == "no_availability":
        return "They couldn't book last time due to availability. Check if they're still looking."

    last_appointment = context.appointment_history.last_appointment_date
    if last_appointment is not None:
        now = _as_utc(now or utc_now())
        elapsed = now - _as_utc(last_appointment)
        days_since = math.floor(elapsed.total_seconds() / 86400)

        if days_since < 0:
            return "They have an upcoming appointment. May be calling about it."
        if days_since <= RECENT_VISIT_DAYS:
            return "They recently visited. May be calling with follow-up questions."

    return None


def should_ask_for_name(context: CallerContext) -> bool:
    if context.known_name:
        return False
    return context.is_repeat_caller and context.previous_call_count >= 2


def render_caller_context_handling(language: Language = Language.ENGLISH) -> str:
    """
    Meta-prompt block teaching the generated script to use the per-call
    runtime variables. Double-brace markers are filled by the voice
    runtime, not by the composer.
    """
    if language == Language.SPANISH:
        return (
            "<caller_context_handling>\n"
            "## Manejo de Contexto del Llamante\n\n"
            "El sistema proporcionara contexto sobre el llamante si esta disponible:\n"
            '- {{is_repeat_caller}} - "true" si han llamado antes\n'
            "- {{caller_name}} - Su nombre si se conoce\n"
            "- {{previous_call_count}} - Cuantas veces han llamado\n"
            "- {{last_service}} - Ultimo servicio reservado\n\n"
            "Para llamantes recurrentes:\n"
            '- Reconocelos: "Que gusto escucharle de nuevo!"\n'
            "- Referencia su historial si es relevante\n"
            "- Omite preguntas redundantes si ya tienes su informacion\n"
            "- Usa su nombre cuando sea apropiado\n\n"
            "Para llamantes nuevos:\n"
            "- Hazlos sentir bienvenidos\n"
            "- Captura su informacion de contacto\n"
            "- Explica los servicios si preguntan\n"
            "</caller_context_handling>"
        )
    return (
        "<caller_context_handling>\n"
        "## Caller Context Handling\n\n"
        "The system will provide context about the caller if available:\n"
        '- {{is_repeat_caller}} - "true" if they\'ve called before\n'
        "- {{caller_name}} - Their name if known\n"
        "- {{previous_call_count}} - How many times they've called\n"
        "- {{last_service}} - Last service they booked\n\n"
        "For repeat callers:\n"
        '- Acknowledge them: "Good to hear from you again!"\n'
        "- Reference their history if relevant\n"
        "- Skip redundant questions if you already have their info\n"
        "- Use their name when appropriate\n\n"
        "For new callers:\n"
        "- Make a great first impression\n"
        "- Capture their contact information\n"
        "- Explain services if they ask\n"
        "</caller_context_handling>"
    )


class CallerContextEnhancement(EnhancementModule):
    key = "CALLER_CONTEXT"

    def is_enabled(self, config: EnhancementConfig) -> bool:
        return config.caller_context_enabled

    def render(self, request: FragmentRequest) -> str:
        return render_caller_context_handling(request.language)
