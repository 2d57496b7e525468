"""
Sentiment Detection Module

Indicator tables for seven caller moods, per-personality response
strategies, escalation triggers, and the prompt block that teaches the
voice agent to read and respond to caller emotion.
"""
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping

from src.enhancements.registry import EnhancementModule, FragmentRequest
from src.models.business import Language, Personality
from src.models.enhancement import EnhancementConfig, SentimentDetectionLevel


class SentimentLevel(StrEnum):
    PLEASED = "pleased"
    NEUTRAL = "neutral"
    CONFUSED = "confused"
    IMPATIENT = "impatient"
    FRUSTRATED = "frustrated"
    UPSET = "upset"
    ANGRY = "angry"


class SentimentCategory(StrEnum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class SentimentIndicators:
    keywords: tuple[str, ...]
    phrases: tuple[str, ...]
    vocal_cues: tuple[str, ...]


@dataclass(frozen=True)
class SentimentResponse:
    acknowledgment: str
    strategy: str
    example: str


@dataclass(frozen=True)
class SentimentProfile:
    level: SentimentLevel
    label_en: str
    label_es: str
    indicators: SentimentIndicators
    category: SentimentCategory
    escalation_threshold: int  # 1-5, higher means closer to escalation
    responses: Mapping[Personality, SentimentResponse]


@dataclass(frozen=True)
class EscalationTrigger:
    condition: str
    action: str


def _responses(*triples: tuple[str, str, str]) -> Mapping[Personality, SentimentResponse]:
    professional, friendly, casual = (SentimentResponse(*t) for t in triples)
    return MappingProxyType({
        Personality.PROFESSIONAL: professional,
        Personality.FRIENDLY: friendly,
        Personality.CASUAL: casual,
    })


def _indicators(keywords, phrases, vocal_cues) -> SentimentIndicators:
    return SentimentIndicators(tuple(keywords), tuple(phrases), tuple(vocal_cues))


# Declaration order matters: detection ties resolve to the earlier level.
_LEVELS = (
    SentimentProfile(
        SentimentLevel.PLEASED, "Happy/Satisfied", "Contento/Satisfecho",
        _indicators(
            ["thank you", "thanks", "great", "wonderful", "perfect", "excellent",
             "appreciate", "helpful", "fantastic", "amazing", "awesome"],
            ["that's exactly what I needed", "you've been so helpful", "this is great",
             "I really appreciate it", "that works perfectly", "thank you so much"],
            ["upbeat tone", "enthusiastic", "relieved sounding", "grateful tone"],
        ),
        SentimentCategory.POSITIVE, 1,
        _responses(
            ("I'm glad I could assist you.",
             "Maintain positive momentum and ensure they have everything they need.",
             "I'm pleased I could help with that. Is there anything else I can assist you with today?"),
            ("That's wonderful to hear!",
             "Match their positive energy while wrapping up professionally.",
             "So glad I could help! Is there anything else you need before we finish up?"),
            ("Awesome, happy to help!",
             "Keep the good vibes going.",
             "Great! Anything else I can do for you?"),
        ),
    ),
    SentimentProfile(
        SentimentLevel.NEUTRAL, "Neutral", "Neutral",
        _indicators(
            ["okay", "sure", "fine", "alright", "I see", "understood"],
            ["that works", "sounds good", "I understand", "got it", "makes sense"],
            ["calm tone", "even-paced", "matter-of-fact"],
        ),
        SentimentCategory.NEUTRAL, 1,
        _responses(
            ("Certainly.",
             "Proceed efficiently with the task at hand.",
             "I'll proceed with that now. One moment please."),
            ("Perfect!",
             "Stay warm and keep things moving smoothly.",
             "Great, let me take care of that for you!"),
            ("Cool.",
             "Keep it easy and efficient.",
             "Got it, let me get that done for you."),
        ),
    ),
    SentimentProfile(
        SentimentLevel.CONFUSED, "Confused", "Confundido",
        _indicators(
            ["what", "huh", "confused", "don't understand", "unclear", "lost", "wait", "I'm not sure"],
            ["I don't follow", "what do you mean", "can you explain", "I'm not getting this",
             "that doesn't make sense", "wait, what?", "I'm a little lost here"],
            ["uncertain tone", "questioning inflection", "hesitant", "slow speech"],
        ),
        SentimentCategory.NEUTRAL, 2,
        _responses(
            ("Let me clarify that for you.",
             "Slow down and explain more clearly. Use simpler language.",
             "I apologize for any confusion. Let me explain this more clearly. What I mean is..."),
            ("Sorry about that confusion!",
             "Be patient and rephrase in a different way.",
             "Oops, let me say that differently! What I'm trying to say is..."),
            ("My bad, let me be clearer.",
             "Keep it simple and straightforward.",
             "Sorry, that was confusing. Basically what I mean is..."),
        ),
    ),
    SentimentProfile(
        SentimentLevel.IMPATIENT, "Impatient/Rushed", "Impaciente/Apurado",
        _indicators(
            ["hurry", "quickly", "fast", "already", "waiting", "how long", "come on", "just"],
            ["I don't have all day", "can we speed this up", "I've been waiting", "just tell me",
             "get to the point", "I'm in a rush", "how much longer"],
            ["rapid speech", "sighing", "interrupting", "terse responses"],
        ),
        SentimentCategory.NEGATIVE, 3,
        _responses(
            ("I understand you're pressed for time.",
             "Be concise and efficient. Skip pleasantries.",
             "I understand you're busy. Let me get this done quickly. I just need your [specific info] and we're set."),
            ("I hear you, let's get this done!",
             "Pick up the pace while staying warm.",
             "Totally get it! Let's speed this up. Just need your [info] and you're good to go!"),
            ("Got it, I'll be quick.",
             "Cut to the chase.",
             "No problem, let's make this fast. Just need [info] and you're done."),
        ),
    ),
    SentimentProfile(
        SentimentLevel.FRUSTRATED, "Frustrated", "Frustrado",
        _indicators(
            ["frustrating", "annoying", "ridiculous", "again", "still", "issue", "problem",
             "never works", "always"],
            ["this is frustrating", "I've tried this before", "this keeps happening",
             "why doesn't this work", "I've called multiple times", "no one can help",
             "this is ridiculous"],
            ["exasperated tone", "raised voice", "sighing heavily", "talking faster"],
        ),
        SentimentCategory.NEGATIVE, 4,
        _responses(
            ("I completely understand your frustration, and I apologize for the difficulty you've experienced.",
             "Validate their feelings first. Take ownership. Focus on resolution.",
             "I'm truly sorry you've had this experience. Let me take personal responsibility for resolving this for you today. Here's what I'm going to do..."),
            ("I totally get it, and I'm so sorry you're dealing with this.",
             "Show genuine empathy. Make it personal.",
             "Ugh, that sounds really frustrating and I'm sorry! Let me see what I can do to make this right for you."),
            ("Yeah, that's rough. I'm sorry about that.",
             "Be genuine and solution-focused.",
             "I hear you, that's annoying. Let me see what I can do to fix this for you."),
        ),
    ),
    SentimentProfile(
        SentimentLevel.UPSET, "Upset", "Molesto",
        _indicators(
            ["upset", "angry", "unacceptable", "complaint", "manager", "supervisor", "wrong",
             "terrible", "horrible", "worst"],
            ["I want to speak to someone else", "this is unacceptable", "I'm very upset",
             "I want to file a complaint", "this is the worst", "you people", "I'm done with this"],
            ["raised voice", "angry tone", "speaking very quickly", "clipped responses"],
        ),
        SentimentCategory.NEGATIVE, 5,
        _responses(
            ("I sincerely apologize. Your concerns are completely valid, and I want to make this right.",
             "Deep acknowledgment. Offer escalation. Focus entirely on resolution.",
             "I am truly sorry for this experience. You have every right to be upset. I would like to personally ensure this is resolved. I can also connect you with a manager if you prefer."),
            ("I'm really, really sorry. I understand why you're upset and I don't blame you at all.",
             "Show deep empathy. Offer help and escalation options.",
             "I'm so sorry this happened. You have every right to feel this way. Let me do everything I can to fix this, or I can get my manager on the line - whatever would help most."),
            ("I'm really sorry. I totally understand why you're upset.",
             "Be genuine and offer solutions immediately.",
             "I hear you, and I'm sorry. Let me try to make this right. Would you like me to get someone else on the line who might be able to help more?"),
        ),
    ),
    SentimentProfile(
        SentimentLevel.ANGRY, "Angry", "Enojado",
        _indicators(
            ["furious", "outraged", "sue", "lawyer", "unbelievable", "never again", "cancel",
             "report", "BBB"],
            ["I'm going to sue", "I want my money back", "I'm reporting you",
             "I'm canceling everything", "this is fraud", "I'm calling my lawyer",
             "you'll hear from my attorney"],
            ["yelling", "very loud", "aggressive tone", "threatening"],
        ),
        SentimentCategory.NEGATIVE, 5,
        _responses(
            ("I hear you, and I deeply apologize. Your anger is completely understandable given what you've described.",
             "Immediate de-escalation. Offer to connect with management. Document everything.",
             "I understand you're very upset, and I want you to know your concerns are being heard. I'm going to get a manager for you right now who can address this directly. I'm also documenting everything you've told me."),
            ("I'm so, so sorry. What you've been through sounds terrible, and I completely understand your anger.",
             "Maximum empathy. Immediate escalation offer.",
             "I hear how upset you are, and honestly, I don't blame you. Let me get my manager on the line right now - they can really help with this situation."),
            ("I get it, that's really bad. I'm sorry.",
             "Stay calm. Offer immediate escalation.",
             "I totally understand. Let me get someone with more authority to help you out right away."),
        ),
    ),
)

SENTIMENT_LEVELS: Mapping[SentimentLevel, SentimentProfile] = MappingProxyType(
    {profile.level: profile for profile in _LEVELS}
)

SPANISH_INDICATORS: Mapping[SentimentLevel, SentimentIndicators] = MappingProxyType({
    SentimentLevel.PLEASED: _indicators(
        ["gracias", "perfecto", "excelente", "maravilloso", "genial", "fantastico",
         "increible", "estupendo"],
        ["muchas gracias", "es exactamente lo que necesitaba", "me ha ayudado mucho",
         "que bueno", "se lo agradezco"],
        ["tono alegre", "entusiasta", "aliviado"],
    ),
    SentimentLevel.NEUTRAL: _indicators(
        ["bien", "esta bien", "de acuerdo", "entiendo", "claro"],
        ["me parece bien", "esta bien", "entiendo", "de acuerdo"],
        ["tono calmado", "neutral"],
    ),
    SentimentLevel.CONFUSED: _indicators(
        ["que", "como", "no entiendo", "confundido", "perdido"],
        ["no entiendo", "que quiere decir", "puede explicar", "estoy confundido",
         "no me queda claro"],
        ["tono incierto", "dudoso"],
    ),
    SentimentLevel.IMPATIENT: _indicators(
        ["rapido", "pronto", "ya", "esperando", "apurese"],
        ["tengo prisa", "cuanto tiempo mas", "ya he esperado mucho", "puede apurarse"],
        ["habla rapida", "tono impaciente"],
    ),
    SentimentLevel.FRUSTRATED: _indicators(
        ["frustrante", "molesto", "otra vez", "problema", "nunca"],
        ["esto es frustrante", "ya he llamado antes", "sigue pasando", "nadie me ayuda"],
        ["tono exasperado", "voz elevada"],
    ),
    SentimentLevel.UPSET: _indicators(
        ["molesto", "enojado", "inaceptable", "queja", "gerente"],
        ["quiero hablar con alguien mas", "esto es inaceptable", "estoy muy molesto",
         "quiero poner una queja"],
        ["voz elevada", "tono enojado"],
    ),
    SentimentLevel.ANGRY: _indicators(
        ["furioso", "indignado", "abogado", "demanda", "cancelar"],
        ["voy a demandar", "quiero mi dinero", "voy a reportar", "voy a cancelar todo"],
        ["gritando", "muy fuerte", "agresivo"],
    ),
})

ESCALATION_TRIGGERS: tuple[EscalationTrigger, ...] = (
    EscalationTrigger(
        "Caller requests to speak with a manager or supervisor",
        "Immediately offer to transfer or take a message for callback",
    ),
    EscalationTrigger(
        "Caller mentions legal action (lawyer, sue, attorney)",
        "Express understanding, document concerns, and escalate to management",
    ),
    EscalationTrigger(
        "Caller has expressed frustration 3+ times in the conversation",
        "Proactively offer to connect them with someone who may have more options",
    ),
    EscalationTrigger(
        "Caller threatens to cancel service or leave negative review",
        "Acknowledge their frustration and offer to find a resolution or escalate",
    ),
    EscalationTrigger(
        "Caller uses profanity or becomes verbally aggressive",
        "Stay calm, acknowledge feelings, and offer to connect with management",
    ),
    EscalationTrigger(
        "Issue has persisted across multiple calls",
        "Apologize for the ongoing issue and ensure a supervisor follows up",
    ),
)

_DEESCALATION_TIPS = {
    Language.ENGLISH: (
        "Always validate the caller's feelings first",
        "Never argue or become defensive",
        "Use the caller's name if you know it",
        "Offer concrete solutions, not just apologies",
        "If the situation escalates, stay calm and offer to transfer",
    ),
    Language.SPANISH: (
        "Siempre valida los sentimientos del llamante primero",
        "Nunca discutas ni te pongas a la defensiva",
        "Usa el nombre del llamante si lo sabes",
        "Ofrece soluciones concretas, no solo disculpas",
        "Si la situacion escala, manten la calma y ofrece transferir",
    ),
}

_TEXT = {
    Language.ENGLISH: {
        "header": "## Caller Sentiment Detection",
        "intro": "Pay attention to the caller's emotional tone and adjust your response accordingly:",
        "detect": "Detect",
        "respond": "Respond",
        "vocal": "Vocal cues",
        "spanish": "Spanish cues",
        "escalation": "### Escalation Triggers",
        "escalation_intro": "Offer to transfer to a manager when:",
        "tips": "### De-escalation Tips",
    },
    Language.SPANISH: {
        "header": "## Deteccion de Sentimiento del Llamante",
        "intro": "Presta atencion al tono emocional del llamante y ajusta tu respuesta en consecuencia:",
        "detect": "Detectar",
        "respond": "Responder",
        "vocal": "Señales vocales",
        "spanish": "Señales en español",
        "escalation": "### Disparadores de Escalacion",
        "escalation_intro": "Ofrece transferir a un gerente cuando:",
        "tips": "### Consejos de De-escalacion",
    },
}


def get_sentiment_profile(level: SentimentLevel) -> SentimentProfile:
    return SENTIMENT_LEVELS[SentimentLevel(level)]


def get_sentiment_response(level: SentimentLevel, personality: Personality) -> SentimentResponse:
    return get_sentiment_profile(level).responses[Personality(personality)]


def get_acknowledgment(level: SentimentLevel, personality: Personality) -> str:
    return get_sentiment_response(level, personality).acknowledgment


def should_consider_escalation(level: SentimentLevel) -> bool:
    return get_sentiment_profile(level).escalation_threshold >= 4


def get_negative_sentiment_levels() -> list[SentimentLevel]:
    return [
        profile.level for profile in _LEVELS
        if profile.category == SentimentCategory.NEGATIVE
    ]


def detect_sentiment(text: str) -> SentimentLevel:
    """
    Score caller text against every level's indicators.

    Keyword substring hits count 1, phrase hits count 2. The highest score
    wins; ties go to the level declared first. No hits at all is NEUTRAL.
    """
    lowered = text.lower()
    best_level, best_score = SentimentLevel.NEUTRAL, 0

    for profile in _LEVELS:
        score = sum(1 for k in profile.indicators.keywords if k.lower() in lowered)
        score += sum(2 for p in profile.indicators.phrases if p.lower() in lowered)
        if score > best_score:
            best_level, best_score = profile.level, score

    return best_level


def get_sentiment_summary() -> str:
    return (
        "The AI will detect caller sentiment and adjust responses accordingly:\n"
        "- Positive callers: Matched enthusiasm, efficient service\n"
        "- Confused callers: Patient clarification, simpler explanations\n"
        "- Impatient callers: Concise responses, faster pacing\n"
        "- Frustrated callers: Validation, ownership, solution focus\n"
        "- Upset/Angry callers: Deep empathy, escalation offers, documentation\n"
    )


def _quoted(items) -> str:
    return '"' + '", "'.join(items) + '"'


def render_sentiment_instructions(
    personality: Personality,
    language: Language = Language.ENGLISH,
    detection_level: SentimentDetectionLevel = SentimentDetectionLevel.BASIC,
) -> str:
    """
    Render the sentiment block of the meta-prompt.

    NONE renders nothing. ADVANCED adds vocal cues to every level and, for
    Spanish output, the Spanish-language indicator phrases.
    """
    if detection_level == SentimentDetectionLevel.NONE:
        return ""

    language = Language(language)
    personality = Personality(personality)
    text = _TEXT[language]
    advanced = detection_level == SentimentDetectionLevel.ADVANCED

    lines = [text["header"], "", text["intro"], ""]

    for profile in _LEVELS:
        label = profile.label_es if language == Language.SPANISH else profile.label_en
        response = profile.responses[personality]
        indicators = profile.indicators

        lines.append(f"### {label}")
        lines.append(
            f"**{text['detect']}**: Keywords like {_quoted(indicators.keywords[:4])}"
            f' or phrases like "{indicators.phrases[0]}"'
        )
        if advanced:
            lines.append(f"**{text['vocal']}**: {', '.join(indicators.vocal_cues)}")
            if language == Language.SPANISH:
                spanish = SPANISH_INDICATORS[profile.level]
                lines.append(
                    f"**{text['spanish']}**: {_quoted(spanish.keywords[:4])}"
                    f' / "{spanish.phrases[0]}"'
                )
        lines.append(f"**{text['respond']}**: {response.strategy}")
        lines.append(f'*Example*: "{response.example}"')
        lines.append("")

    lines.append(text["escalation"])
    lines.append(text["escalation_intro"])
    lines.extend(f"- {trigger.condition}" for trigger in ESCALATION_TRIGGERS)
    lines.append("")

    lines.append(text["tips"])
    lines.extend(f"- {tip}" for tip in _DEESCALATION_TIPS[language])

    return "\n".join(lines) + "\n"


class SentimentEnhancement(EnhancementModule):
    key = "SENTIMENT_INSTRUCTIONS"

    def is_enabled(self, config: EnhancementConfig) -> bool:
        return config.sentiment_detection_level != SentimentDetectionLevel.NONE

    def render(self, request: FragmentRequest) -> str:
        return render_sentiment_instructions(
            request.personality,
            request.language,
            request.config.sentiment_detection_level,
        )
