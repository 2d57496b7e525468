"""
Industry Knowledge Module

Tone guidance, vocabulary, common call scenarios and guardrails for 14
business verticals. Free-text business types are mapped onto a profile;
anything unrecognized gets the generic "other" profile.
"""
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from src.enhancements.registry import EnhancementModule, FragmentRequest
from src.models.business import Language, Personality
from src.models.enhancement import EnhancementConfig

FALLBACK_INDUSTRY = "other"


@dataclass(frozen=True)
class Scenario:
    trigger: str
    instruction: str


@dataclass(frozen=True)
class IndustryProfile:
    key: str
    display_name: str
    personality_modifiers: Mapping[Personality, str]
    terminology: tuple[str, ...]
    common_phrases: tuple[str, ...]
    scenarios: tuple[Scenario, ...]
    guardrails: tuple[str, ...]
    urgency_keywords: tuple[str, ...]
    typical_services: tuple[str, ...]
    peak_times: Optional[str] = None
    spanish_terminology: tuple[str, ...] = ()

    def tone_guidance(self, personality: Personality) -> str:
        return self.personality_modifiers[Personality(personality)]


def _profile(
    key: str,
    display_name: str,
    modifiers: tuple[str, str, str],
    terminology: list[str],
    phrases: list[str],
    scenarios: list[tuple[str, str]],
    guardrails: list[str],
    urgency: list[str],
    services: list[str],
    peak_times: str,
    spanish: list[str],
) -> IndustryProfile:
    professional, friendly, casual = modifiers
    return IndustryProfile(
        key=key,
        display_name=display_name,
        personality_modifiers=MappingProxyType({
            Personality.PROFESSIONAL: professional,
            Personality.FRIENDLY: friendly,
            Personality.CASUAL: casual,
        }),
        terminology=tuple(terminology),
        common_phrases=tuple(phrases),
        scenarios=tuple(Scenario(trigger, instruction) for trigger, instruction in scenarios),
        guardrails=tuple(guardrails),
        urgency_keywords=tuple(urgency),
        typical_services=tuple(services),
        peak_times=peak_times,
        spanish_terminology=tuple(spanish),
    )


_PROFILES = [
    _profile(
        "dental", "Dental Practice",
        (
            "Use reassuring, clinical language. Address patients respectfully. Be empathetic as many patients experience dental anxiety.",
            "Be warm and calming. Acknowledge that dental visits can be stressful. Use a soothing tone while remaining informative.",
            "Keep it light but caring. Help put nervous callers at ease. Be approachable while still conveying professionalism.",
        ),
        ["cleaning", "checkup", "crown", "filling", "x-rays", "hygienist", "extraction", "root canal",
         "whitening", "orthodontics", "braces", "Invisalign", "implant", "dentures", "veneer", "cavity"],
        ["When was your last cleaning?",
         "Are you experiencing any discomfort?",
         "Is this for a routine visit or do you have a specific concern?",
         "Have you been seen at our office before?"],
        [("pain or emergency", "Treat as urgent. Offer same-day or next available appointment. Ask about severity and how long they've had pain."),
         ("insurance question", "Offer to verify coverage. Don't quote specific prices. Suggest they bring their insurance card to the visit."),
         ("nervous or anxious", "Be extra reassuring. Mention sedation options if available. Emphasize the gentle approach of the practice."),
         ("broken tooth or knocked out", "This is urgent. Get them in same-day if possible. Advise keeping knocked-out tooth moist.")],
        ["Never provide medical advice or diagnosis",
         "Always recommend seeing the dentist for any pain",
         "Don't discuss specific treatment costs without verification",
         "Don't recommend specific medications",
         "Don't minimize pain complaints - take all concerns seriously"],
        ["pain", "swelling", "bleeding", "broken", "knocked out", "emergency", "abscess", "infection", "throbbing"],
        ["Cleaning", "Exam", "X-rays", "Filling", "Crown", "Root Canal", "Whitening", "Emergency Visit"],
        "Monday mornings and lunch hours are typically busy",
        ["limpieza", "dolor", "emergencia", "corona", "extracción", "blanqueamiento"],
    ),
    _profile(
        "medical", "Medical Practice",
        (
            "Maintain HIPAA-conscious communication. Be respectful and discreet. Use appropriate medical terminology without being condescending.",
            "Be warm but maintain appropriate clinical boundaries. Show empathy for health concerns while being efficient.",
            "Be approachable while maintaining professionalism. Health matters are serious, so balance warmth with respect.",
        ),
        ["appointment", "checkup", "physical", "lab work", "prescription", "referral", "follow-up", "specialist",
         "symptoms", "vaccination", "immunization", "blood work", "urgent care", "telehealth"],
        ["Is this for a new concern or a follow-up?",
         "Who is your primary care provider?",
         "When did you last see a doctor?",
         "Is this urgent or can it wait for a regular appointment?"],
        [("emergency symptoms", "If caller describes chest pain, difficulty breathing, stroke symptoms, or severe bleeding, advise calling 911 immediately."),
         ("prescription refill", "Take their name, DOB, medication name, and pharmacy. Note that the doctor will review and call in if approved."),
         ("lab results", "Cannot provide results over phone. Offer to have a nurse call back or schedule a follow-up appointment."),
         ("sick child", "Ask about symptoms and urgency. Same-day sick visits may be available. Check for fever, breathing issues.")],
        ["NEVER provide medical advice or diagnosis",
         "Do not discuss specific test results or conditions over the phone",
         "For true emergencies, always advise calling 911",
         "Never confirm or deny a patient's medical history to unknown callers",
         "Do not recommend stopping or changing medications",
         "Be HIPAA-conscious in all communications"],
        ["chest pain", "breathing", "stroke", "bleeding", "unconscious", "fever", "allergic reaction", "severe", "emergency"],
        ["Annual Physical", "Sick Visit", "Follow-up", "Vaccination", "Lab Work", "Telehealth Consult"],
        "Monday mornings and flu season are particularly busy",
        ["cita", "dolor", "fiebre", "emergencia", "vacuna", "análisis de sangre"],
    ),
    _profile(
        "salon", "Salon / Barbershop",
        (
            "Be polished and attentive. Treat each client as a valued guest. Use proper service terminology.",
            "Be warm, welcoming, and enthusiastic. Create a sense of excitement about their upcoming visit.",
            "Be relaxed and personable. Chat naturally like a friend who happens to work at a great salon.",
        ),
        ["haircut", "color", "highlights", "balayage", "blowout", "trim", "style", "stylist", "consultation",
         "touch-up", "roots", "extensions", "treatment", "conditioning", "keratin", "perm"],
        ["Who is your usual stylist?",
         "What service are you looking for today?",
         "Would you like to book a consultation first?",
         "Do you have a color in mind?"],
        [("new client", "Welcome them warmly. Suggest a consultation if it's a significant change. Ask about their hair goals."),
         ("color correction", "This requires extra time. Suggest an in-person consultation. Mention it may take multiple sessions."),
         ("special event", "Ask about the event date and type. Suggest booking a trial run for weddings. Ensure adequate time is scheduled."),
         ("walk-in inquiry", "Check same-day availability. If busy, offer next available slot or add to walk-in list.")],
        ["Don't guarantee specific results without a consultation",
         "Don't quote exact prices for color services without seeing the hair",
         "Don't promise specific stylists without checking availability",
         "Suggest patch tests for new color clients when appropriate"],
        ["wedding", "event", "emergency", "today", "asap", "same day", "last minute"],
        ["Haircut", "Color", "Highlights", "Blowout", "Style", "Treatment", "Extensions"],
        "Weekends and pre-holiday periods are busiest",
        ["corte", "color", "cita", "estilista", "tinte", "tratamiento"],
    ),
    _profile(
        "auto", "Auto Shop / Mechanic",
        (
            "Be knowledgeable and trustworthy. Explain services clearly without being condescending. Build confidence in the shop's expertise.",
            "Be helpful and understanding. Car troubles are stressful - show empathy while being efficient.",
            "Be straightforward and relatable. Talk like a helpful neighbor who knows cars.",
        ),
        ["oil change", "brake service", "tire rotation", "alignment", "diagnostic", "check engine light",
         "transmission", "battery", "inspection", "tune-up", "coolant", "AC service", "timing belt"],
        ["What seems to be the issue with your vehicle?",
         "What year, make, and model is your car?",
         "Is the check engine light on?",
         "Can you drive the car in or do you need a tow?"],
        [("check engine light", "Recommend a diagnostic scan. Don't guess at the problem. Schedule them to come in soon."),
         ("strange noise", "Ask when it happens (braking, turning, accelerating). Get as much detail as possible for the technician."),
         ("breakdown or won't start", "Ask if they need towing. Check if the shop offers towing or can recommend one. Treat as urgent."),
         ("price shopping", "Offer to provide an estimate after inspection. Explain that some issues require diagnosis first.")],
        ["Don't diagnose problems over the phone",
         "Don't guarantee repair costs without inspection",
         "Don't criticize other shops or previous work",
         "If it sounds unsafe to drive, recommend towing"],
        ["broke down", "won't start", "smoking", "overheating", "grinding", "leak", "tow", "stranded"],
        ["Oil Change", "Brake Service", "Tire Rotation", "Diagnostic", "Inspection", "AC Service"],
        "Monday mornings and before long weekends are busy",
        ["cambio de aceite", "frenos", "llantas", "alineación", "diagnóstico", "batería"],
    ),
    _profile(
        "legal", "Law Office",
        (
            "Maintain utmost professionalism and discretion. Be formal and respectful. Convey competence and trustworthiness.",
            "Be warm while maintaining professional boundaries. Legal matters are stressful - show empathy.",
            "Be approachable but still maintain appropriate formality. Legal callers expect a degree of professionalism.",
        ),
        ["consultation", "case", "attorney", "matter", "retainer", "client", "representation", "appointment",
         "confidential", "litigation", "settlement", "filing", "court date"],
        ["What type of legal matter is this regarding?",
         "Are you a current client of the firm?",
         "Would you like to schedule a consultation?",
         "Is this regarding an existing case?"],
        [("new potential client", "Be welcoming. Ask about the type of matter. Offer a consultation. Don't provide legal advice."),
         ("existing case inquiry", "Take their name and case number if they have it. Offer to have their attorney call back."),
         ("court date question", "Don't provide case information to unverified callers. Offer to have staff verify and call back."),
         ("emergency or arrest", "Treat as urgent. Get contact information immediately. Note it's time-sensitive.")],
        ["NEVER provide legal advice",
         "Maintain strict confidentiality",
         "Don't confirm or deny client relationships to unknown callers",
         "Don't discuss case details",
         "Don't guarantee outcomes or results",
         "Note that consultations may have a fee"],
        ["arrest", "custody", "court tomorrow", "served papers", "emergency", "deadline", "jail"],
        ["Consultation", "Case Review", "Representation", "Document Preparation", "Court Appearance"],
        "Court schedules vary; Mondays and after weekends can be busy",
        ["abogado", "consulta", "caso", "cita", "representación", "corte"],
    ),
    _profile(
        "spa", "Spa / Wellness Center",
        (
            "Be serene and composed. Create a sense of calm and luxury. Use elegant, refined language.",
            "Be warm and nurturing. Help callers feel the relaxation starts with your voice.",
            "Be relaxed and welcoming. Make booking feel effortless and inviting.",
        ),
        ["massage", "facial", "treatment", "package", "couples", "aromatherapy", "hot stone", "deep tissue",
         "relaxation", "body wrap", "scrub", "manicure", "pedicure", "wellness"],
        ["What type of treatment are you interested in?",
         "Do you have a preferred therapist?",
         "Is this for a special occasion?",
         "Would you like to add any enhancements to your service?"],
        [("gift certificate inquiry", "Explain gift certificate options. Mention popular packages. Offer to email or mail the certificate."),
         ("couples treatment", "Check room availability for couples. Mention packages that include extras."),
         ("first-time client", "Welcome them warmly. Suggest arriving early to enjoy amenities. Mention what to expect."),
         ("pregnancy", "Ask how far along they are. Note prenatal massage has specific requirements. Ensure they book appropriate services.")],
        ["Don't recommend treatments for medical conditions",
         "Note contraindications (pregnancy, certain health conditions)",
         "Don't provide medical or therapeutic advice",
         "Suggest consulting a doctor for health concerns"],
        ["today", "gift", "special occasion", "anniversary", "birthday", "same day"],
        ["Swedish Massage", "Deep Tissue", "Facial", "Body Wrap", "Manicure", "Pedicure", "Couples Massage"],
        "Weekends, Valentine's Day, Mother's Day, and holidays are peak times",
        ["masaje", "facial", "tratamiento", "relajación", "manicura", "pedicura"],
    ),
    _profile(
        "restaurant", "Restaurant",
        (
            "Be courteous and efficient. Represent the establishment with grace. Handle requests smoothly.",
            "Be warm and welcoming. Make callers excited about dining with you.",
            "Be personable and upbeat. Chat naturally while being helpful.",
        ),
        ["reservation", "party size", "seating", "table", "menu", "special", "dietary", "allergy",
         "private dining", "takeout", "delivery", "catering", "wait list", "patio"],
        ["For how many guests?",
         "What date and time were you thinking?",
         "Do you have any dietary restrictions or allergies?",
         "Would you prefer indoor or patio seating?"],
        [("large party", "Parties over 6-8 may need special arrangements. Mention private dining if available. May require deposit."),
         ("allergy or dietary", "Note all dietary needs carefully. Mention the chef can accommodate most requests. Confirm at booking."),
         ("special occasion", "Ask about the occasion. Offer to note it for the server. Mention any special touches available."),
         ("same-day reservation", "Check availability. If busy, offer alternative times or waitlist options.")],
        ["Don't guarantee specific tables without checking",
         "Note food allergies clearly - this is a safety issue",
         "Be honest about wait times",
         "Don't overcommit on custom menu requests"],
        ["tonight", "today", "large party", "special occasion", "allergy", "celebration"],
        ["Dinner Reservation", "Lunch Reservation", "Private Dining", "Catering", "Takeout Order"],
        "Friday and Saturday evenings, holidays, and special occasions",
        ["reservación", "mesa", "menú", "alergia", "para llevar", "cena"],
    ),
    _profile(
        "fitness", "Fitness / Gym",
        (
            "Be energetic yet polished. Convey expertise and motivation. Be encouraging.",
            "Be enthusiastic and supportive. Make fitness feel accessible and fun.",
            "Be motivating and relatable. Talk like a workout buddy who wants to help.",
        ),
        ["membership", "personal training", "class", "session", "assessment", "orientation", "guest pass",
         "trainer", "group fitness", "boot camp", "yoga", "spinning", "trial", "freeze"],
        ["Are you interested in membership or classes?",
         "Have you worked with a personal trainer before?",
         "What are your fitness goals?",
         "Would you like to schedule a tour?"],
        [("new member inquiry", "Offer a tour or trial. Ask about fitness goals. Be welcoming and non-intimidating."),
         ("personal training", "Ask about goals and experience level. Offer a complimentary assessment if available."),
         ("cancel or freeze", "Express understanding. Note their request. Mention any policies or requirements."),
         ("class schedule", "Provide class times. Mention if registration is required. Suggest popular classes for beginners.")],
        ["Don't provide specific exercise or nutrition advice",
         "Don't guarantee results",
         "Recommend consulting a doctor before starting new exercise programs",
         "Be inclusive - fitness is for everyone"],
        ["today", "trial", "start", "now", "goal", "event"],
        ["Membership", "Personal Training", "Group Classes", "Assessment", "Tour"],
        "January (New Year's), mornings before work, and evenings after work",
        ["membresía", "entrenador", "clase", "gimnasio", "ejercicio", "meta"],
    ),
    _profile(
        "real_estate", "Real Estate",
        (
            "Be polished and knowledgeable. Convey market expertise. Be responsive and helpful.",
            "Be warm and personable. Buying/selling a home is emotional - show you care.",
            "Be approachable and easy to talk to. Real estate is personal - connect naturally.",
        ),
        ["listing", "showing", "buyer", "seller", "property", "open house", "offer", "closing", "mortgage",
         "pre-approval", "inspection", "appraisal", "market analysis", "agent"],
        ["Are you looking to buy or sell?",
         "What area are you interested in?",
         "What's your timeline?",
         "Have you been pre-approved for a mortgage?"],
        [("buying inquiry", "Ask about their preferred area, budget, and timeline. Offer to set up a buyer consultation."),
         ("selling inquiry", "Offer a market analysis or home valuation. Ask about their timeline and reason for selling."),
         ("property inquiry", "Note the specific property address. Offer to schedule a showing or send more information."),
         ("pre-qualified buyer", "Treat as priority. They're ready to act. Offer immediate showing availability.")],
        ["Don't provide specific property values without proper analysis",
         "Don't discuss financing terms in detail - refer to lender",
         "Don't discriminate or steer based on protected classes",
         "Don't make promises about timeline or offers"],
        ["pre-approved", "relocating", "closing", "deadline", "offer", "just listed", "open house"],
        ["Buyer Consultation", "Listing Appointment", "Home Valuation", "Property Showing", "Open House"],
        "Spring and summer are peak seasons; weekends are busy for showings",
        ["propiedad", "comprar", "vender", "casa", "agente", "hipoteca"],
    ),
    _profile(
        "pet_care", "Pet Care / Veterinary",
        (
            "Be compassionate and competent. Pet owners worry about their fur babies - be reassuring.",
            "Be warm and caring. Show genuine affection for animals. Put worried pet parents at ease.",
            "Be relaxed and animal-loving. Talk naturally about pets. Be understanding and kind.",
        ),
        ["appointment", "checkup", "vaccination", "grooming", "boarding", "neuter", "spay", "microchip",
         "flea treatment", "dental cleaning", "emergency", "wellness exam", "pet", "fur baby"],
        ["What type of pet do you have?",
         "What's your pet's name?",
         "Is this for a routine visit or is something wrong?",
         "When was your pet's last visit?"],
        [("pet emergency", "Treat as urgent. Ask about symptoms. If life-threatening, may need to direct to emergency vet."),
         ("new patient", "Welcome them. Ask about the pet type, age, and any immediate concerns. Request vaccination records."),
         ("sick pet", "Ask about symptoms, when they started, and severity. Schedule appropriately based on urgency."),
         ("boarding inquiry", "Ask about dates, pet type, and any special needs. Mention vaccination requirements.")],
        ["Don't provide medical advice for pets",
         "For emergencies, know the nearest emergency vet if your practice isn't 24/7",
         "Note all symptoms carefully for the veterinarian",
         "Don't minimize pet owner concerns"],
        ["emergency", "poisoned", "hit by car", "not breathing", "bleeding", "seizure", "collapsed", "ate something"],
        ["Wellness Exam", "Vaccination", "Spay/Neuter", "Dental Cleaning", "Grooming", "Boarding"],
        "Mornings, Saturdays, and holiday seasons for boarding",
        ["mascota", "veterinario", "cita", "vacuna", "emergencia", "perro", "gato"],
    ),
    _profile(
        "photography", "Photography Studio",
        (
            "Be artistic and polished. Convey creativity and expertise. Discuss their vision.",
            "Be enthusiastic and collaborative. Make them excited about capturing special moments.",
            "Be creative and approachable. Talk about their ideas naturally. Build rapport.",
        ),
        ["session", "shoot", "portrait", "package", "prints", "digital files", "album", "editing", "location",
         "studio", "engagement", "headshot", "family portrait", "event"],
        ["What type of session are you interested in?",
         "When is the date of your event?",
         "Do you have a location in mind?",
         "What's your vision for the shoot?"],
        [("wedding inquiry", "Ask for the date first - availability is key. Discuss packages and vision. Offer a consultation."),
         ("family portrait", "Ask about family size, ages of children, preferred location. Suggest best times for lighting."),
         ("corporate headshot", "Ask about number of people, timeline, and usage. Mention group rates for multiple people."),
         ("event photography", "Get event date, type, duration, and coverage needs. Mention editing turnaround time.")],
        ["Don't commit to dates without checking calendar",
         "Be clear about what's included in packages",
         "Discuss deposits and payment terms",
         "Set realistic expectations for delivery timelines"],
        ["wedding", "event", "deadline", "next week", "rush", "same day", "urgent"],
        ["Portrait Session", "Wedding Photography", "Event Coverage", "Headshots", "Family Portraits"],
        "Wedding season (spring/fall), holidays, and graduation season",
        ["sesión", "fotos", "retrato", "boda", "evento", "cita"],
    ),
    _profile(
        "cleaning", "Cleaning Service",
        (
            "Be efficient and trustworthy. Convey reliability and attention to detail.",
            "Be helpful and accommodating. Make scheduling easy and stress-free.",
            "Be straightforward and personable. Talk naturally about their cleaning needs.",
        ),
        ["deep clean", "regular cleaning", "move-in", "move-out", "estimate", "recurring", "one-time",
         "weekly", "bi-weekly", "monthly", "supplies", "green cleaning", "commercial"],
        ["Is this for a home or business?",
         "How many bedrooms and bathrooms?",
         "Are you looking for one-time or recurring service?",
         "Do you have any specific areas of concern?"],
        [("estimate request", "Ask about property size, type, and specific needs. Offer in-home estimate for accurate pricing."),
         ("move-in/move-out", "These require more time. Ask about property condition and timeline. May need premium pricing."),
         ("recurring service", "Discuss frequency options. Mention recurring customer benefits. Ask about preferred day/time."),
         ("special request", "Note any specific needs (allergies, pets, restricted areas). Confirm team can accommodate.")],
        ["Be clear about what standard service includes",
         "Note any extra charges for additional services",
         "Ask about pets and allergies",
         "Discuss access arrangements"],
        ["same day", "emergency", "moving", "today", "tomorrow", "party", "guests coming"],
        ["Standard Cleaning", "Deep Clean", "Move-In/Out Clean", "Recurring Weekly", "Recurring Bi-Weekly"],
        "Spring (spring cleaning), before holidays, and move-in seasons",
        ["limpieza", "profunda", "estimado", "semanal", "mensual", "casa"],
    ),
    _profile(
        "hvac", "HVAC / Heating & Cooling",
        (
            "Be knowledgeable and trustworthy. Explain technical matters clearly. Be responsive to urgent needs.",
            "Be helpful and understanding. Temperature issues are uncomfortable - show empathy.",
            "Be straightforward and helpful. Explain things in plain terms. Be responsive.",
        ),
        ["AC", "heating", "furnace", "air conditioning", "HVAC", "maintenance", "filter", "thermostat",
         "duct", "vent", "tune-up", "repair", "installation", "emergency service"],
        ["Is your heat or AC not working?",
         "What's happening with your system?",
         "When did you first notice the issue?",
         "What type of system do you have?"],
        [("no heat in winter", "Treat as urgent. Get them scheduled ASAP. Ask if they have alternative heat sources."),
         ("no AC in summer", "Treat as priority, especially for elderly or health concerns. Schedule same-day if possible."),
         ("maintenance/tune-up", "Recommend seasonal maintenance. Explain benefits of regular service."),
         ("strange noise or smell", "Ask for details. Gas smell = immediate safety concern. Advise leaving home if gas suspected.")],
        ["Gas smell is an emergency - advise caller to leave home and call gas company",
         "Don't diagnose complex issues over the phone",
         "Be honest about service call fees",
         "Safety first - don't advise DIY for gas or electrical issues"],
        ["no heat", "no AC", "gas smell", "emergency", "not working", "frozen", "overheating", "smoke"],
        ["AC Repair", "Heating Repair", "Maintenance", "Tune-Up", "Installation", "Emergency Service"],
        "First hot days of summer and first cold days of winter",
        ["aire acondicionado", "calefacción", "reparación", "mantenimiento", "emergencia", "sistema"],
    ),
    _profile(
        "other", "General Business",
        (
            "Be polished, efficient, and helpful. Represent the business professionally.",
            "Be warm, welcoming, and accommodating. Create a positive first impression.",
            "Be relaxed and personable. Make the caller feel comfortable and heard.",
        ),
        ["appointment", "consultation", "service", "inquiry", "quote", "estimate", "booking", "availability"],
        ["How can I help you today?",
         "What service are you interested in?",
         "Would you like to schedule an appointment?",
         "Is there anything specific you'd like to know?"],
        [("new customer", "Welcome them warmly. Learn about their needs. Offer relevant information about services."),
         ("pricing inquiry", "Provide general information. Offer to have someone follow up with a detailed quote."),
         ("complaint", "Listen actively. Show empathy. Offer to connect them with someone who can help resolve the issue."),
         ("general question", "Answer if you have the information. If unsure, offer to have the right person call back.")],
        ["Don't make promises you can't keep",
         "Be honest about what you can and can't help with",
         "Take accurate messages",
         "Treat every caller with respect"],
        ["urgent", "emergency", "asap", "today", "immediately"],
        ["Consultation", "Appointment", "Service Inquiry"],
        "Business hours, particularly mornings",
        ["cita", "consulta", "servicio", "información", "ayuda"],
    ),
]

INDUSTRY_PROFILES: Mapping[str, IndustryProfile] = MappingProxyType(
    {profile.key: profile for profile in _PROFILES}
)

# Free-text words that identify a vertical. Checked in order, first hit wins.
_INDUSTRY_ALIASES: tuple[tuple[str, str], ...] = (
    ("dental", "dental"), ("dentist", "dental"), ("dentistry", "dental"),
    ("orthodontics", "dental"), ("orthodontist", "dental"),
    ("veterinary", "pet_care"), ("veterinarian", "pet_care"), ("vet", "pet_care"),
    ("pet", "pet_care"), ("pets", "pet_care"), ("grooming", "pet_care"), ("kennel", "pet_care"),
    ("medical", "medical"), ("doctor", "medical"), ("physician", "medical"),
    ("clinic", "medical"), ("healthcare", "medical"), ("pediatrics", "medical"),
    ("salon", "salon"), ("barber", "salon"), ("barbershop", "salon"), ("hair", "salon"),
    ("nails", "salon"), ("beauty", "salon"),
    ("auto", "auto"), ("automotive", "auto"), ("mechanic", "auto"), ("car", "auto"),
    ("garage", "auto"), ("tire", "auto"), ("tires", "auto"),
    ("legal", "legal"), ("law", "legal"), ("lawyer", "legal"), ("attorney", "legal"),
    ("attorneys", "legal"),
    ("spa", "spa"), ("massage", "spa"), ("wellness", "spa"),
    ("restaurant", "restaurant"), ("cafe", "restaurant"), ("bistro", "restaurant"),
    ("diner", "restaurant"), ("grill", "restaurant"), ("pizzeria", "restaurant"),
    ("catering", "restaurant"),
    ("fitness", "fitness"), ("gym", "fitness"), ("yoga", "fitness"), ("pilates", "fitness"),
    ("crossfit", "fitness"), ("personal_training", "fitness"),
    ("real_estate", "real_estate"), ("realty", "real_estate"), ("realtor", "real_estate"),
    ("realtors", "real_estate"), ("property_management", "real_estate"),
    ("photography", "photography"), ("photographer", "photography"), ("photo", "photography"),
    ("cleaning", "cleaning"), ("cleaners", "cleaning"), ("maid", "cleaning"),
    ("janitorial", "cleaning"), ("housekeeping", "cleaning"),
    ("hvac", "hvac"), ("heating", "hvac"), ("cooling", "hvac"),
    ("air_conditioning", "hvac"), ("furnace", "hvac"),
)

_SEPARATORS = re.compile(r"[\s\-]+")


def normalize_industry_type(business_type: str) -> str:
    """
    Map a free-text business type onto a profile key.

    Case-folds and collapses whitespace/hyphens to underscores, then tries an
    exact key, then known words inside the type ("Dental Clinic" -> dental).
    Never raises; unmatched input resolves to "other".
    """
    normalized = _SEPARATORS.sub("_", (business_type or "").strip().casefold()).strip("_")
    if normalized in INDUSTRY_PROFILES:
        return normalized

    padded = f"_{normalized}_"
    for alias, key in _INDUSTRY_ALIASES:
        if f"_{alias}_" in padded:
            return key

    return FALLBACK_INDUSTRY


def get_industry_profile(business_type: str) -> IndustryProfile:
    return INDUSTRY_PROFILES[normalize_industry_type(business_type)]


def get_personality_modifier(business_type: str, personality: Personality) -> str:
    return get_industry_profile(business_type).tone_guidance(personality)


def contains_urgency_keyword(phrase: str, business_type: str) -> bool:
    """Check whether caller text mentions one of the vertical's priority keywords."""
    lowered = phrase.casefold()
    return any(
        keyword.casefold() in lowered
        for keyword in get_industry_profile(business_type).urgency_keywords
    )


def get_industry_options() -> list[dict[str, str]]:
    """(value, label) pairs for every profile, for pickers in the configuration UI."""
    return [
        {"value": key, "label": profile.display_name}
        for key, profile in INDUSTRY_PROFILES.items()
    ]


_HEADINGS = {
    Language.ENGLISH: {
        "title": "## Industry Context: {name}",
        "personality": "### Personality Guidance",
        "terminology": "### Key Terminology",
        "scenarios": "### Common Scenarios",
        "guardrails": "### Important Guardrails",
        "urgency": "### Urgency Keywords",
        "urgency_note": "Treat calls mentioning these as priority:",
    },
    Language.SPANISH: {
        "title": "## Contexto de la Industria: {name}",
        "personality": "### Guía de Personalidad",
        "terminology": "### Terminología Clave",
        "scenarios": "### Escenarios Comunes",
        "guardrails": "### Restricciones Importantes",
        "urgency": "### Palabras Clave de Urgencia",
        "urgency_note": "Trata las llamadas que mencionan estas palabras como prioritarias:",
    },
}


def render_industry_context(
    business_type: str,
    personality: Personality,
    language: Language = Language.ENGLISH,
) -> str:
    """Render the industry block of the meta-prompt."""
    profile = get_industry_profile(business_type)
    headings = _HEADINGS[Language(language)]

    terms = profile.terminology
    if language == Language.SPANISH and profile.spanish_terminology:
        terms = profile.spanish_terminology

    lines = [
        headings["title"].format(name=profile.display_name),
        "",
        headings["personality"],
        profile.tone_guidance(personality),
        "",
        headings["terminology"],
        f"Use these terms naturally: {', '.join(terms[:10])}",
        "",
        headings["scenarios"],
        *(f"- **{s.trigger}**: {s.instruction}" for s in profile.scenarios),
        "",
        headings["guardrails"],
        *(f"- {guardrail}" for guardrail in profile.guardrails),
        "",
        headings["urgency"],
        f"{headings['urgency_note']} {', '.join(profile.urgency_keywords)}",
    ]
    return "\n".join(lines) + "\n"


class IndustryEnhancement(EnhancementModule):
    key = "INDUSTRY_CONTEXT"

    def is_enabled(self, config: EnhancementConfig) -> bool:
        return config.industry_enhancements

    def render(self, request: FragmentRequest) -> str:
        return render_industry_context(request.business_type, request.personality, request.language)
