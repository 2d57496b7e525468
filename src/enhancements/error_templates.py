"""
Personality-Aware Error Templates

What the voice agent says when a tool call fails or caller input is
unusable. Every error kind has a professional, friendly and casual wording
in English and Spanish with the same three parts.
"""
import re
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping

from src.enhancements.registry import EnhancementModule, FragmentRequest
from src.models.business import Language, Personality
from src.models.enhancement import EnhancementConfig


class ErrorKind(StrEnum):
    AVAILABILITY_CHECK_FAILED = "availability_check_failed"
    BOOKING_FAILED = "booking_failed"
    TRANSFER_FAILED = "transfer_failed"
    SMS_FAILED = "sms_failed"
    MESSAGE_SAVE_FAILED = "message_save_failed"
    MISHEARD_INFO = "misheard_info"
    SYSTEM_TIMEOUT = "system_timeout"
    NO_AVAILABILITY = "no_availability"
    INVALID_DATE = "invalid_date"
    INVALID_TIME = "invalid_time"
    MISSING_INFO = "missing_info"
    CALENDAR_SYNC_FAILED = "calendar_sync_failed"


@dataclass(frozen=True)
class ErrorMessage:
    initial: str
    follow_up: str
    recovery: str


ErrorTable = Mapping[ErrorKind, Mapping[Personality, ErrorMessage]]

_MARKER = re.compile(r"\{(\w+)\}")


def _table(rows: dict[str, tuple[tuple[str, str, str], ...]]) -> ErrorTable:
    table = {}
    for kind, (professional, friendly, casual) in rows.items():
        table[ErrorKind(kind)] = MappingProxyType({
            Personality.PROFESSIONAL: ErrorMessage(*professional),
            Personality.FRIENDLY: ErrorMessage(*friendly),
            Personality.CASUAL: ErrorMessage(*casual),
        })
    return MappingProxyType(table)


ENGLISH_ERRORS: ErrorTable = _table({
    "availability_check_failed": (
        ("I apologize, but I'm experiencing difficulty accessing our scheduling system at the moment.",
         "Would you prefer to leave your contact information so a member of our team can call you back with available times?",
         "Alternatively, I can take a message and ensure someone reaches out to you promptly."),
        ("Oops! I'm having a little trouble checking our calendar right now.",
         "Can I grab your info and have someone call you back with our available times?",
         "Or I can take down a message for you - whatever works best!"),
        ("Hmm, having some trouble pulling up the schedule right now.",
         "Want me to take your number and have someone get back to you?",
         "Or just leave a message and we'll sort it out."),
    ),
    "booking_failed": (
        ("I apologize, but I wasn't able to complete your booking at this time.",
         "I have all your information recorded. Shall I have someone call you to confirm the appointment manually?",
         "I can also check if there's another time slot that might work better."),
        ("Oh no, something went wrong with the booking!",
         "Don't worry though - I've got your info. Want me to have someone call you back to get this sorted?",
         "Or we could try a different time if you'd like!"),
        ("Shoot, the booking didn't go through.",
         "I've got your details though. Want someone to call you back and finish this up?",
         "Or we could try another time slot."),
    ),
    "transfer_failed": (
        ("I apologize, but I'm unable to transfer your call at this moment.",
         "May I take a detailed message and have someone return your call as soon as possible?",
         "I can also schedule a callback at a time that's convenient for you."),
        ("I'm sorry, I wasn't able to connect you this time.",
         "Can I take a message and make sure someone calls you back right away?",
         "Or if you'd prefer, I can set up a specific time for them to reach you."),
        ("Sorry, couldn't get you connected right now.",
         "Let me take a message and have them call you back. Sound good?",
         "Or I can set up a time for a callback if that works better."),
    ),
    "sms_failed": (
        ("I apologize, but I was unable to send the text message.",
         "Would you like me to try again, or would you prefer to receive this information via email?",
         "I can also read the information to you now if that would be helpful."),
        ("Hmm, the text didn't go through for some reason.",
         "Want me to give it another try, or I can read you the info right now?",
         "Just let me know what works best for you!"),
        ("Text didn't send - technology, right?",
         "Should I try again or just tell you the info now?",
         "Whatever's easiest for you."),
    ),
    "message_save_failed": (
        ("I apologize, but I had difficulty saving your message.",
         "Could you please repeat that? I want to make sure I capture everything accurately.",
         "I'm ready to take your message again."),
        ("Oops, I had a little hiccup saving that message.",
         "Mind saying that one more time? I want to make sure I get it all down!",
         "I'm all ears - go ahead!"),
        ("My bad, that message didn't save.",
         "Can you say that again real quick?",
         "Ready when you are."),
    ),
    "misheard_info": (
        ("I want to ensure I have this correct.",
         "Could you please repeat that information?",
         "I appreciate your patience."),
        ("I want to make sure I got that right!",
         "Could you say that one more time for me?",
         "Thanks for bearing with me!"),
        ("Let me make sure I heard that right.",
         "Mind repeating that?",
         "Thanks!"),
    ),
    "system_timeout": (
        ("I apologize for the delay. Our system is taking longer than expected to respond.",
         "Would you prefer to continue holding, or shall I take your information and have someone call you back?",
         "I appreciate your patience and want to ensure you receive excellent service."),
        ("Sorry for the wait! Things are running a bit slow on my end.",
         "Want to hang in there, or should I grab your info and have someone call you back?",
         "I really appreciate you being so patient!"),
        ("Sorry, things are being a bit slow right now.",
         "Want to wait it out, or should I just have someone call you back?",
         "Thanks for your patience."),
    ),
    "no_availability": (
        ("I'm afraid we don't have any availability on that particular date.",
         "Would you like me to check some alternative dates for you?",
         "I'd be happy to find a time that works with your schedule."),
        ("Oh, we're all booked up that day!",
         "Want me to check some other dates for you?",
         "I'm sure we can find something that works!"),
        ("That day's pretty packed, unfortunately.",
         "Want to try a different day?",
         "I'm sure we can work something out."),
    ),
    "invalid_date": (
        ("I apologize, but I wasn't able to find that date in our calendar.",
         "Could you please provide the date again? For example, 'next Tuesday' or 'January 15th'.",
         "I want to make sure I check the correct date for you."),
        ("Hmm, I'm not quite sure what date that is!",
         "Could you tell me the date again? Like 'next Tuesday' or the specific date?",
         "I want to make sure I'm looking at the right day!"),
        ("Didn't quite catch that date.",
         "What day were you thinking? Like 'next Tuesday' or a specific date.",
         "Just want to make sure I'm looking at the right one."),
    ),
    "invalid_time": (
        ("I'm not certain I understood the time correctly.",
         "Could you please specify the time? For example, '2 PM' or '2:30 in the afternoon'.",
         "I want to ensure I schedule this at the correct time."),
        ("I want to make sure I've got the right time!",
         "What time were you thinking? Like '2 PM' or '2:30 in the afternoon'?",
         "Just double-checking so we get it right!"),
        ("What time was that again?",
         "Like 2 PM or...?",
         "Just want to make sure I've got it right."),
    ),
    "missing_info": (
        ("I need a bit more information to proceed.",
         "Could you please provide your {missing_field}?",
         "This will help me assist you more effectively."),
        ("I just need one more thing from you!",
         "What's your {missing_field}?",
         "And then I can get you all set!"),
        ("Just need one more thing.",
         "What's your {missing_field}?",
         "Then we're good to go."),
    ),
    "calendar_sync_failed": (
        ("I apologize, but I'm having difficulty syncing with our calendar system.",
         "Your appointment request has been noted. Would you like a confirmation call once it's finalized?",
         "Someone from our team will reach out shortly to confirm your booking."),
        ("Our calendar's being a little stubborn right now!",
         "Don't worry - I've got your appointment request. Want us to call you back to confirm?",
         "We'll make sure to get back to you soon!"),
        ("Calendar's acting up on me.",
         "I've got your request though. Want a callback to confirm?",
         "We'll reach out to you shortly."),
    ),
})

SPANISH_ERRORS: ErrorTable = _table({
    "availability_check_failed": (
        ("Le pido disculpas, pero estoy teniendo dificultades para acceder a nuestro sistema de citas en este momento.",
         "Prefiere dejar su informacion de contacto para que un miembro de nuestro equipo le devuelva la llamada con los horarios disponibles?",
         "Alternativamente, puedo tomar un mensaje y asegurarme de que alguien se comunique con usted pronto."),
        ("Ay, estoy teniendo un pequeno problema para revisar nuestro calendario ahora mismo.",
         "Puedo tomar su informacion y hacer que alguien le llame con nuestros horarios disponibles?",
         "O puedo tomar un mensaje para usted, lo que le funcione mejor!"),
        ("Hmm, estoy teniendo problemas para ver el calendario ahora mismo.",
         "Quiere que tome su numero y que alguien le devuelva la llamada?",
         "O solo deje un mensaje y lo resolveremos."),
    ),
    "booking_failed": (
        ("Le pido disculpas, pero no pude completar su reserva en este momento.",
         "Tengo toda su informacion registrada. Desea que alguien le llame para confirmar la cita manualmente?",
         "Tambien puedo verificar si hay otro horario que le funcione mejor."),
        ("Oh no, algo salio mal con la reserva!",
         "Pero no se preocupe, tengo su informacion. Quiere que alguien le llame para resolver esto?",
         "O podemos intentar con otro horario si prefiere!"),
        ("Ay, la reserva no se proceso.",
         "Pero tengo sus datos. Quiere que alguien le devuelva la llamada para terminar esto?",
         "O podemos intentar con otro horario."),
    ),
    "transfer_failed": (
        ("Le pido disculpas, pero no puedo transferir su llamada en este momento.",
         "Puedo tomar un mensaje detallado y hacer que alguien le devuelva la llamada lo antes posible?",
         "Tambien puedo programar una devolucion de llamada a la hora que le convenga."),
        ("Lo siento, no pude conectarle esta vez.",
         "Puedo tomar un mensaje y asegurarme de que alguien le llame pronto?",
         "O si prefiere, puedo programar una hora especifica para que le llamen."),
        ("Disculpe, no pude conectarle ahora mismo.",
         "Deje que tome un mensaje y hago que le devuelvan la llamada. Le parece bien?",
         "O puedo programar una hora para la devolucion de llamada si le funciona mejor."),
    ),
    "sms_failed": (
        ("Le pido disculpas, pero no pude enviar el mensaje de texto.",
         "Desea que lo intente de nuevo, o prefiere recibir esta informacion por correo electronico?",
         "Tambien puedo leerle la informacion ahora si le seria util."),
        ("Hmm, el mensaje no se envio por alguna razon.",
         "Quiere que lo intente de nuevo, o le leo la informacion ahora mismo?",
         "Solo digame que le funciona mejor!"),
        ("El texto no se envio - la tecnologia, verdad?",
         "Quiere que lo intente de nuevo o solo le digo la informacion ahora?",
         "Lo que sea mas facil para usted."),
    ),
    "message_save_failed": (
        ("Le pido disculpas, pero tuve dificultades para guardar su mensaje.",
         "Podria repetirlo? Quiero asegurarme de capturar todo correctamente.",
         "Estoy listo para tomar su mensaje nuevamente."),
        ("Ups, tuve un pequeno problema al guardar ese mensaje.",
         "Le importa repetirlo? Quiero asegurarme de anotarlo todo!",
         "Estoy escuchando, adelante!"),
        ("Perdon, ese mensaje no se guardo.",
         "Puede repetirlo rapidamente?",
         "Listo cuando usted quiera."),
    ),
    "misheard_info": (
        ("Quiero asegurarme de tener esto correcto.",
         "Podria repetir esa informacion, por favor?",
         "Agradezco su paciencia."),
        ("Quiero asegurarme de haberlo entendido bien!",
         "Podria decirmelo una vez mas?",
         "Gracias por su paciencia!"),
        ("Dejeme asegurarme de haber escuchado bien.",
         "Le importa repetirlo?",
         "Gracias!"),
    ),
    "system_timeout": (
        ("Le pido disculpas por la demora. Nuestro sistema esta tardando mas de lo esperado en responder.",
         "Prefiere seguir esperando, o debo tomar su informacion y hacer que alguien le devuelva la llamada?",
         "Agradezco su paciencia y quiero asegurarme de que reciba un excelente servicio."),
        ("Disculpe la espera! Las cosas estan un poco lentas de mi lado.",
         "Quiere esperar un poco mas, o debo tomar su informacion y hacer que alguien le llame?",
         "Realmente agradezco su paciencia!"),
        ("Perdon, las cosas estan un poco lentas ahora.",
         "Quiere esperar, o mejor hago que alguien le devuelva la llamada?",
         "Gracias por su paciencia."),
    ),
    "no_availability": (
        ("Me temo que no tenemos disponibilidad en esa fecha en particular.",
         "Le gustaria que verificara algunas fechas alternativas?",
         "Con gusto buscare un horario que funcione con su agenda."),
        ("Oh, estamos completamente reservados ese dia!",
         "Quiere que revise otras fechas para usted?",
         "Estoy seguro de que encontraremos algo que funcione!"),
        ("Ese dia esta bastante lleno, desafortunadamente.",
         "Quiere probar otro dia?",
         "Seguro encontramos algo."),
    ),
    "invalid_date": (
        ("Le pido disculpas, pero no pude encontrar esa fecha en nuestro calendario.",
         "Podria proporcionar la fecha nuevamente? Por ejemplo, 'el proximo martes' o '15 de enero'.",
         "Quiero asegurarme de verificar la fecha correcta para usted."),
        ("Hmm, no estoy seguro de que fecha es esa!",
         "Podria decirme la fecha de nuevo? Como 'el proximo martes' o la fecha especifica?",
         "Quiero asegurarme de estar viendo el dia correcto!"),
        ("No entendi bien esa fecha.",
         "Que dia estaba pensando? Como 'el proximo martes' o una fecha especifica.",
         "Solo quiero asegurarme de ver el correcto."),
    ),
    "invalid_time": (
        ("No estoy seguro de haber entendido la hora correctamente.",
         "Podria especificar la hora? Por ejemplo, '2 de la tarde' o '2:30 de la tarde'.",
         "Quiero asegurarme de programar esto a la hora correcta."),
        ("Quiero asegurarme de tener la hora correcta!",
         "A que hora estaba pensando? Como '2 de la tarde' o '2:30 de la tarde'?",
         "Solo verifico para que quede bien!"),
        ("A que hora dijo?",
         "Como a las 2 de la tarde o...?",
         "Solo quiero asegurarme de tenerlo bien."),
    ),
    "missing_info": (
        ("Necesito un poco mas de informacion para continuar.",
         "Podria proporcionar su {missing_field}?",
         "Esto me ayudara a asistirle de manera mas efectiva."),
        ("Solo necesito una cosa mas de usted!",
         "Cual es su {missing_field}?",
         "Y luego quedara todo listo!"),
        ("Solo necesito una cosa mas.",
         "Cual es su {missing_field}?",
         "Y listo."),
    ),
    "calendar_sync_failed": (
        ("Le pido disculpas, pero estoy teniendo dificultades para sincronizar con nuestro sistema de calendario.",
         "Su solicitud de cita ha sido anotada. Le gustaria recibir una llamada de confirmacion una vez que este finalizada?",
         "Alguien de nuestro equipo se comunicara pronto para confirmar su reserva."),
        ("Nuestro calendario esta siendo un poco terco ahora mismo!",
         "No se preocupe, tengo su solicitud de cita. Quiere que le llamemos para confirmar?",
         "Nos aseguraremos de comunicarnos pronto!"),
        ("El calendario me esta dando problemas.",
         "Pero tengo su solicitud. Quiere una llamada de confirmacion?",
         "Le contactaremos pronto."),
    ),
})

_GENERIC_ERROR = {
    Language.ENGLISH: ErrorMessage(
        "I apologize, but there was an issue.",
        "Can I help you with something else?",
        "Let's try again.",
    ),
    Language.SPANISH: ErrorMessage(
        "Lo siento, hubo un problema.",
        "Puedo ayudarle con algo mas?",
        "Intentemoslo de nuevo.",
    ),
}

_ERROR_DESCRIPTIONS = {
    ErrorKind.AVAILABILITY_CHECK_FAILED: ("If checking availability fails", "Si falla la verificacion de disponibilidad"),
    ErrorKind.BOOKING_FAILED: ("If booking fails", "Si falla la reserva"),
    ErrorKind.TRANSFER_FAILED: ("If call transfer fails", "Si falla la transferencia"),
    ErrorKind.SMS_FAILED: ("If sending SMS fails", "Si falla el envio de SMS"),
    ErrorKind.MESSAGE_SAVE_FAILED: ("If saving a message fails", "Si falla el guardado del mensaje"),
    ErrorKind.MISHEARD_INFO: ("If you need to confirm information", "Si necesitas confirmar informacion"),
    ErrorKind.SYSTEM_TIMEOUT: ("If the system is slow", "Si el sistema esta lento"),
    ErrorKind.NO_AVAILABILITY: ("If no slots are available", "Si no hay horarios disponibles"),
    ErrorKind.INVALID_DATE: ("If the date is unclear", "Si la fecha no es clara"),
    ErrorKind.INVALID_TIME: ("If the time is unclear", "Si la hora no es clara"),
    ErrorKind.MISSING_INFO: ("If information is missing", "Si falta informacion"),
    ErrorKind.CALENDAR_SYNC_FAILED: ("If calendar sync fails", "Si falla la sincronizacion del calendario"),
}


def _errors(language: Language) -> ErrorTable:
    return SPANISH_ERRORS if language == Language.SPANISH else ENGLISH_ERRORS


def get_error_message(
    kind: str,
    personality: Personality,
    language: Language = Language.ENGLISH,
) -> ErrorMessage:
    """Look up one error wording. Unknown kinds get a generic apology."""
    try:
        kind = ErrorKind(kind)
    except ValueError:
        return _GENERIC_ERROR[Language(language)]
    return _errors(language)[kind][Personality(personality)]


def get_full_error_response(
    kind: str,
    personality: Personality,
    language: Language = Language.ENGLISH,
) -> str:
    message = get_error_message(kind, personality, language)
    return f"{message.initial} {message.follow_up}"


def format_error_message(template: str, values: Mapping[str, str]) -> str:
    """
    Replace `{name}` markers with the given values.
    One pass; braces inside values are never re-interpreted.
    """
    return _MARKER.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def get_error_templates_for_personality(
    personality: Personality, language: Language = Language.ENGLISH
) -> dict[ErrorKind, ErrorMessage]:
    personality = Personality(personality)
    return {kind: wordings[personality] for kind, wordings in _errors(language).items()}


def render_error_handling(personality: Personality, language: Language = Language.ENGLISH) -> str:
    spanish = language == Language.SPANISH
    if spanish:
        lines = ["## Manejo de Errores", "",
                 "Cuando encuentres problemas tecnicos, usa estas respuestas:", ""]
    else:
        lines = ["## Error Handling", "",
                 "When you encounter technical issues, use these responses:", ""]

    for kind, message in get_error_templates_for_personality(personality, language).items():
        description_en, description_es = _ERROR_DESCRIPTIONS[kind]
        lines.append(f"**{description_es if spanish else description_en}:**")
        lines.append(f"- {message.initial}")
        lines.append(f"- {message.follow_up}")
        lines.append("")

    return "\n".join(lines)


class ErrorTemplateEnhancement(EnhancementModule):
    key = "ERROR_HANDLING"

    def is_enabled(self, config: EnhancementConfig) -> bool:
        return config.personality_aware_errors

    def render(self, request: FragmentRequest) -> str:
        return render_error_handling(request.personality, request.language)
