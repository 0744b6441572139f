from typing import Optional

from models.schemas import RequirementType

VERIFY_WITH_OFFICIAL_SOURCES = (
    "Los requisitos pueden cambiar y dependen del tipo de viaje (turismo, trabajo, estudio). "
    "Para confirmar el trámite exacto y documentos, revisa siempre fuentes oficiales."
)

ELECTRONIC_AUTHORIZATION = (
    "Una autorización electrónica (ETA/eTA/ESTA) no es una visa tradicional: es un permiso previo para abordar "
    "y entrar por turismo o tránsito. Se solicita online, puede tener costo y toma desde minutos a días. "
    "Debe gestionarse antes del viaje. Evita webs intermediarias; usa el sitio oficial."
)

EXPLANATIONS = {
    RequirementType.E_VISA: (
        "Una e-Visa es una autorización electrónica que se solicita por internet antes del viaje. "
        "Normalmente se aprueba y se asocia a tu pasaporte; en el aeropuerto pueden pedir comprobantes "
        "(pasaje de salida, alojamiento, fondos). Revisa el sitio oficial para pasos y tiempos. "
        "Evita webs intermediarias; usa el sitio oficial."
    ),
    RequirementType.VOA: (
        "La visa a la llegada se tramita al aterrizar (o al ingresar por frontera). "
        "Suele requerir pasaporte vigente, formulario y pago de tasas; a veces piden pasaje de salida y reserva. "
        "Confirma requisitos exactos antes de viajar."
    ),
    RequirementType.REQUIRES_VISA: (
        "Esto significa que necesitas solicitar una visa en una embajada o consulado (o plataforma oficial) "
        "antes de viajar. Los requisitos varían según motivo (turismo, trabajo, estudio) y pueden incluir "
        "entrevista y documentos. Revisa la fuente oficial para el procedimiento."
    ),
    RequirementType.NO_VISA: (
        "No necesitas visa para visitas cortas (turismo) según la información disponible. "
        "Para estadías largas, trabajo o estudio, los requisitos suelen ser distintos. "
        "Confirma condiciones en la fuente oficial."
    ),
    RequirementType.ETA: ELECTRONIC_AUTHORIZATION,
    RequirementType.ESTA: ELECTRONIC_AUTHORIZATION,
}


def _visa_free_with_days(days: int) -> str:
    return (
        f"No necesitas visa para turismo por hasta {days} días (según la información disponible). "
        "Ojo: pueden existir condiciones como pasaje de salida, seguro o fondos. "
        "Para estadías más largas o para trabajar/estudiar, normalmente se requiere un permiso o visa distinta."
    )


def get_requirement_explanation(type: Optional[RequirementType] = None, days: Optional[int] = None) -> str:
    """
    Spanish explanation for a requirement type.

    Anything the data cannot vouch for (no type, UNKNOWN, a day-limited entry
    without its day count) degrades to the neutral "check official sources"
    text rather than a guess.
    """
    if type is None:
        return VERIFY_WITH_OFFICIAL_SOURCES
    if type == RequirementType.NO_VISA_DAYS:
        return _visa_free_with_days(days) if days else VERIFY_WITH_OFFICIAL_SOURCES
    return EXPLANATIONS.get(type, VERIFY_WITH_OFFICIAL_SOURCES)
