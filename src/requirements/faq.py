from typing import Callable, Dict, List

from models.schemas import FaqItem, RequirementType


def normalize_faq_type(requirement_type: str) -> RequirementType:
    """
    Accepts enum names ("E_VISA"), overlay values ("visa_free") or raw cell text.
    """
    normalized = (requirement_type or "").strip().lower()

    if "evisa" in normalized or "e-visa" in normalized or normalized == "e_visa":
        return RequirementType.E_VISA
    if "esta" in normalized:
        return RequirementType.ESTA
    if normalized == "eta" or "eta" in normalized:
        return RequirementType.ETA
    if normalized == "no_visa_days":
        return RequirementType.NO_VISA_DAYS
    if any(token in normalized for token in ("visa_free", "visa-free", "visa free")) or normalized == "no_visa":
        return RequirementType.NO_VISA
    if "visa_required" in normalized or "visa required" in normalized or normalized in ("required", "requires_visa"):
        return RequirementType.REQUIRES_VISA
    if "voa" in normalized or "visa on arrival" in normalized or "on arrival" in normalized:
        return RequirementType.VOA
    try:
        return RequirementType(normalized.upper())
    except ValueError:
        return RequirementType.UNKNOWN


def _base_questions(destination: str) -> List[FaqItem]:
    return [
        FaqItem(
            question="¿Qué es una visa?",
            answer=(
                "Es una autorización que emite el país de destino para permitir el ingreso por un período "
                "y motivo específicos, como turismo."
            ),
        ),
        FaqItem(
            question="¿La visa garantiza la entrada al país?",
            answer=(
                "No. La decisión final de entrada la toma la autoridad migratoria al llegar, "
                "y puede pedir documentos adicionales."
            ),
        ),
        FaqItem(
            question="¿Con cuánta anticipación conviene iniciar el trámite?",
            answer=(
                "Depende del tipo de permiso, pero es recomendable empezar con varias semanas de anticipación "
                "para evitar contratiempos."
            ),
        ),
        FaqItem(
            question=f"¿Qué documentos suelen pedir para viajar a {destination}?",
            answer=(
                "Generalmente se solicita pasaporte vigente y, en algunos casos, prueba de fondos, "
                "alojamiento o pasaje de salida."
            ),
        ),
    ]


def _no_visa(destination: str) -> List[FaqItem]:
    return [
        FaqItem(
            question="¿Qué significa ingreso sin visa?",
            answer="Significa que para viajes cortos de turismo no necesitas una visa previa para entrar.",
        ),
        FaqItem(
            question="¿Puedo quedarme por tiempo indefinido?",
            answer="No. Aunque no se exija visa, normalmente hay un límite de días permitido para turismo.",
        ),
        FaqItem(
            question="¿Pueden pedirme documentos al llegar?",
            answer="Sí. Pueden solicitar pasaje de salida, reservas o evidencia de solvencia.",
        ),
    ] + _base_questions(destination)


def _no_visa_days(destination: str) -> List[FaqItem]:
    return [
        FaqItem(
            question="¿Qué significa entrada sin visa por días limitados?",
            answer="Puedes viajar por turismo sin visa, pero solo por un número máximo de días.",
        ),
        FaqItem(
            question="¿Qué pasa si necesito quedarme más tiempo?",
            answer="Deberías gestionar una visa o permiso distinto antes del viaje o según las reglas locales.",
        ),
        FaqItem(
            question="¿Pueden pedirme documentos al llegar?",
            answer="Sí. Aun sin visa, pueden pedir pasaje de salida, reservas o fondos.",
        ),
    ] + _base_questions(destination)


def _e_visa(destination: str) -> List[FaqItem]:
    return [
        FaqItem(
            question="¿Qué es una eVisa?",
            answer="Es una autorización electrónica que se solicita online antes del viaje y se asocia a tu pasaporte.",
        ),
        FaqItem(
            question="¿Cómo se solicita una eVisa?",
            answer="Normalmente se completa un formulario en línea, se suben documentos y se paga una tasa.",
        ),
        FaqItem(
            question="¿Cuánto tarda en aprobarse?",
            answer="Puede tardar desde horas hasta varios días, según el país y la temporada.",
        ),
        FaqItem(
            question=f"¿Necesito imprimir la eVisa para viajar a {destination}?",
            answer="En muchos casos basta con el registro electrónico, pero es útil llevar una copia digital o impresa.",
        ),
    ] + _base_questions(destination)


def _esta(destination: str) -> List[FaqItem]:
    return [
        FaqItem(
            question="¿Qué es la autorización ESTA?",
            answer="Es un permiso electrónico previo que habilita viajes cortos por turismo o tránsito sin visa tradicional.",
        ),
        FaqItem(
            question="¿La ESTA es una visa?",
            answer="No. Es una autorización de viaje que se tramita en línea antes de volar.",
        ),
        FaqItem(
            question="¿Cuánto tiempo antes debo solicitarla?",
            answer="Es recomendable hacerlo con días o semanas de anticipación para evitar retrasos.",
        ),
        FaqItem(
            question=f"¿La ESTA sirve para cualquier motivo de viaje a {destination}?",
            answer="No. Usualmente aplica para turismo o tránsito; trabajo o estudio requieren otro trámite.",
        ),
    ] + _base_questions(destination)


def _eta(destination: str) -> List[FaqItem]:
    return [
        FaqItem(
            question="¿Qué es una ETA?",
            answer="Es una autorización electrónica previa que se solicita online antes de viajar por turismo o tránsito.",
        ),
        FaqItem(
            question="¿La ETA reemplaza a la visa tradicional?",
            answer="Para viajes cortos sí, pero no cubre trabajo o estudio.",
        ),
        FaqItem(
            question="¿Cuándo debo solicitar la ETA?",
            answer="Conviene hacerlo con anticipación, ya que la aprobación puede tomar tiempo.",
        ),
        FaqItem(
            question=f"¿Debo llevar prueba de la ETA al viajar a {destination}?",
            answer="Es útil tener el comprobante a mano, aunque muchas veces queda asociada al pasaporte.",
        ),
    ] + _base_questions(destination)


def _voa(destination: str) -> List[FaqItem]:
    return [
        FaqItem(
            question="¿Qué es la visa a la llegada?",
            answer="Es un permiso que se tramita al aterrizar o ingresar por frontera.",
        ),
        FaqItem(
            question="¿Qué se necesita para obtenerla?",
            answer="Suele requerir pasaporte vigente, formulario y pago de tasas.",
        ),
        FaqItem(
            question="¿Puedo viajar sin preparación previa?",
            answer="Aun con visa a la llegada, es aconsejable llevar documentos y fondos comprobables.",
        ),
    ] + _base_questions(destination)


def _requires_visa(destination: str) -> List[FaqItem]:
    return [
        FaqItem(
            question="¿Qué es una visa consular tradicional?",
            answer=(
                "Es un permiso que se solicita antes del viaje en un consulado o embajada, "
                "con requisitos y tiempos definidos."
            ),
        ),
        FaqItem(
            question="¿Quién otorga la visa?",
            answer="La otorga la autoridad migratoria del país de destino a través de su consulado o sistema oficial.",
        ),
        FaqItem(
            question="¿Cuánto tiempo antes debo solicitarla?",
            answer="Se recomienda iniciar el trámite con varias semanas de anticipación.",
        ),
        FaqItem(
            question=f"¿Puedo hacer escala en {destination} sin visa?",
            answer="Depende de si hay tránsito internacional sin pasar migración; algunas escalas exigen visado.",
        ),
    ] + _base_questions(destination)


def _unknown(destination: str) -> List[FaqItem]:
    return [
        FaqItem(
            question="¿Qué significa requisito de visa por confirmar?",
            answer="La información disponible no es concluyente y puede requerir verificación con fuentes oficiales.",
        ),
        FaqItem(
            question="¿Qué es una visa?",
            answer=(
                "Es una autorización que emite el país de destino para permitir el ingreso por un período "
                "y motivo específicos."
            ),
        ),
        FaqItem(
            question="¿La visa garantiza la entrada?",
            answer="No. La autoridad migratoria define el ingreso al llegar.",
        ),
    ] + _base_questions(destination)


FAQ_BY_TYPE: Dict[RequirementType, Callable[[str], List[FaqItem]]] = {
    RequirementType.NO_VISA: _no_visa,
    RequirementType.NO_VISA_DAYS: _no_visa_days,
    RequirementType.E_VISA: _e_visa,
    RequirementType.ESTA: _esta,
    RequirementType.ETA: _eta,
    RequirementType.VOA: _voa,
    RequirementType.REQUIRES_VISA: _requires_visa,
    RequirementType.UNKNOWN: _unknown,
}


def get_visa_faq(requirement_type: str, destination: str) -> List[FaqItem]:
    """
    Between four and six FAQ items for a requirement type and destination name.
    """
    generator = FAQ_BY_TYPE.get(normalize_faq_type(requirement_type), _unknown)
    items = generator(destination)[:6]
    if len(items) < 4:
        return (items + _base_questions(destination))[:4]
    return items
