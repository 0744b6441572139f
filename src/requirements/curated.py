"""Hand-reviewed requirement details layered over the generic template."""
from typing import Any, Dict, Tuple

IATA_TIMATIC = {"label": "IATA/Timatic", "url": "https://www.iatatravelcentre.com/"}

DEFAULT_REQUIREMENT: Dict[str, Any] = {
    "max_stay_days": 90,
    "alt_permit": None,
    "passport_rule": "Pasaporte vigente al menos 6 meses desde la fecha de ingreso.",
    "onward_ticket": "Suele requerirse prueba de salida o boleto de retorno.",
    "funds_proof": "Demuestra solvencia para cubrir gastos durante la estadía.",
    "notes": [
        "Confirma requisitos sanitarios y seguros de viaje vigentes.",
        "Algunas aerolíneas solicitan formularios adicionales antes del embarque.",
    ],
    "sources": [
        {"label": "Sitio oficial de migraciones", "url": "https://www.gov.example/requisitos"},
        IATA_TIMATIC,
    ],
    "embassy": {
        "name": "Embajada o consulado del destino",
        "url": "https://www.embajada.example",
    },
    "last_reviewed": "2024-06-01",
}


def _embassy(name: str, url: str) -> Dict[str, Any]:
    return {"name": name, "url": url, "email": None, "phone": None, "address": None}


DESTINATION_OVERRIDES: Dict[str, Dict[str, Any]] = {
    "estados-unidos": {
        "visa_required": True,
        "alt_permit": "ESTA",
        "notes": [
            "La autorización ESTA aplica para viajes de turismo o negocios cortos.",
            "Si planeas trabajar o estudiar, se requiere una visa específica.",
        ],
        "sources": [
            {"label": "CBP / ESTA", "url": "https://esta.cbp.dhs.gov/"},
            {"label": "Embajada de EE.UU.", "url": "https://travel.state.gov/"},
        ],
        "embassy": _embassy("Embajada o consulado de Estados Unidos", "https://www.usembassy.gov/"),
        "last_reviewed": "2024-06-15",
    },
    "canada": {
        "visa_required": True,
        "alt_permit": "eTA",
        "sources": [
            {"label": "Gobierno de Canadá", "url": "https://www.canada.ca/en/immigration-refugees-citizenship.html"},
            {"label": "eTA", "url": "https://www.canada.ca/eta"},
        ],
        "embassy": _embassy("Embajada de Canadá", "https://www.international.gc.ca/"),
        "last_reviewed": "2024-06-10",
    },
    "mexico": {
        "visa_required": False,
        "alt_permit": "No aplica",
        "sources": [{"label": "Gobierno de México", "url": "https://www.gob.mx/"}, IATA_TIMATIC],
        "embassy": _embassy("Instituto Nacional de Migración", "https://www.gob.mx/inm"),
        "last_reviewed": "2024-06-05",
    },
    "brasil": {
        "visa_required": False,
        "alt_permit": "No aplica",
        "sources": [{"label": "Policía Federal de Brasil", "url": "https://www.gov.br/pf"}, IATA_TIMATIC],
        "embassy": _embassy("Embajada o consulado de Brasil", "https://www.gov.br/mre/pt-br"),
        "last_reviewed": "2024-06-08",
    },
    "reino-unido": {
        "visa_required": True,
        "alt_permit": "ETA",
        "notes": [
            "La ETA se gestiona en línea y es necesaria incluso para estancias cortas.",
            "Si estudiarás o trabajarás, revisa la categoría de visa correspondiente.",
        ],
        "sources": [
            {"label": "UK Home Office", "url": "https://www.gov.uk/uk-border-control"},
            {"label": "ETA UK", "url": "https://www.gov.uk/guidance/electronic-travel-authorisation-eta"},
        ],
        "embassy": _embassy("Embajada británica", "https://www.gov.uk/world/embassies"),
        "last_reviewed": "2024-06-12",
    },
    "japon": {
        "visa_required": True,
        "alt_permit": None,
        "notes": [
            "Algunas nacionalidades pueden acceder a exención parcial; verifica tu caso.",
            "Puede pedirse itinerario detallado y reservas de alojamiento.",
        ],
        "sources": [{"label": "MOFA Japan", "url": "https://www.mofa.go.jp/j_info/visit/visa/"}, IATA_TIMATIC],
        "embassy": _embassy(
            "Embajada o consulado de Japón", "https://www.mofa.go.jp/about/emb_cons/mofaserv.html"
        ),
        "last_reviewed": "2024-06-07",
    },
    "australia": {
        "visa_required": True,
        "alt_permit": "ETA",
        "sources": [
            {"label": "Departamento de Home Affairs", "url": "https://immi.homeaffairs.gov.au/"},
            {"label": "ETA Australia", "url": "https://www.eta.homeaffairs.gov.au/"},
        ],
        "embassy": _embassy(
            "Embajada o consulado de Australia", "https://www.dfat.gov.au/about-us/our-locations/missions"
        ),
        "last_reviewed": "2024-06-11",
    },
    "china": {
        "visa_required": True,
        "alt_permit": None,
        "notes": [
            "Se suele requerir carta de invitación o reserva hotelera.",
            "Algunas ciudades permiten tránsito sin visa por 72/144 horas.",
        ],
        "sources": [{"label": "Embajada de China", "url": "https://www.fmprc.gov.cn/"}, IATA_TIMATIC],
        "embassy": _embassy(
            "Embajada o consulado de la República Popular China",
            "https://www.fmprc.gov.cn/eng/wjb_663304/zwjg_665342/",
        ),
        "last_reviewed": "2024-06-04",
    },
    "turquia": {
        "visa_required": True,
        "alt_permit": "eVisa",
        "sources": [
            {"label": "República de Türkiye", "url": "https://www.evisa.gov.tr/en/"},
            {"label": "Ministerio de Asuntos Exteriores", "url": "https://www.mfa.gov.tr/"},
        ],
        "embassy": _embassy(
            "Embajada o consulado de Türkiye", "https://www.mfa.gov.tr/foreign-representations-of-turkiye.en.mfa"
        ),
        "last_reviewed": "2024-06-03",
    },
    "schengen": {
        "visa_required": False,
        "alt_permit": None,
        "notes": [
            "Para estancias hasta 90 días en un periodo de 180 días en el área Schengen.",
            "ETIAS será obligatorio cuando entre en vigor; sigue las actualizaciones oficiales.",
        ],
        "sources": [{"label": "Schengen Visa Info", "url": "https://www.schengenvisainfo.com/"}, IATA_TIMATIC],
        "embassy": _embassy(
            "Embajada o consulado del país Schengen principal",
            "https://home-affairs.ec.europa.eu/policies/schengen-borders-and-visa/visa-policy_en",
        ),
        "last_reviewed": "2024-06-09",
    },
}

# Keyed by (origin slug, destination slug); wins over destination overrides.
PAIR_OVERRIDES: Dict[Tuple[str, str], Dict[str, Any]] = {
    ("mexico", "mexico"): {
        "visa_required": False,
        "alt_permit": "No aplica",
        "notes": ["Viaje nacional: basta con identificación oficial vigente."],
        "max_stay_days": None,
    },
    ("espana", "schengen"): {
        "visa_required": False,
        "max_stay_days": None,
        "notes": ["Como ciudadano de la UE tienes libre circulación en el espacio Schengen."],
    },
    ("chile", "canada"): {
        "visa_required": False,
        "notes": [
            "Chile está en la lista de países exentos de visa; se necesita eTA para llegar en avión.",
        ],
    },
}
