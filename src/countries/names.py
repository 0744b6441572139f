import gettext
import re
from functools import lru_cache
from typing import Optional

import pycountry

ISO2_REGEX = re.compile(r"^[A-Z]{2}$")

# Names where automatic translation fails or reads unnaturally.
OVERRIDES = {
    "Antigua and Barbuda": "Antigua y Barbuda",
    "Dominican Republic": "República Dominicana",
    "Czech Republic": "República Checa",
    "United States": "Estados Unidos",
    "United Kingdom": "Reino Unido",
    "Ivory Coast": "Costa de Marfil",
    "DR Congo": "República Democrática del Congo",
    "North Korea": "Corea del Norte",
    "South Korea": "Corea del Sur",
    "Cape Verde": "Cabo Verde",
    "Timor-Leste": "Timor Oriental",
    "Russia": "Rusia",
    "Bolivia": "Bolivia",
}

# pycountry carries formal ISO names ("Bolivia, Plurinational State of");
# these are the short Spanish forms a reader expects.
ISO2_OVERRIDES = {
    "BO": "Bolivia",
    "VE": "Venezuela",
    "IR": "Irán",
    "KR": "Corea del Sur",
    "KP": "Corea del Norte",
    "RU": "Rusia",
    "SY": "Siria",
    "TZ": "Tanzania",
    "MD": "Moldavia",
    "LA": "Laos",
    "VN": "Vietnam",
    "TW": "Taiwán",
    "FM": "Micronesia",
    "CD": "República Democrática del Congo",
    "CG": "República del Congo",
    "CI": "Costa de Marfil",
    "CZ": "República Checa",
    "GB": "Reino Unido",
    "US": "Estados Unidos",
    "VA": "Ciudad del Vaticano",
    "PS": "Palestina",
    "MK": "Macedonia del Norte",
    "TR": "Turquía",
}


@lru_cache(maxsize=1)
def _spanish_catalog() -> gettext.NullTranslations:
    return gettext.translation("iso3166-1", pycountry.LOCALES_DIR, languages=["es"], fallback=True)


def resolve_alpha2(value: str) -> Optional[str]:
    """
    Resolve an English country name, alpha-2 or alpha-3 code to its alpha-2 code.
    """
    if not value or not value.strip():
        return None
    try:
        country = pycountry.countries.lookup(value.strip())
    except LookupError:
        return None
    return country.alpha_2


def _english_name(alpha2: str) -> Optional[str]:
    country = pycountry.countries.get(alpha_2=alpha2)
    if country is None:
        return None
    return getattr(country, "common_name", None) or country.name


def get_country_name_en(value: str) -> str:
    """
    English display name for a source key; codes are expanded, names pass through.
    """
    if not value:
        return value
    stripped = value.strip()
    if len(stripped) in (2, 3) and stripped.isupper():
        alpha2 = resolve_alpha2(stripped)
        if alpha2:
            return _english_name(alpha2) or value
    return value


def get_country_name_es(value: str) -> str:
    """
    Spanish display name for an English country name or ISO code.

    Lookup order: curated English overrides, then ISO resolution through
    pycountry (short-form overrides first, then the Spanish ISO 3166
    catalogue). Unknown inputs come back unchanged; this never raises.
    """
    if not value:
        return value
    if value in OVERRIDES:
        return OVERRIDES[value]

    alpha2 = resolve_alpha2(value)
    if not alpha2:
        return value
    if alpha2 in ISO2_OVERRIDES:
        return ISO2_OVERRIDES[alpha2]

    country = pycountry.countries.get(alpha_2=alpha2)
    if country is None:
        return value
    return _spanish_catalog().gettext(country.name) or value


def iso2_to_flag_emoji(iso2: str) -> Optional[str]:
    if not iso2 or not ISO2_REGEX.match(iso2.upper()):
        return None
    return "".join(chr(127397 + ord(char)) for char in iso2.upper())
