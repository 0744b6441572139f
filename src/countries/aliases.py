"""
Destination-name aliases for third-party datasets.

Henley PDFs print destination names in English, with their own spellings
("Türkiye", "Cote d'Ivoire (Ivory Coast)"), while curated data uses Spanish
names. Everything is reduced to ISO alpha-2 through a single folded alias
table so only one matching scheme exists.
"""
import re
from functools import lru_cache
from typing import Dict, Optional

import pycountry
from unidecode import unidecode

from countries.names import ISO2_OVERRIDES, OVERRIDES, _spanish_catalog

_NON_WORD = re.compile(r"[^a-z0-9 ]+")
_SPACES = re.compile(r"\s+")

EXTRA_ALIASES: Dict[str, str] = {
    "turkey": "TR",
    "turkiye": "TR",
    "turquia": "TR",
    "ivory coast": "CI",
    "cote divoire ivory coast": "CI",
    "dr congo": "CD",
    "democratic republic of congo": "CD",
    "democratic republic of the congo": "CD",
    "congo dem rep": "CD",
    "congo rep": "CG",
    "republic of the congo": "CG",
    "congo brazzaville": "CG",
    "south korea": "KR",
    "korea south": "KR",
    "north korea": "KP",
    "korea north": "KP",
    "russia": "RU",
    "usa": "US",
    "united states of america": "US",
    "uk": "GB",
    "great britain": "GB",
    "uae": "AE",
    "czech republic": "CZ",
    "swaziland": "SZ",
    "burma": "MM",
    "macedonia": "MK",
    "macau": "MO",
    "macao sar china": "MO",
    "hong kong sar china": "HK",
    "vatican": "VA",
    "vatican city": "VA",
    "holy see vatican city": "VA",
    "cape verde": "CV",
    "east timor": "TL",
    "timor leste": "TL",
    "palestinian territory": "PS",
    "palestine": "PS",
    "laos": "LA",
    "micronesia": "FM",
    "st kitts and nevis": "KN",
    "st lucia": "LC",
    "st vincent and the grenadines": "VC",
    "sao tome and principe": "ST",
    "brunei": "BN",
    "syria": "SY",
    "iran": "IR",
    "bolivia": "BO",
    "venezuela": "VE",
    "tanzania": "TZ",
    "moldova": "MD",
    "vietnam": "VN",
    "taiwan": "TW",
    "kosovo": "XK",
}


def fold_name(value: str) -> str:
    """
    Unicode-fold, lowercase, drop punctuation and collapse whitespace.
    """
    folded = unidecode(value or "").lower().replace("&", " and ").replace("'", "")
    folded = _NON_WORD.sub(" ", folded)
    return _SPACES.sub(" ", folded).strip()


@lru_cache(maxsize=1)
def alias_table() -> Dict[str, str]:
    catalog = _spanish_catalog()
    table: Dict[str, str] = {}
    for country in pycountry.countries:
        alpha2 = country.alpha_2
        names = [
            country.name,
            getattr(country, "official_name", None),
            getattr(country, "common_name", None),
            catalog.gettext(country.name),
        ]
        for name in names:
            if name:
                table.setdefault(fold_name(name), alpha2)
    for alpha2, name_es in ISO2_OVERRIDES.items():
        table.setdefault(fold_name(name_es), alpha2)
    for name_en, name_es in OVERRIDES.items():
        alpha2 = EXTRA_ALIASES.get(fold_name(name_en)) or table.get(fold_name(name_en))
        if alpha2:
            table.setdefault(fold_name(name_es), alpha2)
    for alias, alpha2 in EXTRA_ALIASES.items():
        table[alias] = alpha2
    return table


def resolve_iso2(name: str) -> Optional[str]:
    """
    Map a free-text destination name or code to ISO alpha-2, or None.
    """
    if not name or not name.strip():
        return None
    stripped = name.strip()
    if len(stripped) == 2 and stripped.isalpha() and stripped.isupper():
        if pycountry.countries.get(alpha_2=stripped) is not None or stripped == "XK":
            return stripped
    return alias_table().get(fold_name(stripped))
