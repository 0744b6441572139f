from .aliases import fold_name, resolve_iso2
from .names import get_country_name_en, get_country_name_es, iso2_to_flag_emoji, resolve_alpha2
from .slug import SlugAllocator, slugify_en, slugify_es

__all__ = [
    "fold_name",
    "resolve_iso2",
    "get_country_name_en",
    "get_country_name_es",
    "iso2_to_flag_emoji",
    "resolve_alpha2",
    "SlugAllocator",
    "slugify_en",
    "slugify_es",
]
