from .catalog import RequirementCatalog, build_requirement, merge_henley
from .classifier import NORMALIZATION_RULES, classify, is_skip_value, normalize_requirement
from .explain import VERIFY_WITH_OFFICIAL_SOURCES, get_requirement_explanation
from .faq import get_visa_faq

__all__ = [
    "RequirementCatalog",
    "build_requirement",
    "merge_henley",
    "NORMALIZATION_RULES",
    "classify",
    "is_skip_value",
    "normalize_requirement",
    "VERIFY_WITH_OFFICIAL_SOURCES",
    "get_requirement_explanation",
    "get_visa_faq",
]
