"""
Requirement classification for raw passport-index cells.

Rules are substring checks evaluated in a fixed order and the first match
wins. Several of them overlap ("eta" occurs inside unrelated words,
"required" matches almost anything mandatory), so reordering or tightening
them changes the published answer for existing destinations. Keep the order.
"""
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from models.schemas import Classification, NormalizedRequirement, RequirementType

SKIP_VALUES = {"", "-1"}

_WHITESPACE = re.compile(r"\s+")
_DIGITS = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class NormalizationRule:
    type: RequirementType
    icon: str
    includes: Tuple[str, ...] = ()
    exact: Tuple[str, ...] = ()
    label: str = ""

    def matches(self, sanitized: str) -> bool:
        return sanitized in self.exact or any(token in sanitized for token in self.includes)


NORMALIZATION_RULES: Tuple[NormalizationRule, ...] = (
    NormalizationRule(RequirementType.NO_VISA, "☑️", includes=("visa free", "visa-free"), label="No necesita visa"),
    NormalizationRule(RequirementType.E_VISA, "🟨", includes=("e-visa", "evisa"), label="e-Visa (trámite online)"),
    NormalizationRule(RequirementType.ESTA, "🟦", includes=("esta",), label="ESTA (autorización electrónica)"),
    NormalizationRule(
        RequirementType.ETA, "🟦", exact=("eta",), includes=("eta",), label="eTA / ETA (autorización electrónica)"
    ),
    NormalizationRule(RequirementType.VOA, "🟧", includes=("visa on arrival", "on arrival"), label="Visa a la llegada"),
    NormalizationRule(
        RequirementType.REQUIRES_VISA, "❌", includes=("visa required", "required"), label="Sí requiere visa"
    ),
)

UNKNOWN_RULE = NormalizationRule(RequirementType.UNKNOWN, "⚠️", label="Requisito no especificado")

DAYS_ICON = "☑️"

NEEDS_NO_VISA = {RequirementType.NO_VISA, RequirementType.NO_VISA_DAYS}
SPECIAL_TYPES = {
    RequirementType.E_VISA,
    RequirementType.ESTA,
    RequirementType.ETA,
    RequirementType.VOA,
    RequirementType.UNKNOWN,
}


def days_label(days: int) -> str:
    return f"No necesita visa ({days} días)"


def sanitize(raw: Optional[str]) -> str:
    return _WHITESPACE.sub(" ", (raw or "").strip().lower())


def is_skip_value(raw: Optional[str]) -> bool:
    """
    True for cells that do not apply (blank, or -1 on the matrix diagonal).
    """
    return sanitize(raw) in SKIP_VALUES


def normalize_requirement(raw: Optional[str]) -> NormalizedRequirement:
    original = raw if isinstance(raw, str) else ""
    sanitized = sanitize(original)

    if _DIGITS.match(sanitized):
        days = int(sanitized)
        label = days_label(days)
        return NormalizedRequirement(
            raw=original,
            type=RequirementType.NO_VISA_DAYS,
            days=days,
            label=label,
            display=f"{DAYS_ICON} {label}",
        )

    rule = next((rule for rule in NORMALIZATION_RULES if rule.matches(sanitized)), UNKNOWN_RULE)
    return NormalizedRequirement(
        raw=original,
        type=rule.type,
        label=rule.label,
        display=f"{rule.icon} {rule.label}",
    )


def classify(raw: Optional[str]) -> Classification:
    if is_skip_value(raw):
        return Classification(skip=True)
    normalized = normalize_requirement(raw)
    return Classification(
        skip=False,
        needs_visa=normalized.type not in NEEDS_NO_VISA,
        days=normalized.days,
        special=normalized.type in SPECIAL_TYPES,
    )
