from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Country(BaseModel):
    name: str
    slug: str
    iso2: str | None = None


class CountryIndexEntry(BaseModel):
    key: str
    name_en: str
    name_es: str
    slug_es: str
    slug_en: str
    alt_slugs: list[str] = Field(default_factory=list)


class CountryIndex(BaseModel):
    map_slug_to_key: dict[str, str] = Field(default_factory=dict)
    map_alt_to_slug: dict[str, str] = Field(default_factory=dict)
    # Declared last: the field name shadows the builtin inside the class body.
    list: List[CountryIndexEntry] = Field(default_factory=lambda: [])


class CountryMetaEntry(BaseModel):
    name_en: str
    name_es: str
    slug_es: str
    slug_en: str


class DestinationEntry(BaseModel):
    key: str
    name_es: str
    slug_es: str
    requirement: str


class RawOriginData(BaseModel):
    origin: str
    destinations: dict[str, str] = Field(default_factory=dict)


class OriginVisaData(BaseModel):
    origin_key: str
    origin_name_es: str
    origin_slug_es: str
    destinations: list[DestinationEntry] = Field(default_factory=list)
    slug_to_key: dict[str, str] = Field(default_factory=dict)
    alt_slug_to_slug: dict[str, str] = Field(default_factory=dict)
    raw: RawOriginData | None = None


class RequirementType(str, Enum):
    NO_VISA = "NO_VISA"
    NO_VISA_DAYS = "NO_VISA_DAYS"
    E_VISA = "E_VISA"
    ESTA = "ESTA"
    ETA = "ETA"
    VOA = "VOA"
    REQUIRES_VISA = "REQUIRES_VISA"
    UNKNOWN = "UNKNOWN"


class NormalizedRequirement(BaseModel):
    raw: str
    type: RequirementType
    days: int | None = None
    label: str
    display: str


class Classification(BaseModel):
    skip: bool = False
    needs_visa: bool | None = None
    days: int | None = None
    special: bool = False


class SourceLink(BaseModel):
    label: str
    url: str


class Embassy(BaseModel):
    name: str
    url: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class Requirement(BaseModel):
    origin_slug: str
    dest_slug: str
    visa_required: bool
    max_stay_days: int | None = None
    alt_permit: str | None = None
    passport_rule: str
    onward_ticket: str
    funds_proof: str
    notes: list[str] = Field(default_factory=list)
    sources: list[SourceLink] = Field(default_factory=list)
    embassy: Embassy
    last_reviewed: str


class FaqItem(BaseModel):
    question: str
    answer: str


class HenleyVisaEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    requires_visa: Optional[bool] = Field(default=None, alias="requiresVisa")
    source: str | None = None
    pdf_updated_at: str | None = Field(default=None, alias="pdfUpdatedAt")


class HenleyDataset(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generated_at: str = Field(alias="generatedAt")
    sources: list[str] = Field(default_factory=list)
    matrix: dict[str, dict[str, HenleyVisaEntry]] = Field(default_factory=dict)
    unmatched: dict[str, list[str]] = Field(default_factory=dict)


HenleyStatus = Literal[
    "ok",
    "unknown_date",
    "missing_pdf",
    "download_error",
    "parse_error",
    "fallback",
    "offline",
]


class HenleyOriginStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    origin_iso: str = Field(alias="originISO")
    pdf_location: str | None = Field(default=None, alias="pdfLocation")
    pdf_updated_at: str | None = Field(default=None, alias="pdfUpdatedAt")
    status: HenleyStatus
    error: str | None = Field(default=None, alias="parseError")


class HenleyMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generated_at: str = Field(alias="generatedAt")
    sources: list[HenleyOriginStatus] = Field(default_factory=list)
