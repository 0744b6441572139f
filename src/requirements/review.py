from datetime import datetime, timezone
from typing import Iterable, Literal, Optional

from pydantic import BaseModel

from models.schemas import Requirement, SourceLink

StatusKey = Literal["green", "yellow", "red"]
VerificationStatus = Literal["verified", "pending", "outdated"]


class ReviewStatusInfo(BaseModel):
    key: StatusKey
    label: str
    helper_text: str
    emoji: str


class ReviewMetadata(BaseModel):
    status: ReviewStatusInfo
    last_reviewed_label: str
    relative_text: str
    last_reviewed_date: Optional[datetime] = None
    age_in_days: Optional[int] = None


class DatasetFreshness(BaseModel):
    status: StatusKey
    age_in_days: Optional[int] = None
    generated_at_text: str
    generated_at_date: Optional[datetime] = None


REVIEW_STATUS_CONFIG = {
    "green": ReviewStatusInfo(
        key="green", label="Actualizado", helper_text="Actualizado en los últimos 7 días", emoji="🟢"
    ),
    "yellow": ReviewStatusInfo(
        key="yellow", label="Por revisar", helper_text="Actualizado hace menos de 30 días", emoji="🟡"
    ),
    "red": ReviewStatusInfo(
        key="red", label="Desactualizado", helper_text="Última revisión hace más de 30 días", emoji="🔴"
    ),
}


def parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _age_in_days(moment: Optional[datetime], now: Optional[datetime]) -> Optional[int]:
    if moment is None:
        return None
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - moment).days


def get_freshness_from_date(raw_value: Optional[str], now: Optional[datetime] = None) -> ReviewMetadata:
    reviewed = parse_date(raw_value)
    age = _age_in_days(reviewed, now)

    key: StatusKey = "red"
    if age is not None and age <= 7:
        key = "green"
    elif age is not None and age <= 30:
        key = "yellow"

    if age is None:
        relative = "Sin fecha"
    elif age <= 0:
        relative = "Actualizado hoy"
    elif age == 1:
        relative = "Hace 1 día"
    else:
        relative = f"Hace {age} días"

    return ReviewMetadata(
        status=REVIEW_STATUS_CONFIG[key],
        last_reviewed_label=raw_value or "Sin fecha",
        relative_text=relative,
        last_reviewed_date=reviewed,
        age_in_days=age,
    )


def get_review_metadata(requirement: Requirement, now: Optional[datetime] = None) -> ReviewMetadata:
    return get_freshness_from_date((requirement.last_reviewed or "").strip() or None, now)


def get_dataset_freshness(generated_at: Optional[str], now: Optional[datetime] = None) -> DatasetFreshness:
    """
    Traffic light for a generated dataset: green up to 30 days, yellow up to 90.
    """
    generated = parse_date(generated_at)
    age = _age_in_days(generated, now)
    status: StatusKey = "red"
    if age is not None and age <= 30:
        status = "green"
    elif age is not None and age <= 90:
        status = "yellow"
    return DatasetFreshness(
        status=status,
        age_in_days=age,
        generated_at_text=generated.date().isoformat() if generated else "Desconocido",
        generated_at_date=generated,
    )


def has_complete_sources(sources: Iterable[SourceLink]) -> bool:
    """
    At least one source, and every source has a label and an http(s) URL.
    """
    sources = list(sources)
    if not sources:
        return False
    return all(source.label.strip() and source.url.startswith(("http://", "https://")) for source in sources)


def compute_verification_status(requirement: Requirement, now: Optional[datetime] = None) -> VerificationStatus:
    review = get_review_metadata(requirement, now)
    if review.status.key == "red":
        return "outdated"
    if review.status.key == "green" and has_complete_sources(requirement.sources):
        return "verified"
    return "pending"
