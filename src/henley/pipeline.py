import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from config.settings import Settings
from countries.aliases import resolve_iso2
from countries.names import get_country_name_en
from henley.download import fetch_pdf, pdf_url
from henley.errors import EmptyHenleyDatasetError, HenleyDownloadError, HenleyParseError
from henley.pdf import parse_pdf
from models.schemas import HenleyDataset, HenleyMeta, HenleyOriginStatus, HenleyVisaEntry
from pipeline.runlog import log_event, new_run_id
from pipeline.storage import read_json, write_json_atomic

logger = logging.getLogger(__name__)


@dataclass
class OriginResult:
    origin_iso: str
    status: HenleyOriginStatus
    entries: Dict[str, HenleyVisaEntry] = field(default_factory=dict)
    unmatched: List[str] = field(default_factory=list)
    source: Optional[str] = None


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def load_previous(path: Path) -> Optional[HenleyDataset]:
    try:
        raw = read_json(path)
        return HenleyDataset.model_validate(raw) if raw else None
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning("Could not read previous Henley dataset %s: %s", path, exc)
        return None


def local_pdf_path(settings: Settings, origin_iso: str) -> Optional[Path]:
    if settings.henley_pdf_dir is None:
        return None
    return settings.henley_pdf_dir / f"{origin_iso}_visa_full.pdf"


def match_destinations(
    origin_iso: str, parsed: Dict[str, bool], source: str, pdf_updated_at: Optional[str]
) -> Tuple[Dict[str, HenleyVisaEntry], List[str]]:
    """
    Key parsed destination names by ISO-2. Names that resolve to nothing are
    returned separately; the first name resolving to a code wins.
    """
    entries: Dict[str, HenleyVisaEntry] = {}
    unmatched: List[str] = []
    for name, requires_visa in parsed.items():
        iso = resolve_iso2(name)
        if iso is None:
            unmatched.append(name)
            continue
        if iso == origin_iso or iso in entries:
            continue
        entries[iso] = HenleyVisaEntry(requires_visa=requires_visa, source=source, pdf_updated_at=pdf_updated_at)
    return entries, sorted(unmatched)


async def _load_pdf(settings: Settings, origin_iso: str) -> Tuple[bytes, str, Optional[str]]:
    """PDF bytes, where they came from, and the server's Last-Modified date if downloaded."""
    local = local_pdf_path(settings, origin_iso)
    if local is not None and local.exists():
        return await asyncio.to_thread(local.read_bytes), str(local), None
    if settings.henley_offline:
        raise FileNotFoundError(f"No local PDF for {origin_iso} and offline mode is on")
    url = pdf_url(settings.henley_download_base, origin_iso)
    downloaded = await fetch_pdf(url, timeout=settings.henley_timeout)
    return downloaded.content, url, downloaded.last_modified_date


async def process_origin(settings: Settings, origin_iso: str, previous: Optional[HenleyDataset]) -> OriginResult:
    origin_iso = origin_iso.upper()
    location = str(local_pdf_path(settings, origin_iso) or pdf_url(settings.henley_download_base, origin_iso))
    try:
        data, location, served_date = await _load_pdf(settings, origin_iso)
        parsed = await asyncio.to_thread(
            parse_pdf,
            data,
            settings.henley_strategy,
            get_country_name_en(origin_iso),
            settings.layout,
            settings.glyph,
        )
    except FileNotFoundError as exc:
        status = "offline" if settings.henley_offline else "missing_pdf"
        return _fallback(origin_iso, status, location, str(exc), previous)
    except HenleyDownloadError as exc:
        return _fallback(origin_iso, "download_error", location, str(exc), previous)
    except (HenleyParseError, OSError) as exc:
        return _fallback(origin_iso, "parse_error", location, str(exc), previous)
    except Exception as exc:
        logger.exception("[%s] Unexpected error while reading %s", origin_iso, location)
        return _fallback(origin_iso, "parse_error", location, f"{type(exc).__name__}: {exc}", previous)

    pdf_updated_at = parsed.pdf_updated_at or served_date
    entries, unmatched = match_destinations(origin_iso, parsed.entries, location, pdf_updated_at)
    if unmatched:
        logger.info("[%s] %d destination names did not resolve to a country", origin_iso, len(unmatched))
    if not entries:
        error = f"None of {len(parsed.entries)} destination names resolved to a country"
        return _fallback(origin_iso, "parse_error", location, error, previous)

    status = HenleyOriginStatus(
        origin_iso=origin_iso,
        pdf_location=location,
        pdf_updated_at=pdf_updated_at,
        status="ok" if pdf_updated_at else "unknown_date",
    )
    logger.info("[%s] %d destinations parsed from %s", origin_iso, len(entries), location)
    return OriginResult(origin_iso=origin_iso, status=status, entries=entries, unmatched=unmatched, source=location)


def _fallback(
    origin_iso: str, status: str, location: str, error: str, previous: Optional[HenleyDataset]
) -> OriginResult:
    logger.warning("[%s] Henley PDF unavailable (%s): %s", origin_iso, status, error)
    kept = previous.matrix.get(origin_iso) if previous else None
    if kept:
        logger.warning("[%s] Keeping %d entries from the previous dataset", origin_iso, len(kept))
        return OriginResult(
            origin_iso=origin_iso,
            status=HenleyOriginStatus(origin_iso=origin_iso, pdf_location=location, status="fallback", error=error),
            entries=dict(kept),
            unmatched=list(previous.unmatched.get(origin_iso, [])),
        )
    return OriginResult(
        origin_iso=origin_iso,
        status=HenleyOriginStatus(origin_iso=origin_iso, pdf_location=location, status=status, error=error),
    )


def assemble(results: Sequence[OriginResult], generated_at: Optional[str] = None) -> Tuple[HenleyDataset, HenleyMeta]:
    generated_at = generated_at or _now_iso()
    dataset = HenleyDataset(
        generated_at=generated_at,
        sources=[result.source for result in results if result.source],
        matrix={result.origin_iso: result.entries for result in results if result.entries},
        unmatched={result.origin_iso: result.unmatched for result in results if result.unmatched},
    )
    meta = HenleyMeta(generated_at=generated_at, sources=[result.status for result in results])
    return dataset, meta


async def generate_dataset(
    settings: Settings, origins: Optional[Sequence[str]] = None, write: bool = True
) -> Tuple[HenleyDataset, HenleyMeta]:
    """
    Build the ISO-2 keyed Henley overlay for ``origins``.

    Every origin is resolved (fresh, fallback or empty) before anything is
    written; when no origin has data the previous files stay in place.
    """
    origins = [code.upper() for code in (origins or settings.henley_origins)]
    run_id = new_run_id("henley")
    log_event(run_id, "henley_started", {"origins": origins, "strategy": settings.henley_strategy}, settings.build_log_path)

    previous = load_previous(settings.henley_output)
    results = await asyncio.gather(*(process_origin(settings, iso, previous) for iso in origins))
    dataset, meta = assemble(results)

    if not any(dataset.matrix.values()) and not settings.allow_empty_dataset:
        log_event(run_id, "henley_failed", {"reason": "empty"}, settings.build_log_path)
        raise EmptyHenleyDatasetError(
            "No Henley data could be built. Set ALLOW_EMPTY_DATASET=1 to write an empty dataset."
        )

    if write:
        write_json_atomic(settings.henley_output, dataset.model_dump(by_alias=True, exclude_none=True))
        write_json_atomic(settings.henley_meta, meta.model_dump(by_alias=True))
        logger.info("Henley dataset written to %s", settings.henley_output)

    log_event(
        run_id,
        "henley_finished",
        {result.origin_iso: result.status.status for result in results},
        settings.build_log_path,
    )
    return dataset, meta
