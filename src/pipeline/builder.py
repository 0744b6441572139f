"""
Passport-index matrix -> per-origin JSON files plus a global country index.

Requirement cells are copied verbatim and classified only when read.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from unidecode import unidecode

from config.settings import Settings
from countries.names import get_country_name_en, get_country_name_es
from countries.slug import SlugAllocator, slugify_en, slugify_es
from models.schemas import (
    CountryIndex,
    CountryIndexEntry,
    CountryMetaEntry,
    DestinationEntry,
    OriginVisaData,
    RawOriginData,
)
from pipeline.csv_parser import PassportMatrix, read_matrix
from pipeline.runlog import log_event, new_run_id
from pipeline.storage import write_json_atomic
from requirements.classifier import is_skip_value

logger = logging.getLogger(__name__)

INDEX_FILE = "index.json"
META_FILE = "countries.meta.json"


@dataclass
class CountryNames:
    key: str
    name_en: str
    name_es: str
    slug_es: str
    slug_en: str


@dataclass
class BuildResult:
    index: CountryIndex
    origins: List[OriginVisaData] = field(default_factory=list)
    meta: List[CountryMetaEntry] = field(default_factory=list)


def _spanish_sort_key(name_es: str, name_en: str):
    folded = unidecode(name_es or name_en).lower()
    return folded, name_es, name_en


def resolve_names(key: str, allocator: SlugAllocator) -> CountryNames:
    name_en = get_country_name_en(key)
    name_es = get_country_name_es(key)
    slug_en = slugify_en(name_en)
    slug_es = allocator.allocate(slugify_es(name_es) or slug_en or slugify_en(key))
    return CountryNames(key=key, name_en=name_en, name_es=name_es, slug_es=slug_es, slug_en=slug_en)


def resolve_destinations(destinations: List[str]) -> List[Optional[CountryNames]]:
    """
    Names for every header column, allocated once in source order. A
    destination has the same slug on every origin page.
    """
    allocator = SlugAllocator()
    return [resolve_names(key, allocator) if key else None for key in destinations]


def build_origin(
    row: List[str], destinations: List[Optional[CountryNames]], names: CountryNames
) -> OriginVisaData:
    raw_destinations: Dict[str, str] = {}
    entries: List[DestinationEntry] = []
    slug_to_key: Dict[str, str] = {}
    alt_slug_to_slug: Dict[str, str] = {}

    for position, dest in enumerate(destinations, start=1):
        if dest is None:
            continue
        dest_key = dest.key
        value = row[position] if position < len(row) else ""
        raw_destinations[dest_key] = value
        if dest_key == names.key or is_skip_value(value):
            continue

        if dest.slug_en and dest.slug_en != dest.slug_es:
            alt_slug_to_slug[dest.slug_en] = dest.slug_es
        slug_to_key[dest.slug_es] = dest_key
        entries.append(
            DestinationEntry(key=dest_key, name_es=dest.name_es, slug_es=dest.slug_es, requirement=value)
        )

    return OriginVisaData(
        origin_key=names.key,
        origin_name_es=names.name_es,
        origin_slug_es=names.slug_es,
        destinations=entries,
        slug_to_key=slug_to_key,
        alt_slug_to_slug=alt_slug_to_slug,
        raw=RawOriginData(origin=names.key, destinations=raw_destinations),
    )


def build_datasets(matrix: PassportMatrix) -> BuildResult:
    """
    Build every artifact in memory; nothing touches the disk here.
    """
    origin_allocator = SlugAllocator()
    destinations = resolve_destinations(matrix.destinations)
    index_entries: List[CountryIndexEntry] = []
    meta: List[CountryMetaEntry] = []
    origins: List[OriginVisaData] = []
    map_slug_to_key: Dict[str, str] = {}
    map_alt_to_slug: Dict[str, str] = {}
    seen_keys = set()

    for row in matrix.rows:
        origin_key = row[0] if row else ""
        if not origin_key:
            continue
        if origin_key in seen_keys:
            logger.warning("Duplicate origin row %s ignored", origin_key)
            continue
        seen_keys.add(origin_key)

        names = resolve_names(origin_key, origin_allocator)
        map_slug_to_key[names.slug_es] = origin_key
        alt_slugs: List[str] = []
        if names.slug_en and names.slug_en != names.slug_es:
            alt_slugs.append(names.slug_en)
            map_alt_to_slug.setdefault(names.slug_en, names.slug_es)

        origins.append(build_origin(row, destinations, names))
        index_entries.append(
            CountryIndexEntry(
                key=origin_key,
                name_en=names.name_en,
                name_es=names.name_es,
                slug_es=names.slug_es,
                slug_en=names.slug_en,
                alt_slugs=alt_slugs,
            )
        )
        meta.append(
            CountryMetaEntry(name_en=names.name_en, name_es=names.name_es, slug_es=names.slug_es, slug_en=names.slug_en)
        )

    index_entries.sort(key=lambda entry: _spanish_sort_key(entry.name_es, entry.name_en))
    meta.sort(key=lambda entry: _spanish_sort_key(entry.name_es, entry.name_en))

    index = CountryIndex(list=index_entries, map_slug_to_key=map_slug_to_key, map_alt_to_slug=map_alt_to_slug)
    return BuildResult(index=index, origins=origins, meta=meta)


def index_payload(index: CountryIndex) -> dict:
    return {
        "list": [entry.model_dump() for entry in index.list],
        "map_slug_to_key": index.map_slug_to_key,
        "map_alt_to_slug": index.map_alt_to_slug,
    }


def write_build(result: BuildResult, out_dir: Path) -> List[Path]:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []

    for origin in result.origins:
        path = out_dir / f"{origin.origin_key}.json"
        write_json_atomic(path, origin.model_dump())
        written.append(path)

    write_json_atomic(out_dir / META_FILE, [entry.model_dump() for entry in result.meta])
    write_json_atomic(out_dir / INDEX_FILE, index_payload(result.index))
    written.extend([out_dir / META_FILE, out_dir / INDEX_FILE])

    # Regeneration is wholesale: origins dropped from the source go away too.
    keep = {path.name for path in written}
    for stale in out_dir.glob("*.json"):
        if stale.name not in keep:
            logger.info("Removing stale dataset %s", stale.name)
            stale.unlink()
    return written


def run_build(settings: Settings, run_id: Optional[str] = None) -> BuildResult:
    """
    Read the source CSV, build everything, then write. Any error before the
    write step propagates and leaves the previous artifacts untouched.
    """
    run_id = run_id or new_run_id("visa-data")
    log_event(run_id, "build_started", {"source": str(settings.source_csv)}, settings.build_log_path)
    try:
        matrix = read_matrix(settings.source_csv, min_columns=settings.min_columns)
        result = build_datasets(matrix)
    except Exception as exc:
        log_event(run_id, "build_failed", {"error": str(exc)}, settings.build_log_path)
        raise
    write_build(result, settings.generated_dir)
    log_event(
        run_id,
        "build_finished",
        {"origins": len(result.origins), "destinations": len(matrix.destinations)},
        settings.build_log_path,
    )
    logger.info("Generated %d origin datasets in %s", len(result.origins), settings.generated_dir)
    return result
