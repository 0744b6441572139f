# src/api/main.py
import secrets
from typing import List, Optional
from xml.sax.saxutils import escape

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from pydantic import BaseModel

from config.settings import Settings
from countries.names import iso2_to_flag_emoji
from models.countries import find_country
from models.schemas import FaqItem, HenleyOriginStatus, NormalizedRequirement, Requirement
from pipeline.storage import DatasetStore
from requirements.catalog import RequirementCatalog
from requirements.classifier import classify, normalize_requirement
from requirements.explain import get_requirement_explanation
from requirements.faq import get_visa_faq
from requirements.review import (
    DatasetFreshness,
    ReviewMetadata,
    VerificationStatus,
    compute_verification_status,
    get_dataset_freshness,
    get_review_metadata,
    has_complete_sources,
)


class OriginSummary(BaseModel):
    key: str
    name_es: str
    slug_es: str
    flag: str | None = None


class OriginListResponse(BaseModel):
    origins: list[OriginSummary]
    henley_freshness: DatasetFreshness | None = None


class DestinationRow(BaseModel):
    key: str
    name_es: str
    slug_es: str
    flag: str | None = None
    requirement: NormalizedRequirement
    needs_visa: bool | None = None
    special: bool = False


class OriginResponse(BaseModel):
    origin: OriginSummary
    destinations: list[DestinationRow]


class DetailResponse(BaseModel):
    origin: OriginSummary
    destination: OriginSummary
    requirement: NormalizedRequirement
    needs_visa: bool | None = None
    explanation: str
    faq: list[FaqItem]
    curated: Requirement | None = None
    review: ReviewMetadata | None = None
    verification: VerificationStatus | None = None


class AdminRow(BaseModel):
    origin_slug: str
    dest_slug: str
    origin_name: str
    dest_name: str
    visa_required: bool
    last_reviewed: str
    source_count: int
    has_complete_sources: bool
    status: VerificationStatus


class AdminCounters(BaseModel):
    total: int = 0
    verified: int = 0
    pending: int = 0
    outdated: int = 0
    without_sources: int = 0


class AdminResponse(BaseModel):
    counters: AdminCounters
    rows: list[AdminRow]
    henley_sources: list[HenleyOriginStatus] = []


def _country_name(slug: str) -> str:
    country = find_country(slug)
    return country.name if country else slug


def build_sitemap(base_url: str, store: DatasetStore) -> str:
    base_url = base_url.rstrip("/")
    entries = [(base_url, "monthly", "1.0"), (f"{base_url}/visa", "monthly", "0.6")]
    for origin in store.index().list:
        data = store.origin(origin.key)
        if not data:
            continue
        entries.append((f"{base_url}/visa/{origin.slug_es}", "weekly", "0.8"))
        for dest in data.destinations:
            entries.append((f"{base_url}/visa/{origin.slug_es}/{dest.slug_es}", "weekly", "0.8"))

    lines = ['<?xml version="1.0" encoding="UTF-8"?>', '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">']
    for loc, changefreq, priority in entries:
        lines.extend(
            [
                "  <url>",
                f"    <loc>{escape(loc)}</loc>",
                f"    <changefreq>{changefreq}</changefreq>",
                f"    <priority>{priority}</priority>",
                "  </url>",
            ]
        )
    lines.append("</urlset>")
    return "\n".join(lines)


def create_app(settings: Optional[Settings] = None, store: Optional[DatasetStore] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    store = store or DatasetStore(settings.generated_dir, settings.henley_output, settings.henley_meta)
    catalogs: List[RequirementCatalog] = []

    def get_catalog() -> RequirementCatalog:
        if not catalogs:
            catalogs.append(RequirementCatalog(store.henley()))
        return catalogs[0]

    app = FastAPI(title="necesitovisa")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    def summary(key: str, name_es: str, slug_es: str) -> OriginSummary:
        return OriginSummary(key=key, name_es=name_es, slug_es=slug_es, flag=iso2_to_flag_emoji(key))

    @app.get("/", response_model=OriginListResponse)
    @app.get("/visa", response_model=OriginListResponse)
    def list_origins() -> OriginListResponse:
        henley = store.henley()
        return OriginListResponse(
            origins=[summary(entry.key, entry.name_es, entry.slug_es) for entry in store.index().list],
            henley_freshness=get_dataset_freshness(henley.generated_at) if henley else None,
        )

    @app.get("/visa/{origin}", response_model=OriginResponse)
    def origin_page(origin: str):
        resolved = store.resolve_origin(origin)
        if resolved is None:
            raise HTTPException(status_code=404, detail="Origin not found")
        entry, canonical, redirected = resolved
        if redirected:
            return RedirectResponse(f"/visa/{canonical}", status_code=301)
        data = store.origin(entry.key)
        if data is None:
            raise HTTPException(status_code=404, detail="Origin not found")

        rows = []
        for dest in data.destinations:
            classification = classify(dest.requirement)
            rows.append(
                DestinationRow(
                    key=dest.key,
                    name_es=dest.name_es,
                    slug_es=dest.slug_es,
                    flag=iso2_to_flag_emoji(dest.key),
                    requirement=normalize_requirement(dest.requirement),
                    needs_visa=classification.needs_visa,
                    special=classification.special,
                )
            )
        return OriginResponse(origin=summary(entry.key, entry.name_es, entry.slug_es), destinations=rows)

    @app.get("/visa/{origin}/{destination}", response_model=DetailResponse)
    def detail_page(origin: str, destination: str):
        resolved = store.resolve_origin(origin)
        if resolved is None:
            raise HTTPException(status_code=404, detail="Origin not found")
        entry, origin_slug, origin_redirected = resolved
        data = store.origin(entry.key)
        if data is None:
            raise HTTPException(status_code=404, detail="Origin not found")
        resolved_dest = store.resolve_destination(data, destination)
        if resolved_dest is None:
            raise HTTPException(status_code=404, detail="Destination not found")
        dest, dest_slug, dest_redirected = resolved_dest
        if origin_redirected or dest_redirected:
            return RedirectResponse(f"/visa/{origin_slug}/{dest_slug}", status_code=301)

        normalized = normalize_requirement(dest.requirement)
        curated = get_catalog().find(origin_slug, dest_slug)
        return DetailResponse(
            origin=summary(entry.key, entry.name_es, entry.slug_es),
            destination=summary(dest.key, dest.name_es, dest.slug_es),
            requirement=normalized,
            needs_visa=classify(dest.requirement).needs_visa,
            explanation=get_requirement_explanation(normalized.type, normalized.days),
            faq=get_visa_faq(normalized.type.value, dest.name_es),
            curated=curated,
            review=get_review_metadata(curated) if curated else None,
            verification=compute_verification_status(curated) if curated else None,
        )

    @app.get("/admin", response_model=AdminResponse)
    def admin(key: Optional[str] = None) -> AdminResponse:
        # Same response as a missing page.
        if not settings.admin_key or not key or not secrets.compare_digest(key, settings.admin_key):
            raise HTTPException(status_code=404, detail="Not Found")

        counters = AdminCounters()
        rows = []
        for requirement in get_catalog():
            status = compute_verification_status(requirement)
            complete = has_complete_sources(requirement.sources)
            counters.total += 1
            if status == "verified":
                counters.verified += 1
            elif status == "pending":
                counters.pending += 1
            else:
                counters.outdated += 1
            if not complete:
                counters.without_sources += 1
            rows.append(
                AdminRow(
                    origin_slug=requirement.origin_slug,
                    dest_slug=requirement.dest_slug,
                    origin_name=_country_name(requirement.origin_slug),
                    dest_name=_country_name(requirement.dest_slug),
                    visa_required=requirement.visa_required,
                    last_reviewed=requirement.last_reviewed,
                    source_count=len(requirement.sources),
                    has_complete_sources=complete,
                    status=status,
                )
            )
        meta = store.henley_meta()
        return AdminResponse(counters=counters, rows=rows, henley_sources=meta.sources if meta else [])

    @app.get("/sitemap.xml")
    def sitemap() -> Response:
        return Response(content=build_sitemap(settings.site_base_url, store), media_type="application/xml")

    @app.get("/robots.txt", response_class=PlainTextResponse)
    def robots() -> str:
        base_url = settings.site_base_url.rstrip("/")
        return f"User-agent: *\nAllow: /\nDisallow: /admin\n\nSitemap: {base_url}/sitemap.xml\n"

    return app


app = create_app()
