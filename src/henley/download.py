import logging
from dataclasses import dataclass
from email.utils import parsedate_to_datetime
from typing import Optional

import httpx

from henley.errors import HenleyDownloadError

logger = logging.getLogger(__name__)


@dataclass
class DownloadedPdf:
    url: str
    content: bytes
    last_modified: Optional[str] = None

    @property
    def last_modified_date(self) -> Optional[str]:
        """``Last-Modified`` as YYYY-MM-DD, or None when absent or malformed."""
        if not self.last_modified:
            return None
        try:
            return parsedate_to_datetime(self.last_modified).date().isoformat()
        except (TypeError, ValueError):
            return None


def pdf_url(base: str, origin_iso: str) -> str:
    return f"{base.rstrip('/')}/{origin_iso.upper()}_visa_full.pdf"


async def fetch_pdf(url: str, timeout: float = 30.0) -> DownloadedPdf:
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.get(url, follow_redirects=True)
            resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise HenleyDownloadError(f"Download failed for {url}: {exc}") from exc

    content = resp.content
    if not content:
        raise HenleyDownloadError(f"Empty response body for {url}")
    logger.debug("Downloaded %s (%d bytes)", url, len(content))
    return DownloadedPdf(url=url, content=content, last_modified=resp.headers.get("last-modified"))
