import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Optional

import fitz

from config.settings import GlyphThresholds, LayoutOptions
from henley.errors import HenleyParseError
from henley.glyph import extract_glyph_entries
from henley.layout import extract_layout_entries

logger = logging.getLogger(__name__)

MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}

DATE_PATTERN = re.compile(r"(\d{1,2})\s+(" + "|".join(MONTHS) + r")\s+(\d{4})", re.IGNORECASE)


@dataclass
class ParsedPdf:
    entries: Dict[str, bool] = field(default_factory=dict)
    pdf_updated_at: Optional[str] = None


def extract_pdf_date(text: str) -> Optional[str]:
    """
    First "12 March 2024" style date in ``text`` as ISO "2024-03-12".
    """
    match = DATE_PATTERN.search(text or "")
    if not match:
        return None
    day = int(match.group(1))
    if not 1 <= day <= 31:
        return None
    month = MONTHS[match.group(2).lower()]
    return f"{match.group(3)}-{month:02d}-{day:02d}"


def parse_pdf(
    data: bytes,
    strategy: str = "layout",
    origin_name: str = "",
    layout: Optional[LayoutOptions] = None,
    glyph: Optional[GlyphThresholds] = None,
) -> ParsedPdf:
    """
    Parse one origin's PDF. Destinations are keyed by the name as printed;
    the first occurrence of a name wins.
    """
    if strategy not in ("layout", "glyph"):
        raise ValueError(f"Unknown Henley strategy: {strategy}")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise HenleyParseError(f"Could not open PDF: {exc}") from exc

    result = ParsedPdf()
    with doc:
        for number, page in enumerate(doc, start=1):
            try:
                if result.pdf_updated_at is None:
                    result.pdf_updated_at = extract_pdf_date(page.get_text())
                if strategy == "glyph":
                    found = extract_glyph_entries(page, origin_name, glyph)
                else:
                    found = extract_layout_entries(page, layout)
            except RuntimeError as exc:
                raise HenleyParseError(f"Could not read page {number}: {exc}") from exc
            for entry in found:
                result.entries.setdefault(entry.destination, entry.requires_visa)

    if not result.entries:
        raise HenleyParseError("No visa entries found in PDF")
    logger.debug("Parsed %d destinations (%s strategy)", len(result.entries), strategy)
    return result
