"""
Pixel-glyph strategy.

Henley PDFs mark each destination with a checkmark (visa-free) or an "X"
(visa required) drawn right after the country name. The page is rasterised
and a small box next to each text line is inspected: an "X" concentrates its
dark pixels on the two diagonals of the box, a checkmark does not.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

import fitz
import numpy as np

from config.settings import GlyphThresholds
from henley.layout import TextSpan, group_lines


@dataclass
class GlyphLine:
    text: str
    min_x: float
    max_x: float
    min_y: float
    max_y: float


@dataclass
class GlyphEntry:
    destination: str
    requires_visa: bool


def _luminance(bitmap: np.ndarray) -> np.ndarray:
    pixels = bitmap.astype(np.float64)
    if pixels.ndim == 2:
        return pixels
    return 0.299 * pixels[..., 0] + 0.587 * pixels[..., 1] + 0.114 * pixels[..., 2]


def detect_visa_required(bitmap: np.ndarray, thresholds: Optional[GlyphThresholds] = None) -> bool:
    """
    Accepts a grayscale (H, W) or RGB/RGBA (H, W, C) uint8 array.
    """
    thresholds = thresholds or GlyphThresholds()
    if bitmap.size == 0:
        return False

    dark = _luminance(bitmap) < thresholds.luminance_cutoff
    height, width = dark.shape
    dark_pixels = int(dark.sum())
    if dark_pixels == 0:
        return False

    ys, xs = np.indices((height, width))
    tolerance = thresholds.diagonal_tolerance
    on_diagonal = (np.abs(xs - ys) <= tolerance) | (np.abs(xs - (width - 1 - ys)) <= tolerance)
    diagonal_pixels = int((dark & on_diagonal).sum())

    dark_ratio = dark_pixels / float(height * width)
    diagonal_ratio = diagonal_pixels / float(dark_pixels)
    return dark_ratio >= thresholds.min_dark_ratio and diagonal_ratio >= thresholds.min_diagonal_ratio


def icon_box(line: GlyphLine, page_size: Tuple[int, int], thresholds: GlyphThresholds) -> Tuple[int, int, int, int]:
    """
    Return (x, y, width, height) of the icon crop right of ``line``, clamped
    to the page bitmap. Coordinates are bitmap pixels.
    """
    page_width, page_height = page_size
    size = thresholds.icon_box_size
    x = min(max(int(round(line.max_x + thresholds.icon_offset_x)), 0), max(page_width - size, 0))
    y = min(max(int(round(line.min_y - thresholds.icon_offset_y)), 0), max(page_height - size, 0))
    return x, y, size, size


def render_page(page, scale: float) -> np.ndarray:
    pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
    samples = np.frombuffer(pix.samples, dtype=np.uint8)
    return samples.reshape(pix.height, pix.width, pix.n)


def page_lines(page, thresholds: GlyphThresholds) -> List[GlyphLine]:
    scale = thresholds.scale
    spans: List[TextSpan] = []
    for block in page.get_text("dict")["blocks"]:
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = " ".join(span.get("text", "").split())
                if not text:
                    continue
                x0, y0, x1, y1 = span["bbox"]
                spans.append(TextSpan(text=text, x0=x0 * scale, y0=y0 * scale, x1=x1 * scale, y1=y1 * scale))

    lines: List[GlyphLine] = []
    for members in group_lines(spans, thresholds.line_tolerance):
        text = " ".join(" ".join(span.text for span in members).split())
        if len(text) <= 1:
            continue
        lines.append(
            GlyphLine(
                text=text,
                min_x=min(span.x0 for span in members),
                max_x=max(span.x1 for span in members),
                min_y=min(span.y0 for span in members),
                max_y=max(span.y1 for span in members),
            )
        )
    return lines


def extract_glyph_entries(page, origin_name: str, thresholds: Optional[GlyphThresholds] = None) -> List[GlyphEntry]:
    thresholds = thresholds or GlyphThresholds()
    bitmap = render_page(page, thresholds.scale)
    page_height, page_width = bitmap.shape[:2]
    origin = origin_name.lower()

    entries: List[GlyphEntry] = []
    for line in page_lines(page, thresholds):
        lowered = line.text.lower()
        if "passport" in lowered or (origin and origin in lowered):
            continue
        x, y, width, height = icon_box(line, (page_width, page_height), thresholds)
        crop = bitmap[y : y + height, x : x + width]
        entries.append(GlyphEntry(destination=line.text, requires_visa=detect_visa_required(crop, thresholds)))
    return entries
