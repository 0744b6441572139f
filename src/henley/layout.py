"""
Text-layout strategy: rebuild visual lines from positioned words, split them
into table cells by horizontal gaps, and read the requirement phrase in each
cell.
"""
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from config.settings import LayoutOptions


@dataclass
class TextSpan:
    text: str
    x0: float
    y0: float
    x1: float
    y1: float


@dataclass
class LayoutEntry:
    destination: str
    requires_visa: bool
    requirement_text: str


# Order matters only for ties; otherwise the earliest match in the cell wins.
REQUIREMENT_MARKERS: List[Tuple[re.Pattern, bool]] = [
    (re.compile(r"visa[-\s]?free", re.IGNORECASE), False),
    (re.compile(r"visa not required", re.IGNORECASE), False),
    (re.compile(r"no visa required", re.IGNORECASE), False),
    (re.compile(r"visa waiver", re.IGNORECASE), False),
    (re.compile(r"visa on arrival", re.IGNORECASE), True),
    (re.compile(r"e-?visa", re.IGNORECASE), True),
    (re.compile(r"visa required", re.IGNORECASE), True),
]

_TRAILING_PUNCTUATION = " \t-–:|,;"


def group_lines(spans: Iterable[TextSpan], tolerance: float = 2.0) -> List[List[TextSpan]]:
    """
    Group spans whose baselines are within ``tolerance`` points; lines come
    back top to bottom with their spans ordered left to right.
    """
    lines: List[Tuple[float, List[TextSpan]]] = []
    for span in spans:
        if not span.text.strip():
            continue
        baseline = span.y1
        for line_y, members in lines:
            if abs(line_y - baseline) < tolerance:
                members.append(span)
                break
        else:
            lines.append((baseline, [span]))

    lines.sort(key=lambda item: item[0])
    return [sorted(members, key=lambda span: span.x0) for _, members in lines]


def split_segments(line: List[TextSpan], column_gap: float = 40.0) -> List[str]:
    segments: List[List[str]] = []
    previous: Optional[TextSpan] = None
    for span in line:
        if previous is None or span.x0 - previous.x1 > column_gap:
            segments.append([])
        segments[-1].append(span.text.strip())
        previous = span
    return [" ".join(words) for words in segments if words]


def parse_segment(text: str) -> Optional[LayoutEntry]:
    normalized = re.sub(r"\s+", " ", text).strip()
    if not normalized:
        return None

    best = None
    for order, (pattern, requires_visa) in enumerate(REQUIREMENT_MARKERS):
        match = pattern.search(normalized)
        if match is None:
            continue
        candidate = (match.start(), order, requires_visa)
        if best is None or candidate[:2] < best[:2]:
            best = candidate
    if best is None:
        return None

    start, _, requires_visa = best
    destination = normalized[:start].strip(_TRAILING_PUNCTUATION)
    requirement_text = normalized[start:].strip()
    if not destination or not requirement_text:
        return None
    return LayoutEntry(destination=destination, requires_visa=requires_visa, requirement_text=requirement_text)


def page_spans(page) -> List[TextSpan]:
    return [TextSpan(text=word[4], x0=word[0], y0=word[1], x1=word[2], y1=word[3]) for word in page.get_text("words")]


def extract_layout_entries(page, options: Optional[LayoutOptions] = None) -> List[LayoutEntry]:
    options = options or LayoutOptions()
    entries: List[LayoutEntry] = []
    for line in group_lines(page_spans(page), options.line_tolerance):
        for segment in split_segments(line, options.column_gap):
            parsed = parse_segment(segment)
            if parsed:
                entries.append(parsed)
    return entries
