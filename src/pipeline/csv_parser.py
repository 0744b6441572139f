"""
Passport-index matrix parsing.

The source CSV has been published both comma- and semicolon-separated, so the
delimiter is sniffed from a sample before tokenizing with the csv module
(RFC 4180 quoting: doubled quotes, quoted delimiters and newlines).
"""
import csv
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from pipeline.errors import CsvFormatError, SourceNotFoundError

SAMPLE_SIZE = 2000
DEFAULT_MIN_COLUMNS = 50


@dataclass
class PassportMatrix:
    header: List[str]
    destinations: List[str]
    rows: List[List[str]] = field(default_factory=list)

    @property
    def origins(self) -> List[str]:
        return [row[0] for row in self.rows if row]


def sniff_delimiter(text: str, sample_size: int = SAMPLE_SIZE) -> str:
    """
    Pick "," or ";" by which appears more often outside quotes in the sample.
    """
    sample = text[:sample_size]
    counts = {",": 0, ";": 0}
    in_quotes = False
    for char in sample:
        if char == '"':
            in_quotes = not in_quotes
        elif not in_quotes and char in counts:
            counts[char] += 1
    return ";" if counts[";"] > counts[","] else ","


def tokenize(text: str, delimiter: str) -> List[List[str]]:
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, quotechar='"', doublequote=True)
    rows: List[List[str]] = []
    for row in reader:
        cells = [cell.strip() for cell in row]
        if not any(cells):
            continue
        rows.append(cells)
    return rows


def _trim_trailing(row: List[str]) -> List[str]:
    end = len(row)
    while end and not row[end - 1]:
        end -= 1
    return row[:end]


def parse_matrix(text: str, min_columns: int = DEFAULT_MIN_COLUMNS) -> PassportMatrix:
    """
    Parse the raw matrix text.

    Trailing empty cells (a trailing delimiter) are not counted. When the
    header is exactly one cell shorter than the widest data row it lists
    destinations only; otherwise its first cell is a corner label
    ("Passport") and destinations start at the second cell. Every data row
    must then have exactly one cell per destination plus the origin.
    """
    text = text.lstrip("\ufeff")
    rows = tokenize(text, sniff_delimiter(text))
    if len(rows) < 2:
        raise CsvFormatError("CSV is empty or invalid: expected a header and at least one data row")

    header, data_rows = _trim_trailing(rows[0]), rows[1:]
    widest = max(len(_trim_trailing(row)) for row in data_rows)
    destinations = header if len(header) == widest - 1 else header[1:]
    width = len(destinations) + 1

    normalized: List[List[str]] = []
    for line_no, row in enumerate(data_rows, start=2):
        if len(_trim_trailing(row)) > width:
            raise CsvFormatError(
                f"Row {line_no} ({row[0]}) has {len(_trim_trailing(row))} cells; the header allows {width}"
            )
        if len(row) < width:
            raise CsvFormatError(f"Row {line_no} ({row[0]}) has {len(row)} cells; expected {width}")
        normalized.append(row[:width])

    if len(destinations) < min_columns:
        raise CsvFormatError(
            f"Suspicious header: {len(destinations)} destination columns (minimum {min_columns}). Check the CSV."
        )
    return PassportMatrix(header=header, destinations=destinations, rows=normalized)


def read_matrix(path: Path, min_columns: int = DEFAULT_MIN_COLUMNS) -> PassportMatrix:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceNotFoundError(f"Source CSV not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceNotFoundError(f"Could not read source CSV {path}: {exc}") from exc
    return parse_matrix(text, min_columns=min_columns)
