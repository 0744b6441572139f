from .errors import EmptyHenleyDatasetError, HenleyDownloadError, HenleyError, HenleyParseError
from .pdf import ParsedPdf, extract_pdf_date, parse_pdf
from .pipeline import generate_dataset

__all__ = [
    "EmptyHenleyDatasetError",
    "HenleyDownloadError",
    "HenleyError",
    "HenleyParseError",
    "ParsedPdf",
    "extract_pdf_date",
    "parse_pdf",
    "generate_dataset",
]
